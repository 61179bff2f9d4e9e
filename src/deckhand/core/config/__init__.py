"""Configuration models for Deckhand.

Pydantic models for the run context, the persisted global config and
logging. All public names are re-exported here.
"""

from deckhand.core.config.global_config import (
    ContextConfig,
    GlobalConfig,
    GlobalConfigError,
    get_config_for_current_kubectx,
    read_config_file,
)
from deckhand.core.config.kubectx import current_kube_context
from deckhand.core.config.log import LogConfig
from deckhand.core.config.run import EMPTY_RUN_CONTEXT, RunContext

__all__ = [
    "ContextConfig",
    "EMPTY_RUN_CONTEXT",
    "GlobalConfig",
    "GlobalConfigError",
    "LogConfig",
    "RunContext",
    "current_kube_context",
    "get_config_for_current_kubectx",
    "read_config_file",
]
