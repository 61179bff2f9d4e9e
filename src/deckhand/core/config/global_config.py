"""Persisted global configuration store.

Deckhand keeps user preferences that outlive a single run in a YAML
file (``~/.deckhand/config`` by default)::

    global:
      default-repo: gcr.io/my-project
    kubeContexts:
      - kube-context: minikube
        default-repo: localhost:5000
      - kube-context: gke_my-project_us-central1_prod
        default-repo: us-docker.pkg.dev/my-project/prod

Settings are looked up per kube context; anything a context leaves
unset is inherited from the ``global`` section. Keys Deckhand does not
use (``local-cluster``, ``insecure-registries``, ...) are ignored.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from deckhand.core.constants import DEFAULT_GLOBAL_CONFIG_FILE
from deckhand.core.config.kubectx import current_kube_context
from deckhand.core.logging import get_logger

_logger = get_logger("config.global")


class GlobalConfigError(Exception):
    """The persisted global config exists but cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"reading global config {path}: {reason}")


class ContextConfig(BaseModel):
    """Settings for one kube context (or the ``global`` section)."""

    model_config = ConfigDict(populate_by_name=True)

    kube_context: str | None = Field(default=None, alias="kube-context")
    default_repo: str | None = Field(default=None, alias="default-repo")

    def inherit(self, parent: ContextConfig) -> ContextConfig:
        """Fill fields left unset here from ``parent``."""
        return ContextConfig(
            kube_context=self.kube_context,
            default_repo=self.default_repo or parent.default_repo,
        )


class GlobalConfig(BaseModel):
    """The whole persisted config file."""

    model_config = ConfigDict(populate_by_name=True)

    global_: ContextConfig | None = Field(default=None, alias="global")
    contexts: list[ContextConfig] = Field(default_factory=list, alias="kubeContexts")

    def for_context(self, kube_context: str | None) -> ContextConfig:
        """Effective settings for ``kube_context``."""
        base = self.global_ or ContextConfig()
        if kube_context:
            for ctx in self.contexts:
                if ctx.kube_context == kube_context:
                    return ctx.inherit(base)
        return base.model_copy(update={"kube_context": kube_context})


def resolve_config_path(config_file: Path | None) -> Path:
    """Resolve the config file path, expanding ~."""
    return (config_file or DEFAULT_GLOBAL_CONFIG_FILE).expanduser()


def read_config_file(config_file: Path | None) -> GlobalConfig:
    """Load the persisted config.

    A missing file is not an error and yields an empty config.

    Raises:
        GlobalConfigError: If the file is unreadable, not UTF-8 YAML,
            or has an unexpected structure.
    """
    path = resolve_config_path(config_file)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return GlobalConfig()
    except OSError as e:
        raise GlobalConfigError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise GlobalConfigError(path, "not valid UTF-8") from e
    except yaml.YAMLError as e:
        raise GlobalConfigError(path, f"invalid YAML: {e}") from e

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as e:
        raise GlobalConfigError(path, f"invalid structure: {e.error_count()} error(s)") from e


def get_config_for_current_kubectx(
    config_file: Path | None,
    kube_context: str | None = None,
) -> ContextConfig:
    """Effective persisted settings for the active kube context.

    Args:
        config_file: Global config path, or None for the default location.
        kube_context: Explicit kube context; falls back to the kubeconfig's
            ``current-context``.

    Raises:
        GlobalConfigError: If the config file cannot be read.
    """
    context = current_kube_context(kube_context)
    cfg = read_config_file(config_file).for_context(context)
    _logger.debug(
        "global_config_loaded",
        kube_context=context,
        has_default_repo=cfg.default_repo is not None,
    )
    return cfg
