"""Resolution of the active cluster (kube) context.

The explicit ``--kube-context`` of the run wins; otherwise the
``current-context`` of the user's kubeconfig is used.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from deckhand.core.constants import DEFAULT_KUBECONFIG_FILE
from deckhand.core.logging import get_logger

_logger = get_logger("config.kubectx")


def kubeconfig_path() -> Path:
    """Path of the kubeconfig to consult.

    Uses the first entry of ``$KUBECONFIG`` when set, like kubectl does
    for the file that owns ``current-context``.
    """
    env = os.environ.get("KUBECONFIG", "")
    first = next((p for p in env.split(os.pathsep) if p), None)
    if first:
        return Path(first).expanduser()
    return DEFAULT_KUBECONFIG_FILE.expanduser()


def current_kube_context(explicit: str | None = None) -> str | None:
    """Return the active kube context name, or None if it cannot be determined."""
    if explicit:
        return explicit

    path = kubeconfig_path()
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        _logger.debug("kubeconfig_unreadable", path=str(path), error=str(e))
        return None

    if not isinstance(data, dict):
        return None
    context = data.get("current-context")
    return context or None
