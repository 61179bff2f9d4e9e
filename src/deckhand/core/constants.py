"""Global constants for Deckhand.

Centralizes values shared by the error catalog, the config store
and the CLI so they stay discoverable and consistent.
"""

from pathlib import Path

# =============================================================================
# Issue reporting
# =============================================================================

ISSUE_TRACKER_URL = "https://github.com/deckhand-dev/deckhand/issues/new"
"""Where users are sent when an error could not be classified."""

REPORT_ISSUE_TEXT = (
    f"If above error is unexpected, please open an issue {ISSUE_TRACKER_URL} "
    "to report this error"
)
"""Action text attached to every phase's catch-all descriptor."""

# =============================================================================
# Persisted configuration
# =============================================================================

DEFAULT_CONFIG_DIR = Path("~/.deckhand")
"""Directory holding the persisted global configuration."""

DEFAULT_GLOBAL_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config"
"""Default global config path when the run does not override it."""

DEFAULT_KUBECONFIG_FILE = Path("~/.kube/config")
"""Fallback kubeconfig location when $KUBECONFIG is unset."""

# =============================================================================
# Cluster contexts
# =============================================================================

MINIKUBE_CONTEXT = "minikube"
"""Kube context name used by a default local minikube cluster."""
