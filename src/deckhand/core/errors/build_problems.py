"""Known Build-phase problems.

Patterns are matched against the message of the error a builder
returned. Order matters: the first matching descriptor wins.
"""

from __future__ import annotations

import re

from deckhand.core.config.global_config import GlobalConfigError, get_config_for_current_kubectx
from deckhand.core.config.run import RunContext
from deckhand.core.logging import get_logger

from .codes import StatusCode, SuggestionCode
from .models import Suggestion
from .problems import Problem, error_message, static_suggestion

_logger = get_logger("errors.build")

PUSH_IMAGE_ERR = "could not push image"

# Prefix of the error the Docker client returns when the daemon is unreachable
DOCKER_CONNECTION_FAILED = r".*(Cannot connect to the Docker daemon.*) Is"

# Build cancelled because a concurrent build of another artifact failed
BUILD_CANCELLED = r".*context canceled.*"

# Managed registry hosts get a provider-specific auth command
_GCR_REPO = re.compile(r"(.+\.)?gcr\.io.*")

_DOCKER_CONNECTION_RE = re.compile(DOCKER_CONNECTION_FAILED)


def suggest_build_push_access_denied_action(run_ctx: RunContext) -> list[Suggestion]:
    """Suggestions for a push rejected by the registry.

    An explicit ``--default-repo`` is the most likely culprit, then the
    default repo from the persisted config for the active kube context.
    Without either, the user is pointed at ``--default-repo``.
    """
    if run_ctx.default_repo is not None:
        return [
            Suggestion(SuggestionCode.CHECK_DEFAULT_REPO, "Check your `--default-repo` value"),
            make_auth_suggestion_for_repo(run_ctx.default_repo),
        ]

    try:
        cfg = get_config_for_current_kubectx(run_ctx.global_config, run_ctx.kube_context)
    except GlobalConfigError as e:
        _logger.debug("global_config_unavailable", error=str(e))
    else:
        if cfg.default_repo:
            return [
                Suggestion(
                    SuggestionCode.CHECK_DEFAULT_REPO_GLOBAL_CONFIG,
                    "Check your default-repo setting in deckhand config",
                ),
                make_auth_suggestion_for_repo(cfg.default_repo),
            ]

    return [Suggestion(SuggestionCode.ADD_DEFAULT_REPO, "Trying running with `--default-repo` flag")]


def make_auth_suggestion_for_repo(repo: str) -> Suggestion:
    """Registry login hint for ``repo``."""
    if _GCR_REPO.search(repo):
        return Suggestion(
            SuggestionCode.GCLOUD_DOCKER_AUTH_CONFIGURE,
            "try `gcloud auth configure-docker`",
        )
    return Suggestion(SuggestionCode.DOCKER_AUTH_CONFIGURE, "try `docker login`")


def _describe_docker_connection(err: BaseException) -> str:
    match = _DOCKER_CONNECTION_RE.search(error_message(err))
    if match:
        return f"Build Failed. {match.group(1)}"
    return "Build Failed. Could not connect to the Docker daemon."


KNOWN_BUILD_PROBLEMS: tuple[Problem, ...] = (
    Problem(
        pattern=re.compile(rf".*{PUSH_IMAGE_ERR}.* denied: .*"),
        status_code=StatusCode.BUILD_PUSH_ACCESS_DENIED,
        description=lambda err: "Build Failed. No push access to specified image repository",
        suggest=suggest_build_push_access_denied_action,
    ),
    Problem(
        pattern=re.compile(BUILD_CANCELLED),
        status_code=StatusCode.BUILD_CANCELLED,
        description=lambda err: "Build Cancelled.",
    ),
    Problem(
        pattern=re.compile(rf".*{PUSH_IMAGE_ERR}.* unknown: Project"),
        status_code=StatusCode.BUILD_PROJECT_NOT_FOUND,
        description=lambda err: "Build Failed",
        suggest=static_suggestion(SuggestionCode.CHECK_GCLOUD_PROJECT, "Check your GCR project"),
    ),
    Problem(
        pattern=_DOCKER_CONNECTION_RE,
        status_code=StatusCode.BUILD_DOCKER_DAEMON_NOT_RUNNING,
        description=_describe_docker_connection,
        suggest=static_suggestion(SuggestionCode.CHECK_DOCKER_RUNNING, "Check if docker is running"),
    ),
)
