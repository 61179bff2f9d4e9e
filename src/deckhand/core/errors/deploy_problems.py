"""Known Deploy-phase problems."""

from __future__ import annotations

import re

from deckhand.core.config.kubectx import current_kube_context
from deckhand.core.config.run import RunContext
from deckhand.core.constants import MINIKUBE_CONTEXT

from .codes import StatusCode, SuggestionCode
from .models import Suggestion
from .problems import Problem, error_message

_CLUSTER_CONNECTION_RE = re.compile(r"(?i).*unable to connect.*: Get (.*)")


def suggest_deploy_failed_action(run_ctx: RunContext) -> list[Suggestion]:
    """Point minikube users at ``minikube status``, everyone else at the connection."""
    kube_context = current_kube_context(run_ctx.kube_context)
    if kube_context == MINIKUBE_CONTEXT:
        return [Suggestion(
            SuggestionCode.CHECK_MINIKUBE_STATUS,
            'Check if minikube is running using "minikube status" command and try again',
        )]
    return [Suggestion(
        SuggestionCode.CHECK_CLUSTER_CONNECTION,
        "Check your connection for the cluster",
    )]


def _describe_cluster_connection(err: BaseException) -> str:
    match = _CLUSTER_CONNECTION_RE.search(error_message(err))
    if match:
        return f"Deploy Failed. Could not connect to cluster due to {match.group(1)}"
    return "Deploy Failed. Could not connect to cluster."


KNOWN_DEPLOY_PROBLEMS: tuple[Problem, ...] = (
    Problem(
        pattern=_CLUSTER_CONNECTION_RE,
        status_code=StatusCode.DEPLOY_CLUSTER_CONNECTION_ERR,
        description=_describe_cluster_connection,
        suggest=suggest_deploy_failed_action,
    ),
)
