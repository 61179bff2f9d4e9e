"""Explain command for Deckhand CLI.

Classifies a failure message as if it had surfaced in the given
pipeline phase and shows the status code and suggestions a run would
have reported.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from deckhand.core.config import RunContext
from deckhand.core.errors import ErrorClassifier, Phase, RunContextHolder
from deckhand.core.logging import LogContext, get_logger, with_context
from deckhand.instrumentation import ErrorCodeMeter

from ..helpers import configure_global_logging
from ..output import console, render_actionable_error

_logger = get_logger("cli.explain")


def explain(
    message: str = typer.Argument(..., help="Error message produced by the failing phase"),
    phase: Phase = typer.Option(
        Phase.BUILD,
        "--phase",
        "-p",
        case_sensitive=False,
        help="Pipeline phase the error surfaced in",
    ),
    default_repo: str | None = typer.Option(
        None,
        "--default-repo",
        "-d",
        help="Default image repository the run used",
    ),
    global_config: Path | None = typer.Option(
        None,
        "--global-config",
        help="Path to the persisted global config (default ~/.deckhand/config)",
    ),
    kube_context: str | None = typer.Option(
        None,
        "--kube-context",
        help="Kube context the run targeted (default: kubeconfig current-context)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output the actionable error as JSON",
    ),
) -> None:
    """Classify an error message and show how to fix it."""
    configure_global_logging(console)

    holder = RunContextHolder()
    holder.set(RunContext(
        command="explain",
        default_repo=default_repo,
        global_config=global_config,
        kube_context=kube_context,
    ))
    meter = ErrorCodeMeter()
    classifier = ErrorClassifier(holder, telemetry=meter)

    with with_context(LogContext(command="explain", phase=phase.value, component="cli")):
        actionable = classifier.actionable_error(phase, Exception(message))
        _logger.info("explained", status_code=actionable.status_code.value, recorded=meter.total())

    if json_output:
        console.print_json(json.dumps({"phase": phase.value, **actionable.to_dict()}))
    else:
        console.print(render_actionable_error(actionable))
