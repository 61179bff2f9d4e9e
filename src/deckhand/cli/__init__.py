"""Deckhand CLI.

Commands:
    explain   Classify an error message and show how to fix it
    problems  List the known-problem catalog
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from deckhand import __version__

from . import helpers as helpers
from .commands import explain, problems
from .helpers import configure_global_logging, set_log_file, set_log_format, set_log_level
from .output import console

app = typer.Typer(
    name="deckhand",
    help="Actionable error classification for build/deploy pipelines",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Deckhand v{__version__}")
        raise typer.Exit()


def log_level_callback(value: str | None) -> str | None:
    if value:
        set_log_level(value)
    return value


def log_file_callback(value: Path | None) -> Path | None:
    if value:
        set_log_file(value)
    return value


def log_format_callback(value: str | None) -> str | None:
    if value:
        set_log_format(value)
    return value


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-L",
            callback=log_level_callback,
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            envvar="DECKHAND_LOG_LEVEL",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            callback=log_file_callback,
            help="Also write JSON logs to this file",
            envvar="DECKHAND_LOG_FILE",
        ),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            callback=log_format_callback,
            help="Log format: json, console, or both",
            envvar="DECKHAND_LOG_FORMAT",
        ),
    ] = None,
) -> None:
    """Deckhand - actionable error classification for build/deploy pipelines."""
    configure_global_logging(console)


app.command()(explain)
app.command()(problems)
