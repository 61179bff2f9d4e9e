"""Shared utilities for Deckhand CLI commands.

Holds the CLI's logging state. Global options set it through the
callbacks in ``deckhand.cli``; every command calls
``configure_global_logging()`` before doing any work.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import typer
from pydantic import ValidationError
from rich.console import Console

from deckhand.core.config import LogConfig
from deckhand.core.logging import configure_logging


@dataclass
class CliLoggingConfig:
    """CLI logging options, filled in by the global option callbacks."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: Path | None = None
    format: Literal["json", "console", "both"] = "console"
    configured: bool = False


_log_config = CliLoggingConfig()


def get_log_config() -> CliLoggingConfig:
    return _log_config


def set_log_level(level: str) -> None:
    _log_config.level = level.upper()  # type: ignore[assignment]


def set_log_file(path: Path | None) -> None:
    """Send logs to ``path``, as JSON, in addition to the console."""
    _log_config.file = path
    if path:
        _log_config.format = "both"


def set_log_format(fmt: str) -> None:
    _log_config.format = fmt.lower()  # type: ignore[assignment]


def configure_global_logging(console: Console) -> None:
    """Configure logging from the global CLI options, once per session.

    Raises:
        typer.Exit: If the options do not form a valid LogConfig.
    """
    if _log_config.configured:
        return

    try:
        log_config = LogConfig(
            level=_log_config.level,
            format=_log_config.format,
            file_path=_log_config.file,
        )
        configure_logging(**log_config.model_dump())
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Logging configuration error:[/red] {e}")
        raise typer.Exit(1) from None
    _log_config.configured = True


def reset_logging_state() -> None:
    """Forget all CLI logging options (used by tests)."""
    global _log_config
    _log_config = CliLoggingConfig()
