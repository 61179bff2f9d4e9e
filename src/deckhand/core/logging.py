"""Structured logging for Deckhand.

Wraps structlog with Deckhand-specific context (run_id, command, phase,
component) so that every classification can be correlated with the run
and pipeline phase that produced the failure.

Example usage:
    from deckhand.core.logging import LogContext, configure_logging, get_logger, with_context

    # Configure once at startup
    configure_logging(level="DEBUG", format="console")

    # Get a component-specific logger
    logger = get_logger("errors.classifier")
    logger.info("error_classified", status_code="BUILD_CANCELLED")

    # Correlate everything logged inside a block with a run and phase
    ctx = LogContext(command="dev").with_phase("Build")
    with with_context(ctx):
        logger.debug("lookup_started")  # includes run_id, command, phase
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Field names whose values are never written to logs. Registry
# credentials can show up in push errors and config dumps.
SENSITIVE_PATTERNS = frozenset({
    "api_key",
    "apikey",
    "token",
    "secret",
    "password",
    "credential",
    "auth",
    "bearer",
    "authorization",
})

REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class LogContext:
    """Immutable correlation context injected into every log entry.

    Attributes:
        run_id: Unique id for one Deckhand invocation.
        command: The pipeline command being run (e.g. "dev", "run", "build").
        phase: Pipeline phase currently executing, if any.
        component: Component emitting the entry.
    """

    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    command: str | None = None
    phase: str | None = None
    component: str = "unknown"

    def with_phase(self, phase: str) -> LogContext:
        """Return a copy of this context scoped to ``phase``."""
        return replace(self, phase=phase)

    def with_component(self, component: str) -> LogContext:
        """Return a copy of this context scoped to ``component``."""
        return replace(self, component=component)

    def to_dict(self) -> dict[str, Any]:
        """Context fields for logging, omitting unset ones."""
        result: dict[str, Any] = {"run_id": self.run_id, "component": self.component}
        if self.command is not None:
            result["command"] = self.command
        if self.phase is not None:
            result["phase"] = self.phase
        return result


_current_context: ContextVar[LogContext | None] = ContextVar(
    "deckhand_log_context", default=None
)


def get_current_context() -> LogContext | None:
    """Get the active LogContext, or None outside a ``with_context`` block."""
    return _current_context.get()


def set_context(ctx: LogContext) -> None:
    """Set the active LogContext. Prefer ``with_context()``."""
    _current_context.set(ctx)


def clear_context() -> None:
    """Clear the active LogContext."""
    _current_context.set(None)


@contextmanager
def with_context(ctx: LogContext) -> Iterator[LogContext]:
    """Make ``ctx`` the active LogContext for the duration of a block."""
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


def _sanitize_value(key: str, value: Any) -> Any:
    """Return ``[REDACTED]`` for sensitive keys, the value otherwise."""
    key_lower = key.lower()
    if any(pattern in key_lower for pattern in SENSITIVE_PATTERNS):
        return REDACTED
    return value


def _sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor redacting sensitive fields, one level deep."""
    sanitized: EventDict = {}
    for key, value in event_dict.items():
        if isinstance(value, dict):
            sanitized[key] = {k: _sanitize_value(k, v) for k, v in value.items()}
        else:
            sanitized[key] = _sanitize_value(key, value)
    return sanitized


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def _add_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor adding LogContext fields.

    Explicitly bound fields take precedence over context fields.
    """
    ctx = get_current_context()
    if ctx is not None:
        for key, value in ctx.to_dict().items():
            event_dict.setdefault(key, value)
    return event_dict


class DeckhandLogger:
    """Component-bound wrapper around a structlog logger.

    The underlying structlog logger is fetched on every call so that
    loggers created at import time still honour ``configure_logging()``
    calls made later.
    """

    def __init__(self, component: str, **initial_context: Any) -> None:
        self._context: dict[str, Any] = {"component": component, **initial_context}

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        logger: structlog.stdlib.BoundLogger = structlog.get_logger().bind(**self._context)
        return logger

    def bind(self, **context: Any) -> DeckhandLogger:
        """Return a new logger with additional bound context."""
        new_logger = DeckhandLogger.__new__(DeckhandLogger)
        new_logger._context = {**self._context, **context}
        return new_logger

    def debug(self, event: str, **kw: Any) -> None:
        self._get_logger().debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._get_logger().info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._get_logger().warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._get_logger().error(event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Log at error level with the active exception's traceback."""
        self._get_logger().exception(event, **kw)


def _build_processors(include_timestamps: bool, include_context: bool) -> list[Processor]:
    """Processors shared by every handler; rendering happens per handler."""
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        _sanitize_event_dict,
    ]
    if include_context:
        processors.append(_add_context)
    if include_timestamps:
        processors.append(_add_timestamp)
    processors.extend([
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ])
    return processors


def _formatter(renderer: Processor) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO",
    format: Literal["json", "console", "both"] = "console",  # noqa: A002
    file_path: Path | None = None,
    max_file_size_mb: int = 50,
    backup_count: int = 5,
    include_timestamps: bool = True,
    include_context: bool = True,
) -> None:
    """Configure Deckhand structured logging.

    Call once at startup, before anything is logged.

    Args:
        level: Minimum log level to capture.
        format: "console" for human-readable stderr output, "json" for
            structured output (to ``file_path`` if given, else stdout),
            "both" for console on stderr plus JSON to ``file_path``.
        file_path: Log file path. Required when format is "both".
        max_file_size_mb: Size at which the log file is rotated.
        backup_count: Number of rotated files to keep.
        include_timestamps: Add ISO8601 UTC timestamps.
        include_context: Inject the active LogContext fields.

    Raises:
        ValueError: If format is "both" but no file_path is given.
    """
    if format == "both" and file_path is None:
        raise ValueError("file_path is required when format='both'")

    log_level = getattr(logging, level)
    handlers: list[logging.Handler] = []

    if format in ("console", "both"):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            _formatter(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
        )
        handlers.append(console_handler)

    if format in ("json", "both"):
        json_handler: logging.Handler
        if file_path is not None:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            json_handler = RotatingFileHandler(
                file_path,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8",
            )
        else:
            json_handler = logging.StreamHandler(sys.stdout)
        json_handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
        handlers.append(json_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setLevel(log_level)
        root_logger.addHandler(handler)

    # cache_logger_on_first_use=False so import-time loggers follow reconfiguration
    structlog.configure(
        processors=_build_processors(include_timestamps, include_context),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **initial_context: Any) -> DeckhandLogger:
    """Get a logger bound to ``component`` (e.g. "errors.classifier")."""
    return DeckhandLogger(component, **initial_context)


__all__ = [
    "DeckhandLogger",
    "LogContext",
    "SENSITIVE_PATTERNS",
    "clear_context",
    "configure_logging",
    "get_current_context",
    "get_logger",
    "set_context",
    "with_context",
]
