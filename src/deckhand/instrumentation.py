"""Telemetry collaborator for classification results.

The classifier reports each resolved status code to an
ErrorCodeRecorder. ErrorCodeMeter is the in-process implementation: it
keeps the last code (what the run exits with) and per-code counts for
aggregate error-rate reporting.
"""

from __future__ import annotations

from collections import Counter
from threading import Lock
from typing import Protocol, runtime_checkable

from deckhand.core.errors.codes import StatusCode
from deckhand.core.logging import get_logger

_logger = get_logger("instrumentation")


@runtime_checkable
class ErrorCodeRecorder(Protocol):
    """Sink for resolved status codes.

    Implementations may raise; the classifier logs and drops such
    failures so that telemetry never affects the caller.
    """

    def record_error_code(self, code: StatusCode) -> None:
        ...


class ErrorCodeMeter:
    """Thread-safe in-memory recorder of status codes."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._counts: Counter[StatusCode] = Counter()
        self._last: StatusCode | None = None

    def record_error_code(self, code: StatusCode) -> None:
        with self._lock:
            self._counts[code] += 1
            self._last = code
        _logger.debug("error_code_recorded", status_code=code.value)

    @property
    def error_code(self) -> StatusCode | None:
        """The most recently recorded code, None if nothing was recorded."""
        with self._lock:
            return self._last

    def counts(self) -> dict[StatusCode, int]:
        """Snapshot of how often each code was recorded."""
        with self._lock:
            return dict(self._counts)

    def total(self) -> int:
        with self._lock:
            return sum(self._counts.values())
