"""Write-once holder for the current run's context.

The run configuration loader sets the RunContext once at startup;
classification calls running in parallel phases read it concurrently.
"""

from __future__ import annotations

from threading import Lock

from deckhand.core.config.run import EMPTY_RUN_CONTEXT, RunContext
from deckhand.core.logging import get_logger

_logger = get_logger("errors.context")


class RunContextHolder:
    """Thread-safe, write-once container for a RunContext.

    Two states: unset -> set. Only the first ``set()`` takes effect,
    later calls are no-ops. Before that, ``get()`` returns an empty
    RunContext rather than None.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._context: RunContext | None = None

    def set(self, run_ctx: RunContext) -> bool:
        """Store ``run_ctx`` unless a context was already set.

        Returns:
            True if this call stored the context, False if ignored.
        """
        with self._lock:
            if self._context is not None:
                return False
            self._context = run_ctx
        _logger.debug("run_context_set", command=run_ctx.command)
        return True

    def get(self) -> RunContext:
        """The stored context, or an empty RunContext if none was set yet."""
        with self._lock:
            return self._context if self._context is not None else EMPTY_RUN_CONTEXT

    @property
    def is_set(self) -> bool:
        with self._lock:
            return self._context is not None
