"""Data models for actionable errors.

This module provides:
- Suggestion: One remedy, a (code, action) pair
- ActionableError: Terminal classification result for display and telemetry
- Classified: Capability protocol for values that already carry a classification
- DeckhandError: Exception carrying an ActionableError through raising layers
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from .codes import StatusCode, SuggestionCode


@dataclass(frozen=True)
class Suggestion:
    """A single remedy for a failure.

    Attributes:
        code: Machine-readable identifier of the remedy.
        action: Human-readable instruction, e.g. "try `docker login`".
    """

    code: SuggestionCode
    action: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "action": self.action}


def concat_suggestions(suggestions: Sequence[Suggestion]) -> str:
    """Join suggestion actions for display.

    Actions are joined with " or " and terminated with a period; an empty
    sequence produces an empty string so that callers never render an
    empty suggestion block.
    """
    actions = [s.action for s in suggestions if s.action]
    if not actions:
        return ""
    return " or ".join(actions) + "."


@runtime_checkable
class Classified(Protocol):
    """Anything that already carries a resolved classification.

    Errors implementing this are never reclassified: their status code
    and suggestions are reused verbatim.
    """

    @property
    def status_code(self) -> StatusCode:
        ...

    @property
    def suggestions(self) -> Sequence[Suggestion]:
        ...


@dataclass(frozen=True)
class ActionableError:
    """Terminal result of classifying a failure.

    Created once per failure and never mutated. The first suggestion is
    the primary remedy.

    Example:
    ```python
    err = classifier.actionable_error(Phase.BUILD, exc)
    print(err.format())
    # [BUILD_DOCKER_DAEMON_NOT_RUNNING] Build Failed. Cannot connect to ...
    # Check if docker is running.
    ```
    """

    status_code: StatusCode
    message: str
    suggestions: tuple[Suggestion, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return self.message

    def format(self) -> str:
        """Render for humans: code and message, then suggestions if any."""
        text = f"[{self.status_code.value}] {self.message}"
        hint = concat_suggestions(self.suggestions)
        if hint:
            text = f"{text}\n{hint}"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code.value,
            "message": self.message,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


class DeckhandError(Exception):
    """Exception carrying an already-resolved classification.

    Raise it (or wrap a failure in it) once a layer has classified an
    error, so that outer layers reuse the classification instead of
    replacing or duplicating its suggestions.
    """

    def __init__(self, actionable: ActionableError) -> None:
        self.actionable = actionable
        super().__init__(actionable.message)

    @property
    def status_code(self) -> StatusCode:
        return self.actionable.status_code

    @property
    def suggestions(self) -> tuple[Suggestion, ...]:
        return self.actionable.suggestions
