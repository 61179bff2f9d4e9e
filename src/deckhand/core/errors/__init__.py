"""Actionable error classification.

Re-exports the engine's public surface: the classifier, its registry
and run context holder, and the data models they produce.
"""

from deckhand.core.errors.codes import Phase, StatusCode, SuggestionCode
from deckhand.core.errors.models import (
    ActionableError,
    Classified,
    DeckhandError,
    Suggestion,
    concat_suggestions,
)
from deckhand.core.errors.problems import (
    Problem,
    ProblemError,
    catch_all,
    report_issue_suggestion,
)
from deckhand.core.errors.registry import ProblemRegistry, create_default_registry
from deckhand.core.errors.context import RunContextHolder
from deckhand.core.errors.classifier import ErrorClassifier

__all__ = [
    "Phase",
    "StatusCode",
    "SuggestionCode",
    "ActionableError",
    "Classified",
    "DeckhandError",
    "Suggestion",
    "concat_suggestions",
    "Problem",
    "ProblemError",
    "catch_all",
    "report_issue_suggestion",
    "ProblemRegistry",
    "create_default_registry",
    "RunContextHolder",
    "ErrorClassifier",
]
