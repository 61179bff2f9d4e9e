"""Problem descriptors: recognizable failure signatures.

A Problem pairs a regular expression over an error's message with the
status code it stands for, a suggestion generator and, optionally, a
formatter overriding the displayed message. Problems are declared once
in the per-phase catalogs (``build_problems``, ``deploy_problems``, ...)
and are read-only afterwards.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from deckhand.core.config.run import RunContext
from deckhand.core.constants import REPORT_ISSUE_TEXT

from .codes import StatusCode, SuggestionCode
from .models import Suggestion, concat_suggestions

SuggestionGenerator = Callable[[RunContext], Sequence[Suggestion]]
"""Pure function of the run context producing suggestions in priority order."""

Describer = Callable[[BaseException], str]
"""Formats the message displayed for a matched error."""


def error_message(err: BaseException) -> str:
    """Text that problem patterns are matched against."""
    return str(err)


def no_suggestions(run_ctx: RunContext) -> list[Suggestion]:
    return []


def report_issue_suggestion(run_ctx: RunContext) -> list[Suggestion]:
    """Static suggestion attached to every phase's catch-all."""
    return [Suggestion(SuggestionCode.OPEN_ISSUE, REPORT_ISSUE_TEXT)]


def static_suggestion(code: SuggestionCode, action: str) -> SuggestionGenerator:
    """Build a generator that always returns one fixed suggestion."""

    def suggest(run_ctx: RunContext) -> list[Suggestion]:
        return [Suggestion(code, action)]

    return suggest


@dataclass(frozen=True)
class Problem:
    """One recognizable failure signature.

    Attributes:
        pattern: Compiled regex searched for in the error's message.
        status_code: Classification assigned on a match.
        suggest: Generator of remedies, given the current run context.
        description: Optional override of the displayed message.
        catch_all: True for the terminal entry that matches anything.
    """

    pattern: re.Pattern[str]
    status_code: StatusCode
    suggest: SuggestionGenerator = no_suggestions
    description: Describer | None = None
    catch_all: bool = False

    def matches(self, err: BaseException) -> bool:
        return self.pattern.search(error_message(err)) is not None

    def describe(self, err: BaseException) -> str:
        if self.description is not None:
            return self.description(err)
        return error_message(err)

    def suggestions(self, run_ctx: RunContext) -> tuple[Suggestion, ...]:
        return tuple(self.suggest(run_ctx))

    def with_error(self, err: BaseException, run_ctx: RunContext) -> ProblemError:
        """Wrap ``err`` as a matched instance of this problem."""
        return ProblemError(self, err, run_ctx)


def catch_all(status_code: StatusCode) -> Problem:
    """Terminal descriptor for a phase: matches anything, asks for a bug report."""
    return Problem(
        pattern=re.compile(r".*"),
        status_code=status_code,
        suggest=report_issue_suggestion,
        catch_all=True,
    )


class ProblemError(Exception):
    """An error that has been matched against a known Problem.

    The message is the problem's description followed by its joined
    suggestions. The original error is kept as ``error`` and as the
    exception's ``__cause__``.
    """

    def __init__(self, problem: Problem, error: BaseException, run_ctx: RunContext) -> None:
        self.problem = problem
        self.error = error
        description = problem.describe(error)
        hint = concat_suggestions(problem.suggestions(run_ctx))
        if hint:
            description = f"{description.strip('.')}. {hint}"
        super().__init__(description)
        self.__cause__ = error
