"""ErrorClassifier: turns raw pipeline failures into actionable errors.

Classification precedence for ``classify(phase, err)``:

1. ``err`` (or an error it was raised from) already carries a
   classification (the Classified protocol): reuse its status code and
   suggestions verbatim.
2. ``err`` (or an error it was raised from) is a ProblemError: reuse its
   problem's status code and derive suggestions from the run context.
3. Otherwise look the error up in the phase's problem list.

Only the external entry points (``actionable_error`` and
``show_ai_error``) report to telemetry, once per call.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from deckhand.core.logging import get_logger

from .codes import Phase, StatusCode
from .context import RunContextHolder
from .devinit_problems import OLD_IMAGE_MANIFEST
from .models import ActionableError, Classified, Suggestion, concat_suggestions
from .problems import Problem, ProblemError, error_message
from .registry import ProblemRegistry, create_default_registry

if TYPE_CHECKING:
    from deckhand.instrumentation import ErrorCodeRecorder

_logger = get_logger("errors.classifier")


@dataclass(frozen=True)
class _Resolution:
    status_code: StatusCode
    suggestions: tuple[Suggestion, ...]
    message: str
    method: str


def _error_chain(err: BaseException) -> Iterator[BaseException]:
    """Yield ``err`` and the errors it was raised from, outermost first."""
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        # ActionableError values are classified without being exceptions
        cause = getattr(current, "__cause__", None)
        if cause is not None:
            current = cause
        elif not getattr(current, "__suppress_context__", True):
            current = current.__context__
        else:
            current = None


class ErrorClassifier:
    """Classifies failures per pipeline phase and assembles actionable errors.

    The run context is injected through a RunContextHolder rather than
    looked up globally; the registry is immutable, so one classifier can
    serve concurrent phases.

    Example:
        holder = RunContextHolder()
        holder.set(RunContext(command="dev", default_repo="gcr.io/my-project"))
        classifier = ErrorClassifier(holder, telemetry=ErrorCodeMeter())

        try:
            build()
        except Exception as e:
            actionable = classifier.actionable_error(Phase.BUILD, e)
            console.print(actionable.format())
    """

    def __init__(
        self,
        run_context: RunContextHolder,
        registry: ProblemRegistry | None = None,
        telemetry: ErrorCodeRecorder | None = None,
    ) -> None:
        """Initialize the classifier.

        Args:
            run_context: Holder the suggestion generators read from.
            registry: Problem catalog; defaults to the built-in catalogs.
            telemetry: Status code sink; defaults to an ErrorCodeMeter.
        """
        if telemetry is None:
            from deckhand.instrumentation import ErrorCodeMeter

            telemetry = ErrorCodeMeter()
        self._run_context = run_context
        self._registry = registry or create_default_registry()
        self._telemetry = telemetry

    @property
    def registry(self) -> ProblemRegistry:
        return self._registry

    @property
    def telemetry(self) -> ErrorCodeRecorder:
        return self._telemetry

    def classify(
        self, phase: Phase, err: BaseException
    ) -> tuple[StatusCode, tuple[Suggestion, ...]]:
        """Resolve the status code and suggestions for ``err`` in ``phase``.

        Never reports to telemetry.

        Raises:
            ValueError: If ``err`` is None.
        """
        resolution = self._resolve(phase, err)
        return resolution.status_code, resolution.suggestions

    def actionable_error(self, phase: Phase, err: BaseException) -> ActionableError:
        """Classify ``err`` and build the terminal ActionableError.

        Reports the resolved status code to telemetry exactly once.

        Raises:
            ValueError: If ``err`` is None.
        """
        resolution = self._resolve(phase, err)
        self._record(resolution.status_code)
        return ActionableError(
            status_code=resolution.status_code,
            message=resolution.message,
            suggestions=resolution.suggestions,
        )

    def lookup_any(self, err: BaseException) -> tuple[Problem, bool]:
        """First known problem ``err`` matches in any phase, ignoring catch-alls."""
        return self._registry.lookup_any(err)

    def show_ai_error(self, err: BaseException) -> BaseException:
        """Best-effort reclassification of an error surfaced without a phase.

        Errors with a pre-classified error or a ProblemError anywhere in
        their chain are returned unchanged. Otherwise an error matching a
        known problem is wrapped in a ProblemError whose message carries
        the problem's description and suggestions. The status code is
        recorded whenever one is known; unmatched errors are returned
        unchanged and nothing is recorded.
        """
        chain = list(_error_chain(err))
        for e in chain:
            if isinstance(e, Classified):
                self._record(e.status_code)
                return err
        for e in chain:
            if isinstance(e, ProblemError):
                self._record(e.problem.status_code)
                return err

        problem, found = self._registry.lookup_any(err)
        if not found:
            return err
        self._record(problem.status_code)
        return problem.with_error(err, self._run_context.get())

    def is_old_image_manifest_problem(self, err: BaseException | None) -> tuple[str, bool]:
        """Check for an image pushed with the deprecated v1 manifest.

        Returns:
            (display text, True) on a match, where the text is the
            description followed by the joined suggestions (empty when the
            problem yields none); ("", False) otherwise.
        """
        if err is None or not OLD_IMAGE_MANIFEST.matches(err):
            return "", False
        hint = concat_suggestions(OLD_IMAGE_MANIFEST.suggestions(self._run_context.get()))
        if not hint:
            return "", True
        return f"{OLD_IMAGE_MANIFEST.describe(err)}. {hint}", True

    def _resolve(self, phase: Phase, err: BaseException) -> _Resolution:
        if err is None:
            raise ValueError("cannot classify a None error")

        chain = list(_error_chain(err))
        for e in chain:
            if isinstance(e, Classified):
                return _Resolution(
                    status_code=e.status_code,
                    suggestions=tuple(e.suggestions),
                    message=error_message(err),
                    method="preclassified",
                )

        run_ctx = self._run_context.get()
        for e in chain:
            if isinstance(e, ProblemError):
                return _Resolution(
                    status_code=e.problem.status_code,
                    suggestions=e.problem.suggestions(run_ctx),
                    message=e.problem.describe(e.error),
                    method="problem",
                )

        problem = self._registry.lookup(phase, err)
        resolution = _Resolution(
            status_code=problem.status_code,
            suggestions=problem.suggestions(run_ctx),
            message=problem.describe(err),
            method="catch_all" if problem.catch_all else "pattern",
        )
        _logger.debug(
            "error_classified",
            phase=phase.value,
            status_code=resolution.status_code.value,
            method=resolution.method,
        )
        return resolution

    def _record(self, code: StatusCode) -> None:
        try:
            self._telemetry.record_error_code(code)
        except Exception as e:
            _logger.warning("telemetry_record_failed", status_code=code.value, error=str(e))
