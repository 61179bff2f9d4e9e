"""Registry of known problems, per pipeline phase.

Each phase owns an ordered list of Problem descriptors ending in a
catch-all, so looking up any error in a registered phase always yields
a descriptor. Phases without a list fall back to a process-wide
catch-all carrying ``StatusCode.UNKNOWN_ERROR``.

The create_default_registry() factory returns the registry with all
built-in catalogs.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .codes import Phase, StatusCode
from .problems import Problem, catch_all


class ProblemRegistry:
    """Immutable, ordered catalog of problems per phase.

    Declaration order is the tie-break: more specific problems must be
    registered before general ones, and lookups never reorder them.
    Instances are safe to share between threads.

    Example:
        registry = create_default_registry()

        problem = registry.lookup(Phase.BUILD, err)
        problem.status_code  # StatusCode.BUILD_CANCELLED

        problem, found = registry.lookup_any(err)
    """

    def __init__(
        self,
        problems: Iterable[tuple[Phase, Sequence[Problem]]],
        fallback: Problem | None = None,
    ) -> None:
        """Build a registry.

        Args:
            problems: (phase, descriptors) pairs. Phase order is kept for
                ``lookup_any``; descriptor order is kept for ``lookup``.
            fallback: Descriptor for phases without a list. Defaults to a
                catch-all with ``StatusCode.UNKNOWN_ERROR``.

        Raises:
            ValueError: If a phase is registered twice, or a phase's list
                does not end in exactly one catch-all.
        """
        self._phases: list[Phase] = []
        self._problems: dict[Phase, tuple[Problem, ...]] = {}
        for phase, phase_problems in problems:
            if phase in self._problems:
                raise ValueError(f"phase {phase.value} registered twice")
            entries = tuple(phase_problems)
            if not entries or not entries[-1].catch_all:
                raise ValueError(f"problems for phase {phase.value} must end in a catch-all")
            if any(p.catch_all for p in entries[:-1]):
                raise ValueError(
                    f"catch-all for phase {phase.value} must be the last entry"
                )
            self._phases.append(phase)
            self._problems[phase] = entries
        self._fallback = fallback or catch_all(StatusCode.UNKNOWN_ERROR)

    @property
    def phases(self) -> tuple[Phase, ...]:
        """Registered phases in declaration order."""
        return tuple(self._phases)

    @property
    def fallback(self) -> Problem:
        return self._fallback

    def problems_for(self, phase: Phase) -> tuple[Problem, ...]:
        """Descriptors for ``phase`` in declaration order, catch-all included."""
        return self._problems.get(phase, ())

    def lookup(self, phase: Phase, err: BaseException) -> Problem:
        """Return the first descriptor of ``phase`` matching ``err``.

        Total: unregistered phases get the process-wide fallback.
        """
        for problem in self._problems.get(phase, ()):
            if problem.matches(err):
                return problem
        return self._fallback

    def lookup_any(self, err: BaseException) -> tuple[Problem, bool]:
        """Match ``err`` against every phase's known problems.

        Used to reclassify errors surfaced without phase context.
        Catch-alls are skipped, so ``found`` is False when only a
        catch-all would have matched; the returned descriptor is then
        the process-wide fallback.
        """
        for phase in self._phases:
            for problem in self._problems[phase]:
                if not problem.catch_all and problem.matches(err):
                    return problem, True
        return self._fallback, False


def create_default_registry() -> ProblemRegistry:
    """Create the registry with all built-in problem catalogs.

    Phases are declared Build, Deploy, Init first, which is also the
    order ``lookup_any`` searches them in.
    """
    from .build_problems import KNOWN_BUILD_PROBLEMS
    from .deploy_problems import KNOWN_DEPLOY_PROBLEMS
    from .devinit_problems import KNOWN_DEVINIT_PROBLEMS
    from .init_problems import KNOWN_INIT_PROBLEMS

    return ProblemRegistry([
        (Phase.BUILD, (*KNOWN_BUILD_PROBLEMS, catch_all(StatusCode.BUILD_UNKNOWN))),
        (Phase.DEPLOY, (*KNOWN_DEPLOY_PROBLEMS, catch_all(StatusCode.DEPLOY_UNKNOWN))),
        (Phase.INIT, (*KNOWN_INIT_PROBLEMS, catch_all(StatusCode.INIT_UNKNOWN))),
        (Phase.DEV_INIT, (*KNOWN_DEVINIT_PROBLEMS, catch_all(StatusCode.DEVINIT_UNKNOWN))),
        (Phase.STATUS_CHECK, (catch_all(StatusCode.STATUSCHECK_UNKNOWN),)),
        (Phase.FILE_SYNC, (catch_all(StatusCode.SYNC_UNKNOWN),)),
        (Phase.CLEANUP, (catch_all(StatusCode.CLEANUP_UNKNOWN),)),
    ])
