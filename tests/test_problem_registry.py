"""Tests for Problem descriptors and the per-phase ProblemRegistry."""

import re

import pytest

from deckhand.core.config import RunContext
from deckhand.core.constants import REPORT_ISSUE_TEXT
from deckhand.core.errors import (
    Phase,
    Problem,
    ProblemError,
    ProblemRegistry,
    StatusCode,
    Suggestion,
    SuggestionCode,
    catch_all,
    create_default_registry,
)
from deckhand.core.errors.problems import static_suggestion

PHASE_UNKNOWN_CODES = {
    Phase.INIT: StatusCode.INIT_UNKNOWN,
    Phase.BUILD: StatusCode.BUILD_UNKNOWN,
    Phase.DEPLOY: StatusCode.DEPLOY_UNKNOWN,
    Phase.STATUS_CHECK: StatusCode.STATUSCHECK_UNKNOWN,
    Phase.FILE_SYNC: StatusCode.SYNC_UNKNOWN,
    Phase.DEV_INIT: StatusCode.DEVINIT_UNKNOWN,
    Phase.CLEANUP: StatusCode.CLEANUP_UNKNOWN,
}


def _problem(pattern: str, code: StatusCode) -> Problem:
    return Problem(pattern=re.compile(pattern), status_code=code)


# ============================================================================
# Problem Tests
# ============================================================================


class TestProblem:
    """Tests for a single Problem descriptor."""

    def test_matches_anywhere_in_message(self) -> None:
        problem = _problem(r"context canceled", StatusCode.BUILD_CANCELLED)
        assert problem.matches(Exception("docker build: context canceled while pushing"))
        assert not problem.matches(Exception("build failed"))

    def test_describe_defaults_to_error_message(self) -> None:
        problem = _problem(r"boom", StatusCode.BUILD_UNKNOWN)
        assert problem.describe(Exception("boom happened")) == "boom happened"

    def test_describe_uses_description(self) -> None:
        problem = Problem(
            pattern=re.compile("boom"),
            status_code=StatusCode.BUILD_UNKNOWN,
            description=lambda err: f"Build Failed. {err}",
        )
        assert problem.describe(Exception("boom")) == "Build Failed. boom"

    def test_suggestions_are_a_tuple(self) -> None:
        problem = Problem(
            pattern=re.compile("x"),
            status_code=StatusCode.BUILD_UNKNOWN,
            suggest=static_suggestion(SuggestionCode.CHECK_DOCKER_RUNNING, "Check if docker is running"),
        )
        assert problem.suggestions(RunContext()) == (
            Suggestion(SuggestionCode.CHECK_DOCKER_RUNNING, "Check if docker is running"),
        )

    def test_no_suggestions_by_default(self) -> None:
        assert _problem("x", StatusCode.BUILD_UNKNOWN).suggestions(RunContext()) == ()

    def test_catch_all_matches_everything(self) -> None:
        problem = catch_all(StatusCode.DEPLOY_UNKNOWN)
        assert problem.catch_all
        assert problem.matches(Exception(""))
        assert problem.matches(Exception("anything\nat all"))
        assert problem.suggestions(RunContext()) == (
            Suggestion(SuggestionCode.OPEN_ISSUE, REPORT_ISSUE_TEXT),
        )


class TestProblemError:
    """Tests for errors wrapped as matched problems."""

    def test_message_appends_suggestions(self) -> None:
        problem = Problem(
            pattern=re.compile("x"),
            status_code=StatusCode.BUILD_PROJECT_NOT_FOUND,
            description=lambda err: "Build Failed",
            suggest=static_suggestion(SuggestionCode.CHECK_GCLOUD_PROJECT, "Check your GCR project"),
        )
        err = problem.with_error(Exception("x"), RunContext())
        assert str(err) == "Build Failed. Check your GCR project."

    def test_trailing_period_not_doubled(self) -> None:
        problem = Problem(
            pattern=re.compile("x"),
            status_code=StatusCode.BUILD_UNKNOWN,
            description=lambda err: "Build Failed.",
            suggest=static_suggestion(SuggestionCode.CHECK_DOCKER_RUNNING, "Check if docker is running"),
        )
        err = problem.with_error(Exception("x"), RunContext())
        assert str(err) == "Build Failed. Check if docker is running."

    def test_message_without_suggestions(self) -> None:
        problem = Problem(
            pattern=re.compile("x"),
            status_code=StatusCode.BUILD_CANCELLED,
            description=lambda err: "Build Cancelled.",
        )
        err = problem.with_error(Exception("x"), RunContext())
        assert str(err) == "Build Cancelled."

    def test_keeps_original_error(self) -> None:
        original = RuntimeError("x")
        err = _problem("x", StatusCode.BUILD_UNKNOWN).with_error(original, RunContext())
        assert isinstance(err, ProblemError)
        assert err.error is original
        assert err.__cause__ is original


# ============================================================================
# ProblemRegistry Tests
# ============================================================================


class TestProblemRegistryConstruction:
    """Tests for registry validation."""

    def test_requires_terminal_catch_all(self) -> None:
        with pytest.raises(ValueError, match="must end in a catch-all"):
            ProblemRegistry([(Phase.BUILD, (_problem("x", StatusCode.BUILD_CANCELLED),))])

    def test_rejects_empty_phase(self) -> None:
        with pytest.raises(ValueError, match="must end in a catch-all"):
            ProblemRegistry([(Phase.BUILD, ())])

    def test_rejects_catch_all_before_end(self) -> None:
        with pytest.raises(ValueError, match="must be the last entry"):
            ProblemRegistry([
                (
                    Phase.BUILD,
                    (
                        catch_all(StatusCode.BUILD_UNKNOWN),
                        _problem("x", StatusCode.BUILD_CANCELLED),
                        catch_all(StatusCode.BUILD_UNKNOWN),
                    ),
                ),
            ])

    def test_rejects_duplicate_phase(self) -> None:
        with pytest.raises(ValueError, match="registered twice"):
            ProblemRegistry([
                (Phase.BUILD, (catch_all(StatusCode.BUILD_UNKNOWN),)),
                (Phase.BUILD, (catch_all(StatusCode.BUILD_UNKNOWN),)),
            ])

    def test_default_fallback_is_unknown_error(self) -> None:
        registry = ProblemRegistry([])
        assert registry.fallback.status_code is StatusCode.UNKNOWN_ERROR
        assert registry.fallback.catch_all


class TestProblemRegistryLookup:
    """Tests for per-phase and cross-phase lookup."""

    def test_first_match_wins(self) -> None:
        """Declaration order resolves overlapping patterns."""
        specific = _problem(r"push .* denied", StatusCode.BUILD_PUSH_ACCESS_DENIED)
        general = _problem(r"push", StatusCode.BUILD_PROJECT_NOT_FOUND)
        registry = ProblemRegistry([
            (Phase.BUILD, (specific, general, catch_all(StatusCode.BUILD_UNKNOWN))),
        ])

        assert registry.lookup(Phase.BUILD, Exception("push to repo denied")) is specific
        assert registry.lookup(Phase.BUILD, Exception("push failed")) is general

    def test_catch_all_when_nothing_else_matches(self) -> None:
        registry = create_default_registry()
        problem = registry.lookup(Phase.BUILD, Exception("something unexpected"))
        assert problem.catch_all
        assert problem.status_code is StatusCode.BUILD_UNKNOWN

    @pytest.mark.parametrize("phase", list(Phase))
    def test_lookup_is_total_in_default_registry(self, phase: Phase) -> None:
        problem = create_default_registry().lookup(phase, Exception("no known signature"))
        assert problem.status_code is PHASE_UNKNOWN_CODES[phase]

    def test_unregistered_phase_uses_fallback(self) -> None:
        registry = ProblemRegistry([(Phase.BUILD, (catch_all(StatusCode.BUILD_UNKNOWN),))])
        problem = registry.lookup(Phase.CLEANUP, Exception("boom"))
        assert problem.status_code is StatusCode.UNKNOWN_ERROR

    def test_lookup_any_finds_known_problem(self) -> None:
        registry = create_default_registry()
        err = Exception("could not push image gcr.io/p/app: denied: Permission denied")
        problem, found = registry.lookup_any(err)
        assert found
        assert problem.status_code is StatusCode.BUILD_PUSH_ACCESS_DENIED

    def test_lookup_any_searches_all_phases(self) -> None:
        registry = create_default_registry()
        problem, found = registry.lookup_any(Exception("creating deployer: unknown type"))
        assert found
        assert problem.status_code is StatusCode.INIT_CREATE_DEPLOYER_ERROR

    def test_lookup_any_skips_catch_alls(self) -> None:
        registry = create_default_registry()
        problem, found = registry.lookup_any(Exception("no known signature"))
        assert not found
        assert problem.status_code is StatusCode.UNKNOWN_ERROR

    def test_lookup_any_follows_phase_order(self) -> None:
        build = _problem("shared", StatusCode.BUILD_CANCELLED)
        deploy = _problem("shared", StatusCode.DEPLOY_CLUSTER_CONNECTION_ERR)
        registry = ProblemRegistry([
            (Phase.DEPLOY, (deploy, catch_all(StatusCode.DEPLOY_UNKNOWN))),
            (Phase.BUILD, (build, catch_all(StatusCode.BUILD_UNKNOWN))),
        ])
        problem, found = registry.lookup_any(Exception("shared signature"))
        assert found
        assert problem is deploy


class TestDefaultRegistry:
    """Tests for the built-in catalogs."""

    def test_phase_order(self) -> None:
        phases = create_default_registry().phases
        assert phases[:3] == (Phase.BUILD, Phase.DEPLOY, Phase.INIT)
        assert set(phases) == set(Phase)

    def test_build_problem_order(self) -> None:
        codes = [p.status_code for p in create_default_registry().problems_for(Phase.BUILD)]
        assert codes == [
            StatusCode.BUILD_PUSH_ACCESS_DENIED,
            StatusCode.BUILD_CANCELLED,
            StatusCode.BUILD_PROJECT_NOT_FOUND,
            StatusCode.BUILD_DOCKER_DAEMON_NOT_RUNNING,
            StatusCode.BUILD_UNKNOWN,
        ]

    def test_unknown_phase_has_no_problems(self) -> None:
        registry = ProblemRegistry([])
        assert registry.problems_for(Phase.BUILD) == ()
