"""Tests for status codes, suggestions and actionable error models.

Tests verify:
- Phase and code enum values
- concat_suggestions joining rules
- ActionableError formatting and serialization
- DeckhandError and ActionableError satisfy the Classified protocol
"""

import pytest

from deckhand.core.errors import (
    ActionableError,
    Classified,
    DeckhandError,
    Phase,
    StatusCode,
    Suggestion,
    SuggestionCode,
    concat_suggestions,
)


# ============================================================================
# Enum Tests
# ============================================================================


class TestCodeEnums:
    """Tests for Phase, StatusCode and SuggestionCode."""

    def test_status_code_values_unique(self) -> None:
        values = [code.value for code in StatusCode]
        assert len(values) == len(set(values)), "Duplicate status code values found"

    def test_status_code_value_is_name(self) -> None:
        """Codes serialize to their own names so telemetry stays readable."""
        for code in StatusCode:
            assert code.value == code.name

    def test_every_phase_has_unknown_code(self) -> None:
        names = {code.name for code in StatusCode}
        for prefix in ("INIT", "BUILD", "DEPLOY", "STATUSCHECK", "SYNC", "DEVINIT", "CLEANUP"):
            assert f"{prefix}_UNKNOWN" in names

    def test_phase_values(self) -> None:
        assert Phase.BUILD.value == "Build"
        assert Phase.STATUS_CHECK.value == "StatusCheck"
        assert Phase("FileSync") is Phase.FILE_SYNC

    def test_suggestion_code_is_str(self) -> None:
        assert SuggestionCode.OPEN_ISSUE == "OPEN_ISSUE"


# ============================================================================
# concat_suggestions Tests
# ============================================================================


class TestConcatSuggestions:
    """Tests for joining suggestion actions for display."""

    def test_empty_is_empty_string(self) -> None:
        assert concat_suggestions([]) == ""

    def test_single_action_gets_period(self) -> None:
        s = Suggestion(SuggestionCode.CHECK_DOCKER_RUNNING, "Check if docker is running")
        assert concat_suggestions([s]) == "Check if docker is running."

    def test_actions_joined_with_or(self) -> None:
        suggestions = [
            Suggestion(SuggestionCode.CHECK_DEFAULT_REPO, "Check your `--default-repo` value"),
            Suggestion(SuggestionCode.DOCKER_AUTH_CONFIGURE, "try `docker login`"),
        ]
        assert (
            concat_suggestions(suggestions)
            == "Check your `--default-repo` value or try `docker login`."
        )

    def test_empty_actions_are_skipped(self) -> None:
        suggestions = [Suggestion(SuggestionCode.OPEN_ISSUE, "")]
        assert concat_suggestions(suggestions) == ""


# ============================================================================
# ActionableError Tests
# ============================================================================


class TestActionableError:
    """Tests for the terminal classification result."""

    def test_str_is_message(self) -> None:
        err = ActionableError(StatusCode.BUILD_CANCELLED, "Build Cancelled.")
        assert str(err) == "Build Cancelled."

    def test_format_without_suggestions(self) -> None:
        """No suggestion block is rendered when there are no suggestions."""
        err = ActionableError(StatusCode.BUILD_CANCELLED, "Build Cancelled.")
        assert err.format() == "[BUILD_CANCELLED] Build Cancelled."

    def test_format_with_suggestions(self) -> None:
        err = ActionableError(
            StatusCode.BUILD_DOCKER_DAEMON_NOT_RUNNING,
            "Build Failed. Cannot connect to the Docker daemon.",
            (Suggestion(SuggestionCode.CHECK_DOCKER_RUNNING, "Check if docker is running"),),
        )
        assert err.format() == (
            "[BUILD_DOCKER_DAEMON_NOT_RUNNING] Build Failed. Cannot connect to the Docker daemon.\n"
            "Check if docker is running."
        )

    def test_to_dict(self) -> None:
        err = ActionableError(
            StatusCode.DEPLOY_CLUSTER_CONNECTION_ERR,
            "Deploy Failed.",
            (Suggestion(SuggestionCode.CHECK_CLUSTER_CONNECTION, "Check your connection for the cluster"),),
        )
        assert err.to_dict() == {
            "status_code": "DEPLOY_CLUSTER_CONNECTION_ERR",
            "message": "Deploy Failed.",
            "suggestions": [
                {"code": "CHECK_CLUSTER_CONNECTION", "action": "Check your connection for the cluster"},
            ],
        }

    def test_is_immutable(self) -> None:
        err = ActionableError(StatusCode.UNKNOWN_ERROR, "boom")
        with pytest.raises(AttributeError):
            err.message = "other"  # type: ignore[misc]

    def test_is_classified(self) -> None:
        err = ActionableError(StatusCode.UNKNOWN_ERROR, "boom")
        assert isinstance(err, Classified)


class TestDeckhandError:
    """Tests for the exception carrying a resolved classification."""

    def test_exposes_classification(self) -> None:
        suggestion = Suggestion(SuggestionCode.CHECK_GCLOUD_PROJECT, "Check your GCR project")
        actionable = ActionableError(StatusCode.BUILD_PROJECT_NOT_FOUND, "Build Failed", (suggestion,))
        err = DeckhandError(actionable)

        assert str(err) == "Build Failed"
        assert err.status_code is StatusCode.BUILD_PROJECT_NOT_FOUND
        assert err.suggestions == (suggestion,)
        assert err.actionable is actionable

    def test_is_classified(self) -> None:
        err = DeckhandError(ActionableError(StatusCode.UNKNOWN_ERROR, "boom"))
        assert isinstance(err, Classified)

    def test_plain_exception_is_not_classified(self) -> None:
        assert not isinstance(RuntimeError("boom"), Classified)
