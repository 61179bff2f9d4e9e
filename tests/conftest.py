"""Pytest fixtures for Deckhand tests."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from deckhand.core.config import RunContext
from deckhand.core.errors import ErrorClassifier, RunContextHolder
from deckhand.instrumentation import ErrorCodeMeter


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset CLI logging options, structlog and root handlers around each test."""
    from deckhand.cli import helpers

    helpers.reset_logging_state()
    structlog.reset_defaults()

    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    helpers.reset_logging_state()
    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's real ~/.deckhand and ~/.kube out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("KUBECONFIG", raising=False)
    return home


@pytest.fixture
def write_global_config(isolated_home: Path):
    """Write YAML text to the default global config location."""

    def write(text: str) -> Path:
        path = isolated_home / ".deckhand" / "config"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    return write


@pytest.fixture
def write_kubeconfig(isolated_home: Path):
    """Write a kubeconfig whose current-context is the given name."""

    def write(current_context: str) -> Path:
        path = isolated_home / ".kube" / "config"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            "apiVersion: v1\n"
            "kind: Config\n"
            f"current-context: {current_context}\n"
            "contexts:\n"
            f"  - name: {current_context}\n"
            "    context:\n"
            f"      cluster: {current_context}\n"
        )
        return path

    return write


@pytest.fixture
def holder() -> RunContextHolder:
    """An unset run context holder."""
    return RunContextHolder()


@pytest.fixture
def meter() -> ErrorCodeMeter:
    return ErrorCodeMeter()


@pytest.fixture
def make_classifier(holder: RunContextHolder, meter: ErrorCodeMeter):
    """Build a classifier whose holder is set to the given run context."""

    def make(run_ctx: RunContext | None = None) -> ErrorClassifier:
        if run_ctx is not None:
            holder.set(run_ctx)
        return ErrorClassifier(holder, telemetry=meter)

    return make


@pytest.fixture
def classifier(make_classifier) -> ErrorClassifier:
    """Classifier with an unset run context."""
    return make_classifier()
