"""Run context: the effective configuration of the current run.

The run configuration loader builds one RunContext at startup and hands
it to the error classifier through a RunContextHolder. Suggestion
generators read it to tailor their advice (e.g. which registry to log
into).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class RunContext(BaseModel):
    """Immutable snapshot of the options a run was started with.

    Every field is optional: an empty RunContext means "no context
    available" and generators fall back to generic suggestions.
    """

    model_config = ConfigDict(frozen=True)

    command: str | None = Field(
        default=None,
        description="Pipeline command being run (dev, run, build, deploy, ...)",
    )
    default_repo: str | None = Field(
        default=None,
        description="Explicit --default-repo override; None when not given",
    )
    global_config: Path | None = Field(
        default=None,
        description="Path to the persisted global config; None for the default location",
    )
    kube_context: str | None = Field(
        default=None,
        description="Explicit --kube-context override; None to use the kubeconfig's",
    )


EMPTY_RUN_CONTEXT = RunContext()
"""What readers observe before the run context has been set."""
