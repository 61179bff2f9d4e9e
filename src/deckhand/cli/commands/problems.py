"""Problems command for Deckhand CLI: list the known-problem catalog."""

from __future__ import annotations

import typer

from deckhand.core.errors import Phase, create_default_registry

from ..helpers import configure_global_logging
from ..output import console, create_problems_table


def problems(
    phase: Phase | None = typer.Option(
        None,
        "--phase",
        "-p",
        case_sensitive=False,
        help="Only list problems of this phase",
    ),
) -> None:
    """List known problems in the order they are matched."""
    configure_global_logging(console)

    registry = create_default_registry()
    phases = [phase] if phase is not None else list(registry.phases)
    rows = [(p, problem) for p in phases for problem in registry.problems_for(p)]
    console.print(create_problems_table(rows))
