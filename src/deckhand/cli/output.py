"""Rich output formatting for the Deckhand CLI."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from deckhand.core.errors import ActionableError, Phase, Problem

# Command modules print through this console; tests capture stdout.
console = Console()


def status_style(actionable: ActionableError) -> str:
    """Unclassified failures are yellow, recognized problems red."""
    if "UNKNOWN" in actionable.status_code.value:
        return "yellow"
    return "red"


def render_actionable_error(actionable: ActionableError) -> Panel:
    """Panel with the message and, when there are any, numbered suggestions."""
    lines = [escape(actionable.message)]
    if actionable.suggestions:
        lines.extend(["", "[bold]Suggestions:[/bold]"])
        for i, suggestion in enumerate(actionable.suggestions, start=1):
            lines.append(f"  {i}. {escape(suggestion.action)} [dim]({suggestion.code.value})[/dim]")
    style = status_style(actionable)
    return Panel(
        "\n".join(lines),
        title=f"[{style}]{actionable.status_code.value}[/{style}]",
        border_style=style,
        expand=False,
    )


def create_problems_table(rows: Sequence[tuple[Phase, Problem]]) -> Table:
    """Table of registered problems in declaration order."""
    table = Table(title="Known problems")
    table.add_column("Phase", style="cyan", no_wrap=True)
    table.add_column("#", justify="right")
    table.add_column("Status code", style="bold", no_wrap=True)
    table.add_column("Pattern", overflow="fold")

    position: dict[Phase, int] = {}
    for phase, problem in rows:
        position[phase] = position.get(phase, 0) + 1
        pattern = "(catch-all)" if problem.catch_all else problem.pattern.pattern
        table.add_row(phase.value, str(position[phase]), problem.status_code.value, pattern)
    return table
