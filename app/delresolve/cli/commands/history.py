"""History command for viewing past deletions.

This module provides the `delresolve history` command for viewing
the deletions recorded by `delresolve rm`.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from delresolve.core.state import StateManager
from delresolve.models.history import HistoryEntry
from delresolve.utils.formatting import console, print_info

app = typer.Typer(
    name="history",
    help="View history of deletions.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of deletions.

    Examples:
        delresolve history              # Show last 20 entries
        delresolve history -n 50        # Show last 50 entries
        delresolve history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    entries = StateManager().get_history(limit=limit)

    if not entries:
        print_info("No history entries found.")
        return

    if json_output:
        console.print_json(json.dumps([entry.to_dict() for entry in entries]))
    else:
        _print_table(entries)


def _print_table(entries: list[HistoryEntry]) -> None:
    """Print history as Rich table.

    Args:
        entries: List of history entries to display.
    """
    table = Table(title="Deletion History")
    table.add_column("ID", style="dim")
    table.add_column("Timestamp", style="cyan")
    table.add_column("Tier", style="green")
    table.add_column("Paths", style="white")

    for entry in entries:
        count = len(entry.items)
        paths = ", ".join(item.path for item in entry.items[:3])
        if count > 3:
            paths += f" (+{count - 3} more)"

        timestamp = entry.timestamp[:19].replace("T", " ")
        table.add_row(entry.id, timestamp, entry.action_type.value, paths)

    console.print(table)
