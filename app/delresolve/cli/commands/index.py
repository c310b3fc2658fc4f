"""Media index commands.

Provides commands to create the local media index, register files in it
and list its contents.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from delresolve.cli.types import require_config
from delresolve.deletion.media_index import MediaIndexError, SqliteMediaIndex
from delresolve.models.index import MediaCollection
from delresolve.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage the local media index.",
    no_args_is_help=True,
)


def _get_index(ctx: typer.Context) -> SqliteMediaIndex:
    """Open the configured media index."""
    return SqliteMediaIndex(require_config(ctx).effective_index_path)


@app.command()
def init(ctx: typer.Context) -> None:
    """Create the media index database."""
    index = _get_index(ctx)
    try:
        index.initialize()
    except MediaIndexError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Media index ready at {index.db_path}")


@app.command()
def add(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="File to register."),
    ],
    collection: Annotated[
        MediaCollection,
        typer.Option(
            "--collection",
            "-C",
            help="Collection to add the file to.",
            case_sensitive=False,
        ),
    ] = MediaCollection.FILES,
    owner: Annotated[
        str | None,
        typer.Option("--owner", "-o", help="Owning application (default: unowned)."),
    ] = None,
) -> None:
    """Register a file in the media index."""
    index = _get_index(ctx)
    absolute = str(path.absolute())
    try:
        entry = index.add(collection, absolute, owner)
    except MediaIndexError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Added {absolute} as {entry.uri}")


@app.command(name="list")
def list_entries(ctx: typer.Context) -> None:
    """List all entries in the media index."""
    index = _get_index(ctx)
    try:
        rows = index.entries()
    except MediaIndexError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not rows:
        print_info("Media index is empty.")
        return

    table = Table(
        title="Media Index",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Entry", style="tier_index", no_wrap=True)
    table.add_column("Path")
    table.add_column("Owner", style="muted")

    for entry, data, row_owner in rows:
        table.add_row(entry.uri, data, row_owner or "-")

    console.print(table)
