"""Config commands.

Provides commands to show the effective configuration and to write a
default config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from delresolve.cli.types import get_config_path, require_config
from delresolve.core.config import ConfigError, get_default_config, save_config
from delresolve.core.paths import get_config_path as get_default_config_path
from delresolve.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    config = require_config(ctx)

    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("sandbox_root", str(config.effective_sandbox_root))
    table.add_row("index_path", str(config.effective_index_path))
    table.add_row("owner", config.owner)
    table.add_row("require_confirmation", str(config.require_confirmation).lower())
    table.add_row("max_tree_depth", str(config.max_tree_depth))
    table.add_row("max_tree_nodes", str(config.max_tree_nodes))

    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    path = get_config_path(ctx) or get_default_config_path()

    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        return

    try:
        saved = save_config(get_default_config(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default config to {saved}")
