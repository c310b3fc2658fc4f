"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from delresolve import __version__
from delresolve.cli.commands import classify, config, history, index, rm

# Create main Typer app
app = typer.Typer(
    name="delresolve",
    help="Delete files wherever they live: private storage, media index or granted folders.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"delresolve version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Use this config file instead of the default.",
        ),
    ] = None,
) -> None:
    """delresolve - tiered deletion for files you don't directly own.

    Each path is deleted through the first tier that applies: private
    storage, the shared media index, or a folder you grant access to.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path


# Register commands
app.command(name="rm")(rm.rm)
app.command(name="classify")(classify.classify)
app.add_typer(index.app, name="index")
app.add_typer(config.app, name="config")
app.add_typer(history.app, name="history")


if __name__ == "__main__":
    app()
