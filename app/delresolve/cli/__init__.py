"""CLI package for delresolve.

This package contains the Typer application and all subcommands.
"""

from delresolve.cli.main import app

__all__ = ["app"]
