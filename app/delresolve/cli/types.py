"""Shared helpers for CLI commands.

This module provides the config loading used by every command so that
error reporting is consistent.
"""

from pathlib import Path

import typer

from delresolve.core.config import ConfigError, ResolverConfig, load_config_or_default
from delresolve.utils.formatting import print_error


def get_config_path(ctx: typer.Context) -> Path | None:
    """Get the --config override stored by the main callback."""
    obj = ctx.find_root().obj
    if isinstance(obj, dict):
        value = obj.get("config_path")
        if isinstance(value, Path):
            return value
    return None


def is_quiet(ctx: typer.Context) -> bool:
    """Check whether --quiet was given."""
    obj = ctx.find_root().obj
    return isinstance(obj, dict) and bool(obj.get("quiet"))


def require_config(ctx: typer.Context) -> ResolverConfig:
    """Load the effective configuration or exit with an error.

    Args:
        ctx: Current Typer context.

    Returns:
        The loaded configuration, or defaults if no config file exists.

    Raises:
        typer.Exit: If an existing config file is invalid.
    """
    try:
        return load_config_or_default(get_config_path(ctx))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
