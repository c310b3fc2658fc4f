"""Resolver configuration and settings.

This module provides the configuration model and I/O functions for the
deletion resolver: where the application's private storage lives, where
the media index is kept, and how the managed delete tier behaves.

Configuration is stored in ~/.config/delresolve/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from delresolve.core.paths import (
    get_config_path,
    get_default_index_path,
    get_default_sandbox_root,
)

logger = logging.getLogger(__name__)

DEFAULT_OWNER = "delresolve"
DEFAULT_MAX_TREE_DEPTH = 256
DEFAULT_MAX_TREE_NODES = 100_000


class ResolverConfig(BaseModel):
    """Configuration for the deletion resolver.

    Attributes:
        sandbox_root: Private storage root. Paths below it are deleted directly.
            If None, the XDG data default is used.
        index_path: Media index database. If None, the XDG state default is used.
        owner: Owner name used for unprivileged index deletes.
        require_confirmation: Whether index deletes need an external ticket.
        max_tree_depth: Maximum depth searched below a granted directory.
        max_tree_nodes: Maximum number of nodes visited in one tree search.
    """

    model_config = ConfigDict(extra="forbid")

    sandbox_root: Annotated[
        Path | None,
        Field(description="Private storage root (None = XDG data default)"),
    ] = None
    index_path: Annotated[
        Path | None,
        Field(description="Media index database (None = XDG state default)"),
    ] = None
    owner: Annotated[
        str,
        Field(min_length=1, description="Owner name for unprivileged index deletes"),
    ] = DEFAULT_OWNER
    require_confirmation: Annotated[
        bool,
        Field(description="Index deletes require an externally confirmed ticket"),
    ] = True
    max_tree_depth: Annotated[
        int,
        Field(ge=1, le=4096, description="Tree search depth cap (1-4096)"),
    ] = DEFAULT_MAX_TREE_DEPTH
    max_tree_nodes: Annotated[
        int,
        Field(ge=1, le=10_000_000, description="Tree search node cap"),
    ] = DEFAULT_MAX_TREE_NODES

    @property
    def effective_sandbox_root(self) -> Path:
        """Get the sandbox root, falling back to the XDG default."""
        return (self.sandbox_root or get_default_sandbox_root()).expanduser()

    @property
    def effective_index_path(self) -> Path:
        """Get the index database path, falling back to the XDG default."""
        return (self.index_path or get_default_index_path()).expanduser()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> ResolverConfig:
    """Load resolver configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ResolverConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ResolverConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> ResolverConfig:
    """Load configuration, returning defaults if no config file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded or default ResolverConfig.

    Raises:
        ConfigParseError: If an existing file has invalid TOML syntax.
        ConfigError: If an existing file doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return ResolverConfig()


def save_config(config: ResolverConfig, path: Path | None = None) -> Path:
    """Save resolver configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ResolverConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: ResolverConfig) -> dict[str, object]:
    """Convert ResolverConfig to a dictionary for TOML serialization.

    TOML has no null value, so unset paths are omitted.

    Args:
        config: The ResolverConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "owner": config.owner,
        "require_confirmation": config.require_confirmation,
        "max_tree_depth": config.max_tree_depth,
        "max_tree_nodes": config.max_tree_nodes,
    }

    if config.sandbox_root is not None:
        result["sandbox_root"] = str(config.sandbox_root)

    if config.index_path is not None:
        result["index_path"] = str(config.index_path)

    return result


def get_default_config() -> ResolverConfig:
    """Create a default ResolverConfig.

    Returns:
        ResolverConfig with default settings.
    """
    return ResolverConfig()
