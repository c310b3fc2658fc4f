"""XDG-compliant path management for delresolve.

This module provides standardized paths following the XDG Base Directory
Specification for configuration, state, and application data.

XDG defaults:
- Config: ~/.config/delresolve/
- State: ~/.local/state/delresolve/
- Data: ~/.local/share/delresolve/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "delresolve"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/delresolve/ (or XDG_CONFIG_HOME/delresolve/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the history file and the local media index.

    Returns:
        Path to ~/.local/state/delresolve/ (or XDG_STATE_HOME/delresolve/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_data_dir() -> Path:
    """Get the data directory path.

    Returns:
        Path to ~/.local/share/delresolve/ (or XDG_DATA_HOME/delresolve/).
    """
    return _get_xdg_dir("XDG_DATA_HOME", ".local/share")


def get_config_path() -> Path:
    """Get the default config file path.

    Returns:
        Path to ~/.config/delresolve/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_history_path() -> Path:
    """Get the history file path.

    Returns:
        Path to ~/.local/state/delresolve/history.jsonl.
    """
    return get_state_dir() / "history.jsonl"


def get_default_sandbox_root() -> Path:
    """Get the default private storage root of the application.

    Files below this directory are owned by delresolve and deleted
    directly without consulting the media index.

    Returns:
        Path to ~/.local/share/delresolve/files.
    """
    return get_data_dir() / "files"


def get_default_index_path() -> Path:
    """Get the default media index database path.

    Returns:
        Path to ~/.local/state/delresolve/media-index.db.
    """
    return get_state_dir() / "media-index.db"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Returns:
        Path to the state directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")
