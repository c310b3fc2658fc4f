"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from delresolve.core.config import ResolverConfig, save_config
from delresolve.deletion.media_index import SqliteMediaIndex


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point all XDG directories into the test's temporary directory."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(xdg / "state"))
    monkeypatch.setenv("XDG_DATA_HOME", str(xdg / "data"))
    return xdg


@pytest.fixture
def sandbox_root(tmp_path: Path) -> Path:
    """Private storage root of the application."""
    root = tmp_path / "sandbox" / "app"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def shared_root(tmp_path: Path) -> Path:
    """Shared storage outside the sandbox, with typical media folders."""
    root = tmp_path / "shared"
    for folder in ("Pictures", "Documents", "Music", "Movies"):
        (root / folder).mkdir(parents=True)
    return root


@pytest.fixture
def media_index(tmp_path: Path) -> SqliteMediaIndex:
    """An initialized, empty media index."""
    index = SqliteMediaIndex(tmp_path / "index" / "media.db")
    index.initialize()
    return index


@pytest.fixture
def resolver_config(sandbox_root: Path, media_index: SqliteMediaIndex) -> ResolverConfig:
    """Configuration wired to the test sandbox and media index."""
    return ResolverConfig(
        sandbox_root=sandbox_root,
        index_path=media_index.db_path,
        owner="delresolve",
        require_confirmation=True,
    )


@pytest.fixture
def config_file(tmp_path: Path, resolver_config: ResolverConfig) -> Path:
    """Config file on disk matching resolver_config."""
    return save_config(resolver_config, tmp_path / "config.toml")
