"""Unit tests for DirectDeleter."""

import shutil
from pathlib import Path
from unittest.mock import patch

from delresolve.deletion.direct import DirectDeleter


class TestDirectDeleter:
    """Tests for unprivileged filesystem deletes."""

    def test_delete_file(self, tmp_path: Path) -> None:
        """A regular file is unlinked."""
        target = tmp_path / "doc.txt"
        target.write_text("content")

        assert DirectDeleter().delete_direct(target) is True
        assert not target.exists()

    def test_delete_directory_tree(self, tmp_path: Path) -> None:
        """A directory is removed with its whole subtree."""
        target = tmp_path / "folder"
        (target / "nested" / "deeper").mkdir(parents=True)
        (target / "nested" / "deeper" / "file.txt").write_text("x")
        (target / "top.txt").write_text("y")

        assert DirectDeleter().delete_direct(str(target)) is True
        assert not target.exists()

    def test_delete_symlink_keeps_target(self, tmp_path: Path) -> None:
        """A symlink to a directory is removed without touching the target."""
        real = tmp_path / "real"
        real.mkdir()
        (real / "keep.txt").write_text("keep")
        link = tmp_path / "link"
        link.symlink_to(real)

        assert DirectDeleter().delete_direct(link) is True
        assert not link.is_symlink()
        assert (real / "keep.txt").exists()

    def test_delete_dead_symlink(self, tmp_path: Path) -> None:
        """A dangling symlink can be deleted."""
        link = tmp_path / "dead"
        link.symlink_to(tmp_path / "missing")

        assert DirectDeleter().delete_direct(link) is True
        assert not link.is_symlink()

    def test_missing_path(self, tmp_path: Path) -> None:
        """A path that does not exist reports failure."""
        assert DirectDeleter().delete_direct(tmp_path / "nope.txt") is False

    def test_os_error_reports_failure(self, tmp_path: Path) -> None:
        """OS errors are reported as failure, not raised."""
        target = tmp_path / "folder"
        target.mkdir()

        with patch.object(shutil, "rmtree", side_effect=PermissionError("denied")):
            assert DirectDeleter().delete_direct(target) is False
        assert target.exists()

    def test_unlink_error_reports_failure(self, tmp_path: Path) -> None:
        """A failing unlink is reported as failure."""
        target = tmp_path / "doc.txt"
        target.write_text("x")

        with patch.object(Path, "unlink", side_effect=OSError("busy")):
            assert DirectDeleter().delete_direct(target) is False
        assert target.exists()
