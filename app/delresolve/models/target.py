"""Deletion target model.

A FileTarget is the path a caller wants gone, captured once at the start
of a resolution attempt and never changed afterwards.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class FileTarget:
    """A file or directory the caller asked to delete.

    Attributes:
        path: Absolute path of the target. Symlinks and ``..`` segments are
            kept as given; canonicalization is the classifier's job.
    """

    path: str

    def __post_init__(self) -> None:
        """Validate target data after initialization."""
        if not self.path:
            msg = "Target path cannot be empty"
            raise ValueError(msg)
        if not os.path.isabs(self.path):
            msg = f"Target path must be absolute, got {self.path!r}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Basename of the target path."""
        return Path(self.path).name

    @classmethod
    def from_path(cls, path: str | Path) -> FileTarget:
        """Create a target from a possibly relative path.

        Relative paths are anchored at the current working directory
        without resolving symlinks.

        Args:
            path: Path to the file or directory.

        Returns:
            FileTarget with an absolute path.
        """
        return cls(path=str(Path(path).absolute()))
