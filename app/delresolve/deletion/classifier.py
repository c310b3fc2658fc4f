"""Sandbox ownership classification.

Decides whether a path lives inside the application's private storage
area, where it can be deleted without involving any other tier.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathClassifier:
    """Checks paths against the application's private storage root.

    Attributes:
        _sandbox_root: Private storage root, or None if the application has
            no private storage configured.
    """

    def __init__(self, sandbox_root: Path | None) -> None:
        """Initialize the PathClassifier.

        Args:
            sandbox_root: Private storage root. None disables the sandbox tier.
        """
        self._sandbox_root = sandbox_root

    @property
    def sandbox_root(self) -> Path | None:
        """The configured private storage root."""
        return self._sandbox_root

    def is_sandbox_owned(self, path: str | Path) -> bool:
        """Check whether a path is inside the private storage root.

        Both the root and the candidate are canonicalized (symlinks
        resolved) before comparison, and the comparison is made on whole
        path components. Any failure to canonicalize counts as "not
        owned" so the path falls through to the slower tiers.

        Args:
            path: Absolute path to classify.

        Returns:
            True if the canonical path is the root or lies below it.
        """
        if self._sandbox_root is None:
            return False

        try:
            root = self._sandbox_root.resolve()
            candidate = Path(path).resolve()
        except (OSError, RuntimeError, ValueError) as e:
            logger.debug("Cannot canonicalize %s: %s", path, e)
            return False

        return candidate.is_relative_to(root)
