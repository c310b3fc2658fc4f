"""Unprivileged filesystem deletion for sandbox-owned paths."""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class DirectDeleter:
    """Deletes files and directory trees with plain filesystem calls."""

    def delete_direct(self, path: str | Path) -> bool:
        """Delete a single path.

        Dispatches on the path type:
        - Directories (not symlinks to directories): shutil.rmtree
        - Files, symlinks and dead symlinks: Path.unlink

        Args:
            path: Absolute path to delete.

        Returns:
            True if the path was deleted, False if it did not exist or any
            OS error occurred.
        """
        target = Path(path)

        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
                logger.info("Deleted directory %s", target)
                return True

            if target.exists() or target.is_symlink():
                target.unlink()
                logger.info("Deleted %s", target)
                return True
        except OSError as e:
            logger.warning("Direct delete of %s failed: %s", target, e)
            return False

        logger.debug("Direct delete skipped, path does not exist: %s", target)
        return False
