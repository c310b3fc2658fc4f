"""Deletion inside a user-granted directory tree.

When a path is neither in the private storage area nor in the media
index, the user has to grant access to a folder that contains it. The
file is then found by name below that folder and deleted through the
granted handle.
"""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from delresolve.core.config import DEFAULT_MAX_TREE_DEPTH, DEFAULT_MAX_TREE_NODES

logger = logging.getLogger(__name__)


class DirectoryNode(Protocol):
    """Read-only view of one node of a granted directory tree."""

    @property
    def name(self) -> str: ...

    @property
    def is_container(self) -> bool: ...

    def children(self) -> Iterable["DirectoryNode"]:
        """Enumerate child nodes in the provider's native order.

        Raises:
            OSError: If the node cannot be enumerated.
        """
        ...

    def delete(self) -> bool:
        """Delete this node, returning True on success."""
        ...


class LocalDirectoryNode:
    """DirectoryNode over a local filesystem path."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def is_container(self) -> bool:
        """Whether this is a real folder.

        A symlink to a folder is a leaf: it can match by name, and deleting
        it removes the link, never the folder it points to.
        """
        return self._path.is_dir() and not self._path.is_symlink()

    def children(self) -> list["LocalDirectoryNode"]:
        # Sorted so traversal order does not depend on directory hashing.
        return [LocalDirectoryNode(child) for child in sorted(self._path.iterdir())]

    def delete(self) -> bool:
        try:
            if self.is_container:
                shutil.rmtree(self._path)
            else:
                self._path.unlink()
        except OSError as e:
            logger.warning("Cannot delete %s: %s", self._path, e)
            return False
        return True

    def __repr__(self) -> str:
        return f"LocalDirectoryNode({str(self._path)!r})"


def open_tree(path: str | Path) -> LocalDirectoryNode | None:
    """Open a granted directory.

    Args:
        path: Directory the user granted access to.

    Returns:
        Root node of the tree, or None if the path is not a readable directory.
    """
    root = Path(path).expanduser()
    try:
        if not root.is_dir():
            return None
    except OSError:
        return None
    return LocalDirectoryNode(root)


class TreeScopedDeleter:
    """Finds a file by name in a granted tree and deletes it.

    The tree comes from outside and has no size bound, so the search uses
    an explicit stack and stops at configurable depth and node limits.

    Attributes:
        _max_depth: Deepest level searched; the root is depth 0.
        _max_nodes: Maximum number of nodes visited.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_TREE_DEPTH,
        max_nodes: int = DEFAULT_MAX_TREE_NODES,
    ) -> None:
        """Initialize the TreeScopedDeleter.

        Args:
            max_depth: Deepest level searched below the root.
            max_nodes: Maximum number of nodes visited in one search.
        """
        if max_depth < 1 or max_nodes < 1:
            msg = "Tree search limits must be positive"
            raise ValueError(msg)
        self._max_depth = max_depth
        self._max_nodes = max_nodes

    def find_candidates(self, tree_root: DirectoryNode, target_name: str) -> list[DirectoryNode]:
        """Collect every non-container node named target_name.

        Traversal is depth-first pre-order with children in enumeration
        order, and visits all branches. An entry whose type cannot be read
        is skipped, and so is a container whose children cannot be listed,
        except for the root, whose listing failure propagates.

        Args:
            tree_root: Root of the granted tree.
            target_name: Exact, case-sensitive name to match.

        Returns:
            Matching nodes in traversal order.

        Raises:
            OSError: If the root cannot be enumerated.
        """
        candidates: list[DirectoryNode] = []
        stack: list[tuple[DirectoryNode, int]] = [(tree_root, 0)]
        visited = 0

        while stack:
            node, depth = stack.pop()
            visited += 1
            if visited > self._max_nodes:
                logger.warning(
                    "Tree search stopped after %d nodes; results may be incomplete",
                    self._max_nodes,
                )
                break

            try:
                is_container = node.is_container
            except OSError as e:
                logger.warning("Skipping unreadable entry %s: %s", node.name, e)
                continue

            if not is_container:
                if node.name == target_name:
                    candidates.append(node)
                continue

            if depth >= self._max_depth:
                logger.warning(
                    "Not descending into %s: depth limit %d",
                    node.name,
                    self._max_depth,
                )
                continue

            try:
                children = list(node.children())
            except OSError as e:
                if depth == 0:
                    raise
                logger.warning("Skipping unreadable folder %s: %s", node.name, e)
                continue

            stack.extend((child, depth + 1) for child in reversed(children))

        return candidates

    def delete_in_tree(self, tree_root: DirectoryNode | None, target_name: str) -> bool:
        """Delete the first file named target_name found in the tree.

        Args:
            tree_root: Root of the granted tree, or None if the grant could
                not be opened.
            target_name: Exact, case-sensitive file name.

        Returns:
            True only if a matching file was found and its delete succeeded.
        """
        if tree_root is None or not target_name:
            return False

        try:
            candidates = self.find_candidates(tree_root, target_name)
        except OSError as e:
            logger.warning("Cannot open granted tree %s: %s", tree_root.name, e)
            return False

        if not candidates:
            logger.debug("No file named %s in granted tree", target_name)
            return False
        if len(candidates) > 1:
            logger.warning(
                "%d files named %s in granted tree, deleting the first",
                len(candidates),
                target_name,
            )

        return candidates[0].delete()
