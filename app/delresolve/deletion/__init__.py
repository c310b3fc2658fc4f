"""Deletion resolution engine.

This module provides the tiers a path can be deleted through (direct,
media index, granted directory tree) and the Resolver that picks one.
"""

from delresolve.deletion.classifier import PathClassifier
from delresolve.deletion.direct import DirectDeleter
from delresolve.deletion.gateway import (
    DeleteRequestError,
    LocalTicketAuthority,
    ManagedDeleteGateway,
    TicketAuthority,
    UnsupportedTicketAuthority,
)
from delresolve.deletion.media_index import (
    MediaIndex,
    MediaIndexError,
    MediaIndexResolver,
    SqliteMediaIndex,
)
from delresolve.deletion.resolver import (
    ResolutionPlan,
    ResolutionTier,
    Resolver,
    build_resolver,
    build_tree_deleter,
    complete_confirmation,
    complete_with_grant,
)
from delresolve.deletion.tree import (
    DirectoryNode,
    LocalDirectoryNode,
    TreeScopedDeleter,
    open_tree,
)

__all__ = [
    "DeleteRequestError",
    "DirectDeleter",
    "DirectoryNode",
    "LocalDirectoryNode",
    "LocalTicketAuthority",
    "ManagedDeleteGateway",
    "MediaIndex",
    "MediaIndexError",
    "MediaIndexResolver",
    "PathClassifier",
    "ResolutionPlan",
    "ResolutionTier",
    "Resolver",
    "SqliteMediaIndex",
    "TicketAuthority",
    "TreeScopedDeleter",
    "UnsupportedTicketAuthority",
    "build_resolver",
    "build_tree_deleter",
    "complete_confirmation",
    "complete_with_grant",
    "open_tree",
]
