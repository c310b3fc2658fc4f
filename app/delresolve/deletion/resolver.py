"""Deletion resolution.

The Resolver decides, once per call, which tier can delete a path:

1. Sandbox: the path is in the application's private storage and is
   deleted directly.
2. Index: the path is known to the media index and is deleted through the
   managed gateway, possibly pending external confirmation.
3. External: anything else needs a user-granted directory tree.

Resolution is synchronous and keeps no state between calls. Non-terminal
outcomes are resumed by the caller with complete_confirmation() or
complete_with_grant().
"""

import logging
from dataclasses import dataclass
from enum import Enum

from delresolve.core.config import ResolverConfig
from delresolve.deletion.classifier import PathClassifier
from delresolve.deletion.direct import DirectDeleter
from delresolve.deletion.gateway import LocalTicketAuthority, ManagedDeleteGateway
from delresolve.deletion.media_index import MediaIndexResolver, SqliteMediaIndex
from delresolve.deletion.tree import DirectoryNode, TreeScopedDeleter
from delresolve.models.index import IndexEntry
from delresolve.models.outcome import (
    Deleted,
    DeletionOutcome,
    Failed,
    NeedsDirectoryGrant,
    NeedsExternalConfirmation,
)
from delresolve.models.target import FileTarget

logger = logging.getLogger(__name__)

DIRECT_DELETE_FAILED = "direct delete failed"
DELETION_DENIED = "deletion denied"
CONFIRMATION_FAILED = "confirmation failed"
TREE_DELETE_FAILED = "tree delete failed"


class ResolutionTier(str, Enum):
    """Tier responsible for deleting a path.

    Attributes:
        SANDBOX: Private storage, deleted directly.
        INDEX: Known to the media index.
        EXTERNAL: Reachable only through a directory grant.
    """

    SANDBOX = "sandbox"
    INDEX = "index"
    EXTERNAL = "external"


@dataclass(frozen=True, slots=True)
class ResolutionPlan:
    """Result of classifying a target.

    Attributes:
        tier: Tier that will handle the target.
        entry: Media index entry, set only for the INDEX tier.
    """

    tier: ResolutionTier
    entry: IndexEntry | None = None

    def __post_init__(self) -> None:
        """Validate plan data after initialization."""
        if (self.tier == ResolutionTier.INDEX) != (self.entry is not None):
            msg = "An index entry is required for, and only for, the index tier"
            raise ValueError(msg)


class Resolver:
    """Chooses and runs the deletion tier for a target."""

    def __init__(
        self,
        classifier: PathClassifier,
        direct_deleter: DirectDeleter,
        index_resolver: MediaIndexResolver,
        gateway: ManagedDeleteGateway,
    ) -> None:
        self._classifier = classifier
        self._direct_deleter = direct_deleter
        self._index_resolver = index_resolver
        self._gateway = gateway

    def plan(self, target: FileTarget) -> ResolutionPlan:
        """Classify a target without modifying anything.

        Args:
            target: Target to classify.

        Returns:
            The tier that resolve() would use, with the index entry if any.
        """
        if self._classifier.is_sandbox_owned(target.path):
            return ResolutionPlan(tier=ResolutionTier.SANDBOX)

        entry = self._index_resolver.locate(target.path)
        if entry is not None:
            return ResolutionPlan(tier=ResolutionTier.INDEX, entry=entry)

        return ResolutionPlan(tier=ResolutionTier.EXTERNAL)

    def resolve(self, target: FileTarget) -> DeletionOutcome:
        """Attempt to delete a target through the first applicable tier.

        Exactly one tier is attempted. A failed direct delete of a
        sandbox path is reported as is; it never falls through to the
        index or a directory grant.

        Args:
            target: Target to delete.

        Returns:
            The outcome of the chosen tier.
        """
        return self.execute(target, self.plan(target))

    def execute(self, target: FileTarget, plan: ResolutionPlan) -> DeletionOutcome:
        """Run the tier chosen by plan() for a target.

        Args:
            target: Target to delete.
            plan: Plan previously computed for this target.

        Returns:
            The outcome of the planned tier.
        """
        logger.debug("Resolved %s to tier %s", target.path, plan.tier.value)

        if plan.tier == ResolutionTier.SANDBOX:
            if self._direct_deleter.delete_direct(target.path):
                return Deleted()
            return Failed(DIRECT_DELETE_FAILED)

        if plan.entry is not None:
            return self._gateway.request_delete([plan.entry])

        return NeedsDirectoryGrant()


def complete_confirmation(
    outcome: NeedsExternalConfirmation,
    approved: bool | None,
) -> DeletionOutcome:
    """Turn the authority's decision on a ticket into a final outcome.

    The authority performs the removal itself; the index is not checked
    again afterwards.

    Args:
        outcome: The pending confirmation being resumed.
        approved: True if approved, False if denied, None if the authority
            failed to decide.

    Returns:
        Deleted if approved, Failed otherwise.
    """
    if approved is True:
        logger.debug("Ticket %s approved", outcome.ticket.id)
        return Deleted()
    if approved is False:
        return Failed(DELETION_DENIED)
    return Failed(CONFIRMATION_FAILED)


def complete_with_grant(
    target: FileTarget,
    tree_root: DirectoryNode | None,
    tree_deleter: TreeScopedDeleter,
) -> DeletionOutcome:
    """Delete a target through a directory tree the user granted.

    Args:
        target: The original target.
        tree_root: Root of the granted tree, or None if it could not be opened.
        tree_deleter: Deleter performing the search.

    Returns:
        Deleted if the file was found and deleted, Failed otherwise.
    """
    if tree_deleter.delete_in_tree(tree_root, target.name):
        return Deleted()
    return Failed(TREE_DELETE_FAILED)


def build_resolver(config: ResolverConfig) -> Resolver:
    """Wire a Resolver with the local collaborators described by config.

    Args:
        config: Resolver configuration.

    Returns:
        Ready-to-use Resolver.
    """
    index = SqliteMediaIndex(config.effective_index_path)
    gateway = ManagedDeleteGateway(
        index=index,
        authority=LocalTicketAuthority(index),
        owner=config.owner,
        require_confirmation=config.require_confirmation,
    )
    return Resolver(
        classifier=PathClassifier(config.effective_sandbox_root),
        direct_deleter=DirectDeleter(),
        index_resolver=MediaIndexResolver(index),
        gateway=gateway,
    )


def build_tree_deleter(config: ResolverConfig) -> TreeScopedDeleter:
    """Create a TreeScopedDeleter with the configured search limits."""
    return TreeScopedDeleter(
        max_depth=config.max_tree_depth,
        max_nodes=config.max_tree_nodes,
    )
