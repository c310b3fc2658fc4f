"""Managed deletes through the media index.

On platforms where the index protects rows per owner, deleting an entry
the application does not own needs a ticket that an external authority
approves out of process. The gateway requests that ticket and hands it
back to the caller; it never waits for the decision.
"""

import logging
import uuid
from collections.abc import Sequence
from typing import Protocol

from delresolve.deletion.media_index import MediaIndex, MediaIndexError, SqliteMediaIndex
from delresolve.models.index import DeleteTicket, IndexEntry
from delresolve.models.outcome import (
    Deleted,
    DeletionOutcome,
    Failed,
    NeedsExternalConfirmation,
)

logger = logging.getLogger(__name__)

NO_ROWS_REMOVED = "no rows removed"


class DeleteRequestError(Exception):
    """Raised when a deletion ticket cannot be issued."""


class TicketAuthority(Protocol):
    """Issues deletion tickets and carries them out once approved."""

    def create_delete_request(self, entries: Sequence[IndexEntry]) -> DeleteTicket:
        """Issue a ticket covering exactly the given entries.

        Raises:
            DeleteRequestError: If ticketing is unsupported or fails.
        """
        ...

    def commit(self, ticket: DeleteTicket) -> bool:
        """Perform the deletion an approved ticket describes."""
        ...


class LocalTicketAuthority:
    """Ticket authority backed by a local SQLite media index.

    Tickets carry their entries, so the authority keeps no state between
    issuing a ticket and committing it.
    """

    def __init__(self, index: SqliteMediaIndex) -> None:
        """Initialize the LocalTicketAuthority.

        Args:
            index: Index the approved deletions are applied to.
        """
        self._index = index

    def create_delete_request(self, entries: Sequence[IndexEntry]) -> DeleteTicket:
        if not entries:
            raise DeleteRequestError("Cannot issue a ticket for no entries")
        ticket = DeleteTicket(id=uuid.uuid4().hex, entries=tuple(entries))
        logger.debug("Issued ticket %s for %d entries", ticket.id, len(ticket.entries))
        return ticket

    def commit(self, ticket: DeleteTicket) -> bool:
        """Remove the ticket's entries from the index.

        Args:
            ticket: An approved ticket.

        Returns:
            True if at least one row was removed, False otherwise.
        """
        try:
            removed = self._index.commit_delete(ticket.entries)
        except MediaIndexError as e:
            logger.warning("Committing ticket %s failed: %s", ticket.id, e)
            return False
        logger.info("Ticket %s removed %d rows", ticket.id, removed)
        return removed > 0


class UnsupportedTicketAuthority:
    """Authority for platforms that cannot issue deletion tickets."""

    def create_delete_request(self, entries: Sequence[IndexEntry]) -> DeleteTicket:
        raise DeleteRequestError("Deletion tickets are not supported on this platform")

    def commit(self, ticket: DeleteTicket) -> bool:
        return False


class ManagedDeleteGateway:
    """Deletes media index entries, via a ticket where the platform requires one.

    Attributes:
        _index: Index to delete from.
        _authority: Issuer of deletion tickets.
        _owner: Owner name used for unprivileged deletes.
        _require_confirmation: Whether index writes need an approved ticket.
    """

    def __init__(
        self,
        index: MediaIndex,
        authority: TicketAuthority,
        owner: str,
        require_confirmation: bool = True,
    ) -> None:
        """Initialize the ManagedDeleteGateway.

        Args:
            index: Index to delete from.
            authority: Issuer of deletion tickets.
            owner: Owner name used for unprivileged deletes.
            require_confirmation: Whether the platform protects index rows
                per owner and needs an externally approved ticket.
        """
        self._index = index
        self._authority = authority
        self._owner = owner
        self._require_confirmation = require_confirmation

    def request_delete(self, entries: Sequence[IndexEntry]) -> DeletionOutcome:
        """Delete entries or request a ticket for them.

        With confirmation required, a ticket for exactly these entries is
        requested and returned for the caller to present. If ticketing
        fails, or confirmation is not required, an unprivileged delete
        is attempted instead.

        Args:
            entries: Entries to delete.

        Returns:
            NeedsExternalConfirmation, Deleted or Failed.
        """
        if not entries:
            return Failed("no index entries to delete")

        items = tuple(entries)

        if self._require_confirmation:
            try:
                ticket = self._authority.create_delete_request(items)
            except DeleteRequestError as e:
                logger.warning("Ticket request failed, deleting directly: %s", e)
            else:
                return NeedsExternalConfirmation(ticket=ticket, affected_items=items)

        return self._delete_unprivileged(items)

    def _delete_unprivileged(self, entries: tuple[IndexEntry, ...]) -> DeletionOutcome:
        """Delete entries through the index without a ticket."""
        try:
            removed = self._index.delete(entries, self._owner)
        except (MediaIndexError, OSError) as e:
            return Failed(str(e))

        if removed > 0:
            return Deleted()
        return Failed(NO_ROWS_REMOVED)
