"""Unit tests for ManagedDeleteGateway and ticket authorities."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from delresolve.deletion.gateway import (
    NO_ROWS_REMOVED,
    DeleteRequestError,
    LocalTicketAuthority,
    ManagedDeleteGateway,
    TicketAuthority,
    UnsupportedTicketAuthority,
)
from delresolve.deletion.media_index import MediaIndexError, SqliteMediaIndex
from delresolve.models.index import DeleteTicket, IndexEntry, MediaCollection
from delresolve.models.outcome import Deleted, Failed, NeedsExternalConfirmation

ENTRY = IndexEntry(id=1, collection=MediaCollection.IMAGES)


def _gateway(
    index: MagicMock | None = None,
    authority: TicketAuthority | None = None,
    require_confirmation: bool = True,
) -> ManagedDeleteGateway:
    return ManagedDeleteGateway(
        index=index or MagicMock(),
        authority=authority or MagicMock(),
        owner="delresolve",
        require_confirmation=require_confirmation,
    )


class TestManagedDeleteGatewayWithConfirmation:
    """Tests for platforms that require confirmation tickets."""

    def test_returns_ticket_without_deleting(self) -> None:
        """A ticket is requested for exactly the given entries."""
        index = MagicMock()
        authority = MagicMock()
        ticket = DeleteTicket(id="t1", entries=(ENTRY,))
        authority.create_delete_request.return_value = ticket

        outcome = _gateway(index, authority).request_delete([ENTRY])

        assert outcome == NeedsExternalConfirmation(ticket=ticket, affected_items=(ENTRY,))
        authority.create_delete_request.assert_called_once_with((ENTRY,))
        index.delete.assert_not_called()

    def test_preserves_entry_order(self) -> None:
        """Affected items keep the order they were given in."""
        second = IndexEntry(id=9, collection=MediaCollection.VIDEO)
        authority = MagicMock()
        authority.create_delete_request.return_value = DeleteTicket("t", (ENTRY, second))

        outcome = _gateway(authority=authority).request_delete([ENTRY, second])

        assert isinstance(outcome, NeedsExternalConfirmation)
        assert outcome.affected_items == (ENTRY, second)

    def test_ticket_failure_falls_back_to_delete(self) -> None:
        """If ticketing fails, an unprivileged delete is attempted."""
        index = MagicMock()
        index.delete.return_value = 1
        authority = MagicMock()
        authority.create_delete_request.side_effect = DeleteRequestError("unsupported")

        outcome = _gateway(index, authority).request_delete([ENTRY])

        assert outcome == Deleted()
        index.delete.assert_called_once_with((ENTRY,), "delresolve")

    def test_ticket_failure_zero_rows(self) -> None:
        """Fallback delete removing nothing fails with 'no rows removed'."""
        index = MagicMock()
        index.delete.return_value = 0

        outcome = _gateway(index, UnsupportedTicketAuthority()).request_delete([ENTRY])

        assert outcome == Failed(NO_ROWS_REMOVED)
        assert NO_ROWS_REMOVED == "no rows removed"

    def test_ticket_failure_io_error(self) -> None:
        """Fallback delete raising an I/O error fails with its message."""
        index = MagicMock()
        index.delete.side_effect = MediaIndexError("disk I/O error")

        outcome = _gateway(index, UnsupportedTicketAuthority()).request_delete([ENTRY])

        assert outcome == Failed("disk I/O error")

    def test_at_most_one_ticket(self) -> None:
        """A single call requests a single ticket."""
        authority = MagicMock()
        authority.create_delete_request.return_value = DeleteTicket("t", (ENTRY,))

        _gateway(authority=authority).request_delete([ENTRY])

        assert authority.create_delete_request.call_count == 1


class TestManagedDeleteGatewayWithoutConfirmation:
    """Tests for platforms without ownership confirmation."""

    def test_skips_ticketing(self) -> None:
        """No ticket is requested and rows are deleted directly."""
        index = MagicMock()
        index.delete.return_value = 2
        authority = MagicMock()

        outcome = _gateway(index, authority, require_confirmation=False).request_delete([ENTRY])

        assert outcome == Deleted()
        authority.create_delete_request.assert_not_called()

    def test_zero_rows(self) -> None:
        """Zero rows removed is a failure."""
        index = MagicMock()
        index.delete.return_value = 0

        outcome = _gateway(index, require_confirmation=False).request_delete([ENTRY])

        assert outcome == Failed("no rows removed")

    def test_os_error(self) -> None:
        """OS errors from the index become Failed with the message."""
        index = MagicMock()
        index.delete.side_effect = OSError("read-only file system")

        outcome = _gateway(index, require_confirmation=False).request_delete([ENTRY])

        assert outcome == Failed("read-only file system")

    def test_no_entries(self) -> None:
        """An empty request fails without touching the index."""
        index = MagicMock()

        outcome = _gateway(index, require_confirmation=False).request_delete([])

        assert isinstance(outcome, Failed)
        index.delete.assert_not_called()


class TestLocalTicketAuthority:
    """Tests for the SQLite-backed ticket authority."""

    def test_ticket_carries_entries(self, media_index: SqliteMediaIndex) -> None:
        """Issued tickets cover exactly the requested entries."""
        ticket = LocalTicketAuthority(media_index).create_delete_request([ENTRY])

        assert ticket.entries == (ENTRY,)
        assert ticket.id

    def test_tickets_are_unique(self, media_index: SqliteMediaIndex) -> None:
        """Each request gets its own ticket ID."""
        authority = LocalTicketAuthority(media_index)
        first = authority.create_delete_request([ENTRY])
        second = authority.create_delete_request([ENTRY])

        assert first.id != second.id

    def test_empty_request_rejected(self, media_index: SqliteMediaIndex) -> None:
        """A ticket for no entries cannot be issued."""
        with pytest.raises(DeleteRequestError):
            LocalTicketAuthority(media_index).create_delete_request([])

    def test_commit_removes_foreign_entry(
        self, media_index: SqliteMediaIndex, shared_root: Path
    ) -> None:
        """An approved ticket removes the entry even if owned by someone else."""
        photo = shared_root / "Pictures" / "img.jpg"
        photo.write_bytes(b"jpeg")
        entry = media_index.add(MediaCollection.IMAGES, str(photo), owner="camera")
        authority = LocalTicketAuthority(media_index)

        ticket = authority.create_delete_request([entry])

        assert authority.commit(ticket) is True
        assert not photo.exists()

    def test_commit_of_vanished_entry(self, media_index: SqliteMediaIndex) -> None:
        """Committing a ticket whose rows are already gone reports False."""
        authority = LocalTicketAuthority(media_index)
        ticket = authority.create_delete_request([IndexEntry(999, MediaCollection.IMAGES)])

        assert authority.commit(ticket) is False

    def test_commit_index_error(self, tmp_path: Path) -> None:
        """Index failures during commit report False."""
        authority = LocalTicketAuthority(SqliteMediaIndex(tmp_path / "absent.db"))
        ticket = DeleteTicket(id="t", entries=(ENTRY,))

        assert authority.commit(ticket) is False


class TestUnsupportedTicketAuthority:
    """Tests for UnsupportedTicketAuthority."""

    def test_always_raises(self) -> None:
        """Ticket requests always fail."""
        with pytest.raises(DeleteRequestError):
            UnsupportedTicketAuthority().create_delete_request([ENTRY])

    def test_commit_false(self) -> None:
        """Commit never succeeds."""
        assert UnsupportedTicketAuthority().commit(DeleteTicket("t", (ENTRY,))) is False
