"""Deletion outcome variants.

Every resolution step returns exactly one of the variants below. Callers
dispatch with ``match`` and end with ``typing.assert_never`` so that a
type checker reports any variant they forget to handle::

    match outcome:
        case Deleted():
            ...
        case NeedsExternalConfirmation(ticket=ticket):
            ...
        case NeedsDirectoryGrant():
            ...
        case Failed(reason=reason):
            ...
        case _:
            assert_never(outcome)
"""

from dataclasses import dataclass

from delresolve.models.index import DeleteTicket, IndexEntry


@dataclass(frozen=True, slots=True)
class Deleted:
    """The target is gone."""

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class NeedsExternalConfirmation:
    """The index will delete the entries once an external authority approves.

    Attributes:
        ticket: Ticket the caller presents to the authority.
        affected_items: Entries covered by the ticket, in request order.
    """

    ticket: DeleteTicket
    affected_items: tuple[IndexEntry, ...]

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class NeedsDirectoryGrant:
    """The target can only be reached through a user-granted directory tree."""

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Failed:
    """The deletion failed.

    Attributes:
        reason: Diagnostic message. Not meant for branching.
    """

    reason: str

    @property
    def is_terminal(self) -> bool:
        return True


DeletionOutcome = Deleted | NeedsExternalConfirmation | NeedsDirectoryGrant | Failed
