"""Caller-side bookkeeping for deletions awaiting a decision."""

from dataclasses import dataclass

from delresolve.models.outcome import NeedsDirectoryGrant, NeedsExternalConfirmation
from delresolve.models.target import FileTarget


@dataclass(frozen=True, slots=True)
class PendingDeletion:
    """A deletion that returned a non-terminal outcome.

    Held by the caller between the resolver returning and the caller
    resuming. Dropping it cancels the deletion; the resolver keeps no
    record of it.

    Attributes:
        target: The target being deleted.
        position: Position of the target in the caller's list, if any.
        outcome: The non-terminal outcome to resume from.
    """

    target: FileTarget
    position: int | None
    outcome: NeedsExternalConfirmation | NeedsDirectoryGrant
