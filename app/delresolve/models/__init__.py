"""Data models for delresolve.

This module exports the core data structures used throughout the application.
"""

from delresolve.models.history import (
    HistoryActionType,
    HistoryEntry,
    HistoryItem,
    create_history_entry,
)
from delresolve.models.index import LOOKUP_ORDER, DeleteTicket, IndexEntry, MediaCollection
from delresolve.models.outcome import (
    Deleted,
    DeletionOutcome,
    Failed,
    NeedsDirectoryGrant,
    NeedsExternalConfirmation,
)
from delresolve.models.pending import PendingDeletion
from delresolve.models.target import FileTarget

__all__ = [
    "LOOKUP_ORDER",
    "DeleteTicket",
    "Deleted",
    "DeletionOutcome",
    "Failed",
    "FileTarget",
    "HistoryActionType",
    "HistoryEntry",
    "HistoryItem",
    "IndexEntry",
    "MediaCollection",
    "NeedsDirectoryGrant",
    "NeedsExternalConfirmation",
    "PendingDeletion",
    "create_history_entry",
]
