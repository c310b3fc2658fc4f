"""History entry model for auditing deletions.

This module defines data structures for recording completed deletions in
a history file. The history is an audit trail only; deletions cannot be
undone.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class HistoryActionType(str, Enum):
    """Tier that performed a recorded deletion.

    Attributes:
        DIRECT: Deleted directly from the private storage area.
        INDEX: Deleted through the media index without confirmation.
        INDEX_CONFIRMED: Deleted by the index after external approval.
        TREE: Deleted through a user-granted directory tree.
    """

    DIRECT = "direct"
    INDEX = "index"
    INDEX_CONFIRMED = "index_confirmed"
    TREE = "tree"


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """Single path affected by a deletion.

    Attributes:
        path: Absolute path that was deleted.
        entry_uri: Media index URI of the deleted entry, if any.
    """

    path: str
    entry_uri: str | None = None

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.path:
            msg = "Item path cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the history item.
        """
        result: dict[str, Any] = {"path": self.path}
        if self.entry_uri is not None:
            result["entry_uri"] = self.entry_uri
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryItem:
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing item data.

        Returns:
            HistoryItem instance.

        Raises:
            KeyError: If required fields are missing.
        """
        return cls(path=data["path"], entry_uri=data.get("entry_uri"))


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Record of a single deletion in history.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the deletion occurred (ISO 8601 format with timezone).
        action_type: Tier that performed the deletion.
        items: Tuple of paths affected by this deletion.
        metadata: Additional context (command, ticket, etc.).
    """

    id: str
    timestamp: str
    action_type: HistoryActionType
    items: tuple[HistoryItem, ...]
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.id:
            msg = "History entry ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.items:
            msg = "History entry must have at least one item"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the history entry.
        """
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "action_type": self.action_type.value,
            "items": [item.to_dict() for item in self.items],
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing entry data.

        Returns:
            HistoryEntry instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If action_type or item data is invalid.
        """
        items = tuple(HistoryItem.from_dict(item) for item in data["items"])
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            action_type=HistoryActionType(data["action_type"]),
            items=items,
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage.

        Returns:
            Single JSON line (no trailing newline).
        """
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> HistoryEntry:
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        data = json.loads(line.strip())
        return cls.from_dict(data)


def create_history_entry(
    action_type: HistoryActionType,
    items: list[HistoryItem],
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Factory function to create a new HistoryEntry.

    Automatically generates a unique ID and current timestamp.

    Args:
        action_type: Tier that performed the deletion.
        items: List of paths affected by the deletion.
        metadata: Optional additional context.

    Returns:
        New HistoryEntry with auto-generated ID and timestamp.

    Raises:
        ValueError: If items list is empty.
    """
    if not items:
        msg = "Cannot create history entry with no items"
        raise ValueError(msg)

    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        action_type=action_type,
        items=tuple(items),
        metadata=metadata or {},
    )
