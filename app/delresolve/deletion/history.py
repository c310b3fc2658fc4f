"""Deletion history recording.

Records completed deletions to the history file, giving an audit trail
of which tier removed which path.
"""

from delresolve.core.state import StateManager
from delresolve.models.history import HistoryActionType, HistoryItem, create_history_entry
from delresolve.models.index import IndexEntry


def record_deletion(
    path: str,
    action_type: HistoryActionType,
    entries: tuple[IndexEntry, ...] = (),
    command: str = "delresolve rm",
    state: StateManager | None = None,
) -> None:
    """Record a completed deletion to history.

    Args:
        path: Absolute path that was deleted.
        action_type: Tier that performed the deletion.
        entries: Media index entries removed with the path, if any.
        command: Command that triggered the deletion.
        state: StateManager to write to. Defaults to the XDG state location.

    Raises:
        RuntimeError: If the state directory cannot be created.
        OSError: If the history file cannot be written.
    """
    if entries:
        items = [HistoryItem(path=path, entry_uri=entry.uri) for entry in entries]
    else:
        items = [HistoryItem(path=path)]

    entry = create_history_entry(
        action_type=action_type,
        items=items,
        metadata={"command": command},
    )

    (state or StateManager()).record_action(entry)
