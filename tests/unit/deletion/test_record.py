"""Unit tests for recording deletions to history."""

from pathlib import Path

from delresolve.core.state import StateManager
from delresolve.deletion.history import record_deletion
from delresolve.models.history import HistoryActionType
from delresolve.models.index import IndexEntry, MediaCollection


class TestRecordDeletion:
    """Tests for record_deletion."""

    def test_records_plain_path(self, tmp_path: Path) -> None:
        """A direct deletion is recorded with one item and no entry URI."""
        state = StateManager(state_dir=tmp_path / "state")

        record_deletion("/sandbox/app/doc.txt", HistoryActionType.DIRECT, state=state)

        [entry] = state.get_history()
        assert entry.action_type == HistoryActionType.DIRECT
        assert [item.path for item in entry.items] == ["/sandbox/app/doc.txt"]
        assert entry.items[0].entry_uri is None
        assert entry.metadata == {"command": "delresolve rm"}

    def test_records_index_entries(self, tmp_path: Path) -> None:
        """Index deletions keep the URI of every removed entry."""
        state = StateManager(state_dir=tmp_path / "state")
        entries = (
            IndexEntry(id=3, collection=MediaCollection.IMAGES),
            IndexEntry(id=8, collection=MediaCollection.FILES),
        )

        record_deletion(
            "/shared/Pictures/img.jpg",
            HistoryActionType.INDEX_CONFIRMED,
            entries,
            command="test",
            state=state,
        )

        [entry] = state.get_history()
        assert [item.entry_uri for item in entry.items] == [
            "content://media/external/images/3",
            "content://media/external/files/8",
        ]
        assert entry.metadata["command"] == "test"

    def test_default_state_location(self, isolated_xdg: Path) -> None:
        """Without a StateManager, history goes to the XDG state directory."""
        record_deletion("/shared/a.txt", HistoryActionType.TREE)

        history_file = isolated_xdg / "state" / "delresolve" / "history.jsonl"
        assert history_file.exists()
        assert len(StateManager().get_history()) == 1
