"""Shared media index access.

The media index is a catalog of shared files kept by the system rather
than by this application. Each collection (images, video, audio and a
generic catch-all) maps row IDs to the absolute path of the file they
describe. A row also records its owner; unprivileged deletes may only
remove rows that belong to the caller or to nobody.

This module provides the MediaIndex protocol, a SQLite implementation
of it, and the MediaIndexResolver that maps a path to an index entry.
"""

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Protocol

from delresolve.models.index import LOOKUP_ORDER, IndexEntry, MediaCollection

logger = logging.getLogger(__name__)


class MediaIndexError(Exception):
    """Raised when the media index cannot be read or written."""


class MediaIndex(Protocol):
    """Query and delete interface of a media index."""

    def find(self, collection: MediaCollection, absolute_path: str) -> int | None:
        """Return the ID of the row whose stored path equals absolute_path."""
        ...

    def delete(self, entries: Sequence[IndexEntry], owner: str) -> int:
        """Remove entries owned by owner (or by nobody), returning rows removed."""
        ...


class SqliteMediaIndex:
    """Media index stored in a SQLite database, one table per collection.

    Every table has the columns ``_id`` (row ID), ``_data`` (absolute
    path of the file) and ``owner`` (owning application, NULL if none).
    Removing a row also removes the file it describes.

    Attributes:
        _db_path: Path to the database file.
    """

    def __init__(self, db_path: Path) -> None:
        """Initialize the SqliteMediaIndex.

        Args:
            db_path: Path to the database file. It is not created until
                initialize() or add() is called.
        """
        self._db_path = db_path

    @property
    def db_path(self) -> Path:
        """Path to the database file."""
        return self._db_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and always closes."""
        try:
            with closing(sqlite3.connect(self._db_path)) as conn, conn:
                yield conn
        except sqlite3.Error as e:
            raise MediaIndexError(f"Media index error ({self._db_path}): {e}") from e

    def initialize(self) -> None:
        """Create the database and all collection tables if missing.

        Raises:
            MediaIndexError: If the database cannot be created.
        """
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MediaIndexError(f"Cannot create index directory: {e}") from e

        with self._connect() as conn:
            for collection in MediaCollection:
                conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {collection.value} ("
                    "_id INTEGER PRIMARY KEY AUTOINCREMENT, "
                    "_data TEXT NOT NULL, "
                    "owner TEXT)"
                )
                conn.execute(
                    f"CREATE INDEX IF NOT EXISTS {collection.value}_data "
                    f"ON {collection.value} (_data)"
                )

    def add(
        self,
        collection: MediaCollection,
        absolute_path: str,
        owner: str | None = None,
    ) -> IndexEntry:
        """Register a file in a collection.

        Args:
            collection: Collection to add the file to.
            absolute_path: Absolute path of the file, stored verbatim.
            owner: Owning application, or None for an unowned row.

        Returns:
            The new index entry.

        Raises:
            MediaIndexError: If the row cannot be inserted.
        """
        self.initialize()
        with self._connect() as conn:
            cursor = conn.execute(
                f"INSERT INTO {collection.value} (_data, owner) VALUES (?, ?)",
                (absolute_path, owner),
            )
            row_id = cursor.lastrowid
        if row_id is None:
            raise MediaIndexError(f"Insert into {collection.value} returned no row ID")
        return IndexEntry(id=row_id, collection=collection)

    def find(self, collection: MediaCollection, absolute_path: str) -> int | None:
        """Find the row whose stored path equals absolute_path exactly.

        Args:
            collection: Collection to search.
            absolute_path: Absolute path to match against ``_data``.

        Returns:
            Row ID of the first match, or None.

        Raises:
            MediaIndexError: If the collection cannot be queried.
        """
        if not self._db_path.exists():
            return None

        with self._connect() as conn:
            row = conn.execute(
                f"SELECT _id FROM {collection.value} WHERE _data = ? ORDER BY _id LIMIT 1",
                (absolute_path,),
            ).fetchone()
        return int(row[0]) if row is not None else None

    def path_of(self, entry: IndexEntry) -> str | None:
        """Get the stored path of an entry, or None if the row is gone."""
        if not self._db_path.exists():
            return None

        with self._connect() as conn:
            row = conn.execute(
                f"SELECT _data FROM {entry.collection.value} WHERE _id = ?",
                (entry.id,),
            ).fetchone()
        return str(row[0]) if row is not None else None

    def entries(self) -> list[tuple[IndexEntry, str, str | None]]:
        """List every row as (entry, path, owner), in lookup order.

        Raises:
            MediaIndexError: If a collection cannot be read.
        """
        if not self._db_path.exists():
            return []

        result: list[tuple[IndexEntry, str, str | None]] = []
        with self._connect() as conn:
            for collection in LOOKUP_ORDER:
                rows = conn.execute(
                    f"SELECT _id, _data, owner FROM {collection.value} ORDER BY _id"
                ).fetchall()
                for row_id, data, owner in rows:
                    entry = IndexEntry(id=int(row_id), collection=collection)
                    result.append((entry, data, owner))
        return result

    def delete(self, entries: Sequence[IndexEntry], owner: str) -> int:
        """Remove entries the owner may write, together with their files.

        Rows owned by another application are left alone and not counted.

        Args:
            entries: Entries to remove.
            owner: Calling application.

        Returns:
            Number of rows removed.

        Raises:
            MediaIndexError: If the index or a backing file cannot be modified.
        """
        return self._remove(entries, owner=owner)

    def commit_delete(self, entries: Sequence[IndexEntry]) -> int:
        """Remove entries and their files regardless of owner.

        Used by the confirmation authority once a ticket was approved.

        Args:
            entries: Entries to remove.

        Returns:
            Number of rows removed.

        Raises:
            MediaIndexError: If the index or a backing file cannot be modified.
        """
        return self._remove(entries, owner=None)

    def _remove(self, entries: Sequence[IndexEntry], owner: str | None) -> int:
        """Remove rows one at a time, each in its own transaction.

        A row removal is rolled back if its backing file cannot be deleted.
        """
        if not self._db_path.exists():
            raise MediaIndexError(f"Media index not found: {self._db_path}")

        removed = 0
        for entry in entries:
            table = entry.collection.value
            with self._connect() as conn:
                if owner is None:
                    row = conn.execute(
                        f"SELECT _data FROM {table} WHERE _id = ?",
                        (entry.id,),
                    ).fetchone()
                else:
                    row = conn.execute(
                        f"SELECT _data FROM {table} WHERE _id = ? AND (owner IS NULL OR owner = ?)",
                        (entry.id, owner),
                    ).fetchone()
                if row is None:
                    logger.debug("No writable row for %s", entry.uri)
                    continue

                conn.execute(f"DELETE FROM {table} WHERE _id = ?", (entry.id,))
                try:
                    Path(row[0]).unlink(missing_ok=True)
                except OSError as e:
                    conn.rollback()
                    raise MediaIndexError(f"Cannot delete {row[0]}: {e}") from e

            logger.info("Removed %s (%s)", entry.uri, row[0])
            removed += 1
        return removed


class MediaIndexResolver:
    """Maps absolute paths to media index entries."""

    def __init__(self, index: MediaIndex) -> None:
        """Initialize the MediaIndexResolver.

        Args:
            index: Index to query.
        """
        self._index = index

    def locate(self, path: str) -> IndexEntry | None:
        """Find the index entry for a path.

        Collections are queried in LOOKUP_ORDER and the first match wins.
        The path is compared verbatim against the stored path. A match
        only proves the path is known to the index, not that it is
        writable. A collection that cannot be queried counts as a miss.

        Args:
            path: Absolute path to look up.

        Returns:
            The first matching entry, or None.
        """
        for collection in LOOKUP_ORDER:
            try:
                row_id = self._index.find(collection, path)
            except MediaIndexError as e:
                logger.warning("Lookup in %s failed: %s", collection.value, e)
                continue
            if row_id is not None:
                entry = IndexEntry(id=row_id, collection=collection)
                logger.debug("Located %s as %s", path, entry.uri)
                return entry

        logger.debug("%s is not in the media index", path)
        return None
