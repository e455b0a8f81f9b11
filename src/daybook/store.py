"""Entry store - the single owner of the journal entry collection.

Every mutation is a whole-collection read-modify-write against the backing
store: the new sequence is built, persisted, and only then swapped in, so the
in-memory collection never runs ahead of what the backing store accepted.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from .core.entries import (
    JournalEntry,
    Stats,
    compute_stats,
    deserialize_entries,
    generate_id,
    matches_query,
    now_iso,
    parse_timestamp,
    serialize_entries,
    sort_by_date,
)
from .errors import PersistenceError, ValidationError
from .ports.backing_store import BackingStore

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntryStore:
    """
    Journal entries backed by a BackingStore.

    Missing ids are normal outcomes: get_by_id/update return None and delete
    returns False. Save failures raise PersistenceError with the collection
    left as it was before the call.
    """

    def __init__(
        self,
        backing: BackingStore,
        clock: Callable[[], datetime] | None = None,
        export_indent: int | None = 2,
    ):
        self.backing = backing
        self.clock = clock or _utc_now
        self.export_indent = export_indent
        self._lock = threading.RLock()
        self._entries: list[JournalEntry] = self._load()

    def _load(self) -> list[JournalEntry]:
        """Load the collection. Any failure degrades to an empty collection."""
        try:
            stored = self.backing.load()
        except PersistenceError as e:
            logger.warning(f"Error loading entries: {e}")
            return []

        if not stored:
            return []

        try:
            return deserialize_entries(stored)
        except ValidationError as e:
            logger.warning(f"Stored entries are unreadable, starting empty: {e}")
            return []

    def _commit(self, entries: list[JournalEntry]) -> None:
        """Persist the new collection, then make it current."""
        try:
            self.backing.save(serialize_entries(entries))
        except PersistenceError as e:
            logger.error(f"Error saving entries: {e}")
            raise
        self._entries = entries

    def _index_of(self, entry_id: str) -> int | None:
        for i, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return i
        return None

    def __len__(self) -> int:
        return len(self._entries)

    # ============== Mutations ==============

    def create(
        self,
        title: str,
        content: str,
        mood: str = "",
        date: datetime | str | None = None,
    ) -> JournalEntry:
        """Add a new entry at the head of the collection."""
        title = title.strip()
        content = content.strip()
        if not title:
            raise ValidationError("Title is required")
        if not content:
            raise ValidationError("Content is required")

        with self._lock:
            now = self.clock()
            created_at = now_iso(now)
            if date is None:
                entry_date = created_at
            elif isinstance(date, datetime):
                if date.tzinfo is None:
                    date = date.replace(tzinfo=timezone.utc)
                entry_date = now_iso(date)
            else:
                entry_date = now_iso(parse_timestamp(date))

            entry = JournalEntry(
                id=generate_id({e.id for e in self._entries}, now),
                title=title,
                content=content,
                date=entry_date,
                created_at=created_at,
                mood=mood or "",
            )
            self._commit([entry, *self._entries])

        logger.debug(f"Created entry {entry.id}")
        return entry

    def update(self, entry_id: str, title: str, content: str, mood: str | None = None) -> JournalEntry | None:
        """
        Replace title and content of an entry.

        The mood is only replaced when a non-empty mood is given.
        Returns None if the id is unknown.
        """
        with self._lock:
            index = self._index_of(entry_id)
            if index is None:
                return None

            title = title.strip()
            content = content.strip()
            if not title:
                raise ValidationError("Title is required")
            if not content:
                raise ValidationError("Content is required")

            current = self._entries[index]
            now = self.clock()
            if current.updated_at and parse_timestamp(current.updated_at) > now:
                updated_at = current.updated_at
            else:
                updated_at = now_iso(now)

            updated = replace(
                current,
                title=title,
                content=content,
                mood=mood or current.mood,
                updated_at=updated_at,
            )
            entries = list(self._entries)
            entries[index] = updated
            self._commit(entries)

        logger.debug(f"Updated entry {entry_id}")
        return updated

    def delete(self, entry_id: str) -> bool:
        """Remove an entry. Returns whether anything was removed."""
        with self._lock:
            index = self._index_of(entry_id)
            if index is None:
                return False
            self._commit(self._entries[:index] + self._entries[index + 1:])

        logger.debug(f"Deleted entry {entry_id}")
        return True

    def clear_all(self) -> bool:
        """Empty the collection and persist the empty list."""
        with self._lock:
            self._commit([])
        logger.info("Cleared all entries")
        return True

    def reset(self) -> None:
        """Remove the stored blob entirely and empty the collection."""
        with self._lock:
            self.backing.clear()
            self._entries = []
        logger.info("Removed stored entries")

    # ============== Queries ==============

    def list(self) -> list[JournalEntry]:
        """All entries, most recent date first."""
        return sort_by_date(self._entries)

    def recent(self, limit: int = 5) -> list[JournalEntry]:
        """The first `limit` entries of list()."""
        return self.list()[:limit]

    def get_by_id(self, entry_id: str) -> JournalEntry | None:
        """Look up an entry by exact id. Returns None if not found."""
        index = self._index_of(entry_id)
        return self._entries[index] if index is not None else None

    def search(self, query: str) -> list[JournalEntry]:
        """Case-insensitive search over title, content and mood. A blank query matches everything."""
        if not query.strip():
            return self.list()
        return sort_by_date([e for e in self._entries if matches_query(e, query)])

    def stats(self) -> Stats:
        """Aggregate stats in storage order (see compute_stats)."""
        return compute_stats(self._entries)

    # ============== Backup / Restore ==============

    def export_all(self) -> str:
        """Serialize the whole collection, in storage order, as JSON."""
        return serialize_entries(self._entries, indent=self.export_indent)

    def import_all(self, serialized: str) -> bool:
        """
        Replace the whole collection with previously exported data.

        Fails closed: any decode or validation problem returns False and leaves
        the collection untouched. Duplicate ids are kept as given.
        """
        try:
            imported = deserialize_entries(serialized)
        except ValidationError as e:
            logger.warning(f"Error importing entries: {e}")
            return False

        duplicates = [i for i, n in Counter(e.id for e in imported).items() if n > 1]
        if duplicates:
            logger.warning(f"Imported data contains duplicate ids: {', '.join(sorted(duplicates))}")

        with self._lock:
            self._commit(imported)

        logger.info(f"Imported {len(imported)} entries")
        return True
