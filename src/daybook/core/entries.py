"""Pure journal entry domain logic - no I/O dependencies."""

import json
import math
import random
import re
import string
from dataclasses import dataclass
from datetime import datetime, timezone

from daybook.errors import ValidationError

REQUIRED_FIELDS = ("id", "title", "content", "date")
ID_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
ID_SUFFIX_LENGTH = 9

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class JournalEntry:
    """A single journal record."""

    id: str
    title: str
    content: str
    date: str
    created_at: str
    mood: str = ""
    updated_at: str | None = None

    @property
    def word_count(self) -> int:
        return count_words(self.content)

    def to_dict(self) -> dict:
        """Serialize to the persisted record layout."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "mood": self.mood,
            "date": self.date,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JournalEntry":
        """
        Create JournalEntry from a persisted record.

        A null or missing mood becomes "", so it is exported as "".
        """
        return cls(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            date=data["date"],
            created_at=data.get("createdAt") or data["date"],
            mood=data.get("mood") or "",
            updated_at=data.get("updatedAt"),
        )


@dataclass
class Stats:
    """Aggregate figures over a collection of entries."""

    total_entries: int = 0
    total_words: int = 0
    avg_words_per_entry: int = 0
    first_entry: str | None = None
    last_entry: str | None = None

    def to_dict(self) -> dict:
        return {
            "totalEntries": self.total_entries,
            "totalWords": self.total_words,
            "avgWordsPerEntry": self.avg_words_per_entry,
            "firstEntry": self.first_entry,
            "lastEntry": self.last_entry,
        }


def now_iso(now: datetime) -> str:
    """ISO-8601 timestamp with millisecond precision."""
    return now.isoformat(timespec="milliseconds")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Accepts a trailing "Z". Naive values are treated as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def generate_id(existing: set[str], now: datetime, rng: random.Random | None = None) -> str:
    """
    Generate a new entry id: millisecond timestamp plus a random base-36 suffix.

    Regenerates until the id does not collide with any id in `existing`.
    """
    rng = rng or random.Random()
    millis = int(now.timestamp() * 1000)
    while True:
        suffix = "".join(rng.choice(ID_SUFFIX_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
        candidate = f"{millis}{suffix}"
        if candidate not in existing:
            return candidate


def sort_by_date(entries: list[JournalEntry]) -> list[JournalEntry]:
    """
    Sort entries by date, most recent first.

    Entries sharing a date keep their relative order.
    Pure function - no I/O.
    """
    return sorted(entries, key=lambda e: parse_timestamp(e.date), reverse=True)


def matches_query(entry: JournalEntry, query: str) -> bool:
    """Case-insensitive substring match on title, content or mood."""
    term = query.strip().lower()
    return (
        term in entry.title.lower()
        or term in entry.content.lower()
        or term in entry.mood.lower()
    )


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len([w for w in _WHITESPACE.split(text) if w])


def compute_stats(entries: list[JournalEntry]) -> Stats:
    """
    Compute stats over entries in storage order (newest first).

    firstEntry/lastEntry come from the ends of the stored sequence, not from
    a date sort, so they can differ from list() when entries are back-dated.
    The average is rounded half-up.
    """
    total = len(entries)
    if total == 0:
        return Stats()

    words = sum(count_words(e.content) for e in entries)
    return Stats(
        total_entries=total,
        total_words=words,
        avg_words_per_entry=math.floor(words / total + 0.5),
        first_entry=entries[-1].date,
        last_entry=entries[0].date,
    )


def validate_records(data) -> list[dict]:
    """
    Validate decoded import data. Fails closed on the first bad record.

    Raises ValidationError if data is not a list of entry records.
    """
    if not isinstance(data, list):
        raise ValidationError("Invalid data format: expected a list of entries")

    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise ValidationError(f"Invalid entry structure at index {index}")
        for name in REQUIRED_FIELDS:
            value = record.get(name)
            if not isinstance(value, str) or not value:
                raise ValidationError(f"Entry at index {index} is missing '{name}'")
        mood = record.get("mood")
        if mood is not None and not isinstance(mood, str):
            raise ValidationError(f"Entry at index {index} has a non-text mood")
        parse_timestamp(record["date"])
        for name in ("createdAt", "updatedAt"):
            if record.get(name) is not None:
                try:
                    parse_timestamp(record[name])
                except ValidationError:
                    raise ValidationError(f"Entry at index {index} has an invalid '{name}'")

    return data


def serialize_entries(entries: list[JournalEntry], indent: int | None = None) -> str:
    """Encode entries as a JSON list of records."""
    return json.dumps([e.to_dict() for e in entries], indent=indent, ensure_ascii=False)


def deserialize_entries(text: str) -> list[JournalEntry]:
    """
    Decode and validate a JSON list of records.

    Raises ValidationError on malformed JSON or invalid records.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}")
    return [JournalEntry.from_dict(record) for record in validate_records(data)]
