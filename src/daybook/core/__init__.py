"""Functional core - pure business logic with no I/O."""

from .entries import (
    JournalEntry,
    Stats,
    compute_stats,
    count_words,
    deserialize_entries,
    generate_id,
    matches_query,
    parse_timestamp,
    serialize_entries,
    sort_by_date,
    validate_records,
)

__all__ = [
    "JournalEntry",
    "Stats",
    "compute_stats",
    "count_words",
    "deserialize_entries",
    "generate_id",
    "matches_query",
    "parse_timestamp",
    "serialize_entries",
    "sort_by_date",
    "validate_records",
]
