"""Display helpers for entries in the terminal."""

import logging
import math
import re
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import click

from .core.entries import JournalEntry, count_words, parse_timestamp
from .errors import ValidationError

PREVIEW_LENGTH = 150
WORDS_PER_MINUTE = 200

logger = logging.getLogger(__name__)


def preview(content: str, max_length: int = PREVIEW_LENGTH) -> str:
    """First max_length characters of content, with an ellipsis if cut."""
    if len(content) <= max_length:
        return content
    return content[:max_length].rstrip() + "..."


def resolve_timezone(name: str) -> tzinfo | None:
    """ZoneInfo for a configured name, or None for the local zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {name!r}, using local time")
        return None


def format_date(value: str, tz: tzinfo | None = None) -> str:
    """Format an ISO timestamp like 'October 17, 2026 at 09:05 AM'."""
    try:
        moment = parse_timestamp(value)
    except ValidationError:
        return value
    moment = moment.astimezone(tz)
    return f"{moment:%B} {moment.day}, {moment:%Y at %I:%M %p}"


def read_time_minutes(content: str) -> int:
    """Estimated reading time at ~200 words per minute."""
    return math.ceil(count_words(content) / WORDS_PER_MINUTE)


def highlight(text: str, query: str) -> str:
    """Highlight every case-insensitive occurrence of query."""
    term = query.strip()
    if not term:
        return text
    pattern = re.compile(re.escape(term), re.IGNORECASE)
    return pattern.sub(lambda m: click.style(m.group(0), fg="black", bg="yellow", bold=True), text)


def format_entry_line(entry: JournalEntry, tz: tzinfo | None = None, query: str = "") -> str:
    """One-entry summary for list views."""
    mood = f"{entry.mood} " if entry.mood else ""
    title = highlight(entry.title, query)
    body = highlight(preview(entry.content), query)
    return f"{mood}{title}  [{entry.id}]\n  {format_date(entry.date, tz)}\n  {body}"


def format_entry_detail(entry: JournalEntry, tz: tzinfo | None = None) -> str:
    """Full entry for the detail view."""
    words = entry.word_count
    lines = [
        f"{entry.mood} {entry.title}".strip(),
        format_date(entry.date, tz),
        f"{words} words · {read_time_minutes(entry.content)} min read",
    ]
    if entry.updated_at:
        lines.append(f"Edited {format_date(entry.updated_at, tz)}")
    lines.append("")
    lines.append(entry.content)
    return "\n".join(lines)
