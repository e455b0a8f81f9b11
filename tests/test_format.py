"""Tests for display helpers."""

from datetime import timezone
from zoneinfo import ZoneInfo

import click

from daybook.core.entries import JournalEntry
from daybook.format import (
    format_date,
    format_entry_detail,
    format_entry_line,
    highlight,
    preview,
    read_time_minutes,
    resolve_timezone,
)


def make_entry(**overrides):
    fields = dict(
        id="abc",
        title="Morning Walk",
        content="Went to the park",
        date="2026-10-07T09:05:00.000Z",
        created_at="2026-10-07T09:05:00.000Z",
        mood="😊",
    )
    fields.update(overrides)
    return JournalEntry(**fields)


class TestPreview:
    def test_short_content_unchanged(self):
        assert preview("short") == "short"

    def test_exactly_max_length_unchanged(self):
        assert preview("a" * 150) == "a" * 150

    def test_long_content_truncated(self):
        assert preview("a" * 200) == "a" * 150 + "..."

    def test_trailing_space_trimmed_before_ellipsis(self):
        assert preview("abc def", max_length=4) == "abc..."


class TestFormatDate:
    def test_us_long_format(self):
        assert format_date("2026-10-07T09:05:00Z", timezone.utc) == "October 7, 2026 at 09:05 AM"

    def test_two_digit_day_keeps_hour_padding(self):
        assert format_date("2026-10-17T21:30:00Z", timezone.utc) == "October 17, 2026 at 09:30 PM"

    def test_converts_to_timezone(self):
        assert format_date("2026-01-15T12:00:00Z", ZoneInfo("America/Toronto")) == "January 15, 2026 at 07:00 AM"

    def test_unparseable_returned_as_is(self):
        assert format_date("someday") == "someday"


class TestResolveTimezone:
    def test_empty_is_local(self):
        assert resolve_timezone("") is None

    def test_named(self):
        assert resolve_timezone("Europe/Paris") == ZoneInfo("Europe/Paris")

    def test_unknown_falls_back_to_local(self, caplog):
        assert resolve_timezone("Mars/Olympus_Mons") is None
        assert "Mars/Olympus_Mons" in caplog.text


class TestReadTime:
    def test_rounds_up(self):
        assert read_time_minutes("word " * 201) == 2

    def test_short(self):
        assert read_time_minutes("a few words") == 1

    def test_empty(self):
        assert read_time_minutes("") == 0


class TestHighlight:
    def test_styles_each_match(self):
        result = highlight("Walk, walk, WALK", "walk")
        assert result.count("\x1b[") >= 3
        assert click.unstyle(result) == "Walk, walk, WALK"

    def test_regex_characters_are_literal(self):
        result = highlight("cost (approx) $5", "(approx)")
        assert click.unstyle(result) == "cost (approx) $5"
        assert "\x1b[" in result

    def test_blank_query_unchanged(self):
        assert highlight("text", "  ") == "text"


class TestEntryFormatting:
    def test_line_contains_summary(self):
        line = format_entry_line(make_entry(), timezone.utc)
        assert "😊 Morning Walk  [abc]" in line
        assert "October 7, 2026 at 09:05 AM" in line
        assert "Went to the park" in line

    def test_line_without_mood(self):
        assert format_entry_line(make_entry(mood=""), timezone.utc).startswith("Morning Walk")

    def test_detail(self):
        detail = format_entry_detail(make_entry(updated_at="2026-10-08T10:00:00.000Z"), timezone.utc)
        assert detail.splitlines()[0] == "😊 Morning Walk"
        assert "4 words · 1 min read" in detail
        assert "Edited October 8, 2026 at 10:00 AM" in detail
        assert detail.endswith("Went to the park")
