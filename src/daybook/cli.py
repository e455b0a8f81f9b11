"""Daybook CLI - Personal Journal."""

import json
import logging
import sys

import click

from .config import load_config
from .core.entries import JournalEntry
from .errors import DaybookError
from .format import format_date, format_entry_detail, format_entry_line, resolve_timezone
from .store import EntryStore
from .workflows import export_to_file, get_store, import_from_file


def _open_store() -> EntryStore:
    return get_store(load_config())


def _timezone():
    return resolve_timezone(load_config().timezone)


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(1)


def _show_entries(entries: list[JournalEntry], as_json: bool, empty_msg: str, query: str = "") -> None:
    """Shared list display logic."""
    if as_json:
        click.echo(json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False))
        return

    if not entries:
        click.echo(empty_msg)
        return

    tz = _timezone()
    for i, entry in enumerate(entries):
        if i:
            click.echo()
        click.echo(format_entry_line(entry, tz, query))


@click.group()
@click.version_option(package_name="daybook")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Daybook - Personal Journal CLI."""
    level = logging.DEBUG if debug else getattr(logging, load_config().log_level, logging.WARNING)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
    )


@main.command()
@click.argument("title")
@click.argument("content", required=False)
@click.option("--mood", "-m", default="", help="Mood emoji or label")
@click.option("--date", "-d", "entry_date", default=None, help="Entry date (ISO-8601), defaults to now")
def add(title: str, content: str | None, mood: str, entry_date: str | None):
    """Write a new entry. Content is read from stdin or an editor if omitted."""
    if content is None:
        stdin = click.get_text_stream("stdin")
        content = stdin.read() if not stdin.isatty() else (click.edit() or "")

    try:
        entry = _open_store().create(title, content, mood, date=entry_date)
    except DaybookError as e:
        _fail(f"Error: {e}")

    click.echo(f"✓ Saved entry {entry.id}")


@main.command("list")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Show only the N most recent entries")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_entries(limit: int | None, as_json: bool):
    """List entries, most recent first."""
    store = _open_store()
    entries = store.recent(limit) if limit else store.list()
    _show_entries(entries, as_json, "No entries yet. Start writing with 'daybook add'.")


@main.command()
@click.argument("entry_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(entry_id: str, as_json: bool):
    """Show a single entry."""
    entry = _open_store().get_by_id(entry_id)
    if entry is None:
        _fail(f"No entry with id {entry_id}.")

    if as_json:
        click.echo(json.dumps(entry.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(format_entry_detail(entry, _timezone()))


@main.command()
@click.argument("entry_id")
@click.option("--title", "-t", default=None, help="New title")
@click.option("--content", "-c", default=None, help="New content")
@click.option("--mood", "-m", default="", help="New mood (unchanged if omitted)")
def edit(entry_id: str, title: str | None, content: str | None, mood: str):
    """Edit an entry. Fields not given keep their current value."""
    store = _open_store()
    entry = store.get_by_id(entry_id)
    if entry is None:
        _fail(f"No entry with id {entry_id}.")

    if title is None and content is None and not mood:
        edited = click.edit(entry.content)
        if edited is None:
            click.echo("No changes.")
            return
        content = edited

    try:
        store.update(
            entry_id,
            title if title is not None else entry.title,
            content if content is not None else entry.content,
            mood,
        )
    except DaybookError as e:
        _fail(f"Error: {e}")

    click.echo(f"✓ Updated entry {entry_id}")


@main.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def delete(entry_id: str, yes: bool):
    """Delete an entry."""
    store = _open_store()
    entry = store.get_by_id(entry_id)
    if entry is None:
        _fail(f"No entry with id {entry_id}.")

    if not yes and not click.confirm(
        f"Delete '{entry.title}'? This action cannot be undone."
    ):
        return

    try:
        store.delete(entry_id)
    except DaybookError as e:
        _fail(f"Error: {e}")

    click.echo("✓ Entry deleted")


@main.command()
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def search(query: str, as_json: bool):
    """Search titles, content and moods."""
    entries = _open_store().search(query)
    _show_entries(entries, as_json, f'No entries found matching "{query}".', query=query)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(as_json: bool):
    """Show journal statistics."""
    summary = _open_store().stats()

    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
        return

    tz = _timezone()
    click.echo(f"Entries:          {summary.total_entries}")
    click.echo(f"Words:            {summary.total_words}")
    click.echo(f"Words per entry:  {summary.avg_words_per_entry}")
    if summary.total_entries:
        click.echo(f"First entry:      {format_date(summary.first_entry, tz)}")
        click.echo(f"Latest entry:     {format_date(summary.last_entry, tz)}")


@main.command("export")
@click.argument("output", required=False, type=click.Path(dir_okay=False))
def export_cmd(output: str | None):
    """Export all entries as JSON (to stdout if no file is given)."""
    store = _open_store()
    if output is None:
        click.echo(store.export_all())
        return

    path = export_to_file(store, output)
    click.echo(f"✓ Exported {len(store)} entries to {path}")


@main.command("import")
@click.argument("source", type=click.Path(dir_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def import_cmd(source: str, yes: bool):
    """Replace all entries with a JSON backup."""
    store = _open_store()
    if len(store) and not yes and not click.confirm(
        f"Replace all {len(store)} existing entries with {source}?"
    ):
        return

    try:
        ok = import_from_file(store, source)
    except DaybookError as e:
        _fail(f"Error: {e}")

    if not ok:
        _fail(f"Error: {source} is not a valid Daybook backup. Nothing was changed.")
    click.echo(f"✓ Imported {len(store)} entries")


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def clear(yes: bool):
    """Delete ALL entries."""
    if not yes and not click.confirm(
        "Are you sure you want to delete ALL journal entries? This action cannot be undone."
    ):
        return

    try:
        _open_store().clear_all()
    except DaybookError as e:
        _fail(f"Error: {e}")

    click.echo("✓ All entries cleared")


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def reset(yes: bool):
    """Remove the journal data file entirely."""
    if not yes and not click.confirm("Remove the journal data file? This action cannot be undone."):
        return

    try:
        _open_store().reset()
    except DaybookError as e:
        _fail(f"Error: {e}")

    click.echo("✓ Journal storage removed")


if __name__ == "__main__":
    main()
