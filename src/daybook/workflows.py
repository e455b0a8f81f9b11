"""Shared workflow layer between the CLI and the entry store."""

import logging
from pathlib import Path

from .adapters.file_store import FileBackingStore
from .config import Config
from .store import EntryStore

logger = logging.getLogger(__name__)


def get_store(config: Config) -> EntryStore:
    """Build the entry store over the configured data directory."""
    backing = FileBackingStore(
        config.resolved_data_dir(),
        key=config.storage_key,
        max_bytes=config.max_bytes,
    )
    return EntryStore(backing, export_indent=config.export_indent)


def export_to_file(store: EntryStore, path: Path | str) -> Path:
    """Write a backup of every entry to path."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(store.export_all(), encoding="utf-8")
    logger.info(f"Exported {len(store)} entries to {path}")
    return path


def import_from_file(store: EntryStore, path: Path | str) -> bool:
    """Restore entries from a backup file. Returns False if it cannot be used."""
    path = Path(path).expanduser()
    try:
        data = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read backup {path}: {e}")
        return False
    return store.import_all(data)
