"""File-based backing store adapter."""

import logging
import os
import tempfile
from pathlib import Path

from daybook.errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_KEY = "journalEntries"


class FileBackingStore:
    """
    File-based blob storage.

    Implements BackingStore protocol. Each key gets a JSON file in data_dir.
    """

    def __init__(
        self,
        data_dir: Path | str,
        key: str = DEFAULT_KEY,
        max_bytes: int | None = None,
    ):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.key = key
        self.max_bytes = max_bytes

    @property
    def path(self) -> Path:
        """The file holding the blob for this key."""
        return self.data_dir / f"{self.key}.json"

    def load(self) -> str | None:
        """Read the stored blob. Returns None if not found."""
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read {self.path}: {e}")

    def save(self, data: str) -> None:
        """Write the blob via a temp file so a failed write keeps the old one."""
        encoded = data.encode("utf-8")
        if self.max_bytes is not None and len(encoded) > self.max_bytes:
            raise PersistenceError(
                f"Storage quota exceeded: {len(encoded)} bytes > {self.max_bytes} bytes"
            )

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{self.key}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(encoded)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"Failed to write {self.path}: {e}")
            raise PersistenceError(f"Failed to write {self.path}: {e}")

    def clear(self) -> None:
        """Remove the stored blob."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to remove {self.path}: {e}")
