"""Configuration management for Daybook."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DAYBOOK_HOME = Path(os.environ.get("DAYBOOK_HOME", Path.home() / "daybook"))
CONFIG_FILE = DAYBOOK_HOME / "config" / "daybook.conf"
DATA_DIR = DAYBOOK_HOME / "data"

# Same ballpark as a browser's per-origin local storage
DEFAULT_MAX_BYTES = 5 * 1024 * 1024


@dataclass
class Config:
    """Daybook configuration."""

    data_dir: str = ""
    storage_key: str = "journalEntries"
    max_bytes: int | None = DEFAULT_MAX_BYTES
    timezone: str = ""
    export_indent: int | None = 2
    log_level: str = "WARNING"

    def resolved_data_dir(self) -> Path:
        """Data directory with ~ expanded, falling back to the default."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _parse_optional_int(key: str, value: str, default: int | None) -> int | None:
    """Parse an int setting; 0 or "none" disables it."""
    if value.lower() in ("", "none", "0"):
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {key.upper()}: {value!r}")
        return default


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from daybook.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value[:1] in ('"', "'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "data_dir":
                config.data_dir = value
            case "storage_key":
                if value:
                    config.storage_key = value
            case "max_bytes":
                config.max_bytes = _parse_optional_int(key, value, config.max_bytes)
            case "timezone":
                config.timezone = value
            case "export_indent":
                config.export_indent = _parse_optional_int(key, value, config.export_indent)
            case "log_level":
                config.log_level = value.upper() or config.log_level
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
