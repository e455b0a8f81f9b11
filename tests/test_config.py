"""Tests for configuration loading."""

from pathlib import Path

import pytest

from daybook.config import DATA_DIR, DEFAULT_MAX_BYTES, Config, load_config


@pytest.fixture
def config_file(tmp_path):
    def write(text: str) -> Path:
        path = tmp_path / "daybook.conf"
        path.write_text(text)
        return path

    return write


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.conf")
        assert config == Config()
        assert config.max_bytes == DEFAULT_MAX_BYTES
        assert config.storage_key == "journalEntries"

    def test_parses_values(self, config_file):
        path = config_file(
            "# Daybook settings\n"
            "DATA_DIR=~/journal\n"
            "STORAGE_KEY=myEntries\n"
            "MAX_BYTES=1024\n"
            "TIMEZONE=America/Toronto\n"
            "EXPORT_INDENT=4\n"
            "LOG_LEVEL=debug\n"
        )
        config = load_config(path)
        assert config.data_dir == "~/journal"
        assert config.storage_key == "myEntries"
        assert config.max_bytes == 1024
        assert config.timezone == "America/Toronto"
        assert config.export_indent == 4
        assert config.log_level == "DEBUG"

    def test_quoted_values_and_inline_comments(self, config_file):
        path = config_file(
            'DATA_DIR="/data/my journal" # where entries live\n'
            "TIMEZONE='Europe/Paris'\n"
            "STORAGE_KEY=entries # comment\n"
        )
        config = load_config(path)
        assert config.data_dir == "/data/my journal"
        assert config.timezone == "Europe/Paris"
        assert config.storage_key == "entries"

    def test_zero_or_none_disables_limits(self, config_file):
        config = load_config(config_file("MAX_BYTES=0\nEXPORT_INDENT=none\n"))
        assert config.max_bytes is None
        assert config.export_indent is None

    def test_bad_number_is_ignored(self, config_file, caplog):
        config = load_config(config_file("MAX_BYTES=lots\n"))
        assert config.max_bytes == DEFAULT_MAX_BYTES
        assert "MAX_BYTES" in caplog.text

    def test_unknown_keys_and_junk_lines_ignored(self, config_file):
        config = load_config(config_file("COLOR=blue\nnot a setting\n\n"))
        assert config == Config()


class TestResolvedDataDir:
    def test_default(self):
        assert Config().resolved_data_dir() == DATA_DIR

    def test_expands_user(self):
        assert Config(data_dir="~/j").resolved_data_dir() == Path.home() / "j"
