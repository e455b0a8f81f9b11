"""Tests for the shared workflow layer."""

import json

import pytest

from daybook.config import Config
from daybook.workflows import export_to_file, get_store, import_from_file


@pytest.fixture
def config(tmp_path):
    return Config(data_dir=str(tmp_path / "data"))


class TestGetStore:
    def test_uses_configured_dir_and_key(self, tmp_path):
        config = Config(data_dir=str(tmp_path), storage_key="entries")
        store = get_store(config)
        store.create("T", "C")
        assert (tmp_path / "entries.json").exists()

    def test_applies_quota(self, tmp_path):
        store = get_store(Config(data_dir=str(tmp_path), max_bytes=50))
        assert store.backing.max_bytes == 50

    def test_applies_export_indent(self, config):
        store = get_store(Config(data_dir=config.data_dir, export_indent=None))
        store.create("T", "C")
        assert "\n" not in store.export_all()

    def test_reopened_store_sees_entries(self, config):
        entry = get_store(config).create("T", "C")
        assert get_store(config).get_by_id(entry.id) == entry


class TestBackupRestore:
    def test_export_then_import(self, config, tmp_path):
        store = get_store(config)
        store.create("One", "a")
        store.create("Two", "b")
        backup = export_to_file(store, tmp_path / "backups" / "journal.json")
        assert len(json.loads(backup.read_text())) == 2

        fresh = get_store(Config(data_dir=str(tmp_path / "other")))
        assert import_from_file(fresh, backup) is True
        assert fresh.list() == store.list()

    def test_missing_backup(self, config, tmp_path):
        store = get_store(config)
        store.create("Kept", "C")
        assert import_from_file(store, tmp_path / "absent.json") is False
        assert len(store) == 1

    def test_invalid_backup(self, config, tmp_path):
        store = get_store(config)
        store.create("Kept", "C")
        bad = tmp_path / "bad.json"
        bad.write_text('[{"id": "1"}]')
        assert import_from_file(store, bad) is False
        assert [e.title for e in store.list()] == ["Kept"]
