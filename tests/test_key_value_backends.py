"""
Contract tests shared by every backing store implementation.
"""
from __future__ import annotations

import pytest

from schooldesk.core.exceptions import ConfigurationError, PersistenceError
from schooldesk.persistence import database
from schooldesk.persistence import (
    FileKeyValueStore,
    KeyValueStoreFactory,
    MemoryKeyValueStore,
    SQLiteKeyValueStore,
)


@pytest.fixture(params=["sqlite", "file", "memory"])
def store(request, tmp_path):
    if request.param == "sqlite":
        return SQLiteKeyValueStore(database_path=str(tmp_path / "kv.db"))
    if request.param == "file":
        return FileKeyValueStore(base_path=str(tmp_path / "kv"))
    return MemoryKeyValueStore()


def test_absent_key_reads_as_none(store):
    assert store.get("users") is None
    assert store.contains("users") is False


def test_set_then_get_and_overwrite(store):
    store.set("users", "[1]")
    assert store.get("users") == "[1]"
    store.set("users", "[2]")
    assert store.get("users") == "[2]"
    assert store.contains("users") is True


def test_remove_and_remove_absent(store):
    store.set("user", "{}")
    store.remove("user")
    assert store.get("user") is None
    # second remove is a no-op
    store.remove("user")
    assert store.get("user") is None


def test_keys_lists_present_keys(store):
    store.set("schedule", "[]")
    store.set("attendance", "[]")
    assert store.keys() == ["attendance", "schedule"]


def test_rejects_unsafe_keys(store):
    with pytest.raises(PersistenceError):
        store.set("../escape", "x")


def test_sqlite_values_survive_reopen(tmp_path):
    path = str(tmp_path / "kv.db")
    SQLiteKeyValueStore(database_path=path).set("announcements", "[]")
    assert SQLiteKeyValueStore(database_path=path).get("announcements") == "[]"


def test_file_values_survive_reopen(tmp_path):
    base = str(tmp_path / "data")
    FileKeyValueStore(base_path=base).set("announcements", '[{"a": 1}]')
    assert FileKeyValueStore(base_path=base).get("announcements") == '[{"a": 1}]'
    assert (tmp_path / "data" / "announcements.json").exists()


def test_sqlite_unusable_path_raises_persistence_error(tmp_path):
    with pytest.raises(PersistenceError):
        SQLiteKeyValueStore(database_path=str(tmp_path / "missing" / "dir" / "kv.db"))


def test_factory_builds_each_type(tmp_path):
    assert isinstance(KeyValueStoreFactory.create_store("memory"), MemoryKeyValueStore)
    assert isinstance(
        KeyValueStoreFactory.create_store("SQLite", database_path=str(tmp_path / "a.db")),
        SQLiteKeyValueStore,
    )
    assert isinstance(
        KeyValueStoreFactory.create_store("file", base_path=str(tmp_path / "f")),
        FileKeyValueStore,
    )


def test_factory_rejects_unknown_type():
    with pytest.raises(ConfigurationError) as exc:
        KeyValueStoreFactory.create_store("redis")
    assert exc.value.error_code == "storage_type"


def test_file_undecodable_value_raises_persistence_error(tmp_path):
    (tmp_path / "users.json").write_bytes(b"\xff\xfe")
    with pytest.raises(PersistenceError):
        FileKeyValueStore(base_path=str(tmp_path)).get("users")


def test_file_failed_write_leaves_no_temp_file(tmp_path, monkeypatch):
    store = FileKeyValueStore(base_path=str(tmp_path))
    store.set("users", "[]")

    def fail_replace(src, dst):
        raise OSError("read-only")

    monkeypatch.setattr(database.os, "replace", fail_replace)
    with pytest.raises(PersistenceError):
        store.set("users", '[{"id": "1"}]')

    assert sorted(p.name for p in tmp_path.iterdir()) == ["users.json"]
    assert store.get("users") == "[]"
