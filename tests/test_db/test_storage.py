"""Tests for PersistentStore and key-value backends."""

import json

import pytest
from unittest.mock import MagicMock

from tribetask.db.database import create_storage_engine, init_db
from tribetask.db.storage import (
    InMemoryKeyValueBackend,
    PersistentStore,
    SQLAlchemyKeyValueBackend,
    StorageKeys,
)
from tribetask.utils.errors import ErrorCategory


class FailingBackend(InMemoryKeyValueBackend):
    """Backend whose writes always fail (quota exceeded, locked DB...)."""

    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")


class TestPersistentStore:
    """Test suite for PersistentStore."""

    def test_load_returns_default_when_missing(self, store):
        """Test that a missing key yields the default."""
        assert store.load(StorageKeys.TASKS, []) == []

    def test_load_default_is_independent_copy(self, store):
        """Test that mutating the returned default never touches the original."""
        default = [{"id": 1, "tags": ["a"]}]

        loaded = store.load(StorageKeys.TASKS, default)
        loaded[0]["tags"].append("b")

        assert default == [{"id": 1, "tags": ["a"]}]

    def test_save_then_load(self, store):
        """Test that saved values are read back."""
        store.save(StorageKeys.COUNTERS, {"taskId": 8, "tribeId": 4, "sessionId": 4})

        assert store.load(StorageKeys.COUNTERS, {}) == {"taskId": 8, "tribeId": 4, "sessionId": 4}

    def test_keys_are_namespaced(self, kv_backend, store):
        """Test that keys carry the namespace prefix."""
        store.save(StorageKeys.USER, {"id": "1"})

        assert kv_backend.keys() == ["test_user"]
        assert json.loads(kv_backend.get("test_user")) == {"id": "1"}

    def test_load_ignores_unparseable_value(self, kv_backend, store):
        """Test that corrupt stored data falls back to the default."""
        kv_backend.set("test_tasks", "{not json")

        assert store.load(StorageKeys.TASKS, ["fallback"]) == ["fallback"]

    def test_save_failure_is_absorbed(self):
        """Test that a failing write neither raises nor goes unnoticed."""
        store = PersistentStore(FailingBackend(), namespace="test")
        listener = MagicMock()
        store.add_failure_listener(listener)

        store.save(StorageKeys.TASKS, [{"id": 1}])

        assert store.failure_count == 1
        assert store.last_failure.category == ErrorCategory.PERSISTENCE
        listener.assert_called_once()
        assert listener.call_args[0][0].details["key"] == "test_tasks"

    def test_unserializable_value_is_absorbed(self, store):
        """Test that serialization errors are treated as write failures."""
        store.save(StorageKeys.TASKS, [object()])

        assert store.failure_count == 1
        assert store.load(StorageKeys.TASKS, []) == []

    def test_broken_listener_does_not_propagate(self):
        """Test that a failing listener is logged and ignored."""
        store = PersistentStore(FailingBackend(), namespace="test")
        store.add_failure_listener(MagicMock(side_effect=RuntimeError("boom")))

        store.save(StorageKeys.TASKS, [])

        assert store.failure_count == 1

    def test_clear_removes_all_keys(self, kv_backend, store):
        """Test clearing every persisted key."""
        for key in StorageKeys.ALL:
            store.save(key, {"k": key})

        store.clear()

        assert kv_backend.keys() == []

    def test_clear_keeps_other_namespaces(self, kv_backend, store):
        """Test that clear only touches its own namespace."""
        other = PersistentStore(kv_backend, namespace="other")
        other.save(StorageKeys.TASKS, [])
        store.save(StorageKeys.TASKS, [])

        store.clear()

        assert kv_backend.keys() == ["other_tasks"]


class TestSQLAlchemyKeyValueBackend:
    """Test suite for the SQL key-value backend."""

    @pytest.fixture
    def sql_backend(self):
        """SQLite in-memory backend."""
        engine = create_storage_engine("sqlite:///:memory:")
        init_db(engine)
        backend = SQLAlchemyKeyValueBackend(engine)
        yield backend
        backend.close()

    def test_get_missing_key(self, sql_backend):
        """Test that a missing key returns None."""
        assert sql_backend.get("nope") is None

    def test_set_and_overwrite(self, sql_backend):
        """Test insert followed by update of the same key."""
        sql_backend.set("k", "1")
        sql_backend.set("k", "2")

        assert sql_backend.get("k") == "2"

    def test_delete(self, sql_backend):
        """Test deleting a key (and deleting it again)."""
        sql_backend.set("k", "1")

        sql_backend.delete("k")
        sql_backend.delete("k")

        assert sql_backend.get("k") is None

    def test_is_healthy(self, sql_backend):
        """Test the connection check."""
        assert sql_backend.is_healthy() is True

    def test_store_over_sql_backend(self, sql_backend):
        """Test PersistentStore end to end over SQLite."""
        store = PersistentStore(sql_backend, namespace="test")
        store.save(StorageKeys.TRIBES, [{"id": 1, "name": "Work Team"}])

        assert store.load(StorageKeys.TRIBES, []) == [{"id": 1, "name": "Work Team"}]

    def test_file_database_creates_directory(self, tmp_path):
        """Test that a SQLite file URL gets its parent directory created."""
        db_path = tmp_path / "nested" / "tribetask.db"
        engine = create_storage_engine(f"sqlite:///{db_path}")
        init_db(engine)
        backend = SQLAlchemyKeyValueBackend(engine)

        backend.set("k", "v")
        backend.close()

        assert db_path.exists()
