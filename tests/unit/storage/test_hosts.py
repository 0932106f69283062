"""Tests for host store implementations."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import redis

from synaptic_store.core.exceptions import BackendError, QuotaExceededError
from synaptic_store.models.envelope import BackendKind
from synaptic_store.storage.hosts import (
    HostStore,
    MemoryHostStore,
    MemoryStore,
    RedisHostStore,
    SQLiteHostStore,
)


@pytest.fixture(params=["sqlite-file", "sqlite-memory", "memory"])
def host(request, temp_dir: Path):
    """Each local host store implementation."""
    if request.param == "sqlite-file":
        store = SQLiteHostStore(temp_dir / "host.db")
    elif request.param == "sqlite-memory":
        store = SQLiteHostStore(":memory:")
    else:
        store = MemoryHostStore()
    yield store
    store.close()


class TestHostContract:
    """Test the contract shared by every host store."""

    def test_set_and_get(self, host: HostStore):
        """Test storing and reading a value."""
        host.set_item("a", "1")
        assert host.get_item("a") == "1"
        assert host.get_item("missing") is None

    def test_overwrite_keeps_position(self, host: HostStore):
        """Test that overwriting a key does not move it in the enumeration."""
        for key in ("a", "b", "c"):
            host.set_item(key, key)
        host.set_item("a", "updated")

        assert [host.key(i) for i in range(host.length)] == ["a", "b", "c"]
        assert host.get_item("a") == "updated"

    def test_enumeration_in_insertion_order(self, host: HostStore):
        """Test key(index) follows insertion order and is None out of range."""
        for key in ("key1", "key2", "key3"):
            host.set_item(key, "v")

        assert host.key(0) == "key1"
        assert host.key(2) == "key3"
        assert host.key(3) is None
        assert host.key(-1) is None

    def test_keys_in_enumeration_order(self, host: HostStore):
        """Test that keys() lists every key in the order key(index) does."""
        for key in ("b", "a", "c"):
            host.set_item(key, "v")
        host.set_item("b", "updated")

        assert host.keys() == ["b", "a", "c"]
        assert host.keys() == [host.key(i) for i in range(host.length)]

    def test_remove(self, host: HostStore):
        """Test removing keys, including missing ones."""
        host.set_item("a", "1")
        host.set_item("b", "2")

        host.remove_item("a")
        host.remove_item("never-set")

        assert host.get_item("a") is None
        assert host.length == 1
        assert host.key(0) == "b"

    def test_clear(self, host: HostStore):
        """Test clearing every entry."""
        host.set_item("a", "1")
        host.set_item("b", "2")
        host.clear()
        assert host.length == 0
        assert host.key(0) is None


class TestSQLiteHostStore:
    """Test SQLite host store specifics."""

    def test_creates_database_file(self, temp_dir: Path):
        """Test that first use creates the database and parent directories."""
        path = temp_dir / "nested" / "durable.db"
        store = SQLiteHostStore(path)

        assert not path.exists()
        store.set_item("a", "1")
        assert path.exists()
        store.close()

    def test_file_store_survives_reopen(self, temp_dir: Path):
        """Test that durable data is still there after reconnecting."""
        path = temp_dir / "durable.db"
        store = SQLiteHostStore(path)
        store.set_item("a", "1")
        store.close()

        reopened = SQLiteHostStore(path)
        assert reopened.get_item("a") == "1"
        reopened.close()

    def test_quota_rejects_new_keys(self):
        """Test that a full store refuses new keys but accepts overwrites."""
        store = SQLiteHostStore(":memory:", max_entries=2)
        store.set_item("a", "1")
        store.set_item("b", "2")

        with pytest.raises(QuotaExceededError) as exc_info:
            store.set_item("c", "3")
        assert exc_info.value.error_code == "QUOTA_EXCEEDED"
        assert isinstance(exc_info.value, BackendError)

        store.set_item("a", "updated")
        assert store.get_item("a") == "updated"

    def test_unopenable_path_raises_backend_error(self, temp_dir: Path):
        """Test that an unusable path surfaces as BackendError."""
        blocker = temp_dir / "file"
        blocker.write_text("not a directory")
        store = SQLiteHostStore(blocker / "durable.db")

        with pytest.raises(BackendError):
            store.get_item("a")


class TestMemoryStore:
    """Test the shared in-memory fallback."""

    def test_key_spaces_are_independent(self):
        """Test that the local and session spaces do not share entries."""
        store = MemoryStore()
        store.local.set_item("key1", "local")
        store.session.set_item("key1", "session")
        store.session.set_item("key3", "session")

        assert store.local.get_item("key1") == "local"
        assert store.local.length == 1
        assert store.session.length == 2
        assert store.space(BackendKind.SESSION) is store.session

    def test_clear_empties_every_space(self):
        """Test clearing the whole fallback."""
        store = MemoryStore()
        store.local.set_item("a", "1")
        store.space(BackendKind.MEMORY).set_item("b", "2")
        store.clear()

        assert store.local.length == 0
        assert store.space(BackendKind.MEMORY).length == 0

    def test_snapshot_is_a_copy(self):
        """Test that snapshots do not alias the store."""
        host = MemoryHostStore()
        host.set_item("a", "1")
        snapshot = host.snapshot()
        snapshot["b"] = "2"
        assert host.length == 1


class TestRedisHostStore:
    """Test Redis host store with a mocked client."""

    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.pipeline.return_value = MagicMock()
        return client

    def test_set_new_key_records_order(self, client):
        """Test that a new key is added to the order set before its value."""
        client.hexists.return_value = False
        client.incr.return_value = 7
        store = RedisHostStore("redis://unused", namespace="test", client=client)

        store.set_item("a", "1")

        client.zadd.assert_called_once_with("test:order", {"a": 7})
        client.hset.assert_called_once_with("test:items", "a", "1")

    def test_overwrite_keeps_order(self, client):
        """Test that overwriting does not touch the order set."""
        client.hexists.return_value = True
        store = RedisHostStore("redis://unused", namespace="test", client=client)

        store.set_item("a", "2")

        client.zadd.assert_not_called()
        client.hset.assert_called_once_with("test:items", "a", "2")

    def test_quota(self, client):
        """Test that a full Redis store refuses new keys."""
        client.hexists.return_value = False
        client.hlen.return_value = 1
        store = RedisHostStore("redis://unused", client=client, max_entries=1)

        with pytest.raises(QuotaExceededError):
            store.set_item("b", "2")

    def test_key_by_index(self, client):
        """Test enumeration reads the order set."""
        client.zrange.return_value = ["b"]
        store = RedisHostStore("redis://unused", namespace="test", client=client)

        assert store.key(1) == "b"
        client.zrange.assert_called_once_with("test:order", 1, 1)

        client.zrange.return_value = []
        assert store.key(5) is None
        assert store.key(-1) is None

    def test_keys_read_whole_order_set(self, client):
        """Test that listing keys is a single range read."""
        client.zrange.return_value = ["a", "b"]
        store = RedisHostStore("redis://unused", namespace="test", client=client)

        assert store.keys() == ["a", "b"]
        client.zrange.assert_called_once_with("test:order", 0, -1)

    def test_remove_uses_pipeline(self, client):
        """Test removal drops both the value and its order entry."""
        store = RedisHostStore("redis://unused", namespace="test", client=client)
        store.remove_item("a")

        pipe = client.pipeline.return_value
        pipe.hdel.assert_called_once_with("test:items", "a")
        pipe.zrem.assert_called_once_with("test:order", "a")
        pipe.execute.assert_called_once()

    def test_connection_failure_raises_backend_error(self, client):
        """Test that Redis errors are translated."""
        client.hget.side_effect = redis.ConnectionError("refused")
        client.hlen.side_effect = redis.ConnectionError("refused")
        store = RedisHostStore("redis://unused", client=client)

        with pytest.raises(BackendError):
            store.get_item("a")
        with pytest.raises(BackendError):
            _ = store.length

    def test_clear_deletes_namespace_keys(self, client):
        """Test clear removes the hash, the order set and the counter."""
        store = RedisHostStore("redis://unused", namespace="test", client=client)
        store.clear()
        client.delete.assert_called_once_with("test:items", "test:order", "test:seq")
