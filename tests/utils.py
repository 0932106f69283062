"""Test utilities and helper functions for Synaptic Store tests."""

from typing import Any, Dict, List, Optional

from synaptic_store.engine import KindStore, StorageEngine
from synaptic_store.models.envelope import BackendKind, Envelope
from synaptic_store.storage.codec import decode

START_MS = 1_700_000_000_000


class FakeClock:
    """Callable clock returning epoch milliseconds under test control."""

    def __init__(self, start: int = START_MS) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class StoreTestHelper:
    """Helper class for storage-related testing."""

    NAMESPACED_KEYS = [
        "ns1:subns1:key1",
        "ns1:subns1:key2",
        "ns1:subns2:key1",
        "ns1:subns2:key2",
        "ns1:subns2:key3",
        "ns1:subns3:key1",
        "ns1:subns4:key1",
        "ns1:subns11:key1",
    ]

    @staticmethod
    def populate(store: KindStore, values: Dict[str, Any], ttl_ms: Optional[int] = None) -> None:
        for key, value in values.items():
            store.set(key, value, ttl_ms)

    @staticmethod
    def populate_namespaces(store: KindStore) -> List[str]:
        """Write one value per namespaced key; returns the keys."""
        for key in StoreTestHelper.NAMESPACED_KEYS:
            store.set(key, key.replace(":", " ") + " value")
        return list(StoreTestHelper.NAMESPACED_KEYS)

    @staticmethod
    def raw_value(engine: StorageEngine, kind: BackendKind, key: str) -> Optional[str]:
        """Persisted string for ``key``, read straight from the serving backend."""
        return engine.backend(kind).read(key)

    @staticmethod
    def raw_envelope(engine: StorageEngine, kind: BackendKind, key: str) -> Envelope:
        return decode(StoreTestHelper.raw_value(engine, kind, key))


class AssertionHelpers:
    """Common assertions on persisted data."""

    @staticmethod
    def assert_wire_format(raw: Optional[str], fragment: str) -> None:
        """Persisted value starts with ``{`` followed by ``fragment`` and holds no raw quotes."""
        assert raw is not None
        assert raw.index(fragment) == 1
        assert '"' not in raw

