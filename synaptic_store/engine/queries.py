"""Enumeration, bulk-clear and statistics operations handler."""

from typing import TYPE_CHECKING, List, Optional

from ..models.envelope import BackendKind
from ..models.stats import StoreStats
from ..storage import namespace
from ..storage.codec import try_decode
from ..storage.keys import normalize_key
from ..utils.validation import validate_key
from .operations import read_live

if TYPE_CHECKING:
    from .core import StorageEngine


class EntryQueries:
    """Handles enumeration and bulk operations for every storage kind."""

    def __init__(self, engine: "StorageEngine", logger):
        self.engine = engine
        self.logger = logger

    def key(self, kind: BackendKind, index: int) -> Optional[str]:
        """Canonical key at ``index``, or None when out of range."""
        return self.engine.backend(kind).key_at(index)

    def length(self, kind: BackendKind) -> int:
        """Raw number of entries, foreign entries included."""
        return self.engine.backend(kind).count()

    def keys(self, kind: BackendKind) -> List[str]:
        return self.engine.backend(kind).keys()

    def exists(self, kind: BackendKind, key: str) -> bool:
        """Check if a live entry exists under ``key``."""
        validate_key(key)
        backend = self.engine.backend(kind)
        return read_live(backend, normalize_key(key), self.engine.clock(), self.logger) is not None

    def clear(self, kind: BackendKind) -> None:
        """Remove every entry of ``kind``."""
        backend = self.engine.backend(kind)
        backend.clear()
        self.logger.info("Storage cleared", kind=kind.value, fallback=backend.fallback)

    def clear_expired(self, kind: BackendKind) -> int:
        """Remove all expired entries. Returns the number removed."""
        removed = namespace.clear_expired(self.engine.backend(kind), self.engine.clock())
        if removed > 0:
            self.logger.info("Cleaned up expired entries", kind=kind.value, count=removed)
        return removed

    def clear_namespace(self, kind: BackendKind, prefix: str) -> int:
        """Remove all entries under ``prefix``. Returns the number removed."""
        validate_key(prefix)
        removed = namespace.clear_namespace(self.engine.backend(kind), prefix)
        self.logger.info(
            "Namespace cleared",
            kind=kind.value,
            namespace=namespace.namespace_prefix(prefix),
            count=removed,
        )
        return removed

    def stats(self, kind: BackendKind) -> StoreStats:
        """Get usage statistics for ``kind``."""
        backend = self.engine.backend(kind)
        now = self.engine.clock()

        managed = expired = expiring = 0
        keys = backend.keys()
        for key in keys:
            envelope = try_decode(backend.read(key))
            if envelope is None:
                continue
            managed += 1
            if envelope.expires_at is not None:
                expiring += 1
                if envelope.is_expired(now):
                    expired += 1

        stats = StoreStats(
            kind=kind,
            backend=backend.host.name,
            fallback=backend.fallback,
            total_entries=len(keys),
            managed_entries=managed,
            foreign_entries=len(keys) - managed,
            expired_entries=expired,
            expiring_entries=expiring,
        )

        self.logger.debug("Storage stats retrieved", kind=kind.value, total=stats.total_entries)
        return stats
