"""Storage engine with backend selection and kind dispatch."""

from typing import Any, Callable, Dict, List, Optional, Union

from ..config.logging import LoggerMixin
from ..config.settings import Settings
from ..core.exceptions import ConfigurationError
from ..models.envelope import BackendKind, Envelope
from ..models.stats import StoreStats
from ..storage.backend import Backend, probe_host
from ..storage.hosts import HostStore, MemoryStore, RedisHostStore, SQLiteHostStore
from ..storage.undo import UndoLedger
from ..utils.date_utils import now_ms
from .operations import EntryOperations
from .queries import EntryQueries

KindLike = Union[BackendKind, str]


def _coerce_kind(kind: KindLike) -> BackendKind:
    if isinstance(kind, BackendKind):
        return kind
    try:
        return BackendKind(str(kind).strip().lower())
    except ValueError:
        raise ConfigurationError(f"Unknown storage kind: {kind!r}", "kind")


class KindStore:
    """Operations bound to one storage kind."""

    def __init__(self, engine: "StorageEngine", kind: BackendKind) -> None:
        self.engine = engine
        self.kind = kind

    def get(self, key: str) -> Any:
        return self.engine._operations.get(self.kind, key)

    def get_envelope(self, key: str) -> Optional[Envelope]:
        return self.engine._operations.get_envelope(self.kind, key)

    def set(self, key: str, data: Any, ttl_ms: Optional[int] = None) -> Envelope:
        return self.engine._operations.set(self.kind, key, data, ttl_ms)

    def remove(self, key: str) -> bool:
        return self.engine._operations.remove(self.kind, key)

    def undo(self, key: str) -> Any:
        return self.engine._operations.undo(self.kind, key)

    def key(self, index: int) -> Optional[str]:
        return self.engine._queries.key(self.kind, index)

    def length(self) -> int:
        return self.engine._queries.length(self.kind)

    def keys(self) -> List[str]:
        return self.engine._queries.keys(self.kind)

    def exists(self, key: str) -> bool:
        return self.engine._queries.exists(self.kind, key)

    def clear(self) -> None:
        self.engine._queries.clear(self.kind)

    def clear_expired(self) -> int:
        return self.engine._queries.clear_expired(self.kind)

    def clear_namespace(self, prefix: str) -> int:
        return self.engine._queries.clear_namespace(self.kind, prefix)

    def stats(self) -> StoreStats:
        return self.engine._queries.stats(self.kind)

    def __repr__(self) -> str:
        return f"KindStore(kind={self.kind.value})"


class StorageEngine(LoggerMixin):
    """Key-value store with expiration, namespaces, undo and in-memory fallback.

    The engine owns all mutable state: the configured kind used by the
    generic operations, the undo ledger and the probe results. Use one
    engine per process, or a fresh one per test.

    Args:
        settings: Engine settings; read from the environment when omitted.
        hosts: Host stores per kind. A kind mapped to None is unavailable.
            Built from ``settings`` when omitted.
        clock: Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        hosts: Optional[Dict[BackendKind, Optional[HostStore]]] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.clock = clock or now_ms
        self.hosts = hosts if hosts is not None else self._create_hosts()
        self.fallback = MemoryStore()
        self.undo_ledger = UndoLedger(enabled=self.settings.UNDO_ENABLED)

        self._kind: Optional[BackendKind] = None
        self._probe_results: Dict[BackendKind, bool] = {}

        # Delegate operation handlers
        self._operations = EntryOperations(self, self.logger)
        self._queries = EntryQueries(self, self.logger)

    def _create_hosts(self) -> Dict[BackendKind, Optional[HostStore]]:
        """Build host stores from settings."""
        settings = self.settings
        durable: Optional[HostStore] = None
        session: Optional[HostStore] = None

        if settings.DURABLE_ENABLED:
            if settings.REDIS_ENABLED:
                durable = RedisHostStore(
                    settings.REDIS_URL,
                    namespace=settings.REDIS_NAMESPACE,
                    max_entries=settings.MAX_STORAGE_ENTRIES,
                )
            else:
                durable = SQLiteHostStore(
                    settings.DURABLE_DATABASE_PATH,
                    max_entries=settings.MAX_STORAGE_ENTRIES,
                )

        if settings.SESSION_ENABLED:
            session = SQLiteHostStore(
                settings.SESSION_DATABASE_PATH,
                max_entries=settings.MAX_STORAGE_ENTRIES,
            )

        return {BackendKind.LOCAL: durable, BackendKind.SESSION: session}

    def close(self) -> None:
        """Close host stores."""
        for host in self.hosts.values():
            if host is not None:
                host.close()
        self._probe_results.clear()
        self.logger.debug("Storage engine closed")

    def __enter__(self) -> "StorageEngine":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Configuration
    @property
    def kind(self) -> BackendKind:
        """Kind used by the generic operations."""
        if self._kind is None:
            return BackendKind(self.settings.DEFAULT_STORAGE_KIND)
        return self._kind

    def configure_kind(self, kind: KindLike) -> None:
        """Set the kind used by the generic operations (``local`` or ``session``)."""
        kind = _coerce_kind(kind)
        if kind is BackendKind.MEMORY:
            raise ConfigurationError("Storage kind must be 'local' or 'session'", "kind")
        self._kind = kind
        self.logger.debug("Storage kind configured", kind=kind.value)

    @property
    def undo_enabled(self) -> bool:
        return self.undo_ledger.enabled

    def enable_undo(self, on: bool = True) -> None:
        """Turn undo tracking on or off for all kinds."""
        self.undo_ledger.enable(on)

    def reset_undo(self) -> None:
        """Forget every recorded undo value."""
        self.undo_ledger.clear()

    # Backend selection
    def supports(self, kind: KindLike) -> bool:
        """Whether the host store of ``kind`` is usable. Cached per kind."""
        kind = _coerce_kind(kind)
        if kind is BackendKind.MEMORY:
            return True

        if kind not in self._probe_results:
            supported = probe_host(self.hosts.get(kind))
            self._probe_results[kind] = supported
            if not supported:
                self.logger.warning(
                    "Storage kind unavailable, using in-memory fallback", kind=kind.value
                )
        return self._probe_results[kind]

    def mark_unsupported(self, kind: KindLike, reason: Optional[str] = None) -> None:
        """Serve ``kind`` from the fallback until capabilities are refreshed."""
        kind = _coerce_kind(kind)
        self._probe_results[kind] = False
        self.logger.warning(
            "Storage kind failed, using in-memory fallback", kind=kind.value, reason=reason
        )

    def refresh_capabilities(self) -> None:
        """Forget cached probe results so the next operation probes again."""
        self._probe_results.clear()

    def backend(self, kind: KindLike) -> Backend:
        """Backend serving ``kind``, redirected to the fallback when unsupported.

        Support is decided for each kind on its own: a durable store that
        fails does not move session data to memory, and the reverse.
        """
        kind = _coerce_kind(kind)
        if kind is not BackendKind.MEMORY and self.supports(kind):
            return Backend(kind, self.hosts[kind])
        return Backend(kind, self.fallback.space(kind), fallback=True)

    # Per-kind access
    def store(self, kind: KindLike) -> KindStore:
        return KindStore(self, _coerce_kind(kind))

    @property
    def local(self) -> KindStore:
        return self.store(BackendKind.LOCAL)

    @property
    def session(self) -> KindStore:
        return self.store(BackendKind.SESSION)

    @property
    def memory(self) -> KindStore:
        return self.store(BackendKind.MEMORY)

    # Generic operations on the configured kind
    def get(self, key: str) -> Any:
        """Value stored under ``key``, or None when missing or expired."""
        return self._operations.get(self.kind, key)

    def get_envelope(self, key: str) -> Optional[Envelope]:
        """Live envelope stored under ``key``, with its timestamps."""
        return self._operations.get_envelope(self.kind, key)

    def set(self, key: str, data: Any, ttl_ms: Optional[int] = None) -> Envelope:
        """Store ``data`` under ``key``; it expires ``ttl_ms`` after now when given."""
        return self._operations.set(self.kind, key, data, ttl_ms)

    def remove(self, key: str) -> bool:
        return self._operations.remove(self.kind, key)

    def undo(self, key: str) -> Any:
        return self._operations.undo(self.kind, key)

    def key(self, index: int) -> Optional[str]:
        return self._queries.key(self.kind, index)

    def length(self) -> int:
        return self._queries.length(self.kind)

    def keys(self) -> List[str]:
        return self._queries.keys(self.kind)

    def exists(self, key: str) -> bool:
        return self._queries.exists(self.kind, key)

    def clear(self) -> None:
        self._queries.clear(self.kind)

    def clear_expired(self) -> int:
        return self._queries.clear_expired(self.kind)

    def clear_namespace(self, prefix: str) -> int:
        return self._queries.clear_namespace(self.kind, prefix)

    def stats(self) -> StoreStats:
        return self._queries.stats(self.kind)
