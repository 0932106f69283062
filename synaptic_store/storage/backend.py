"""Backends: a storage kind bound to the host store serving it."""

from typing import List, Optional

from ..config.logging import LoggerMixin, storage_logger
from ..core.exceptions import BackendError
from ..models.envelope import BackendKind
from .hosts.base import HostStore

PROBE_KEY = "__synaptic_store_probe__"


def probe_host(host: Optional[HostStore]) -> bool:
    """Check that ``host`` accepts a write, read and remove cycle.

    Never raises: a missing host, a failing host (disabled, unreachable,
    over quota) or a read that does not return the written value all
    report False.
    """
    if host is None:
        return False

    try:
        host.set_item(PROBE_KEY, PROBE_KEY)
        try:
            readable = host.get_item(PROBE_KEY) == PROBE_KEY
        finally:
            host.remove_item(PROBE_KEY)
    except BackendError as e:
        storage_logger.debug("Host store probe failed", backend=host.name, error=str(e))
        return False

    return readable


class Backend(LoggerMixin):
    """Uniform read/write/enumerate contract over one storage kind."""

    def __init__(self, kind: BackendKind, host: HostStore, fallback: bool = False) -> None:
        self.kind = kind
        self.host = host
        self.fallback = fallback

    def read(self, key: str) -> Optional[str]:
        return self.host.get_item(key)

    def write(self, key: str, value: str) -> None:
        self.host.set_item(key, value)

    def remove(self, key: str) -> None:
        self.host.remove_item(key)

    def key_at(self, index: int) -> Optional[str]:
        return self.host.key(index)

    def count(self) -> int:
        """Raw number of entries, including foreign ones."""
        return self.host.length

    def clear(self) -> None:
        self.host.clear()

    def keys(self) -> List[str]:
        """Snapshot of all keys in enumeration order."""
        return list(self.host.keys())

    def __repr__(self) -> str:
        return f"Backend(kind={self.kind.value}, host={self.host.name}, fallback={self.fallback})"
