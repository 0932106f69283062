"""In-memory host stores used as fallback."""

from typing import Dict, List, Optional

from ...models.envelope import BackendKind
from .base import HostStore


class MemoryHostStore(HostStore):
    """Dict-backed host store, enumerated in insertion order."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def key(self, index: int) -> Optional[str]:
        if index < 0 or index >= len(self._items):
            return None
        return list(self._items)[index]

    def keys(self) -> List[str]:
        return list(self._items)

    @property
    def length(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> Dict[str, str]:
        """Copy of the raw entries."""
        return dict(self._items)


class MemoryStore:
    """Shared fallback holding one independent key-space per storage kind."""

    def __init__(self) -> None:
        self._spaces: Dict[BackendKind, MemoryHostStore] = {
            BackendKind.LOCAL: MemoryHostStore(),
            BackendKind.SESSION: MemoryHostStore(),
        }

    def space(self, kind: BackendKind) -> MemoryHostStore:
        """Key-space standing in for ``kind``."""
        if kind not in self._spaces:
            self._spaces[kind] = MemoryHostStore()
        return self._spaces[kind]

    @property
    def local(self) -> MemoryHostStore:
        return self._spaces[BackendKind.LOCAL]

    @property
    def session(self) -> MemoryHostStore:
        return self._spaces[BackendKind.SESSION]

    def clear(self) -> None:
        for space in self._spaces.values():
            space.clear()
