"""Abstract base class for host key-value stores."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ...config.logging import LoggerMixin


class HostStore(ABC, LoggerMixin):
    """Primitive string-to-string store a backend kind is persisted in.

    Enumeration order is defined by the implementation but must not change
    between mutations.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is a no-op."""
        pass

    @abstractmethod
    def key(self, index: int) -> Optional[str]:
        """Return the key at ``index``, or None when out of range."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """Return every key in enumeration order."""
        pass

    @property
    @abstractmethod
    def length(self) -> int:
        """Number of entries held, including ones not written by the store."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""
        pass

    def close(self) -> None:
        """Release any resources held by the store."""
        pass

    @property
    def name(self) -> str:
        """Name used in logs and statistics."""
        return type(self).__name__
