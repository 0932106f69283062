"""Host key-value stores.

This package provides the primitive stores a storage kind is persisted in:
- base: Abstract base class defining the host contract
- sqlite: SQLite-based store for durable and session data
- redis: Redis-based store for durable data
- memory: In-memory stores used as fallback
"""

from .base import HostStore
from .memory import MemoryHostStore, MemoryStore
from .redis import RedisHostStore
from .sqlite import SQLiteHostStore

__all__ = [
    "HostStore",
    "MemoryHostStore",
    "MemoryStore",
    "RedisHostStore",
    "SQLiteHostStore",
]
