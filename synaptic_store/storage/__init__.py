"""Storage primitives.

This package holds the pieces the engine is composed of:
- keys: canonical key names
- codec: envelope serialization and parsing
- hosts: host key-value stores (SQLite, Redis, in-memory fallback)
- backend: uniform backend contract and capability probe
- namespace: namespace and expiration sweeps
- undo: single-slot undo ledger
"""

from .backend import Backend, probe_host
from .codec import decode, encode, try_decode
from .keys import normalize_key
from .namespace import clear_expired, clear_namespace
from .undo import UndoLedger

__all__ = [
    "Backend",
    "probe_host",
    "encode",
    "decode",
    "try_decode",
    "normalize_key",
    "clear_expired",
    "clear_namespace",
    "UndoLedger",
]
