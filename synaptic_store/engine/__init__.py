"""
Storage engine.

This package composes the storage primitives into the public facade:

- **Core**: StorageEngine with backend selection, kind configuration and dispatch
- **Operations**: get, set, remove and undo of single entries
- **Queries**: enumeration, length, bulk clears and statistics

Generic operations act on the configured kind (``session`` unless set);
``engine.local`` and ``engine.session`` address a kind explicitly. A kind
whose host store fails its capability probe is served transparently by
the in-memory fallback.
"""

from .core import KindStore, StorageEngine

__all__ = ["StorageEngine", "KindStore"]
