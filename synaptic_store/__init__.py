"""
Synaptic Store - a key-value persistence facade.

This package layers structured semantics over primitive host key-value stores:
- Whitespace-free canonical keys and colon-delimited namespaces
- A fixed value envelope with write timestamp and optional expiry
- Durable and session storage with transparent in-memory fallback
- Single-slot undo/redo per key
"""

__version__ = "0.1.0"
__author__ = "Synaptic Store Team"
__email__ = "dev@synaptic-store.dev"

from .config.settings import Settings
from .engine import StorageEngine
from .models.envelope import BackendKind

__all__ = ["StorageEngine", "Settings", "BackendKind"]
