"""Bulk operations over a backend's key enumeration."""

from ..config.logging import storage_logger
from .backend import Backend
from .codec import try_decode
from .keys import normalize_key

NAMESPACE_SEPARATOR = ":"


def namespace_prefix(prefix: str) -> str:
    """Canonical, colon-terminated form of a namespace prefix."""
    prefix = normalize_key(prefix)
    if not prefix.endswith(NAMESPACE_SEPARATOR):
        prefix += NAMESPACE_SEPARATOR
    return prefix


def clear_expired(backend: Backend, now_ms: int) -> int:
    """Remove every entry whose expiry has passed. Returns the number removed.

    Entries that do not decode as envelopes, and envelopes written without
    TTL, are left alone.
    """
    removed = 0
    for key in backend.keys():
        envelope = try_decode(backend.read(key))
        if envelope is None:
            continue
        if envelope.is_expired(now_ms):
            backend.remove(key)
            removed += 1

    storage_logger.debug(
        "Cleared expired entries", kind=backend.kind.value, removed=removed
    )
    return removed


def clear_namespace(backend: Backend, prefix: str) -> int:
    """Remove every entry under the namespace ``prefix``. Returns the number removed.

    ``"ns:sub1"`` clears ``"ns:sub1:x"`` but never ``"ns:sub11:x"``.
    """
    prefix = namespace_prefix(prefix)

    removed = 0
    for key in backend.keys():
        if key.startswith(prefix):
            backend.remove(key)
            removed += 1

    storage_logger.debug(
        "Cleared namespace", kind=backend.kind.value, namespace=prefix, removed=removed
    )
    return removed
