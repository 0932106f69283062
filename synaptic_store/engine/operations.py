"""Entry read/write/remove/undo operations handler."""

from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import BackendError, ValidationError
from ..models.envelope import BackendKind, Envelope
from ..storage.backend import Backend
from ..storage.codec import encode_envelope, try_decode
from ..storage.keys import normalize_key
from ..storage.undo import MISSING, NO_PRIOR_VALUE
from ..utils.validation import validate_key, validate_ttl, validate_value

if TYPE_CHECKING:
    from .core import StorageEngine


def read_live(backend: Backend, key: str, now_ms: int, logger) -> Optional[Envelope]:
    """Envelope currently stored under ``key``.

    Entries that are not envelopes or have expired are removed and reported
    as missing.
    """
    raw = backend.read(key)
    if raw is None:
        return None

    envelope = try_decode(raw)
    if envelope is None:
        backend.remove(key)
        logger.debug("Removed undecodable entry", kind=backend.kind.value, key=key)
        return None

    if envelope.is_expired(now_ms):
        backend.remove(key)
        logger.debug("Removed expired entry", kind=backend.kind.value, key=key)
        return None

    return envelope


class EntryOperations:
    """Handles single-entry operations for every storage kind."""

    def __init__(self, engine: "StorageEngine", logger):
        self.engine = engine
        self.logger = logger

    def get(self, kind: BackendKind, key: str) -> Any:
        """Value stored under ``key``, or None when missing or expired."""
        envelope = self.get_envelope(kind, key)
        return None if envelope is None else envelope.data

    def get_envelope(self, kind: BackendKind, key: str) -> Optional[Envelope]:
        validate_key(key)
        backend = self.engine.backend(kind)
        return read_live(backend, normalize_key(key), self.engine.clock(), self.logger)

    def set(
        self,
        kind: BackendKind,
        key: str,
        data: Any,
        ttl_ms: Optional[int] = None,
    ) -> Envelope:
        """Store ``data`` under ``key``, expiring ``ttl_ms`` after now when given."""
        validate_key(key)
        validate_value(data)
        validate_ttl(ttl_ms)

        created_at = self.engine.clock()
        expires_at = None if ttl_ms is None else created_at + ttl_ms
        return self._write(kind, normalize_key(key), data, created_at, expires_at)

    def remove(self, kind: BackendKind, key: str) -> bool:
        """Remove ``key``. Returns True if an entry was present."""
        validate_key(key)
        key = normalize_key(key)
        backend = self.engine.backend(kind)

        existed = backend.read(key) is not None
        backend.remove(key)

        if existed:
            self.logger.debug("Entry removed", kind=kind.value, key=key)
        return existed

    def undo(self, kind: BackendKind, key: str) -> Any:
        """Swap the live value of ``key`` with the one it replaced.

        Returns the value that is live afterwards. Calling it again swaps
        back. Without undo tracking, or with nothing recorded for the key,
        the current value is returned and nothing changes.
        """
        validate_key(key)
        ledger = self.engine.undo_ledger
        key = normalize_key(key)

        slot = ledger.slot(kind, key) if ledger.enabled else MISSING
        if slot is MISSING:
            return self.get(kind, key)

        if slot is NO_PRIOR_VALUE:
            backend = self.engine.backend(kind)
            ledger.record(kind, key, read_live(backend, key, self.engine.clock(), self.logger))
            backend.remove(key)
            self.logger.debug("Undo removed entry without prior value", kind=kind.value, key=key)
            return None

        self._write(kind, key, slot.data, self.engine.clock(), slot.expires_at)
        self.logger.debug("Undo restored previous value", kind=kind.value, key=key)
        return slot.data

    def _write(
        self,
        kind: BackendKind,
        key: str,
        data: Any,
        created_at: int,
        expires_at: Optional[int],
    ) -> Envelope:
        try:
            envelope = Envelope(data=data, created_at=created_at, expires_at=expires_at)
        except PydanticValidationError as e:
            raise ValidationError(f"Value not storable: {e.error_count()} error(s)", "data")

        encoded = encode_envelope(envelope)
        stored = try_decode(encoded)
        if stored is None or stored.data != envelope.data:
            raise ValidationError("Value does not survive storage unchanged", "data")

        backend = self.engine.backend(kind)
        ledger = self.engine.undo_ledger
        previous = read_live(backend, key, created_at, self.logger) if ledger.enabled else None

        try:
            backend.write(key, encoded)
        except BackendError as e:
            if backend.fallback:
                raise
            self.engine.mark_unsupported(kind, reason=str(e))
            backend = self.engine.backend(kind)
            backend.write(key, encoded)

        if ledger.enabled:
            ledger.record(kind, key, previous)

        self.logger.debug(
            "Entry stored",
            kind=kind.value,
            key=key,
            fallback=backend.fallback,
            expires_at=expires_at,
        )
        return envelope
