"""Single-slot undo ledger."""

from typing import Dict, Optional, Tuple, Union

from ..models.envelope import BackendKind, Envelope


class _Sentinel:
    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name


NO_PRIOR_VALUE = _Sentinel("NO_PRIOR_VALUE")   # key did not exist before the write
MISSING = _Sentinel("MISSING")                 # nothing recorded for the key

Slot = Union[Envelope, _Sentinel]


class UndoLedger:
    """Keeps the value each key held before its latest write.

    One slot per ``(kind, key)``; every recorded write replaces the slot,
    so history is exactly one step deep. Slots are never persisted.
    """

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled
        self._slots: Dict[Tuple[BackendKind, str], Slot] = {}

    def enable(self, on: bool = True) -> None:
        """Switch tracking on or off. Existing slots are kept but ignored while off."""
        self.enabled = on

    def record(self, kind: BackendKind, key: str, previous: Optional[Envelope]) -> None:
        """Remember ``previous`` as the value ``key`` held before a write."""
        if not self.enabled:
            return
        self._slots[(kind, key)] = NO_PRIOR_VALUE if previous is None else previous

    def slot(self, kind: BackendKind, key: str) -> Slot:
        """Recorded value for ``key``, ``NO_PRIOR_VALUE``, or ``MISSING``."""
        return self._slots.get((kind, key), MISSING)

    def clear(self) -> None:
        self._slots.clear()

    def __len__(self) -> int:
        return len(self._slots)
