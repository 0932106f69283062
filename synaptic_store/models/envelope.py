"""Envelope and backend kind models for Synaptic Store."""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field, JsonValue, StrictInt

from .base import StoreBaseModel


class BackendKind(str, Enum):
    """Key-value providers an operation can target."""

    LOCAL = "local"        # Durable, survives the process
    SESSION = "session"    # Lives as long as the process
    MEMORY = "memory"      # In-memory fallback


class Envelope(StoreBaseModel):
    """A stored value together with its write time and optional expiry.

    Field aliases are the persisted names: ``_data_``, ``_ts_`` and ``_exp_``.
    Timestamps are epoch milliseconds.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: JsonValue = Field(alias="_data_", description="Stored value")
    created_at: StrictInt = Field(alias="_ts_", description="Write time (epoch ms)")
    expires_at: Optional[StrictInt] = Field(
        default=None,
        alias="_exp_",
        description="Expiry time (epoch ms), absent when written without TTL",
    )

    @property
    def ttl_ms(self) -> Optional[int]:
        """Time to live the entry was written with."""
        if self.expires_at is None:
            return None
        return self.expires_at - self.created_at

    def is_expired(self, now_ms: int) -> bool:
        """Check if the entry has expired at ``now_ms``."""
        if self.expires_at is None:
            return False
        return now_ms >= self.expires_at

    def to_wire_dict(self) -> dict:
        """Envelope fields under their persisted names, ``_exp_`` only when set."""
        payload = {"_data_": self.data, "_ts_": self.created_at}
        if self.expires_at is not None:
            payload["_exp_"] = self.expires_at
        return payload
