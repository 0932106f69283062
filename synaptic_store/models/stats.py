"""Statistics models for Synaptic Store."""

from pydantic import Field

from .base import StoreBaseModel
from .envelope import BackendKind


class StoreStats(StoreBaseModel):
    """Statistics about one storage kind."""

    kind: BackendKind = Field(description="Storage kind the statistics were taken for")
    backend: str = Field(description="Host store class serving the kind")
    fallback: bool = Field(description="Whether the kind is served by the in-memory fallback")
    total_entries: int = Field(ge=0, description="Raw number of entries in the backend")
    managed_entries: int = Field(ge=0, description="Entries holding a valid envelope")
    foreign_entries: int = Field(ge=0, description="Entries not written by the store")
    expired_entries: int = Field(ge=0, description="Managed entries past their expiry")
    expiring_entries: int = Field(ge=0, description="Managed entries carrying an expiry")
