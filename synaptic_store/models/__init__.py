"""Synaptic Store domain models."""

from .base import StoreBaseModel
from .envelope import BackendKind, Envelope
from .stats import StoreStats

__all__ = [
    "StoreBaseModel",
    "BackendKind",
    "Envelope",
    "StoreStats",
]
