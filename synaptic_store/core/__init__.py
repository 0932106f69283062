"""Core error types for Synaptic Store."""

from .exceptions import (
    BackendError,
    ConfigurationError,
    DecodeError,
    QuotaExceededError,
    StoreError,
    ValidationError,
)

__all__ = [
    "StoreError",
    "ConfigurationError",
    "ValidationError",
    "BackendError",
    "QuotaExceededError",
    "DecodeError",
]
