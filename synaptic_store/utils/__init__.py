"""Utility functions and helpers."""

from .date_utils import format_duration, now_ms, parse_ttl, time_until_expiry
from .validation import validate_key, validate_ttl, validate_value

__all__ = [
    "now_ms",
    "parse_ttl",
    "format_duration",
    "time_until_expiry",
    "validate_key",
    "validate_value",
    "validate_ttl",
]
