"""Validation of caller-supplied keys, values and TTLs."""

import json
from typing import Any, Optional

from ..core.exceptions import ValidationError


def validate_key(key: Any) -> None:
    """Validate that a key is a string."""
    if not isinstance(key, str):
        raise ValidationError("Key must be a string", "key")


def validate_value(data: Any) -> None:
    """Validate that data is JSON-representable."""
    try:
        json.dumps(data, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Value not JSON serializable: {e}", "data")


def validate_ttl(ttl_ms: Optional[int]) -> None:
    """Validate a TTL in milliseconds. Negative values are allowed."""
    if ttl_ms is None:
        return

    if isinstance(ttl_ms, bool) or not isinstance(ttl_ms, int):
        raise ValidationError("TTL must be an integer number of milliseconds", "ttl_ms")
