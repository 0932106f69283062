"""Date and time utility functions.

All timestamps handled by the store are integer epoch milliseconds.
"""

import re
import time
from typing import Optional


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def parse_ttl(ttl_str: str) -> int:
    """Parse a TTL string into milliseconds.

    Plain integers (optionally negative) are taken as milliseconds; human
    readable forms like ``"30s"``, ``"5m"``, ``"2d"`` are converted.
    """
    if not ttl_str:
        return 0

    ttl_str = ttl_str.strip()
    if re.fullmatch(r'-?\d+', ttl_str):
        return int(ttl_str)

    pattern = r'^(-?\d+)(ms|[smhdw])$'
    match = re.match(pattern, ttl_str.lower())

    if not match:
        raise ValueError(f"Invalid TTL format: {ttl_str}")

    value, unit = match.groups()
    value = int(value)

    multipliers = {
        'ms': 1,
        's': 1000,
        'm': 60 * 1000,
        'h': 3600 * 1000,
        'd': 86400 * 1000,
        'w': 604800 * 1000,
    }

    return value * multipliers[unit]


def format_duration(ms: int) -> str:
    """Format a duration in milliseconds to a human-readable string."""
    if ms < 0:
        return f"-{format_duration(-ms)}"
    if ms < 1000:
        return f"{ms}ms"

    seconds = ms // 1000
    if seconds < 60:
        return f"{seconds}s"
    elif seconds < 3600:
        minutes, remaining_seconds = divmod(seconds, 60)
        return f"{minutes}m" if remaining_seconds == 0 else f"{minutes}m {remaining_seconds}s"
    elif seconds < 86400:
        hours = seconds // 3600
        remaining_minutes = (seconds % 3600) // 60
        return f"{hours}h" if remaining_minutes == 0 else f"{hours}h {remaining_minutes}m"
    else:
        days = seconds // 86400
        remaining_hours = (seconds % 86400) // 3600
        return f"{days}d" if remaining_hours == 0 else f"{days}d {remaining_hours}h"


def time_until_expiry(
    expires_at: Optional[int],
    current_time: Optional[int] = None,
) -> Optional[int]:
    """Get milliseconds until expiry, or None if no expiry."""
    if expires_at is None:
        return None

    if current_time is None:
        current_time = now_ms()

    return max(0, expires_at - current_time)
