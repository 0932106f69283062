"""Canonical key names."""

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_key(key: str) -> str:
    """Strip every whitespace character from a caller key.

    Keys that only differ by whitespace map to the same canonical key.
    """
    return _WHITESPACE.sub("", key)
