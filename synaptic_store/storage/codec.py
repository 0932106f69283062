"""Envelope codec.

An entry is persisted as compact JSON ``{"_data_": ..., "_ts_": ..., "_exp_": ...}``
with every double quote replaced by ``QUOTE_MARKER``. Quotes escaped inside
string data are replaced as well, so ``"a \\"b\\""`` is stored as
``^^a \\^^b\\^^^^``. Whole floats are written as integers (``1.0`` as ``1``).
The format must stay byte-compatible with existing data.
"""

import json
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import DecodeError
from ..models.envelope import Envelope

QUOTE_MARKER = "^^"


def encode(data, created_at: int, expires_at: Optional[int] = None) -> str:
    """Serialize a value and its timestamps into the persisted string."""
    return encode_envelope(
        Envelope(data=data, created_at=created_at, expires_at=expires_at)
    )


def _integral_floats_as_ints(value: Any) -> Any:
    """Write whole floats without a fraction, as JavaScript prints them."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, list):
        return [_integral_floats_as_ints(item) for item in value]
    if isinstance(value, dict):
        return {name: _integral_floats_as_ints(item) for name, item in value.items()}
    return value


def encode_envelope(envelope: Envelope) -> str:
    """Serialize an envelope into the persisted string."""
    payload = envelope.to_wire_dict()
    payload["_data_"] = _integral_floats_as_ints(payload["_data_"])
    text = json.dumps(
        payload,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.replace('"', QUOTE_MARKER)


def decode(raw: Optional[str]) -> Envelope:
    """Parse a persisted string back into an envelope.

    Raises:
        DecodeError: if ``raw`` is missing, is not JSON once the markers are
            reverted, or does not carry ``_data_`` and ``_ts_``.
    """
    if raw is None:
        raise DecodeError("No stored value")

    try:
        payload = json.loads(raw.replace(QUOTE_MARKER, '"'))
    except ValueError as e:
        raise DecodeError(f"Stored value is not an envelope: {e}", raw)

    if not isinstance(payload, dict):
        raise DecodeError("Stored value is not an envelope object", raw)
    if "_data_" not in payload or "_ts_" not in payload:
        raise DecodeError("Stored value lacks _data_ or _ts_", raw)

    try:
        return Envelope.model_validate(payload)
    except PydanticValidationError as e:
        raise DecodeError(f"Invalid envelope: {e.error_count()} error(s)", raw)


def try_decode(raw: Optional[str]) -> Optional[Envelope]:
    """Decode ``raw``, returning None for anything that is not an envelope."""
    try:
        return decode(raw)
    except DecodeError:
        return None
