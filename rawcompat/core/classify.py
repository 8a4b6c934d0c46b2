"""Value classification by leading byte.

Only the first byte is inspected; the value is not parsed. Inputs are
expected to come from a JSON decoder, so the first byte is never whitespace.
"""
from __future__ import annotations

from typing import Dict

from .types import RawValue, ValueKind

_LEADING: Dict[str, ValueKind] = {
    "n": ValueKind.NULL,
    "f": ValueKind.FALSE,
    "t": ValueKind.TRUE,
    '"': ValueKind.STRING,
    "[": ValueKind.ARRAY,
    "{": ValueKind.OBJECT,
    "-": ValueKind.NUMBER,
    "+": ValueKind.NUMBER,
}
_LEADING.update({digit: ValueKind.NUMBER for digit in "0123456789"})


def leading_char(raw: RawValue) -> str:
    """First character of a raw value, or "" when it is empty."""
    if not raw:
        return ""
    if isinstance(raw, bytes):
        return chr(raw[0])
    return raw[0]


def classify(raw: RawValue) -> ValueKind:
    """Return the ValueKind of a raw value; UNKNOWN for empty or non-JSON input."""
    return _LEADING.get(leading_char(raw), ValueKind.UNKNOWN)
