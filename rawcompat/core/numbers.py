"""Numeric equivalence of JSON number literals.

Comparison tiers:
- identical literal text: equal without decoding
- both literals are integers in int64 range: exact integer comparison
- both parse as finite doubles: float comparison (5.3e1 == 53)
- otherwise: arbitrary-precision Decimal comparison

Float values in messages use the shortest round-trip digits, switching to
exponent form when the decimal exponent is below -4 or at least 6
(50, 5.1, 1.2345675e+06, 1e-05).
"""
from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER = re.compile(r"-?(?:0|[1-9][0-9]*)\Z")

# len("-9223372036854775808"); longer literals are never int64
_INT64_MAX_LEN = 20


def as_int64(literal: str) -> Optional[int]:
    if len(literal) > _INT64_MAX_LEN or not _INTEGER.match(literal):
        return None
    value = int(literal)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def as_float(literal: str) -> Optional[float]:
    try:
        value = float(literal)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_float(value: float) -> str:
    """Shortest %g-style rendering of a finite float."""
    digits = Decimal(repr(value)).normalize().as_tuple()
    ndigits = len(digits.digits)
    point = ndigits + digits.exponent
    exponent = point - 1
    if exponent < -4 or exponent >= 6:
        return format(value, f".{max(ndigits - 1, 0)}e")
    return format(value, f".{max(ndigits - point, 0)}f")


def compare_numbers(got: str, want: str) -> Optional[str]:
    """Compare two number literals; return None if equal, else a mismatch message."""
    if got == want:
        return None

    got_int = as_int64(got)
    want_int = as_int64(want)
    if got_int is not None and want_int is not None:
        if got_int != want_int:
            return f"mismatched number values (got {got_int}, want {want_int})"
        return None

    got_float = as_float(got)
    want_float = as_float(want)
    if got_float is not None and want_float is not None:
        if got_float != want_float:
            return (
                f"mismatched number values "
                f"(got {format_float(got_float)}, want {format_float(want_float)})"
            )
        return None

    # out of double range
    try:
        if Decimal(got) == Decimal(want):
            return None
    except InvalidOperation:
        pass
    return f"mismatched number values (got {got}, want {want})"
