"""
Errors raised and returned by the compatibility checks.

Two families:
- Aborting errors (MalformedValueError, DepthLimitError): the input cannot be
  walked at all. Both comparison variants stop on them.
- Findings (MismatchError subclasses): one incompatibility at one location.
  The diagnostic variant turns them into FailureRecords and keeps going; the
  short-circuit variant returns the first one.
"""

from __future__ import annotations

import json
from typing import Any, Optional


def quote(text: str) -> str:
    """Double-quoted rendering of a string for messages."""
    return json.dumps(text, ensure_ascii=False)


class CompatError(Exception):
    """Base exception for compatibility-check errors."""

    pass


class MalformedValueError(CompatError):
    """
    Raised when a raw value is empty, starts with a non-JSON byte, or does not
    decode as the kind its leading byte announced.

    This is a contract violation by the caller (the document was not produced
    by a JSON decoder), not a data mismatch.
    """

    def __init__(
        self,
        message: str,
        side: Optional[str] = None,
        field: str = "",
    ):
        super().__init__(message)
        self.side = side
        self.field = field

    def __str__(self) -> str:
        if self.side is None:
            return f"malformed input: {self.args[0]}"
        location = f"{self.side}.{self.field}" if self.field else self.side
        return f"malformed input at {location}: {self.args[0]}"


class DepthLimitError(CompatError):
    """
    Raised when documents nest deeper than the configured maximum.

    max_depth is None when no limit was configured and the nesting exhausted
    the interpreter's recursion limit instead.
    """

    def __init__(self, max_depth: Optional[int], field: str = ""):
        if max_depth is None:
            message = "nesting exceeds the recursion limit"
        else:
            message = f"nesting deeper than {max_depth} levels"
        super().__init__(message)
        self.max_depth = max_depth
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.args[0]} at {self.field}"
        return self.args[0]


class MismatchError(CompatError):
    """
    One incompatibility between got and want.

    Attributes:
        detail: Message without location, as used in diagnostic records.
        field: Dotted path of the value (empty at the document root).
    """

    def __init__(self, detail: str, field: str = ""):
        super().__init__(detail)
        self.detail = detail
        self.field = field


class TypeMismatchError(MismatchError):
    def __init__(self, got: Any, want: Any, field: str = ""):
        super().__init__(f"mismatched types (got {got!s}, want {want!s})", field)
        self.got = got
        self.want = want


class ValueMismatchError(MismatchError):
    pass


class MissingKeyError(MismatchError):
    """Raised when want has a key that got lacks."""

    def __init__(self, key: str, field: str = ""):
        super().__init__("missing key", field)
        self.key = key

    def __str__(self) -> str:
        return f"missing key {quote(self.key)}"


class MissingElementsError(MismatchError):
    def __init__(self, got_count: int, want_count: int, field: str = ""):
        super().__init__(
            f"missing elements (got {got_count}, want {want_count})", field
        )
        self.got_count = got_count
        self.want_count = want_count


class ElementNotFoundError(MismatchError):
    """Raised when no element of the got array is compatible with a want element."""

    def __init__(self, want: str, got: str, field: str = ""):
        super().__init__(f"element not found (want {want} in got {got})", field)
        self.want = want
        self.got = got
