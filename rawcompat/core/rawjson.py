"""Raw JSON decode boundary.

The standard library decodes JSON straight into Python objects and has no
notion of an undecoded member value. This module walks one level of an
object or array with the stdlib scanner and hands back the members as raw
byte spans, leaving nested values undecoded for the comparator.

Every function raises MalformedValueError when its input is not the JSON it
was expected to be, and DepthLimitError when nesting exhausts the scanner's
recursion.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import DepthLimitError, MalformedValueError
from .types import RawValue

_WS = re.compile(r"[ \t\n\r]*")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} is not JSON")


# Numbers stay literal text; only their syntax is checked here.
_DECODER = json.JSONDecoder(
    parse_constant=_reject_constant,
    parse_int=str,
    parse_float=str,
)


def _text(raw: RawValue) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedValueError(f"invalid UTF-8: {exc}") from exc


def _skip(text: str, idx: int) -> int:
    return _WS.match(text, idx).end()


def _scan(text: str, idx: int) -> Tuple[Any, int]:
    try:
        return _DECODER.raw_decode(text, idx)
    except ValueError as exc:
        raise MalformedValueError(str(exc)) from exc
    except RecursionError as exc:
        raise DepthLimitError(None) from exc


def _expect(text: str, idx: int, token: str, what: str) -> None:
    if not text.startswith(token, idx):
        raise MalformedValueError(f"expected {what} at offset {idx}")


def _finish(text: str, idx: int) -> None:
    if _skip(text, idx) != len(text):
        raise MalformedValueError(f"trailing data at offset {idx}")


def _whole(text: str) -> Tuple[Any, int, int]:
    start = _skip(text, 0)
    value, end = _scan(text, start)
    _finish(text, end)
    return value, start, end


def _span(text: str, start: int, end: int) -> bytes:
    return text[start:end].encode("utf-8")


def split_object(raw: RawValue) -> Dict[str, bytes]:
    """Split a JSON object into its members as raw spans. Duplicate keys: last wins."""
    text = _text(raw)
    idx = _skip(text, 0)
    _expect(text, idx, "{", "object")
    members: Dict[str, bytes] = {}

    idx = _skip(text, idx + 1)
    if text.startswith("}", idx):
        _finish(text, idx + 1)
        return members

    while True:
        _expect(text, idx, '"', "member name")
        key, idx = _scan(text, idx)
        idx = _skip(text, idx)
        _expect(text, idx, ":", "':'")
        start = _skip(text, idx + 1)
        _, end = _scan(text, start)
        members[key] = _span(text, start, end)

        idx = _skip(text, end)
        if text.startswith(",", idx):
            idx = _skip(text, idx + 1)
            continue
        _expect(text, idx, "}", "',' or '}'")
        _finish(text, idx + 1)
        return members


def split_array(raw: RawValue) -> List[bytes]:
    """Split a JSON array into its elements as raw spans, in order."""
    text = _text(raw)
    idx = _skip(text, 0)
    _expect(text, idx, "[", "array")
    elements: List[bytes] = []

    idx = _skip(text, idx + 1)
    if text.startswith("]", idx):
        _finish(text, idx + 1)
        return elements

    while True:
        _, end = _scan(text, idx)
        elements.append(_span(text, idx, end))

        idx = _skip(text, end)
        if text.startswith(",", idx):
            idx = _skip(text, idx + 1)
            continue
        _expect(text, idx, "]", "',' or ']'")
        _finish(text, idx + 1)
        return elements


def decode_string(raw: RawValue) -> str:
    """Decode a JSON string literal into its logical text (escapes undone)."""
    text = _text(raw)
    value, start, _ = _whole(text)
    if text[start] != '"':
        raise MalformedValueError("expected string")
    return value


def decode_number(raw: RawValue) -> str:
    """Validate a JSON number and return its literal text."""
    text = _text(raw)
    _, start, end = _whole(text)
    if text[start] not in "-0123456789":
        raise MalformedValueError("expected number")
    return text[start:end]


def load_document(data: RawValue) -> Dict[str, bytes]:
    """
    Parse a JSON text into a Document.

    The top level must be an object; a top-level null is an empty document.
    """
    text = _text(data)
    if text.startswith("n", _skip(text, 0)):
        value, _, _ = _whole(text)
        if value is not None:
            raise MalformedValueError("expected object")
        return {}
    return split_object(text)


def to_document(values: Optional[Mapping[str, Any]]) -> Dict[str, bytes]:
    """
    Encode already-decoded values (e.g. token claims) into a Document.

    None is an empty document.
    """
    if values is None:
        return {}
    try:
        encoded = json.dumps(values, allow_nan=False, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise MalformedValueError(f"value is not JSON-encodable: {exc}") from exc
    except RecursionError as exc:
        raise DepthLimitError(None) from exc
    return load_document(encoded)
