"""
Structural compatibility checks for raw JSON documents.

"got" is compatible with "want" when every key, value and array element that
want requires is present in got, possibly among extra material that is
ignored. Values are compared by meaning, not by encoding: 5.3e1 equals 53 and
"\\/" equals "/".

One recursive walk serves both variants; a ComparePolicy selects how array
elements are paired and whether the walk stops at the first finding.

- check():      diagnostic. Full walk, positional arrays, every failure
                returned as a FailureRecord with its dotted field path.
- raw_check():  short-circuit. Containment arrays, first failure returned as
                an error value.

Invariants:
- want's object keys are visited in sorted order, so diagnostics are
  reproducible regardless of mapping order
- extra keys and extra trailing/unmatched elements in got never fail
- malformed input aborts both variants; it is never reported as a mismatch
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, TypeVar

from .classify import classify
from .errors import (
    CompatError,
    DepthLimitError,
    ElementNotFoundError,
    MalformedValueError,
    MismatchError,
    MissingElementsError,
    MissingKeyError,
    TypeMismatchError,
    ValueMismatchError,
    quote,
)
from .numbers import compare_numbers
from .rawjson import (
    decode_number,
    decode_string,
    split_array,
    split_object,
    to_document,
)
from .types import Document, FailureRecord, FieldPath, RawValue, ValueKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PREVIEW_LEN = 60


# =============================================================================
# Policy
# =============================================================================


class ArrayMatch(Enum):
    """
    How array elements of got and want are paired.

    POSITIONAL: got[i] is compared with want[i]; got needs at least as many
        elements as want, extra trailing elements are ignored.
    CONTAINMENT: every want element must be compatible with some got element,
        in any order and any multiplicity.
    """

    POSITIONAL = "positional"
    CONTAINMENT = "containment"


@dataclass(frozen=True)
class ComparePolicy:
    """
    Configuration for a compatibility walk.

    Attributes:
        array_match: Pairing of array elements (ArrayMatch).
        fail_fast: If True, the first finding ends the walk.
        max_depth: Maximum nesting of arrays/objects below the document,
            or None for no limit.
    """

    array_match: ArrayMatch = ArrayMatch.POSITIONAL
    fail_fast: bool = False
    max_depth: Optional[int] = None

    @classmethod
    def diagnostic(cls, max_depth: Optional[int] = None) -> "ComparePolicy":
        """Full walk with positional arrays."""
        return cls(
            array_match=ArrayMatch.POSITIONAL,
            fail_fast=False,
            max_depth=max_depth,
        )

    @classmethod
    def short_circuit(cls, max_depth: Optional[int] = None) -> "ComparePolicy":
        """First-failure walk with containment arrays."""
        return cls(
            array_match=ArrayMatch.CONTAINMENT,
            fail_fast=True,
            max_depth=max_depth,
        )


# =============================================================================
# Reporting
# =============================================================================


class FailureCollector:
    """
    Receives findings during a walk.

    Collecting mode keeps every finding in discovery order. Fail-fast mode
    raises the first finding, which unwinds the walk.
    """

    def __init__(self, fail_fast: bool = False):
        self.fail_fast = fail_fast
        self.records: List[FailureRecord] = []

    def fail(self, error: MismatchError) -> None:
        if self.fail_fast:
            raise error
        self.records.append(FailureRecord(field=error.field, message=error.detail))


# =============================================================================
# Walk
# =============================================================================


def _preview(raw: RawValue) -> str:
    text = raw.decode("utf-8", "replace") if isinstance(raw, bytes) else raw
    if len(text) > _PREVIEW_LEN:
        return text[: _PREVIEW_LEN - 3] + "..."
    return text


class _Walker:
    def __init__(self, policy: ComparePolicy, collector: FailureCollector):
        self.policy = policy
        self.collector = collector

    def document(
        self,
        got: Document,
        want: Document,
        path: FieldPath,
        depth: int = 0,
    ) -> None:
        for key in sorted(want):
            key_path = path.child(key)
            if key not in got:
                self.collector.fail(MissingKeyError(key, field=str(key_path)))
                continue
            self.value(got[key], want[key], key_path, depth)

    def value(
        self,
        got: RawValue,
        want: RawValue,
        path: FieldPath,
        depth: int,
    ) -> None:
        got_kind = self._kind(got, "got", path)
        want_kind = self._kind(want, "want", path)

        if got_kind is not want_kind:
            self.collector.fail(
                TypeMismatchError(got_kind, want_kind, field=str(path))
            )
            return

        if want_kind in (ValueKind.NULL, ValueKind.TRUE, ValueKind.FALSE):
            return
        if want_kind is ValueKind.NUMBER:
            self._number(got, want, path)
        elif want_kind is ValueKind.STRING:
            self._string(got, want, path)
        elif want_kind is ValueKind.ARRAY:
            self._array(got, want, path, depth + 1)
        elif want_kind is ValueKind.OBJECT:
            self._object(got, want, path, depth + 1)

    def _kind(self, raw: RawValue, side: str, path: FieldPath) -> ValueKind:
        if not raw:
            raise MalformedValueError("empty raw value", side=side, field=str(path))
        kind = classify(raw)
        if kind is ValueKind.UNKNOWN:
            raise MalformedValueError(
                f"non-JSON leading byte in {_preview(raw)!r}",
                side=side,
                field=str(path),
            )
        return kind

    def _check_depth(self, depth: int, path: FieldPath) -> None:
        limit = self.policy.max_depth
        if limit is not None and depth > limit:
            raise DepthLimitError(limit, field=str(path))

    def _decode_pair(
        self,
        decode: Callable[[RawValue], T],
        got: RawValue,
        want: RawValue,
        path: FieldPath,
    ) -> Tuple[T, T]:
        return (
            _decode(decode, got, "got", path),
            _decode(decode, want, "want", path),
        )

    def _number(self, got: RawValue, want: RawValue, path: FieldPath) -> None:
        got_text, want_text = self._decode_pair(decode_number, got, want, path)
        message = compare_numbers(got_text, want_text)
        if message is not None:
            self.collector.fail(ValueMismatchError(message, field=str(path)))

    def _string(self, got: RawValue, want: RawValue, path: FieldPath) -> None:
        got_text, want_text = self._decode_pair(decode_string, got, want, path)
        if got_text != want_text:
            message = (
                f"mismatched strings (got {quote(got_text)}, want {quote(want_text)})"
            )
            self.collector.fail(ValueMismatchError(message, field=str(path)))

    def _object(
        self, got: RawValue, want: RawValue, path: FieldPath, depth: int
    ) -> None:
        self._check_depth(depth, path)
        got_doc, want_doc = self._decode_pair(split_object, got, want, path)
        self.document(got_doc, want_doc, path, depth)

    def _array(
        self, got: RawValue, want: RawValue, path: FieldPath, depth: int
    ) -> None:
        self._check_depth(depth, path)
        got_items, want_items = self._decode_pair(split_array, got, want, path)
        if self.policy.array_match is ArrayMatch.CONTAINMENT:
            self._array_contains(got, got_items, want_items, path, depth)
        else:
            self._array_prefix(got_items, want_items, path, depth)

    def _array_prefix(
        self,
        got_items: Sequence[bytes],
        want_items: Sequence[bytes],
        path: FieldPath,
        depth: int,
    ) -> None:
        if len(got_items) < len(want_items):
            self.collector.fail(
                MissingElementsError(len(got_items), len(want_items), field=str(path))
            )
        # Still compare the overlapping prefix
        for i, (got_item, want_item) in enumerate(zip(got_items, want_items)):
            self.value(got_item, want_item, path.child(i), depth)

    def _array_contains(
        self,
        got: RawValue,
        got_items: Sequence[bytes],
        want_items: Sequence[bytes],
        path: FieldPath,
        depth: int,
    ) -> None:
        for i, want_item in enumerate(want_items):
            item_path = path.child(i)
            if not any(
                self._matches(got_item, want_item, item_path, depth)
                for got_item in got_items
            ):
                self.collector.fail(
                    ElementNotFoundError(
                        _preview(want_item), _preview(got), field=str(item_path)
                    )
                )

    def _matches(
        self, got: RawValue, want: RawValue, path: FieldPath, depth: int
    ) -> bool:
        probe = _Walker(self.policy, FailureCollector(fail_fast=True))
        try:
            probe.value(got, want, path, depth)
        except MismatchError:
            return False
        return True


def _decode(
    decode: Callable[[RawValue], T], raw: RawValue, side: str, path: FieldPath
) -> T:
    try:
        return decode(raw)
    except MalformedValueError as exc:
        raise MalformedValueError(exc.args[0], side=side, field=str(path)) from exc


# =============================================================================
# Entry points
# =============================================================================


def _walk(walker: _Walker, got: Document, want: Document) -> None:
    try:
        walker.document(got, want, FieldPath.root())
    except RecursionError as exc:
        raise DepthLimitError(None) from exc


def check(
    got: Document,
    want: Document,
    policy: Optional[ComparePolicy] = None,
) -> List[FailureRecord]:
    """
    Diagnostic compatibility check of got against want.

    Walks both documents completely and returns every failure, ordered by
    discovery (object keys sorted, array elements by index). An empty list
    means got is fully compatible with want.

    Args:
        got: Observed document.
        want: Expected document.
        policy: Walk configuration; defaults to ComparePolicy.diagnostic().

    Returns:
        List of FailureRecord, empty when compatible.

    Raises:
        MalformedValueError: A raw value is empty or not valid JSON.
        DepthLimitError: Nesting exceeds policy.max_depth, or the recursion
            limit when no max_depth is set.
    """
    policy = policy or ComparePolicy.diagnostic()
    collector = FailureCollector(fail_fast=policy.fail_fast)
    try:
        _walk(_Walker(policy, collector), got, want)
    except MismatchError as exc:
        collector.records.append(FailureRecord(field=exc.field, message=exc.detail))
    logger.debug("diagnostic check found %d failure(s)", len(collector.records))
    return collector.records


def raw_check(
    got: Document,
    want: Document,
    policy: Optional[ComparePolicy] = None,
) -> Optional[CompatError]:
    """
    Short-circuit compatibility check of got against want.

    Returns the first failure as an error, or None when got is fully
    compatible with want. Malformed input and excessive nesting are returned
    too, never raised.

    Args:
        got: Observed document.
        want: Expected document.
        policy: Walk configuration; defaults to ComparePolicy.short_circuit().
            Only array_match and max_depth are honoured: this variant always
            stops at the first failure, whatever policy.fail_fast says.
    """
    policy = policy or ComparePolicy.short_circuit()
    try:
        _walk(_Walker(policy, FailureCollector(fail_fast=True)), got, want)
    except CompatError as exc:
        logger.debug("short-circuit check failed: %s", exc)
        return exc
    return None


def check_claims(
    token: Optional[Mapping[str, Any]],
    required: Optional[Mapping[str, Any]],
) -> Optional[CompatError]:
    """
    Check that decoded token claims satisfy the required claims.

    Both maps hold already-decoded JSON values; None is treated as empty.
    Arrays use containment, so a required ["admin"] is satisfied by
    ["user", "admin"].
    """
    try:
        got = to_document(token)
        want = to_document(required)
    except CompatError as exc:
        return exc
    return raw_check(got, want)
