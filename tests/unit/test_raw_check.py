"""Tests for the short-circuit compatibility check."""

from __future__ import annotations

import unittest
from typing import Dict

from rawcompat.core.compat import ArrayMatch, ComparePolicy, raw_check
from rawcompat.core.errors import (
    DepthLimitError,
    ElementNotFoundError,
    MalformedValueError,
    MissingKeyError,
    TypeMismatchError,
    ValueMismatchError,
)


def _doc(**members: str) -> Dict[str, bytes]:
    return {k: v.encode("utf-8") for k, v in members.items()}


class ShortCircuitScalarTest(unittest.TestCase):
    def test_compatible_returns_none(self) -> None:
        got = _doc(a="53", b='"/"', c="true", d="false", e="null", extra="1")
        want = _doc(a="5.3e1", b='"\\/"', c="true", d="false", e="null")
        self.assertIsNone(raw_check(got, want))

    def test_number_mismatch(self) -> None:
        err = raw_check(_doc(x="50"), _doc(x="5.1"))
        self.assertIsInstance(err, ValueMismatchError)
        self.assertEqual("mismatched number values (got 50, want 5.1)", str(err))
        self.assertEqual("x", err.field)

    def test_type_mismatch(self) -> None:
        err = raw_check(_doc(x="true"), _doc(x="100"))
        self.assertIsInstance(err, TypeMismatchError)
        self.assertEqual("mismatched types (got true, want number)", str(err))

    def test_missing_key_names_key(self) -> None:
        err = raw_check({}, _doc(foo='"bar"'))
        self.assertIsInstance(err, MissingKeyError)
        self.assertEqual('missing key "foo"', str(err))

    def test_first_failure_by_sorted_key(self) -> None:
        err = raw_check(_doc(b="1", c="1"), _doc(c="2", a="1", b="2"))
        self.assertIsInstance(err, MissingKeyError)
        self.assertEqual("a", err.key)


class ContainmentTest(unittest.TestCase):
    def test_element_found_anywhere(self) -> None:
        got = _doc(x='["uno","dos","baz","tres"]')
        self.assertIsNone(raw_check(got, _doc(x='["baz"]')))
        self.assertIsNone(raw_check(got, _doc(x='["tres","uno"]')))

    def test_element_not_found(self) -> None:
        err = raw_check(_doc(x='["uno","dos","tres"]'), _doc(x='["baz"]'))
        self.assertIsInstance(err, ElementNotFoundError)
        self.assertEqual('"baz"', err.want)
        self.assertEqual("x.0", err.field)
        self.assertTrue(str(err).startswith("element not found"))

    def test_multiplicity_is_ignored(self) -> None:
        self.assertIsNone(raw_check(_doc(x='["a"]'), _doc(x='["a","a","a"]')))
        self.assertIsNone(raw_check(_doc(x="[1,1,2]"), _doc(x="[2]")))

    def test_shorter_got_array_can_still_contain(self) -> None:
        self.assertIsNone(raw_check(_doc(x="[1]"), _doc(x="[1.0,10e-1]")))

    def test_objects_matched_as_supersets(self) -> None:
        got = _doc(x='[{"a":"b"},{"bar":"baz","n":1},{"c":"d"}]')
        self.assertIsNone(raw_check(got, _doc(x='[{"bar":"baz"}]')))
        err = raw_check(got, _doc(x='[{"bar":"foobar"}]'))
        self.assertIsInstance(err, ElementNotFoundError)

    def test_stops_at_first_missing_element(self) -> None:
        err = raw_check(_doc(x='["b"]'), _doc(x='["a","b","c"]'))
        self.assertEqual("x.0", err.field)

    def test_nested_containment(self) -> None:
        got = _doc(x='[["q",["r","s"]]]')
        self.assertIsNone(raw_check(got, _doc(x='[[["s"]]]')))


class ShortCircuitMalformedTest(unittest.TestCase):
    def test_empty_value_is_returned_not_raised(self) -> None:
        err = raw_check({"a": b""}, _doc(a="1"))
        self.assertIsInstance(err, MalformedValueError)
        self.assertEqual("got", err.side)

    def test_malformed_array_is_returned(self) -> None:
        err = raw_check(_doc(x="[1]"), {"x": b"[1, ?]"})
        self.assertIsInstance(err, MalformedValueError)
        self.assertEqual("want", err.side)

    def test_depth_limit(self) -> None:
        policy = ComparePolicy.short_circuit(max_depth=1)
        err = raw_check(_doc(x="[[1]]"), _doc(x="[[1]]"), policy)
        self.assertIsInstance(err, DepthLimitError)

    def test_nesting_beyond_recursion_limit_is_returned(self) -> None:
        deep = "[" * 1000 + "1" + "]" * 1000
        err = raw_check(_doc(x=deep), _doc(x=deep))
        self.assertIsInstance(err, DepthLimitError)
        self.assertEqual("nesting exceeds the recursion limit", str(err))

    def test_policy_fail_fast_is_ignored(self) -> None:
        policy = ComparePolicy(array_match=ArrayMatch.CONTAINMENT, fail_fast=False)
        err = raw_check(_doc(b="1"), _doc(a="1", b="2"), policy)
        self.assertIsInstance(err, MissingKeyError)
        self.assertEqual("a", err.key)


if __name__ == "__main__":
    unittest.main()
