"""Tests for the rawcompat CLI."""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from typing import List, Tuple

from rawcompat.cli import EXIT_BAD_INPUT, EXIT_INCOMPATIBLE, EXIT_OK, main


class CliTest(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def _write(self, name: str, text: str) -> str:
        path = os.path.join(self._tmp.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def _run(self, argv: List[str]) -> Tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        code = EXIT_OK
        with redirect_stdout(out), redirect_stderr(err):
            try:
                main(argv)
            except SystemExit as exc:
                code = exc.code
        return code, out.getvalue(), err.getvalue()

    def test_compatible(self) -> None:
        got = self._write("got.json", '{"a": 53, "b": ["/"], "extra": true}')
        want = self._write("want.json", '{"a": 5.3e1, "b": ["\\/"]}')
        code, out, _ = self._run(["check", got, want])
        self.assertEqual(EXIT_OK, code)
        self.assertEqual("complete validation success!\n", out)

    def test_diagnostic_text(self) -> None:
        got = self._write("got.json", '{"t": 100, "x": [1, 2]}')
        want = self._write("want.json", '{"t": true, "x": [1, 2, 3], "y": null}')
        code, out, _ = self._run(["check", got, want])
        self.assertEqual(EXIT_INCOMPATIBLE, code)
        self.assertEqual(
            "validation errors:\n"
            "- t: mismatched types (got number, want true)\n"
            "- x: missing elements (got 2, want 3)\n"
            "- y: missing key\n",
            out,
        )

    def test_diagnostic_json(self) -> None:
        got = self._write("got.json", "{}")
        want = self._write("want.json", '{"foo": "bar"}')
        code, out, _ = self._run(["check", got, want, "--format", "json"])
        self.assertEqual(EXIT_INCOMPATIBLE, code)
        self.assertEqual([{"field": "foo", "message": "missing key"}], json.loads(out))

    def test_short_circuit(self) -> None:
        got = self._write("got.json", '{"tags": ["uno", "dos", "baz"]}')
        want = self._write("want.json", '{"tags": ["baz"]}')
        code, out, _ = self._run(["check", got, want, "--mode", "short-circuit"])
        self.assertEqual(EXIT_OK, code)

        want = self._write("want2.json", '{"tags": ["tres"]}')
        code, out, _ = self._run(
            ["check", got, want, "--mode", "short-circuit", "--format", "json"]
        )
        self.assertEqual(EXIT_INCOMPATIBLE, code)
        payload = json.loads(out)
        self.assertFalse(payload["compatible"])
        self.assertEqual("ElementNotFoundError", payload["error"])
        self.assertEqual("tags.0", payload["field"])

    def test_malformed_file(self) -> None:
        got = self._write("got.json", "[1, 2]")
        want = self._write("want.json", "{}")
        code, _, err = self._run(["check", got, want])
        self.assertEqual(EXIT_BAD_INPUT, code)
        self.assertIn("malformed input", err)

    def test_missing_file(self) -> None:
        want = self._write("want.json", "{}")
        missing = os.path.join(self._tmp.name, "nope.json")
        code, _, err = self._run(["check", missing, want])
        self.assertEqual(EXIT_BAD_INPUT, code)
        self.assertIn("Error:", err)

    def test_depth_limit(self) -> None:
        doc = self._write("doc.json", '{"a": {"b": {"c": 1}}}')
        code, _, err = self._run(["check", doc, doc, "--max-depth", "1"])
        self.assertEqual(EXIT_BAD_INPUT, code)
        self.assertIn("nesting deeper than 1 levels", err)

    def test_deep_nesting_without_limit(self) -> None:
        doc = self._write("doc.json", '{"a": ' + "[" * 100000 + "]" * 100000 + "}")
        code, _, err = self._run(["check", doc, doc])
        self.assertEqual(EXIT_BAD_INPUT, code)
        self.assertIn("nesting exceeds the recursion limit", err)

    def test_no_command_prints_help(self) -> None:
        code, out, _ = self._run([])
        self.assertEqual(1, code)
        self.assertIn("usage:", out)


if __name__ == "__main__":
    unittest.main()
