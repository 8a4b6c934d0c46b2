"""rawcompat CLI.

Entry point for the ``rawcompat`` command-line tool.

Usage:
    rawcompat check <got.json> <want.json> [--mode diagnostic|short-circuit]
                    [--format json|text] [--max-depth N] [--verbose]

Exit status: 0 compatible, 1 incompatible, 2 malformed input or unreadable file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Dict, List

from .core.compat import ComparePolicy, check, raw_check
from .core.errors import CompatError, DepthLimitError, MalformedValueError
from .core.rawjson import load_document
from .core.types import FailureRecord

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INCOMPATIBLE = 1
EXIT_BAD_INPUT = 2

# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


def _read(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def _load(path: str) -> Dict[str, bytes]:
    try:
        return load_document(_read(path))
    except MalformedValueError as exc:
        raise MalformedValueError(f"{path}: {exc.args[0]}") from exc


# ---------------------------------------------------------------------------
# Text formatter
# ---------------------------------------------------------------------------


def _format_records(records: List[FailureRecord]) -> str:
    if not records:
        return "complete validation success!"
    lines = ["validation errors:"]
    for record in records:
        lines.append(f"- {record.field}: {record.message}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_check(args: argparse.Namespace) -> None:
    try:
        got = _load(args.got)
        want = _load(args.want)
    except (OSError, MalformedValueError, DepthLimitError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_BAD_INPUT)

    if args.mode == "short-circuit":
        _run_short_circuit(args, got, want)
    else:
        _run_diagnostic(args, got, want)


def _run_diagnostic(
    args: argparse.Namespace, got: Dict[str, bytes], want: Dict[str, bytes]
) -> None:
    policy = ComparePolicy.diagnostic(max_depth=args.max_depth)
    try:
        records = check(got, want, policy)
    except (MalformedValueError, DepthLimitError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_BAD_INPUT)

    if args.format == "json":
        print(json.dumps([r.to_dict() for r in records], indent=2))
    else:
        print(_format_records(records))

    if records:
        sys.exit(EXIT_INCOMPATIBLE)


def _run_short_circuit(
    args: argparse.Namespace, got: Dict[str, bytes], want: Dict[str, bytes]
) -> None:
    policy = ComparePolicy.short_circuit(max_depth=args.max_depth)
    error = raw_check(got, want, policy)
    if isinstance(error, (MalformedValueError, DepthLimitError)):
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(EXIT_BAD_INPUT)

    if args.format == "json":
        print(json.dumps(_error_dict(error), indent=2))
    elif error is None:
        print("complete validation success!")
    else:
        print(f"validation error: {error}")

    if error is not None:
        sys.exit(EXIT_INCOMPATIBLE)


def _error_dict(error: CompatError | None) -> Dict[str, object]:
    if error is None:
        return {"compatible": True}
    return {
        "compatible": False,
        "error": type(error).__name__,
        "field": getattr(error, "field", ""),
        "message": str(error),
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="rawcompat",
        description="rawcompat: structural superset checks for JSON documents",
    )
    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser(
        "check", help="Check that one JSON document is a compatible superset of another"
    )
    check_parser.add_argument("got", help="Observed document ('-' for stdin)")
    check_parser.add_argument("want", help="Expected document ('-' for stdin)")
    check_parser.add_argument(
        "--mode",
        choices=["diagnostic", "short-circuit"],
        default="diagnostic",
        help="Report every failure or stop at the first (default: diagnostic)",
    )
    check_parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )
    check_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Reject documents nested deeper than N levels (default: no limit)",
    )
    check_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    check_parser.set_defaults(func=_cmd_check)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        logger.debug("running %s", args.command)
        args.func(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
