"""CLI entry point for blocktail.

Parses arguments, runs ``tail()`` in stream or table mode, and reports
library errors on stderr.
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from .core import tail
from .errors import TailError
from .log import setup_logging
from .report import TailReport, print_text_report, report_to_json


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid line count: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"line count must be positive: {n}")
    return n


def parse_args(argv=None) -> argparse.Namespace:
    """Build the argument parser and return parsed arguments."""
    parser = argparse.ArgumentParser(
        prog="blocktail",
        description="Print the last N lines of a file without reading all of it.",
    )
    parser.add_argument("file", help="File to read")
    parser.add_argument("-n", "--lines", type=_positive_int, default=10, help="Number of lines (default: 10)")

    out = parser.add_mutually_exclusive_group()
    out.add_argument("--table", action="store_true", help="Collect lines and print them one per line")
    out.add_argument("--json", action="store_true", help="Collect lines and print them as a JSON report")

    parser.add_argument("--encoding", default="utf-8", help="Decoding for --table/--json output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log block scans to stderr")

    return parser.parse_args(argv)


def main(argv=None) -> None:
    """Entry point: stream the tail of a file, or print it as a table."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.table or args.json:
            lines = tail(args.file, args.lines, stream=False, encoding=args.encoding)
        else:
            tail(args.file, args.lines)
            return
    except TailError as e:
        logger.debug("tail failed: {!r}", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    report = TailReport(path=args.file, n_lines=args.lines, lines=lines)
    if args.json:
        print(report_to_json(report))
    else:
        print_text_report(report)


if __name__ == "__main__":
    main()
