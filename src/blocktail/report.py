"""Table-mode result container and output formatters (text and JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from typing import List


@dataclass
class TailReport:
    """The last lines of one file, as returned in table mode.

    Attributes:
        path: File the lines were read from.
        n_lines: Number of lines requested.
        lines: Lines in file order, without their trailing separator.
    """
    path: str
    n_lines: int
    lines: List[str]


def print_text_report(report: TailReport) -> None:
    """Print each line of the report to stdout."""
    for line in report.lines:
        print(line)


def report_to_json(report: TailReport) -> str:
    """Serialize the report to a pretty-printed JSON string."""
    return json.dumps(asdict(report), indent=2, ensure_ascii=False)
