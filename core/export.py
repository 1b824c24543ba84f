"""CSV export of test results.

Updates:
  v0.2.1 - 2026-10-19 - Write numeric cells in positional notation.
  v0.2.0 - 2026-10-12 - Add ``parse_results_csv`` for reading exports back.
  v0.1.0 - 2026-10-08 - Export results with quoted values and collapsed newlines.
"""

from __future__ import annotations

import csv
import io
import re
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from models.test_run_model import TestResult

CSV_HEADER: tuple[str, ...] = ("Input", "Output", "Latency(ms)", "Cost($)", "Quality(0-1)")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def collapse_newlines(text: str) -> str:
    """Replace every CR, LF or CRLF sequence with a single space."""
    return _LINE_BREAK.sub(" ", text)


def plain_number(value: float) -> str:
    """Render *value* in positional notation; ``7.5e-05`` becomes ``0.000075``."""
    if isinstance(value, int):
        return str(value)
    return format(Decimal(repr(value)), "f")


def result_row(result: TestResult) -> list[str]:
    """Return the exported cells for one result."""
    quality = "" if result.quality_score is None else plain_number(result.quality_score)
    return [
        collapse_newlines(result.input_text),
        collapse_newlines(result.ai_response),
        plain_number(result.response_time_ms),
        plain_number(result.cost_usd),
        quality,
    ]


def export_results_csv(results: Iterable[TestResult]) -> str:
    """Return CSV text for *results*; every value cell is double-quoted."""
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for result in results:
        writer.writerow(result_row(result))
    return buffer.getvalue()


def write_results_csv(path: Path, results: Iterable[TestResult]) -> Path:
    """Write the export for *results* to *path* and return the resolved destination."""
    resolved = path.expanduser()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    with resolved.open("w", encoding="utf-8", newline="") as handle:
        handle.write(export_results_csv(results))
    return resolved


def parse_results_csv(text: str) -> list[dict[str, str]]:
    """Split an export back into row mappings keyed by header name."""
    reader = csv.DictReader(io.StringIO(text, newline=""))
    return [dict(row) for row in reader]


__all__ = [
    "CSV_HEADER",
    "collapse_newlines",
    "export_results_csv",
    "parse_results_csv",
    "plain_number",
    "result_row",
    "write_results_csv",
]
