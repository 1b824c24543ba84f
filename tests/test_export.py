"""Tests for CSV export of test results.

Updates:
  v0.1.1 - 2026-10-19 - Cover positional notation for small costs.
  v0.1.0 - 2026-10-12 - Cover header, quoting, newline collapsing and file output.
"""

from __future__ import annotations

from pathlib import Path

from core.export import (
    CSV_HEADER,
    collapse_newlines,
    export_results_csv,
    parse_results_csv,
    plain_number,
    write_results_csv,
)
from models.test_run_model import TestResult


def _result(**overrides: object) -> TestResult:
    values: dict[str, object] = {
        "ai_response": "Paris",
        "input_variables": {"question": "Capital of France?"},
        "response_time_ms": 120,
        "quality_score": 0.9,
        "cost_usd": 0.002,
        "token_count": 12,
    }
    values.update(overrides)
    return TestResult(**values)  # type: ignore[arg-type]


def test_export_writes_header_then_quoted_rows() -> None:
    text = export_results_csv([_result()])
    lines = text.splitlines()

    assert lines[0] == "Input,Output,Latency(ms),Cost($),Quality(0-1)"
    assert lines[1] == '"Capital of France?","Paris","120","0.002","0.9"'


def test_export_without_results_is_header_only() -> None:
    assert export_results_csv([]) == ",".join(CSV_HEADER) + "\n"


def test_quotes_and_newlines_survive_parsing() -> None:
    result = _result(
        ai_response='He said "yes",\r\nthen left\rquietly\n',
        input_variables={"question": "line one\nline two"},
    )

    rows = parse_results_csv(export_results_csv([result]))

    assert rows == [
        {
            "Input": "line one line two",
            "Output": 'He said "yes", then left quietly ',
            "Latency(ms)": "120",
            "Cost($)": "0.002",
            "Quality(0-1)": "0.9",
        }
    ]


def test_missing_quality_exports_empty_cell() -> None:
    rows = parse_results_csv(export_results_csv([_result(quality_score=None)]))

    assert rows[0]["Quality(0-1)"] == ""


def test_small_costs_are_not_written_in_scientific_notation() -> None:
    rows = parse_results_csv(
        export_results_csv([_result(cost_usd=0.000075, quality_score=1e-05, response_time_ms=87)])
    )

    assert rows[0]["Cost($)"] == "0.000075"
    assert rows[0]["Quality(0-1)"] == "0.00001"
    assert rows[0]["Latency(ms)"] == "87"


def test_plain_number_keeps_every_digit() -> None:
    assert plain_number(0.0123) == "0.0123"
    assert plain_number(2.5e-07) == "0.00000025"
    assert plain_number(1e16) == "10000000000000000"
    assert plain_number(120) == "120"


def test_collapse_newlines_handles_crlf_as_single_break() -> None:
    assert collapse_newlines("a\r\nb\nc\rd") == "a b c d"


def test_write_results_csv_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "exports" / "results.csv"

    written = write_results_csv(target, [_result(), _result(ai_response="Lyon")])

    assert written == target
    assert len(parse_results_csv(target.read_text(encoding="utf-8"))) == 2
