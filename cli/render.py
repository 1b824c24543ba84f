"""Text rendering of controller state for the CLI.

Updates:
  v0.2.0 - 2026-10-14 - Render comparison panes and version test run history.
  v0.1.0 - 2026-10-09 - Metric cards, result listings and a stderr notification printer.
"""

from __future__ import annotations

import sys
import textwrap
from typing import TYPE_CHECKING, TextIO

from core.notifications import NotificationStatus

from .utils import format_cost, format_latency, format_quality

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from core.notifications import Notification
    from models.prompt_model import EntityId, Prompt
    from models.test_run_model import TestResult, TestRun

_WRAP_WIDTH = 88


class NotificationPrinter:
    """Subscriber writing toasts to a stream and counting errors."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.error_count = 0

    def __call__(self, notification: Notification) -> None:
        if notification.is_error:
            self.error_count += 1
        if notification.status is NotificationStatus.STARTED:
            return
        stream = self._stream or sys.stderr
        print(f"[{notification.level.value}] {notification.message}", file=stream)


def render_prompt_list(prompts: Sequence[Prompt]) -> str:
    if not prompts:
        return "No prompts yet. Create one with the 'create' command."
    lines = []
    for prompt in prompts:
        description = f" - {prompt.description}" if prompt.description else ""
        lines.append(f"{prompt.id}: {prompt.name}{description}")
    return "\n".join(lines)


def render_prompt_detail(prompt: Prompt, selected_version_id: EntityId | None) -> str:
    """Render the prompt header and its versions, marking the selection."""
    lines = [prompt.name]
    if prompt.description:
        lines.append(prompt.description)
    if prompt.created_at is not None:
        lines.append(f"Created: {prompt.created_at:%Y-%m-%d %H:%M}")
    lines.append("")
    if not prompt.versions:
        lines.append("No versions.")
        return "\n".join(lines)
    lines.append(f"Versions ({len(prompt.versions)}):")
    for version in prompt.versions:
        marker = "*" if version.id == selected_version_id else " "
        created = f" ({version.created_at:%Y-%m-%d %H:%M})" if version.created_at else ""
        lines.append(f" {marker} {version.label} [id {version.id}]{created}")
    selected = prompt.find_version(selected_version_id)
    if selected is not None:
        lines.append("")
        lines.append(f"Content of {selected.label}:")
        lines.append(textwrap.indent(selected.content, "    "))
    return "\n".join(lines)


def render_metric_cards(run: TestRun) -> str:
    metrics = run.metrics
    cards = (
        ("Avg Response Time", format_latency(metrics.average_response_time_ms)),
        ("Avg Quality Score", format_quality(metrics.average_quality_score)),
        ("Total Tokens", str(metrics.total_tokens)),
        ("Total Cost", format_cost(metrics.total_cost_usd)),
    )
    return "  |  ".join(f"{label}: {value}" for label, value in cards)


def render_result(result: TestResult, index: int) -> str:
    header = (
        f"Test #{index}  {result.response_time_ms}ms  "
        f"Score: {format_quality(result.quality_score)}  "
        f"Tokens: {result.token_count}  Cost: {format_cost(result.cost_usd)}"
    )
    body = [
        header,
        "  Input:",
        textwrap.indent(textwrap.fill(result.input_text or "-", _WRAP_WIDTH), "    "),
        "  AI Response:",
        textwrap.indent(result.ai_response or "-", "    "),
    ]
    return "\n".join(body)


def render_test_run(run: TestRun, *, title: str = "Test Results") -> str:
    """Render metric cards followed by every individual result."""
    lines = [title, render_metric_cards(run), ""]
    lines.append(f"Individual Results ({len(run.results)})")
    for index, result in enumerate(run.results, start=1):
        lines.append(render_result(result, index))
    return "\n".join(lines)


def render_history(runs: Sequence[TestRun]) -> str:
    if not runs:
        return "No test runs recorded for this version."
    lines = []
    for run in runs:
        started = f"{run.started_at:%Y-%m-%d %H:%M}" if run.started_at else "-"
        lines.append(
            f"{run.id or '-'}  {started}  {run.ai_provider}/{run.model_name}  "
            f"{run.status or '-'}  {len(run.results)} result(s)  "
            f"{render_metric_cards(run)}"
        )
    return "\n".join(lines)


def render_comparison(
    left_label: str,
    right_label: str,
    left: TestResult | None,
    right: TestResult | None,
) -> str:
    """Render both comparison panes one after the other."""
    sections = []
    for label, result in ((left_label, left), (right_label, right)):
        sections.append(f"=== {label} ===")
        if result is None:
            sections.append("No result returned.")
            continue
        sections.append(
            f"{result.response_time_ms}ms  Score: {format_quality(result.quality_score)}  "
            f"Tokens: {result.token_count}"
        )
        sections.append(textwrap.indent(result.ai_response or "-", "    "))
    return "\n".join(sections)


__all__ = [
    "NotificationPrinter",
    "render_comparison",
    "render_history",
    "render_metric_cards",
    "render_prompt_detail",
    "render_prompt_list",
    "render_result",
    "render_test_run",
]
