"""Data models for the prompt testing client.

Updates: v0.2.0 - 2026-10-12 - Export quick test history entries.
Updates: v0.1.0 - 2026-10-05 - Export Prompt, PromptVersion and test run dataclasses.
"""

from .prompt_model import EntityId, Prompt, PromptVersion, coerce_entity_id
from .test_run_model import (
    QuickTestHistoryEntry,
    TestInput,
    TestResult,
    TestRun,
    TestRunMetrics,
)

__all__ = [
    "EntityId",
    "Prompt",
    "PromptVersion",
    "QuickTestHistoryEntry",
    "TestInput",
    "TestResult",
    "TestRun",
    "TestRunMetrics",
    "coerce_entity_id",
]
