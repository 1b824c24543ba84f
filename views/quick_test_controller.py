"""Ad hoc prompt testing without persisting a version.

Each successful run is prepended to a session-only history so earlier
configurations can be restored. The history is bounded by
``quick_test_history_limit`` and is never written to disk.

Updates:
  v0.2.0 - 2026-10-14 - Bound the session history and restore entries by id.
  v0.1.0 - 2026-10-08 - Quick test form with provider/model selection and CSV export.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.settings import AI_PROVIDERS, DEFAULT_AI_PROVIDER, DEFAULT_MODEL_NAME
from core.exceptions import InputValidationError, PromptTestingError
from core.export import export_results_csv, write_results_csv
from core.templating import extract_placeholders
from core.validation import require_prompt_content, require_test_inputs
from models.test_run_model import QuickTestHistoryEntry

from .base import ViewController
from .test_inputs import TestInputList

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    import uuid
    from pathlib import Path

    from config.settings import PromptTestingSettings
    from core.api_client import PromptTestingClient
    from core.credentials import CredentialStore
    from core.notifications import NotificationCenter
    from models.test_run_model import TestRun

logger = logging.getLogger("prompt_testing.views.quick_test")

DEFAULT_HISTORY_LIMIT = 20


class QuickTestController(ViewController):
    """Hold the quick test form, the latest result and the session history."""

    def __init__(
        self,
        *,
        client: PromptTestingClient,
        credentials: CredentialStore,
        notifications: NotificationCenter | None = None,
        settings: PromptTestingSettings | None = None,
    ) -> None:
        super().__init__(notifications=notifications, settings=settings, logger=logger)
        self._client = client
        self._credentials = credentials
        self._history_limit = (
            settings.quick_test_history_limit if settings else DEFAULT_HISTORY_LIMIT
        )

        self.prompt_content = ""
        self.test_inputs = TestInputList()
        self.ai_provider = settings.default_ai_provider if settings else DEFAULT_AI_PROVIDER
        self.model_name = settings.default_model_name if settings else DEFAULT_MODEL_NAME
        self.testing = False
        self.result: TestRun | None = None
        self.history: list[QuickTestHistoryEntry] = []

    def set_prompt_content(self, content: str) -> None:
        self.prompt_content = content

    def add_test_input(self) -> None:
        self.test_inputs = self.test_inputs.add()

    def remove_test_input(self, index: int) -> None:
        self.test_inputs = self.test_inputs.remove(index)

    def update_test_input(self, index: int, text: str) -> None:
        self.test_inputs = self.test_inputs.update(index, text)

    def set_ai_provider(self, provider: str) -> None:
        choice = provider.strip().lower()
        if choice not in AI_PROVIDERS:
            raise InputValidationError(
                f"Unsupported AI provider '{provider}'", {"ai_provider": provider}
            )
        self.ai_provider = choice

    def set_model_name(self, model_name: str) -> None:
        name = model_name.strip()
        if not name:
            raise InputValidationError("A model name is required", {"model_name": model_name})
        self.model_name = name

    @property
    def placeholders(self) -> list[str]:
        return extract_placeholders(self.prompt_content)

    @property
    def can_run(self) -> bool:
        return not self.testing and bool(self.prompt_content.strip())

    async def run_quick_test(self) -> TestRun | None:
        """Submit the content and non-blank inputs to ``/api/quick-test``."""
        if self.testing:
            return None
        try:
            content = require_prompt_content(self.prompt_content)
            inputs = require_test_inputs(self.test_inputs)
        except InputValidationError as exc:
            self._notify_error(str(exc))
            return None

        self.testing = True
        try:
            run = await self._client.quick_test(
                content,
                self.ai_provider,
                self.model_name,
                inputs,
                self._credentials.get(),
            )
        except PromptTestingError as exc:
            self._report_failure("Failed to run test", exc)
            return None
        finally:
            self.testing = False

        self.result = run
        entry = QuickTestHistoryEntry(
            prompt_content=content,
            ai_provider=self.ai_provider,
            model_name=self.model_name,
            test_inputs=self.test_inputs.items,
            result=run,
        )
        self.history = [entry, *self.history][: self._history_limit]
        logger.debug("Quick test stored in session history (%d entries)", len(self.history))
        return run

    def load_from_history(self, entry_id: uuid.UUID | str) -> QuickTestHistoryEntry:
        """Restore the form from a history entry and return to the input view."""
        for entry in self.history:
            if str(entry.id) == str(entry_id):
                break
        else:
            raise KeyError(f"No quick test history entry '{entry_id}'")
        self.prompt_content = entry.prompt_content
        self.ai_provider = entry.ai_provider
        self.model_name = entry.model_name
        self.test_inputs = TestInputList(entry.test_inputs)
        self.result = None
        return entry

    def reset(self) -> None:
        """Clear the result only ("Test Again")."""
        self.result = None

    def export_result_csv(self) -> str:
        if self.result is None:
            raise InputValidationError("No test results to export")
        return export_results_csv(self.result.results)

    def write_result_csv(self, path: Path) -> Path:
        if self.result is None:
            raise InputValidationError("No test results to export")
        return write_results_csv(path, self.result.results)


__all__ = ["QuickTestController"]
