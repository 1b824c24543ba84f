"""Side-by-side comparison of two versions of one prompt.

Both test runs are issued concurrently and applied together: when either side
fails, neither result is shown and a single error notification is published.

Updates:
  v0.2.0 - 2026-10-13 - Apply comparison results all-or-nothing.
  v0.1.0 - 2026-10-08 - Default slots to the two most recent versions.
"""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from config.settings import (
    DEFAULT_AI_PROVIDER,
    DEFAULT_COMPARE_INPUT,
    DEFAULT_COMPARE_MODEL_NAME,
)
from core.exceptions import PromptTestingError, VersionNotFoundError
from models.prompt_model import coerce_entity_id
from models.test_run_model import TestInput

from .base import ViewController

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config.settings import PromptTestingSettings
    from core.api_client import PromptTestingClient
    from core.credentials import CredentialStore
    from core.notifications import NotificationCenter
    from models.prompt_model import EntityId, Prompt, PromptVersion
    from models.test_run_model import TestResult, TestRun

logger = logging.getLogger("prompt_testing.views.compare")

SELECT_TWO_VERSIONS = "Select two versions"
ENTER_INPUT = "Enter an input to compare"


class VersionComparisonController(ViewController):
    """Run one shared input against two versions and hold both first results."""

    def __init__(
        self,
        prompt_id: EntityId,
        *,
        client: PromptTestingClient,
        credentials: CredentialStore,
        notifications: NotificationCenter | None = None,
        settings: PromptTestingSettings | None = None,
    ) -> None:
        super().__init__(notifications=notifications, settings=settings, logger=logger)
        self.prompt_id = coerce_entity_id(prompt_id)
        self._client = client
        self._credentials = credentials

        self.prompt: Prompt | None = None
        self.loading = True
        self.left_version_id: EntityId | None = None
        self.right_version_id: EntityId | None = None
        self.input_value = settings.default_compare_input if settings else DEFAULT_COMPARE_INPUT
        self.ai_provider = DEFAULT_AI_PROVIDER
        self.model_name = settings.compare_model_name if settings else DEFAULT_COMPARE_MODEL_NAME
        self.running = False
        self.left_result: TestResult | None = None
        self.right_result: TestResult | None = None

    async def load(self) -> Prompt | None:
        """Fetch the prompt and default the slots to the latest two versions."""
        self.loading = True
        try:
            prompt = await self._client.get_prompt(self.prompt_id)
        except PromptTestingError as exc:
            self._report_failure("Failed to load prompt", exc)
            return None
        finally:
            self.loading = False
        self.prompt = prompt
        versions = prompt.versions
        if len(versions) >= 2:
            self.left_version_id = versions[-1].id
            self.right_version_id = versions[-2].id
        elif versions:
            self.left_version_id = self.right_version_id = versions[0].id
        else:
            self.left_version_id = self.right_version_id = None
        return prompt

    def _resolve(self, version_id: EntityId) -> PromptVersion:
        resolved = coerce_entity_id(version_id)
        version = self.prompt.find_version(resolved) if self.prompt else None
        if version is None:
            raise VersionNotFoundError(f"Version {version_id} does not belong to this prompt")
        return version

    def select_left(self, version_id: EntityId) -> None:
        self.left_version_id = self._resolve(version_id).id

    def select_right(self, version_id: EntityId) -> None:
        self.right_version_id = self._resolve(version_id).id

    def set_input(self, value: str) -> None:
        self.input_value = value

    @property
    def can_run(self) -> bool:
        return (
            not self.running
            and self.left_version_id is not None
            and self.right_version_id is not None
        )

    async def run_comparison(self) -> tuple[TestResult | None, TestResult | None] | None:
        """Run both sides concurrently; returns ``None`` when nothing was applied."""
        if self.running:
            return None
        if self.left_version_id is None or self.right_version_id is None:
            self._notify_error(SELECT_TWO_VERSIONS)
            return None
        if not self.input_value.strip():
            self._notify_error(ENTER_INPUT)
            return None

        left_id, right_id = self.left_version_id, self.right_version_id
        self.running = True
        self.left_result = None
        self.right_result = None
        try:
            api_key = self._credentials.get()
            inputs = (TestInput(question=self.input_value),)
            outcomes = await asyncio.gather(
                self._client.run_test(left_id, self.ai_provider, self.model_name, inputs, api_key),
                self._client.run_test(right_id, self.ai_provider, self.model_name, inputs, api_key),
                return_exceptions=True,
            )
            for outcome in outcomes:
                if isinstance(outcome, BaseException) and not isinstance(
                    outcome, PromptTestingError
                ):
                    raise outcome
            failure = next(
                (item for item in outcomes if isinstance(item, PromptTestingError)), None
            )
            if failure is not None:
                raise failure
        except PromptTestingError as exc:
            self._report_failure("Failed to run comparison", exc)
            return None
        finally:
            self.running = False

        left_run, right_run = outcomes
        self.left_result = _first_result(left_run)
        self.right_result = _first_result(right_run)
        self._notifications.success("Comparison complete")
        return self.left_result, self.right_result


def _first_result(run: TestRun | BaseException) -> TestResult | None:
    if isinstance(run, BaseException):  # pragma: no cover - filtered above
        raise run
    return run.first_result


__all__ = ["VersionComparisonController"]
