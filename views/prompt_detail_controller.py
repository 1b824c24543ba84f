"""Headless state for the prompt detail page.

The controller owns the loaded prompt aggregate, the selected version, the
editable draft, the test input list and the most recent test run. Every
backend call is issued from an ``async`` action that resets its busy flag in
``finally`` and turns :class:`~core.exceptions.PromptTestingError` into an
error notification, keeping the previously loaded state intact.

Responses are tagged: prompt loads with a generation counter, history loads
with the version id they were issued for. A response whose tag no longer
matches the controller state is dropped.

Updates:
  v0.4.1 - 2026-10-19 - Saved versions invalidate loads already in flight.
  v0.4.0 - 2026-10-15 - Drop stale history responses after the selection changes.
  v0.3.0 - 2026-10-12 - Apply saved versions from prompt, version or empty responses.
  v0.2.0 - 2026-10-09 - Add CSV export and placeholder previews for the draft.
  v0.1.0 - 2026-10-07 - Initial load/select/run state machine.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.settings import AI_PROVIDERS, DEFAULT_AI_PROVIDER, DEFAULT_MODEL_NAME
from core.exceptions import InputValidationError, PromptTestingError, VersionNotFoundError
from core.export import export_results_csv, write_results_csv
from core.templating import extract_placeholders, render_preview
from core.validation import require_test_inputs, validate_version_content
from models.prompt_model import Prompt, PromptVersion, coerce_entity_id

from .base import ViewController
from .test_inputs import TestInputList

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from pathlib import Path

    from config.settings import PromptTestingSettings
    from core.api_client import PromptTestingClient
    from core.credentials import CredentialStore
    from core.notifications import NotificationCenter
    from models.prompt_model import EntityId
    from models.test_run_model import TestRun

logger = logging.getLogger("prompt_testing.views.detail")

SELECT_VERSION_FIRST = "Please select a version to test"
NO_RESULT_TO_EXPORT = "No test results to export"


class PromptDetailController(ViewController):
    """Coordinate version selection, draft editing and test execution for one prompt."""

    def __init__(
        self,
        prompt_id: EntityId,
        *,
        client: PromptTestingClient,
        credentials: CredentialStore,
        notifications: NotificationCenter | None = None,
        settings: PromptTestingSettings | None = None,
    ) -> None:
        """Store collaborators; nothing is fetched until :meth:`load` runs."""
        super().__init__(notifications=notifications, settings=settings, logger=logger)
        self.prompt_id = coerce_entity_id(prompt_id)
        self._client = client
        self._credentials = credentials

        self.prompt: Prompt | None = None
        self.loading = True
        self.selected_version_id: EntityId | None = None
        self.draft_content = ""
        self.creating_version = False

        self.test_inputs = TestInputList()
        self.ai_provider = settings.default_ai_provider if settings else DEFAULT_AI_PROVIDER
        self.model_name = settings.default_model_name if settings else DEFAULT_MODEL_NAME
        self.testing = False
        self.current_result: TestRun | None = None
        self.history: list[TestRun] = []

        self._load_generation = 0

    # ------------------------------------------------------------------
    # Prompt aggregate
    # ------------------------------------------------------------------
    async def load(self) -> Prompt | None:
        """Fetch the prompt aggregate and select a version."""
        self._load_generation += 1
        generation = self._load_generation
        self.loading = True
        try:
            prompt = await self._client.get_prompt(self.prompt_id)
        except PromptTestingError as exc:
            if generation == self._load_generation:
                self._report_failure("Failed to load prompt", exc)
            return None
        finally:
            if generation == self._load_generation:
                self.loading = False
        if generation != self._load_generation:
            logger.debug("Discarding stale prompt response (generation %s)", generation)
            return None
        self._apply_prompt(prompt)
        return prompt

    def _apply_prompt(self, prompt: Prompt, *, select: EntityId | None = None) -> None:
        self.prompt = prompt
        if select is not None and prompt.find_version(select) is not None:
            target: EntityId | None = select
        elif prompt.find_version(self.selected_version_id) is not None:
            target = self.selected_version_id
        else:
            latest = prompt.latest_version
            target = latest.id if latest else None
        self._set_selection(target, reseed=select is not None)

    def _apply_server_prompt(self, prompt: Prompt, *, select: EntityId | None) -> None:
        """Apply a write response; loads already in flight become stale."""
        self._load_generation += 1
        self.loading = False
        self._apply_prompt(prompt, select=select)

    def _set_selection(self, version_id: EntityId | None, *, reseed: bool = False) -> None:
        changed = version_id != self.selected_version_id
        self.selected_version_id = version_id
        if changed:
            self.history = []
        if changed or reseed:
            version = self.selected_version
            self.draft_content = version.content if version else ""

    @property
    def versions(self) -> tuple[PromptVersion, ...]:
        return self.prompt.versions if self.prompt else ()

    @property
    def selected_version(self) -> PromptVersion | None:
        if self.prompt is None:
            return None
        return self.prompt.find_version(self.selected_version_id)

    def select_version(self, version_id: EntityId) -> PromptVersion:
        """Select *version_id*; unknown ids raise :class:`VersionNotFoundError`."""
        if self.prompt is None:
            raise VersionNotFoundError("No prompt is loaded")
        resolved = coerce_entity_id(version_id)
        version = self.prompt.find_version(resolved)
        if version is None:
            known = ", ".join(str(item) for item in self.prompt.version_ids()) or "none"
            raise VersionNotFoundError(
                f"Version {version_id} does not belong to this prompt (versions: {known})"
            )
        self._set_selection(version.id)
        return version

    def select_latest(self) -> PromptVersion | None:
        """Select the most recent version ("Load Latest Version")."""
        latest = self.prompt.latest_version if self.prompt else None
        if latest is None:
            return None
        return self.select_version(latest.id)

    # ------------------------------------------------------------------
    # Draft editing
    # ------------------------------------------------------------------
    def update_draft(self, text: str) -> None:
        self.draft_content = text

    @property
    def is_modified(self) -> bool:
        version = self.selected_version
        if version is None:
            return bool(self.draft_content)
        return self.draft_content != version.content

    @property
    def can_save_version(self) -> bool:
        return self.is_modified and not self.creating_version and bool(self.draft_content.strip())

    @property
    def placeholders(self) -> list[str]:
        """Variable names referenced by the draft, used as input hints."""
        return extract_placeholders(self.draft_content)

    def preview_input(self, index: int) -> str:
        """Render the draft with the input at *index* substituted."""
        return render_preview(self.draft_content, self.test_inputs[index].to_payload())

    async def save_version(self) -> PromptVersion | None:
        """Save the draft as a new version and select it."""
        if self.creating_version:
            return None
        current = self.selected_version
        try:
            content = validate_version_content(
                self.draft_content, current.content if current else None
            )
        except InputValidationError as exc:
            self._notify_error(str(exc))
            return None

        self.creating_version = True
        previous = self.prompt.latest_version if self.prompt else None
        try:
            outcome = await self._client.create_version(self.prompt_id, content)
            if isinstance(outcome, Prompt):
                created = outcome.latest_version
                self._apply_server_prompt(outcome, select=created.id if created else None)
            elif isinstance(outcome, PromptVersion) and self.prompt is not None:
                created = outcome
                self._apply_server_prompt(self.prompt.with_version(outcome), select=outcome.id)
            else:
                logger.debug("Version response carried no entity; reloading prompt")
                reloaded = await self.load()
                created = reloaded.latest_version if reloaded else None
                if created is not None and previous is not None and created.id == previous.id:
                    logger.warning(
                        "Reloaded prompt %s does not list the saved version", self.prompt_id
                    )
                    created = None
                if created is not None:
                    self._set_selection(created.id, reseed=True)
        except PromptTestingError as exc:
            self._report_failure("Failed to save version", exc)
            return None
        finally:
            self.creating_version = False

        if created is not None:
            self._notifications.success(f"Saved version {created.label}")
        return created

    # ------------------------------------------------------------------
    # Test configuration
    # ------------------------------------------------------------------
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

    # ------------------------------------------------------------------
    # Test execution
    # ------------------------------------------------------------------
    @property
    def can_run_test(self) -> bool:
        return not self.testing and self.selected_version_id is not None

    async def run_test(self) -> TestRun | None:
        """Run the non-blank inputs against the selected version."""
        if self.testing:
            return None
        if self.selected_version_id is None:
            self._notify_error(SELECT_VERSION_FIRST)
            return None
        try:
            inputs = require_test_inputs(self.test_inputs)
        except InputValidationError as exc:
            self._notify_error(str(exc))
            return None

        version_id = self.selected_version_id
        self.current_result = None
        self.testing = True
        try:
            run = await self._client.run_test(
                version_id,
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

        self.current_result = run
        logger.info(
            "Test run for version %s finished with %d result(s)", version_id, len(run.results)
        )
        if self.selected_version_id == version_id:
            await self.load_history()
        return run

    def clear_result(self) -> None:
        """Return to the test interface ("Back to test interface")."""
        self.current_result = None

    def export_result_csv(self) -> str:
        if self.current_result is None:
            raise InputValidationError(NO_RESULT_TO_EXPORT)
        return export_results_csv(self.current_result.results)

    def write_result_csv(self, path: Path) -> Path:
        if self.current_result is None:
            raise InputValidationError(NO_RESULT_TO_EXPORT)
        return write_results_csv(path, self.current_result.results)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    async def load_history(self) -> list[TestRun]:
        """Fetch test runs for the selected version, ignoring stale replies."""
        version_id = self.selected_version_id
        if version_id is None:
            self.history = []
            return []
        try:
            runs = await self._client.list_test_runs(version_id)
        except PromptTestingError as exc:
            if version_id == self.selected_version_id:
                self._report_failure("Failed to load test history", exc)
            return self.history
        if version_id != self.selected_version_id:
            logger.debug("Discarding stale history for version %s", version_id)
            return self.history
        self.history = runs
        return runs


__all__ = ["PromptDetailController"]
