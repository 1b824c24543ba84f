"""Headless state for the prompt list page.

Updates: v0.1.0 - 2026-10-07 - Load prompt summaries with stale-response protection.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.exceptions import PromptTestingError

from .base import ViewController

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config.settings import PromptTestingSettings
    from core.api_client import PromptTestingClient
    from core.notifications import NotificationCenter
    from models.prompt_model import Prompt

logger = logging.getLogger("prompt_testing.views.list")


class PromptListController(ViewController):
    """Hold the summaries returned by ``GET /api/prompts``."""

    def __init__(
        self,
        *,
        client: PromptTestingClient,
        notifications: NotificationCenter | None = None,
        settings: PromptTestingSettings | None = None,
    ) -> None:
        super().__init__(notifications=notifications, settings=settings, logger=logger)
        self._client = client
        self.prompts: list[Prompt] = []
        self.loading = True
        self._generation = 0

    async def load(self) -> list[Prompt]:
        """Refresh the list; a failure keeps the previous entries."""
        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            prompts = await self._client.list_prompts()
        except PromptTestingError as exc:
            if generation == self._generation:
                self._report_failure("Failed to load prompts", exc)
            return self.prompts
        finally:
            if generation == self._generation:
                self.loading = False
        if generation != self._generation:
            logger.debug("Discarding stale prompt list (generation %s)", generation)
            return self.prompts
        self.prompts = prompts
        return prompts

    @property
    def is_empty(self) -> bool:
        return not self.loading and not self.prompts


__all__ = ["PromptListController"]
