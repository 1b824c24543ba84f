"""Form reducer for the create prompt page.

Updates:
  v0.2.0 - 2026-10-11 - Clear a field's error as soon as the field is edited.
  v0.1.0 - 2026-10-07 - Validate and submit name, description and initial content.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.exceptions import PromptTestingError
from core.validation import prompt_form_errors

from .base import ViewController

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config.settings import PromptTestingSettings
    from core.api_client import PromptTestingClient
    from core.notifications import NotificationCenter
    from models.prompt_model import Prompt

logger = logging.getLogger("prompt_testing.views.create")

FORM_FIELDS: tuple[str, ...] = ("name", "description", "initial_content")


class CreatePromptController(ViewController):
    """Collect the create form and post it once it validates."""

    def __init__(
        self,
        *,
        client: PromptTestingClient,
        notifications: NotificationCenter | None = None,
        settings: PromptTestingSettings | None = None,
    ) -> None:
        super().__init__(notifications=notifications, settings=settings, logger=logger)
        self._client = client
        self.name = ""
        self.description = ""
        self.initial_content = ""
        self.errors: dict[str, str] = {}
        self.submitting = False
        self.created_prompt: Prompt | None = None

    def edit_field(self, field: str, value: str) -> None:
        """Store *value* for *field* and clear that field's error."""
        if field not in FORM_FIELDS:
            raise KeyError(f"Unknown form field '{field}'")
        setattr(self, field, value)
        self.errors.pop(field, None)

    def validate(self) -> bool:
        self.errors = prompt_form_errors(self.name, self.description, self.initial_content)
        return not self.errors

    async def submit(self) -> Prompt | None:
        """Create the prompt; returns ``None`` when validation or the request fails."""
        if self.submitting or not self.validate():
            return None
        self.submitting = True
        try:
            prompt = await self._client.create_prompt(
                self.name.strip(), self.description.strip(), self.initial_content
            )
        except PromptTestingError as exc:
            self._report_failure("Failed to create prompt", exc)
            return None
        finally:
            self.submitting = False
        self.created_prompt = prompt
        logger.info("Created prompt %s", prompt.id)
        self._notifications.success(f"Prompt '{prompt.name}' created")
        return prompt


__all__ = ["FORM_FIELDS", "CreatePromptController"]
