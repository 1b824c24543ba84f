"""API key settings form.

Updates: v0.1.0 - 2026-10-08 - Save or remove the provider key through a credential store.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.exceptions import CredentialStoreError

from .base import ViewController

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config.settings import PromptTestingSettings
    from core.credentials import CredentialStore
    from core.notifications import NotificationCenter

logger = logging.getLogger("prompt_testing.views.settings")

KEY_SAVED = "API Key saved"
KEY_REMOVED = "API Key removed"


class SettingsController(ViewController):
    """Edit the stored provider key; the provider itself is fixed to OpenAI."""

    provider = "openai"

    def __init__(
        self,
        *,
        credentials: CredentialStore,
        notifications: NotificationCenter | None = None,
        settings: PromptTestingSettings | None = None,
    ) -> None:
        super().__init__(notifications=notifications, settings=settings, logger=logger)
        self._credentials = credentials
        self.api_key_input = ""

    def load(self) -> str:
        """Seed the form from the store."""
        try:
            self.api_key_input = self._credentials.get() or ""
        except CredentialStoreError as exc:
            self._report_failure("Failed to read API key", exc)
            self.api_key_input = ""
        return self.api_key_input

    def edit_api_key(self, value: str) -> None:
        self.api_key_input = value

    @property
    def has_key(self) -> bool:
        return bool(self.api_key_input.strip())

    def save(self) -> bool:
        """Store a non-blank key or remove the stored one; returns True on success."""
        value = self.api_key_input.strip()
        try:
            if value:
                self._credentials.set(value)
            else:
                self._credentials.clear()
        except CredentialStoreError as exc:
            self._report_failure("Failed to save API key", exc)
            return False
        self.api_key_input = value
        self._notifications.success(KEY_SAVED if value else KEY_REMOVED)
        return True


__all__ = ["KEY_REMOVED", "KEY_SAVED", "SettingsController"]
