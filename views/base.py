"""Shared plumbing for headless view controllers.

Updates: v0.1.0 - 2026-10-07 - Extract notification and failure reporting helpers.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.notifications import NotificationCenter

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config.settings import PromptTestingSettings
    from core.exceptions import PromptTestingError


class ViewController:
    """Base class holding the notification hub and optional settings."""

    def __init__(
        self,
        *,
        notifications: NotificationCenter | None,
        settings: PromptTestingSettings | None,
        logger: logging.Logger,
    ) -> None:
        self._notifications = notifications or NotificationCenter()
        self._settings = settings
        self._logger = logger

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications

    def _notify_error(self, message: str) -> None:
        self._logger.info("Rejected action: %s", message)
        self._notifications.error(message)

    def _report_failure(self, action: str, exc: PromptTestingError) -> None:
        """Log *exc* and surface it as a single error toast."""
        self._logger.warning("%s: %s", action, exc)
        self._notifications.error(f"{action}: {exc}", title=action)


__all__ = ["ViewController"]
