"""Runtime boot helpers for the prompt testing CLI.

Updates:
  v0.2.0 - 2026-10-12 - Build the shared command context from settings.
  v0.1.0 - 2026-10-09 - Logging configuration helper.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING

from core.api_client import PromptTestingClient
from core.credentials import FileCredentialStore

from .commands import CliContext

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config.settings import PromptTestingSettings

DEFAULT_LOGGING_CONFIG = Path("config/logging.conf")


def setup_logging(logging_conf_path: Path | None) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (KeyError, ValueError, OSError, RuntimeError) as exc:
            logging.basicConfig(level=logging.INFO)
            logging.getLogger("prompt_testing.runtime").warning(
                "Ignoring invalid logging configuration %s: %s", path, exc
            )
            return
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_context(settings: PromptTestingSettings) -> CliContext:
    """Wire the backend client and credential store from *settings*."""
    client = PromptTestingClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
    )
    credentials = FileCredentialStore(
        settings.credentials_path,
        storage_key=settings.credential_storage_key,
    )
    return CliContext(settings=settings, client=client, credentials=credentials)


__all__ = ["build_context", "setup_logging"]
