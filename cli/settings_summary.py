"""Printable summary of the prompt testing configuration.

Updates: v0.1.0 - 2026-10-09 - Summarise backend, model defaults and credential status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import CredentialStoreError

from .utils import describe_path, mask_secret

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config.settings import PromptTestingSettings
    from core.credentials import CredentialStore


def print_settings_summary(
    settings: PromptTestingSettings,
    credentials: CredentialStore | None = None,
) -> None:
    """Emit a readable summary of the resolved configuration."""
    if credentials is None:
        key_status = "not checked"
    else:
        try:
            key_status = mask_secret(credentials.get())
        except CredentialStoreError as exc:
            key_status = f"unreadable ({exc})"

    lines = [
        "Prompt testing configuration",
        "----------------------------",
        f"Backend URL: {settings.api_base_url}",
        f"Request timeout: {settings.request_timeout_seconds:.1f}s",
        f"Default provider/model: {settings.default_ai_provider} / {settings.default_model_name}",
        f"Comparison model: {settings.compare_model_name}",
        f"Comparison input: {settings.default_compare_input}",
        f"Quick test history limit: {settings.quick_test_history_limit}",
        "Credential file: "
        + describe_path(settings.credentials_path, allow_missing_file=True),
        f"API key ({settings.credential_storage_key}): {key_status}",
    ]
    print("\n".join(lines))


__all__ = ["print_settings_summary"]
