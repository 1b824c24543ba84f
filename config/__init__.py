"""Configuration helpers for the prompt testing client.

Updates: v0.2.0 - 2026-10-14 - Expose provider choices and model defaults.
Updates: v0.1.0 - 2026-10-05 - Expose settings loader and configuration error type.
"""

from .settings import (
    AI_PROVIDERS,
    DEFAULT_AI_PROVIDER,
    DEFAULT_API_BASE_URL,
    DEFAULT_COMPARE_INPUT,
    DEFAULT_COMPARE_MODEL_NAME,
    DEFAULT_CREDENTIAL_STORAGE_KEY,
    DEFAULT_MODEL_NAME,
    PromptTestingSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "AI_PROVIDERS",
    "DEFAULT_AI_PROVIDER",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_COMPARE_INPUT",
    "DEFAULT_COMPARE_MODEL_NAME",
    "DEFAULT_CREDENTIAL_STORAGE_KEY",
    "DEFAULT_MODEL_NAME",
    "PromptTestingSettings",
    "SettingsError",
    "load_settings",
]
