"""Settings management for the prompt testing client.

Updates:
  v0.3.0 - 2026-10-14 - Add quick test history bound and credential storage key.
  v0.2.0 - 2026-10-09 - Load ``.env`` values through python-dotenv alongside the environment.
  v0.1.0 - 2026-10-05 - Initial backend URL, timeout and model default settings.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

logger = logging.getLogger("prompt_testing.settings")

AI_PROVIDERS: tuple[str, ...] = ("openai", "anthropic")
DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_AI_PROVIDER = "openai"
DEFAULT_MODEL_NAME = "gpt-4"
DEFAULT_COMPARE_MODEL_NAME = "gpt-3.5-turbo"
DEFAULT_COMPARE_INPUT = "Explain quantum computing"
DEFAULT_CREDENTIAL_STORAGE_KEY = "openai_api_key"

# Environment keys (after the prefix) accepted for each field.
_ENV_ALIASES: dict[str, list[str]] = {
    "api_base_url": ["API_BASE_URL", "API_URL", "BACKEND_URL"],
    "request_timeout_seconds": ["REQUEST_TIMEOUT_SECONDS", "TIMEOUT"],
    "default_ai_provider": ["DEFAULT_AI_PROVIDER", "AI_PROVIDER"],
    "default_model_name": ["DEFAULT_MODEL_NAME", "MODEL_NAME"],
    "compare_model_name": ["COMPARE_MODEL_NAME"],
    "default_compare_input": ["DEFAULT_COMPARE_INPUT"],
    "credentials_path": ["CREDENTIALS_PATH"],
    "credential_storage_key": ["CREDENTIAL_STORAGE_KEY"],
    "quick_test_history_limit": ["QUICK_TEST_HISTORY_LIMIT"],
}

# Keys that would place an API key in a committed JSON file.
_DISALLOWED_SECRET_KEYS = frozenset({"api_key", "openai_api_key", "OPENAI_API_KEY", "X-API-KEY"})

class SettingsError(Exception):
    """Raised when client configuration cannot be loaded or validated."""


ENV_PREFIX = "PROMPT_TESTING_"
CONFIG_JSON_ENV = f"{ENV_PREFIX}CONFIG_JSON"
ENV_FILE_ENV = f"{ENV_PREFIX}ENV_FILE"
DEFAULT_CONFIG_JSON = Path("config") / "config.json"


def _dotenv_path() -> Path | None:
    """Return the ``.env`` file to read; an empty override disables it."""
    override = os.getenv(ENV_FILE_ENV)
    if override is None:
        return Path(".env")
    override = override.strip()
    return Path(override).expanduser() if override else None


def _environment_values() -> dict[str, str]:
    """Resolve each field from the first alias set in the environment or ``.env``.

    Process variables win over ``.env`` entries; blank values are skipped.
    """
    path = _dotenv_path()
    dotenv: dict[str, str | None] = {}
    if path is not None and path.is_file():
        dotenv = dict(dotenv_values(path))
    resolved: dict[str, str] = {}
    for field_name, aliases in _ENV_ALIASES.items():
        for alias in aliases:
            key = ENV_PREFIX + alias
            raw = os.environ.get(key, dotenv.get(key))
            if raw and raw.strip():
                resolved[field_name] = raw.strip()
                break
    return resolved


def _json_values(field_names: Iterable[str]) -> dict[str, Any]:
    """Read the JSON config file, keeping only known, non-secret keys."""
    explicit = os.getenv(CONFIG_JSON_ENV)
    path = Path(explicit).expanduser() if explicit else DEFAULT_CONFIG_JSON
    if not path.exists():
        if explicit:
            raise SettingsError(f"Configuration file not found: {path}")
        return {}
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
        raise SettingsError(f"Unable to read configuration file: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
    if not isinstance(document, Mapping):
        raise SettingsError(f"Configuration file {path} must contain a JSON object")

    entries = {str(key): value for key, value in cast("Mapping[object, Any]", document).items()}
    secrets = sorted(_DISALLOWED_SECRET_KEYS.intersection(entries))
    if secrets:
        logger.warning(
            "Ignoring secret key(s) %s in configuration file %s; "
            "store the API key with the set-key command instead.",
            ", ".join(secrets),
            path,
        )
    allowed = set(field_names)
    return {key: value for key, value in entries.items() if key in allowed}


class PromptTestingSettings(BaseSettings):
    """Client configuration sourced from keyword arguments, JSON files or the environment."""

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the prompt testing backend.",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every backend request.",
    )
    default_ai_provider: str = Field(default=DEFAULT_AI_PROVIDER)
    default_model_name: str = Field(default=DEFAULT_MODEL_NAME)
    compare_model_name: str = Field(
        default=DEFAULT_COMPARE_MODEL_NAME,
        description="Model used by the version comparison page.",
    )
    default_compare_input: str = Field(default=DEFAULT_COMPARE_INPUT)
    credentials_path: Path = Field(default=Path("data") / "credentials.json")
    credential_storage_key: str = Field(default=DEFAULT_CREDENTIAL_STORAGE_KEY)
    quick_test_history_limit: int = Field(
        default=20,
        description="Maximum number of quick test runs kept for the session.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": ENV_PREFIX,
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("api_base_url", mode="before")
    def _normalise_base_url(cls, value: Any) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        text = str(value or "").strip()
        if not text.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://")
        return text.rstrip("/")

    @field_validator("request_timeout_seconds")
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_seconds must be greater than zero")
        return value

    @field_validator("default_ai_provider", mode="before")
    def _normalise_provider(cls, value: Any) -> str:
        provider = str(value or "").strip().lower()
        if provider not in AI_PROVIDERS:
            raise ValueError(f"default_ai_provider must be one of: {', '.join(AI_PROVIDERS)}")
        return provider

    @field_validator("default_model_name", "compare_model_name", mode="before")
    def _require_model_name(cls, value: Any) -> str:
        name = str(value or "").strip()
        if not name:
            raise ValueError("a model name is required")
        return name

    @field_validator("credentials_path", mode="before")
    def _normalise_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value is None:
            raise ValueError("a filesystem path is required")
        return Path(str(value)).expanduser().resolve()

    @field_validator("quick_test_history_limit")
    def _validate_history_limit(cls, value: int) -> int:
        if value < 1:
            raise ValueError("quick_test_history_limit must be at least 1")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Keyword arguments win, then the JSON file, then the environment, then secrets.

        The built-in env and dotenv sources are replaced by :func:`_environment_values`
        so that alias names and ``PROMPT_TESTING_ENV_FILE`` are honoured.
        """
        del env_settings, dotenv_settings
        field_names = tuple(settings_cls.model_fields)

        def json_source(_: BaseSettings | None = None) -> dict[str, Any]:
            return _json_values(field_names)

        def environment_source(_: BaseSettings | None = None) -> dict[str, Any]:
            return dict(_environment_values())

        return (
            init_settings,
            cast("PydanticBaseSettingsSource", json_source),
            cast("PydanticBaseSettingsSource", environment_source),
            file_secret_settings,
        )


def load_settings(**overrides: Any) -> PromptTestingSettings:
    """Build settings from every source; invalid values raise :class:`SettingsError`."""
    try:
        return PromptTestingSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid prompt testing configuration") from exc


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
