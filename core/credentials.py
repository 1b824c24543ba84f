"""Local storage for the LLM provider API key.

The key is an opaque string kept under a fixed storage key inside a small JSON
file, mirroring per-key browser storage. Callers read it at submission time.

Updates:
  v0.2.0 - 2026-10-13 - Write the credential file with user-only permissions.
  v0.1.0 - 2026-10-06 - Introduce file and in-memory credential stores.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, cast, runtime_checkable

from .exceptions import CredentialStoreError

logger = logging.getLogger("prompt_testing.credentials")

DEFAULT_STORAGE_KEY = "openai_api_key"


@runtime_checkable
class CredentialStore(Protocol):
    """Minimal get/set/clear contract used by view controllers."""

    def get(self) -> str | None:
        """Return the stored key or ``None``."""
        ...

    def set(self, value: str) -> None:
        """Persist *value* as the current key."""
        ...

    def clear(self) -> None:
        """Remove the stored key."""
        ...


class MemoryCredentialStore:
    """Process-local store used by tests and embedders."""

    def __init__(self, value: str | None = None) -> None:
        self._value = value

    def get(self) -> str | None:
        return self._value

    def set(self, value: str) -> None:
        self._value = value

    def clear(self) -> None:
        self._value = None


class FileCredentialStore:
    """JSON-file backed store; other keys present in the file are preserved."""

    def __init__(self, path: Path | str, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self.path = Path(path).expanduser()
        self.storage_key = storage_key

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            parsed = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CredentialStoreError(f"Unable to read credential file: {self.path}") from exc
        except json.JSONDecodeError as exc:
            raise CredentialStoreError(f"Credential file is not valid JSON: {self.path}") from exc
        if not isinstance(parsed, Mapping):
            raise CredentialStoreError(f"Credential file {self.path} must contain a JSON object")
        return {str(key): value for key, value in cast("Mapping[object, Any]", parsed).items()}

    def _write(self, data: Mapping[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(dict(data), handle, indent=2)
            os.chmod(self.path, 0o600)
        except OSError as exc:
            raise CredentialStoreError(f"Unable to write credential file: {self.path}") from exc

    def get(self) -> str | None:
        value = self._load().get(self.storage_key)
        if value is None:
            return None
        return str(value)

    def set(self, value: str) -> None:
        data = self._load()
        data[self.storage_key] = value
        self._write(data)
        logger.info("Stored API key under '%s'", self.storage_key)

    def clear(self) -> None:
        data = self._load()
        if data.pop(self.storage_key, None) is None:
            return
        self._write(data)
        logger.info("Removed API key stored under '%s'", self.storage_key)


__all__ = [
    "DEFAULT_STORAGE_KEY",
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
]
