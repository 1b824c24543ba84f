"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`PromptTestingError`, allowing
view controllers to catch a single base class at the action boundary while
still distinguishing transport, status, payload and validation failures.

Updates:
  v0.3.0 - 2026-10-13 - Add credential store failures.
  v0.2.0 - 2026-10-09 - Carry per-field messages on input validation errors.
  v0.1.0 - 2026-10-05 - Created module with the API error hierarchy.
"""

from __future__ import annotations

from collections.abc import Mapping


class PromptTestingError(Exception):
    """Base exception for prompt testing client failures."""


# ---------------------------------------------------------------------------
# Remote API errors
# ---------------------------------------------------------------------------


class ApiError(PromptTestingError):
    """Base class for failures talking to the prompt testing backend."""


class ApiTransportError(ApiError):
    """Raised when the backend cannot be reached or the request timed out."""


class ApiStatusError(ApiError):
    """Raised when the backend answers with a non-success HTTP status."""

    def __init__(self, status_code: int, detail: str | None = None) -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"Backend returned HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ApiResponseError(ApiError):
    """Raised when the backend returns an invalid or unexpected payload."""


# ---------------------------------------------------------------------------
# Client-side errors
# ---------------------------------------------------------------------------


class InputValidationError(PromptTestingError):
    """Raised when user input is rejected before any request is sent."""

    def __init__(self, message: str, field_errors: Mapping[str, str] | None = None) -> None:
        self.field_errors: dict[str, str] = dict(field_errors or {})
        super().__init__(message)


class VersionNotFoundError(PromptTestingError):
    """Raised when a version id is not part of the loaded prompt."""


class CredentialStoreError(PromptTestingError):
    """Raised when the local credential store cannot be read or written."""


__all__ = [
    "ApiError",
    "ApiResponseError",
    "ApiStatusError",
    "ApiTransportError",
    "CredentialStoreError",
    "InputValidationError",
    "PromptTestingError",
    "VersionNotFoundError",
]
