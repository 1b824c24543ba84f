"""Core service layer for the prompt testing client.

Updates:
  v0.3.0 - 2026-10-15 - Export CSV and placeholder helpers.
  v0.2.0 - 2026-10-11 - Export credential stores and validation rules.
  v0.1.0 - 2026-10-05 - Surface the backend client, notifications and error hierarchy.
"""

from .api_client import API_KEY_HEADER, PromptTestingClient, classify_version_response
from .credentials import (
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)
from .exceptions import (
    ApiError,
    ApiResponseError,
    ApiStatusError,
    ApiTransportError,
    CredentialStoreError,
    InputValidationError,
    PromptTestingError,
    VersionNotFoundError,
)
from .export import CSV_HEADER, export_results_csv, parse_results_csv, write_results_csv
from .notifications import (
    Notification,
    NotificationCenter,
    NotificationLevel,
    NotificationStatus,
)
from .templating import extract_placeholders, render_preview

__all__ = [
    "API_KEY_HEADER",
    "ApiError",
    "ApiResponseError",
    "ApiStatusError",
    "ApiTransportError",
    "CSV_HEADER",
    "CredentialStore",
    "CredentialStoreError",
    "FileCredentialStore",
    "InputValidationError",
    "MemoryCredentialStore",
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "NotificationStatus",
    "PromptTestingClient",
    "PromptTestingError",
    "VersionNotFoundError",
    "classify_version_response",
    "export_results_csv",
    "extract_placeholders",
    "parse_results_csv",
    "render_preview",
    "write_results_csv",
]
