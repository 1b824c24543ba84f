"""HTTPX client for the prompt store and test executor backend.

Updates:
  v0.3.0 - 2026-10-15 - Add ``get_test_run`` for fetching a single persisted run.
  v0.2.0 - 2026-10-11 - Classify version creation responses as prompt, version or unknown.
  v0.1.0 - 2026-10-05 - Introduce async client covering prompt and test run endpoints.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from models.prompt_model import Prompt, PromptVersion
from models.test_run_model import TestRun

from .exceptions import ApiResponseError, ApiStatusError, ApiTransportError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from models.prompt_model import EntityId
    from models.test_run_model import TestInput

logger = logging.getLogger("prompt_testing.api")

API_KEY_HEADER = "X-API-KEY"
_DETAIL_LIMIT = 200


def _error_detail(response: httpx.Response) -> str | None:
    """Return a short human readable message from an error response."""
    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:_DETAIL_LIMIT] or None
    if isinstance(payload, Mapping):
        for key in ("message", "error", "detail"):
            value = payload.get(key)
            if value:
                return str(value)[:_DETAIL_LIMIT]
    return None


def classify_version_response(payload: Any) -> Prompt | PromptVersion | None:
    """Interpret the body returned after creating a version.

    A body carrying a ``versions`` list is a full prompt aggregate; a body
    carrying ``versionNumber`` and ``content`` is the new version alone.
    Anything else (including an empty body) yields ``None`` so callers reload.
    """
    if not isinstance(payload, Mapping):
        return None
    try:
        if isinstance(payload.get("versions"), list):
            return Prompt.from_payload(payload)
        if "versionNumber" in payload and "content" in payload:
            return PromptVersion.from_payload(payload)
    except ValueError as exc:
        raise ApiResponseError(f"Unexpected version response: {exc}") from exc
    return None


@dataclass(slots=True)
class PromptTestingClient:
    """Async wrapper over the ``/api`` REST endpoints.

    When ``client_factory`` is supplied the returned client is reused and left
    open for the caller to close; otherwise each call opens and closes its own
    ``httpx.AsyncClient``.
    """

    base_url: str = "http://localhost:8080"
    timeout: float = 30.0
    client_factory: Callable[[], httpx.AsyncClient] | None = None

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        api_key: str | None = None,
        allow_empty: bool = False,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers: dict[str, str] = {"Accept": "application/json"}
        if api_key is not None:
            headers[API_KEY_HEADER] = api_key
        manage_client = self.client_factory is None
        client = (
            httpx.AsyncClient(timeout=self.timeout)
            if self.client_factory is None
            else self.client_factory()
        )
        logger.debug("%s %s", method, url)
        try:
            response = await client.request(
                method,
                url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out after %.1fs", method, url, self.timeout)
            raise ApiTransportError(f"Request to {path} timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiTransportError(f"Unable to reach backend at {self.base_url}") from exc
        finally:
            if manage_client:
                await client.aclose()

        if response.is_error:
            detail = _error_detail(response)
            logger.warning("%s %s returned HTTP %s", method, url, response.status_code)
            raise ApiStatusError(response.status_code, detail)
        if not response.content.strip():
            if allow_empty:
                return None
            raise ApiResponseError(f"Backend returned an empty body for {path}")
        try:
            return response.json()
        except ValueError as exc:
            if allow_empty:
                return None
            raise ApiResponseError(f"Backend returned invalid JSON for {path}") from exc

    # ------------------------------------------------------------------
    # Prompt store
    # ------------------------------------------------------------------
    async def list_prompts(self) -> list[Prompt]:
        """Return prompt summaries from ``GET /api/prompts``."""
        payload = await self._request("GET", "/api/prompts")
        try:
            return Prompt.list_from_payload(payload)
        except ValueError as exc:
            raise ApiResponseError(f"Invalid prompt list: {exc}") from exc

    async def get_prompt(self, prompt_id: EntityId) -> Prompt:
        """Return the full prompt aggregate including versions."""
        payload = await self._request("GET", f"/api/prompts/{prompt_id}")
        try:
            return Prompt.from_payload(payload)
        except ValueError as exc:
            raise ApiResponseError(f"Invalid prompt payload: {exc}") from exc

    async def create_prompt(self, name: str, description: str, initial_content: str) -> Prompt:
        """Create a prompt with its first version."""
        body = {"name": name, "description": description, "initialContent": initial_content}
        payload = await self._request("POST", "/api/prompts", json_body=body)
        try:
            return Prompt.from_payload(payload)
        except ValueError as exc:
            raise ApiResponseError(f"Invalid prompt payload: {exc}") from exc

    async def create_version(
        self, prompt_id: EntityId, content: str
    ) -> Prompt | PromptVersion | None:
        """Append a version; see :func:`classify_version_response` for the result."""
        payload = await self._request(
            "POST",
            f"/api/prompts/{prompt_id}/versions",
            json_body={"content": content},
            allow_empty=True,
        )
        return classify_version_response(payload)

    # ------------------------------------------------------------------
    # Test executor
    # ------------------------------------------------------------------
    async def run_test(
        self,
        version_id: EntityId,
        ai_provider: str,
        model_name: str,
        inputs: Sequence[TestInput],
        api_key: str | None,
    ) -> TestRun:
        """Execute a persisted test run against a stored version."""
        body = {
            "promptVersionId": version_id,
            "aiProvider": ai_provider,
            "modelName": model_name,
            "testInputs": [item.to_payload() for item in inputs],
        }
        payload = await self._request(
            "POST", "/api/test-runs", json_body=body, api_key=api_key or ""
        )
        return self._parse_run(payload)

    async def quick_test(
        self,
        prompt_content: str,
        ai_provider: str,
        model_name: str,
        inputs: Sequence[TestInput],
        api_key: str | None,
    ) -> TestRun:
        """Execute ad hoc content without persisting a version."""
        body = {
            "promptContent": prompt_content,
            "aiProvider": ai_provider,
            "modelName": model_name,
            "testInputs": [item.to_payload() for item in inputs],
        }
        payload = await self._request(
            "POST", "/api/quick-test", json_body=body, api_key=api_key or ""
        )
        return self._parse_run(payload)

    async def list_test_runs(self, version_id: EntityId) -> list[TestRun]:
        """Return the run history for a version."""
        payload = await self._request("GET", f"/api/test-runs/version/{version_id}")
        try:
            return TestRun.list_from_payload(payload)
        except ValueError as exc:
            raise ApiResponseError(f"Invalid test run list: {exc}") from exc

    async def get_test_run(self, run_id: EntityId) -> TestRun:
        """Return a single persisted run."""
        payload = await self._request("GET", f"/api/test-runs/{run_id}")
        return self._parse_run(payload)

    @staticmethod
    def _parse_run(payload: Any) -> TestRun:
        try:
            return TestRun.from_payload(payload)
        except ValueError as exc:
            raise ApiResponseError(f"Invalid test run payload: {exc}") from exc


__all__ = ["API_KEY_HEADER", "PromptTestingClient", "classify_version_response"]
