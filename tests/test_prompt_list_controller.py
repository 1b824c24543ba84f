"""Tests for the prompt list controller.

Updates: v0.1.0 - 2026-10-07 - Cover loading, empty state and failure handling.
"""

from __future__ import annotations

import pytest

from core.exceptions import ApiTransportError
from core.notifications import Notification, NotificationCenter
from fakes import FakeClient, error_messages, make_prompt
from views.prompt_list_controller import PromptListController


@pytest.mark.asyncio()
async def test_load_replaces_prompts() -> None:
    client = FakeClient(prompts=[make_prompt(1), make_prompt(2)])
    controller = PromptListController(client=client)  # type: ignore[arg-type]
    assert controller.loading is True
    assert controller.is_empty is False

    prompts = await controller.load()

    assert [prompt.id for prompt in prompts] == [1, 2]
    assert controller.loading is False
    assert controller.is_empty is False


@pytest.mark.asyncio()
async def test_empty_backend_reports_empty_state(fake_client: FakeClient) -> None:
    controller = PromptListController(client=fake_client)  # type: ignore[arg-type]

    await controller.load()

    assert controller.is_empty is True


@pytest.mark.asyncio()
async def test_failure_keeps_previous_list(
    notifications: NotificationCenter, events: list[Notification]
) -> None:
    client = FakeClient(prompts=[make_prompt(1)])
    controller = PromptListController(
        client=client, notifications=notifications  # type: ignore[arg-type]
    )
    await controller.load()
    client.errors["list_prompts"] = ApiTransportError("Unable to reach backend")

    prompts = await controller.load()

    assert [prompt.id for prompt in prompts] == [1]
    assert controller.loading is False
    assert error_messages(events) == ["Failed to load prompts: Unable to reach backend"]
