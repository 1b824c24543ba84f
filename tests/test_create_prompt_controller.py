"""Tests for the create prompt form reducer.

Updates: v0.2.0 - 2026-10-11 - Cover per-field error clearing.
"""

from __future__ import annotations

import pytest

from core.exceptions import ApiStatusError
from core.notifications import Notification, NotificationCenter, NotificationLevel
from core.validation import CONTENT_REQUIRED, NAME_REQUIRED
from fakes import FakeClient, error_messages
from views.create_prompt_controller import CreatePromptController


def _controller(client: FakeClient, notifications: NotificationCenter) -> CreatePromptController:
    return CreatePromptController(
        client=client,  # type: ignore[arg-type]
        notifications=notifications,
    )


@pytest.mark.asyncio()
async def test_invalid_form_makes_no_request(
    fake_client: FakeClient, notifications: NotificationCenter
) -> None:
    controller = _controller(fake_client, notifications)

    assert await controller.submit() is None

    assert controller.errors == {"name": NAME_REQUIRED, "initial_content": CONTENT_REQUIRED}
    assert fake_client.count("create_prompt") == 0
    assert controller.submitting is False


def test_editing_a_field_clears_only_its_error(
    fake_client: FakeClient, notifications: NotificationCenter
) -> None:
    controller = _controller(fake_client, notifications)
    controller.validate()

    controller.edit_field("name", "Support reply")

    assert controller.name == "Support reply"
    assert controller.errors == {"initial_content": CONTENT_REQUIRED}
    with pytest.raises(KeyError):
        controller.edit_field("unknown", "x")


@pytest.mark.asyncio()
async def test_submit_trims_fields_and_stores_created_prompt(
    fake_client: FakeClient, notifications: NotificationCenter, events: list[Notification]
) -> None:
    controller = _controller(fake_client, notifications)
    controller.edit_field("name", "  Support reply  ")
    controller.edit_field("description", " Replies ")
    controller.edit_field("initial_content", "Answer {{question}}\n")

    prompt = await controller.submit()

    assert prompt is not None
    assert controller.created_prompt is prompt
    assert fake_client.calls == [
        ("create_prompt", ("Support reply", "Replies", "Answer {{question}}\n"))
    ]
    assert events[-1].level is NotificationLevel.SUCCESS
    assert events[-1].message == "Prompt 'Support reply' created"


@pytest.mark.asyncio()
async def test_submit_failure_resets_flag_and_notifies(
    fake_client: FakeClient, notifications: NotificationCenter, events: list[Notification]
) -> None:
    controller = _controller(fake_client, notifications)
    controller.edit_field("name", "Name")
    controller.edit_field("initial_content", "content")
    fake_client.errors["create_prompt"] = ApiStatusError(400, "Name already exists")

    assert await controller.submit() is None

    assert controller.submitting is False
    assert controller.created_prompt is None
    assert error_messages(events) == [
        "Failed to create prompt: Backend returned HTTP 400: Name already exists"
    ]
