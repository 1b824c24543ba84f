"""Tests for the API key settings controller.

Updates: v0.1.0 - 2026-10-08 - Cover save, removal and store failures.
"""

from __future__ import annotations

from pathlib import Path

from core.credentials import FileCredentialStore, MemoryCredentialStore
from core.notifications import Notification, NotificationCenter, NotificationLevel
from fakes import error_messages
from views.settings_controller import KEY_REMOVED, KEY_SAVED, SettingsController


def test_load_seeds_form_from_store(notifications: NotificationCenter) -> None:
    controller = SettingsController(
        credentials=MemoryCredentialStore("sk-stored"), notifications=notifications
    )

    assert controller.load() == "sk-stored"
    assert controller.has_key is True
    assert controller.provider == "openai"


def test_save_trims_and_stores_key(
    notifications: NotificationCenter, events: list[Notification]
) -> None:
    store = MemoryCredentialStore()
    controller = SettingsController(credentials=store, notifications=notifications)
    controller.edit_api_key("  sk-new  ")

    assert controller.save() is True

    assert store.get() == "sk-new"
    assert controller.api_key_input == "sk-new"
    assert events[-1].level is NotificationLevel.SUCCESS
    assert events[-1].message == KEY_SAVED


def test_saving_blank_key_removes_it(
    notifications: NotificationCenter, events: list[Notification]
) -> None:
    store = MemoryCredentialStore("sk-old")
    controller = SettingsController(credentials=store, notifications=notifications)
    controller.load()
    controller.edit_api_key("   ")

    assert controller.save() is True

    assert store.get() is None
    assert events[-1].message == KEY_REMOVED


def test_unreadable_store_is_reported(
    tmp_path: Path, notifications: NotificationCenter, events: list[Notification]
) -> None:
    path = tmp_path / "credentials.json"
    path.write_text("{broken", encoding="utf-8")
    controller = SettingsController(
        credentials=FileCredentialStore(path), notifications=notifications
    )

    assert controller.load() == ""
    controller.edit_api_key("sk-new")
    assert controller.save() is False

    assert len(error_messages(events)) == 2
    assert error_messages(events)[0].startswith("Failed to read API key:")
