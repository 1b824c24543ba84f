"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-10-14 - Provide fake backend client and notification fixtures.
  v0.1.0 - 2026-10-05 - Isolate settings from the developer environment.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pytest import MonkeyPatch

from core.credentials import MemoryCredentialStore
from core.notifications import Notification, NotificationCenter
from fakes import FakeClient


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Run every test from an empty directory without PROMPT_TESTING_* variables."""
    for name in list(os.environ):
        if name.startswith("PROMPT_TESTING_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def notifications() -> NotificationCenter:
    return NotificationCenter()


@pytest.fixture()
def events(notifications: NotificationCenter) -> list[Notification]:
    """Collect every notification published during the test."""
    received: list[Notification] = []
    notifications.subscribe(received.append)
    return received


@pytest.fixture()
def credentials() -> MemoryCredentialStore:
    return MemoryCredentialStore("sk-test-key")


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()
