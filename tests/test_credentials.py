"""Tests for the API key credential stores.

Updates: v0.1.0 - 2026-10-13 - Cover file persistence, permissions and corrupt files.
"""

from __future__ import annotations

import json
import os
import stat
import sys
from pathlib import Path

import pytest

from core.credentials import CredentialStore, FileCredentialStore, MemoryCredentialStore
from core.exceptions import CredentialStoreError


def test_memory_store_round_trip() -> None:
    store = MemoryCredentialStore()
    assert isinstance(store, CredentialStore)
    assert store.get() is None

    store.set("sk-1")
    assert store.get() == "sk-1"

    store.clear()
    assert store.get() is None


def test_file_store_persists_between_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "credentials.json"
    FileCredentialStore(path).set("sk-abc")

    assert FileCredentialStore(path).get() == "sk-abc"
    assert json.loads(path.read_text(encoding="utf-8")) == {"openai_api_key": "sk-abc"}


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions only")
def test_file_store_restricts_permissions(tmp_path: Path) -> None:
    path = tmp_path / "credentials.json"
    FileCredentialStore(path).set("sk-abc")

    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600


def test_file_store_preserves_unrelated_keys(tmp_path: Path) -> None:
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    store = FileCredentialStore(path)

    store.set("sk-abc")
    store.clear()

    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}


def test_clear_without_stored_key_leaves_file_untouched(tmp_path: Path) -> None:
    path = tmp_path / "credentials.json"

    FileCredentialStore(path).clear()

    assert not path.exists()


def test_custom_storage_key(tmp_path: Path) -> None:
    path = tmp_path / "credentials.json"
    store = FileCredentialStore(path, storage_key="anthropic_api_key")
    store.set("ak-1")

    assert FileCredentialStore(path).get() is None
    assert store.get() == "ak-1"


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_corrupt_file_raises_credential_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "credentials.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(CredentialStoreError):
        FileCredentialStore(path).get()
