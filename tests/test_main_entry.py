"""Lightweight integration checks for the main module and CLI commands.

Updates:
  v0.2.1 - 2026-10-19 - Cover blank identifier arguments.
  v0.2.0 - 2026-10-15 - Cover compare, history and credential commands.
  v0.1.0 - 2026-10-09 - Cover exit codes, --print-settings and test command output.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, cast

import pytest

import main
from cli.commands import CliContext
from cli.render import NotificationPrinter
from config import load_settings
from core.credentials import MemoryCredentialStore
from core.exceptions import ApiStatusError, ApiTransportError
from core.export import parse_results_csv
from fakes import FakeClient, make_prompt, make_run


def _patch_main(monkeypatch: pytest.MonkeyPatch, name: str, value: object) -> None:
    monkeypatch.setattr(cast(Any, main), name, value)


def _install_context(
    monkeypatch: pytest.MonkeyPatch,
    client: FakeClient,
    credentials: MemoryCredentialStore | None = None,
) -> tuple[CliContext, io.StringIO]:
    stream = io.StringIO()
    context = CliContext(
        settings=load_settings(),
        client=client,  # type: ignore[arg-type]
        credentials=credentials or MemoryCredentialStore("sk-cli"),
        printer=NotificationPrinter(stream),
    )
    _patch_main(monkeypatch, "build_context", lambda settings: context)
    return context, stream


def test_main_without_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main([]) == 0
    assert "Prompt testing client" in capsys.readouterr().out


def test_main_returns_two_when_settings_fail(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("PROMPT_TESTING_CONFIG_JSON", str(tmp_path / "missing.json"))

    assert main.main(["prompts"]) == 2


def test_print_settings_masks_key_and_describes_paths(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PROMPT_TESTING_API_BASE_URL", "http://backend:9000/")

    assert main.main(["--print-settings"]) == 0

    out = capsys.readouterr().out
    assert "Backend URL: http://backend:9000" in out
    assert "missing - created on demand" in out
    assert "API key (openai_api_key): not set" in out


def test_prompts_command_lists_summaries(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _install_context(monkeypatch, FakeClient(prompts=[make_prompt(7)]))

    assert main.main(["prompts"]) == 0
    assert "7: Support reply - Replies" in capsys.readouterr().out


def test_prompts_command_fails_when_backend_is_down(monkeypatch: pytest.MonkeyPatch) -> None:
    client = FakeClient()
    client.errors["list_prompts"] = ApiTransportError("Unable to reach backend")
    _, stream = _install_context(monkeypatch, client)

    assert main.main(["prompts"]) == 1
    assert "[error] Failed to load prompts: Unable to reach backend" in stream.getvalue()


def test_show_marks_selected_version(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _install_context(monkeypatch, FakeClient(make_prompt(contents=("one", "Ask {{question}}"))))

    assert main.main(["show", "1", "--version", "101"]) == 0

    out = capsys.readouterr().out
    assert " * V1 [id 101]" in out
    assert "   V2 [id 102]" in out


def test_show_rejects_unknown_version(monkeypatch: pytest.MonkeyPatch) -> None:
    _, stream = _install_context(monkeypatch, FakeClient(make_prompt()))

    assert main.main(["show", "1", "--version", "999"]) == 1
    assert "does not belong" in stream.getvalue()


def test_create_reports_field_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    client = FakeClient()
    _install_context(monkeypatch, client)

    assert main.main(["create", "--name", " ", "--content", "Hi"]) == 1
    assert "name: Prompt title is required" in capsys.readouterr().err
    assert client.count("create_prompt") == 0


def test_add_version_from_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    client = FakeClient(make_prompt())
    client.version_response = lambda content: make_prompt(contents=("first", content))
    _install_context(monkeypatch, client)
    content_file = tmp_path / "v2.txt"
    content_file.write_text("Second {{question}}", encoding="utf-8")

    assert main.main(["add-version", "1", "--content-file", str(content_file)]) == 0
    assert "Saved V2 [id 102] for prompt 1" in capsys.readouterr().out


def test_test_command_prints_results_and_writes_csv(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    client = FakeClient(make_prompt())
    _install_context(monkeypatch, client)
    csv_path = tmp_path / "results.csv"

    exit_code = main.main(
        ["test", "1", "--input", "What is AI?", "--input", " ", "--csv", str(csv_path)]
    )

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Test Results (V1)" in out
    assert "Avg Response Time: 120ms" in out
    assert "Total Cost: $0.0010" in out
    rows = parse_results_csv(csv_path.read_text(encoding="utf-8"))
    assert [row["Input"] for row in rows] == ["What is AI?"]


def test_test_command_without_inputs_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    client = FakeClient(make_prompt())
    _, stream = _install_context(monkeypatch, client)

    assert main.main(["test", "1"]) == 1
    assert "Add at least one test input" in stream.getvalue()
    assert client.count("run_test") == 0


def test_test_command_reports_backend_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    client = FakeClient(make_prompt())
    client.errors["run_test"] = ApiStatusError(502, "provider unavailable")
    _, stream = _install_context(monkeypatch, client)

    assert main.main(["test", "1", "--input", "q"]) == 1
    assert "[error] Failed to run test: Backend returned HTTP 502" in stream.getvalue()


def test_quick_test_command(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    client = FakeClient()
    _install_context(monkeypatch, client)

    args = ["quick-test", "--content", "Say {{question}}", "--input", "hi"]
    assert main.main([*args, "--provider", "anthropic"]) == 0
    assert "Quick Test Results" in capsys.readouterr().out
    assert client.calls[0][1][1] == "anthropic"


def test_quick_test_with_unreadable_file_fails(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    _install_context(monkeypatch, FakeClient())

    missing = tmp_path / "missing.txt"
    assert main.main(["quick-test", "--content-file", str(missing), "--input", "q"]) == 1


def test_history_command_tracks_task(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    client = FakeClient()
    client.history[101] = [make_run(101)]
    _, stream = _install_context(monkeypatch, client)

    assert main.main(["history", "101"]) == 0
    assert "openai/gpt-4" in capsys.readouterr().out
    assert "[success] Test history loaded" in stream.getvalue()


def test_history_command_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    client = FakeClient()
    client.errors["list_test_runs"] = ApiTransportError("offline")
    _, stream = _install_context(monkeypatch, client)

    assert main.main(["history", "101"]) == 1
    assert "[error] Failed to load test history: offline" in stream.getvalue()


def test_compare_command_renders_both_panes(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _install_context(monkeypatch, FakeClient(make_prompt(contents=("a", "b"))))

    assert main.main(["compare", "1", "--input", "Why?"]) == 0

    out = capsys.readouterr().out
    assert "=== V2 ===" in out
    assert "=== V1 ===" in out
    assert "answer to Why?" in out


def test_set_and_clear_key(monkeypatch: pytest.MonkeyPatch) -> None:
    credentials = MemoryCredentialStore()
    _, stream = _install_context(monkeypatch, FakeClient(), credentials)

    assert main.main(["set-key", "  sk-abc  "]) == 0
    assert credentials.get() == "sk-abc"
    assert main.main(["clear-key"]) == 0
    assert credentials.get() is None
    assert "[success] API Key saved" in stream.getvalue()
    assert "[success] API Key removed" in stream.getvalue()


@pytest.mark.parametrize(
    ("argv", "label"),
    [
        (["history", ""], "version id"),
        (["show", "  "], "prompt id"),
        (["test", "1", "--version", " ", "--input", "q"], "version id"),
        (["compare", ""], "prompt id"),
    ],
)
def test_blank_identifiers_fail_without_traceback(
    monkeypatch: pytest.MonkeyPatch, argv: list[str], label: str
) -> None:
    client = FakeClient(make_prompt())
    _, stream = _install_context(monkeypatch, client)

    assert main.main(argv) == 1
    assert f"[error] Invalid {label}: an identifier is required" in stream.getvalue()
    assert client.count("list_test_runs") == 0
    assert client.count("run_test") == 0
