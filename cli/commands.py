"""CLI command handlers for the prompt testing client.

Each handler drives one view controller, renders its state to stdout and
returns an exit code: ``0`` on success and ``1`` when the action failed and
an error notification was published.

Updates:
  v0.2.1 - 2026-10-19 - Report blank identifiers as failed actions.
  v0.2.0 - 2026-10-15 - Add compare, history and credential commands.
  v0.1.0 - 2026-10-09 - Prompt list/show/create, add-version and test commands.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.exceptions import InputValidationError, PromptTestingError, VersionNotFoundError
from core.notifications import NotificationCenter
from models.prompt_model import coerce_entity_id
from views import (
    CreatePromptController,
    PromptDetailController,
    PromptListController,
    QuickTestController,
    SettingsController,
    TestInputList,
    VersionComparisonController,
)

from .render import (
    NotificationPrinter,
    render_comparison,
    render_history,
    render_prompt_detail,
    render_prompt_list,
    render_test_run,
)
from .utils import print_and_log, read_content

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config.settings import PromptTestingSettings
    from core.api_client import PromptTestingClient
    from core.credentials import CredentialStore
    from models.prompt_model import EntityId


@dataclass(slots=True)
class CliContext:
    """Collaborators shared by every command handler."""

    settings: PromptTestingSettings
    client: PromptTestingClient
    credentials: CredentialStore
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    printer: NotificationPrinter = field(default_factory=NotificationPrinter)

    def __post_init__(self) -> None:
        self.notifications.subscribe(self.printer)

    def status(self) -> int:
        """Return ``1`` when any error notification was published, else ``0``."""
        return 1 if self.printer.error_count else 0


CommandHandler = Callable[[CliContext, argparse.Namespace, logging.Logger], Awaitable[int]]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler


def _controller_kwargs(context: CliContext) -> dict[str, object]:
    return {"notifications": context.notifications, "settings": context.settings}


def _apply_run_options(
    controller: PromptDetailController | QuickTestController,
    args: argparse.Namespace,
) -> None:
    controller.test_inputs = TestInputList.from_texts(getattr(args, "inputs", None) or [""])
    if getattr(args, "provider", None):
        controller.set_ai_provider(args.provider)
    if getattr(args, "model", None):
        controller.set_model_name(args.model)


async def run_prompts(context: CliContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    del args
    controller = PromptListController(client=context.client, **_controller_kwargs(context))
    prompts = await controller.load()
    if context.status():
        return 1
    logger.debug("Listed %d prompt(s)", len(prompts))
    print(render_prompt_list(prompts))
    return 0


def _coerce_id(context: CliContext, raw: object, label: str) -> EntityId | None:
    """Parse an identifier argument, publishing an error toast when it is blank."""
    try:
        return coerce_entity_id(raw)
    except ValueError as exc:
        context.notifications.error(f"Invalid {label}: {exc}")
        return None


async def _load_detail(
    context: CliContext, args: argparse.Namespace
) -> PromptDetailController | None:
    prompt_id = _coerce_id(context, args.prompt_id, "prompt id")
    if prompt_id is None:
        return None
    controller = PromptDetailController(
        prompt_id,
        client=context.client,
        credentials=context.credentials,
        **_controller_kwargs(context),
    )
    if await controller.load() is None:
        return None
    raw_version = getattr(args, "version_id", None)
    if raw_version is not None:
        version_id = _coerce_id(context, raw_version, "version id")
        if version_id is None:
            return None
        try:
            controller.select_version(version_id)
        except VersionNotFoundError as exc:
            context.notifications.error(str(exc))
            return None
    return controller


async def run_show(context: CliContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    del logger
    controller = await _load_detail(context, args)
    if controller is None or controller.prompt is None:
        return 1
    print(render_prompt_detail(controller.prompt, controller.selected_version_id))
    if controller.placeholders:
        print(f"\nVariables: {', '.join(controller.placeholders)}")
    return 0


async def run_create(context: CliContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    controller = CreatePromptController(client=context.client, **_controller_kwargs(context))
    try:
        content = read_content(args.content, args.content_file)
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return 1
    controller.edit_field("name", args.name)
    controller.edit_field("description", args.description or "")
    controller.edit_field("initial_content", content)
    prompt = await controller.submit()
    if prompt is None:
        for field_name, message in controller.errors.items():
            print(f"{field_name}: {message}", file=sys.stderr)
        return 1
    print(f"Created prompt {prompt.id}: {prompt.name}")
    return 0


async def run_add_version(
    context: CliContext, args: argparse.Namespace, logger: logging.Logger
) -> int:
    try:
        content = read_content(args.content, args.content_file)
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return 1
    controller = await _load_detail(context, args)
    if controller is None:
        return 1
    controller.update_draft(content)
    version = await controller.save_version()
    if version is None:
        return 1
    print(f"Saved {version.label} [id {version.id}] for prompt {controller.prompt_id}")
    return 0


async def run_test(context: CliContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    controller = await _load_detail(context, args)
    if controller is None:
        return 1
    try:
        _apply_run_options(controller, args)
    except InputValidationError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return 1
    run = await controller.run_test()
    if run is None:
        return 1
    version = controller.selected_version
    title = f"Test Results ({version.label})" if version else "Test Results"
    print(render_test_run(run, title=title))
    if args.csv_path is not None:
        destination = controller.write_result_csv(args.csv_path)
        print_and_log(logger, logging.INFO, f"Results exported to {destination}")
    return 0


async def run_quick_test(
    context: CliContext, args: argparse.Namespace, logger: logging.Logger
) -> int:
    controller = QuickTestController(
        client=context.client,
        credentials=context.credentials,
        **_controller_kwargs(context),
    )
    try:
        controller.set_prompt_content(read_content(args.content, args.content_file))
        _apply_run_options(controller, args)
    except (ValueError, InputValidationError) as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return 1
    run = await controller.run_quick_test()
    if run is None:
        return 1
    print(render_test_run(run, title="Quick Test Results"))
    if args.csv_path is not None:
        destination = controller.write_result_csv(args.csv_path)
        print_and_log(logger, logging.INFO, f"Results exported to {destination}")
    return 0


async def run_history(context: CliContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    version_id = _coerce_id(context, args.version_id, "version id")
    if version_id is None:
        return 1
    try:
        with context.notifications.track_task(
            title="Test history",
            start_message=f"Loading test runs for version {version_id}",
            success_message="Test history loaded",
            failure_message="Failed to load test history",
            metadata={"version_id": version_id},
        ):
            runs = await context.client.list_test_runs(version_id)
    except PromptTestingError as exc:
        logger.warning("Failed to load test history: %s", exc)
        return 1
    print(render_history(runs))
    return 0


async def run_compare(context: CliContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    prompt_id = _coerce_id(context, args.prompt_id, "prompt id")
    if prompt_id is None:
        return 1
    controller = VersionComparisonController(
        prompt_id,
        client=context.client,
        credentials=context.credentials,
        **_controller_kwargs(context),
    )
    if await controller.load() is None:
        return 1
    try:
        if args.left is not None:
            controller.select_left(args.left)
        if args.right is not None:
            controller.select_right(args.right)
    except (VersionNotFoundError, ValueError) as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return 1
    if args.input_value is not None:
        controller.set_input(args.input_value)
    outcome = await controller.run_comparison()
    if outcome is None or controller.prompt is None:
        return 1
    left_version = controller.prompt.find_version(controller.left_version_id)
    right_version = controller.prompt.find_version(controller.right_version_id)
    print(f"Input: {controller.input_value}\n")
    print(
        render_comparison(
            left_version.label if left_version else "Left",
            right_version.label if right_version else "Right",
            *outcome,
        )
    )
    return 0


async def run_set_key(context: CliContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    del logger
    controller = SettingsController(credentials=context.credentials, **_controller_kwargs(context))
    controller.load()
    key = args.key if args.key is not None else getpass.getpass("OpenAI API key: ")
    controller.edit_api_key(key)
    return 0 if controller.save() else 1


async def run_clear_key(
    context: CliContext, args: argparse.Namespace, logger: logging.Logger
) -> int:
    del args, logger
    controller = SettingsController(credentials=context.credentials, **_controller_kwargs(context))
    controller.edit_api_key("")
    return 0 if controller.save() else 1


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    "prompts": CommandSpec(run_prompts),
    "show": CommandSpec(run_show),
    "create": CommandSpec(run_create),
    "add-version": CommandSpec(run_add_version),
    "test": CommandSpec(run_test),
    "quick-test": CommandSpec(run_quick_test),
    "history": CommandSpec(run_history),
    "compare": CommandSpec(run_compare),
    "set-key": CommandSpec(run_set_key),
    "clear-key": CommandSpec(run_clear_key),
}


__all__ = ["COMMAND_SPECS", "CliContext", "CommandSpec"]
