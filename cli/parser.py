"""Argument parser for the prompt testing CLI.

Updates:
  v0.2.0 - 2026-10-15 - Add compare, history and credential commands.
  v0.1.0 - 2026-10-09 - Prompt list/show/create and test run commands.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from config.settings import AI_PROVIDERS


def _add_content_arguments(parser: argparse.ArgumentParser, *, required: bool) -> None:
    group = parser.add_mutually_exclusive_group(required=required)
    group.add_argument("--content", type=str, help="Prompt content text.")
    group.add_argument(
        "--content-file",
        type=Path,
        help="Read prompt content from a UTF-8 text file.",
    )


def _add_run_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        dest="inputs",
        action="append",
        default=None,
        metavar="TEXT",
        help="Value for the {{question}} variable; repeat for several inputs.",
    )
    parser.add_argument(
        "--provider",
        choices=AI_PROVIDERS,
        default=None,
        help="AI provider (defaults to the configured provider).",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Model name (defaults to the configured model).",
    )
    parser.add_argument(
        "--csv",
        dest="csv_path",
        type=Path,
        default=None,
        help="Write the individual results to this CSV file.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(description="Prompt testing client")
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("prompts", help="List prompts stored by the backend.")

    show_parser = subparsers.add_parser("show", help="Show a prompt and its versions.")
    show_parser.add_argument("prompt_id", help="Prompt identifier.")
    show_parser.add_argument(
        "--version",
        dest="version_id",
        default=None,
        help="Version to mark as selected (defaults to the latest).",
    )

    create_parser = subparsers.add_parser("create", help="Create a prompt with its first version.")
    create_parser.add_argument("--name", required=True, help="Prompt title.")
    create_parser.add_argument("--description", default="", help="Optional description.")
    _add_content_arguments(create_parser, required=True)

    version_parser = subparsers.add_parser(
        "add-version",
        help="Save new content as the next version of a prompt.",
    )
    version_parser.add_argument("prompt_id", help="Prompt identifier.")
    _add_content_arguments(version_parser, required=True)

    test_parser = subparsers.add_parser("test", help="Run a test against a stored version.")
    test_parser.add_argument("prompt_id", help="Prompt identifier.")
    test_parser.add_argument(
        "--version",
        dest="version_id",
        default=None,
        help="Version to test (defaults to the latest).",
    )
    _add_run_arguments(test_parser)

    quick_parser = subparsers.add_parser(
        "quick-test",
        help="Test ad hoc content without saving a version.",
    )
    _add_content_arguments(quick_parser, required=True)
    _add_run_arguments(quick_parser)

    history_parser = subparsers.add_parser("history", help="List test runs for a version.")
    history_parser.add_argument("version_id", help="Version identifier.")

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run one input against two versions side by side.",
    )
    compare_parser.add_argument("prompt_id", help="Prompt identifier.")
    compare_parser.add_argument("--left", default=None, help="Left version (default: latest).")
    compare_parser.add_argument(
        "--right",
        default=None,
        help="Right version (default: second latest).",
    )
    compare_parser.add_argument(
        "--input",
        dest="input_value",
        default=None,
        help="Shared input (defaults to the configured comparison input).",
    )

    key_parser = subparsers.add_parser("set-key", help="Store the provider API key.")
    key_parser.add_argument(
        "key",
        nargs="?",
        default=None,
        help="API key; prompted for when omitted.",
    )
    subparsers.add_parser("clear-key", help="Remove the stored provider API key.")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]
