"""Application entry point for the prompt testing client.

Updates:
  v0.2.0 - 2026-10-15 - Dispatch async command handlers through COMMAND_SPECS.
  v0.1.0 - 2026-10-09 - Parse arguments, load settings and print the settings summary.
"""

from __future__ import annotations

import asyncio
import logging

from cli.commands import COMMAND_SPECS
from cli.parser import build_parser
from cli.runtime import build_context, setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings


def main(argv: list[str] | None = None) -> int:
    """Entrypoint that wires settings, the backend client and CLI commands."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.logging_config)

    logger = logging.getLogger("prompt_testing.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        cause = exc.__cause__
        logger.error("Failed to load settings: %s%s", exc, f" ({cause})" if cause else "")
        return 2

    context = build_context(settings)
    if args.print_settings:
        print_settings_summary(settings, context.credentials)
        return 0

    spec = COMMAND_SPECS.get(getattr(args, "command", None))
    if spec is None:
        parser.print_help()
        return 0
    return asyncio.run(spec.handler(context, args, logger))


if __name__ == "__main__":
    raise SystemExit(main())
