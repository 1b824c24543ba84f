"""Shared CLI utility functions for prompt testing commands.

Updates:
  v0.2.0 - 2026-10-12 - Add metric formatters matching the result cards.
  v0.1.0 - 2026-10-09 - Stdout logging, masking and path helpers.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from logging import Logger


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def mask_secret(value: str | None) -> str:
    """Show whether an API key is stored without revealing it."""
    secret = (value or "").strip()
    if not secret:
        return "not set"
    if len(secret) > 6:
        return f"set ({secret[:4]}...{secret[-4:]})"
    return "set (****)"


def describe_path(path: Path | None, *, allow_missing_file: bool = False) -> str:
    """Return *path* followed by whether it exists yet."""
    if path is None:
        return "not set"
    resolved = path.expanduser()
    if resolved.is_dir():
        state = "exists but is a directory"
    elif resolved.exists():
        state = "exists"
    elif allow_missing_file:
        state = "missing - created on demand"
    else:
        state = "missing"
    return f"{resolved} ({state})"


def read_content(text: str | None, path: Path | None) -> str:
    """Return prompt content from *text* or the file at *path*."""
    if path is not None:
        try:
            return path.expanduser().read_text(encoding="utf-8")
        except OSError as exc:
            raise ValueError(f"Unable to read {path}: {exc}") from exc
    return text or ""


def format_latency(value: float) -> str:
    return f"{value:.0f}ms"


def format_quality(value: float | None) -> str:
    if value is None:
        return "n/a"
    return f"{value:.2f}"


def format_cost(value: float) -> str:
    return f"${value:.4f}"


__all__ = [
    "describe_path",
    "format_cost",
    "format_latency",
    "format_quality",
    "mask_secret",
    "print_and_log",
    "read_content",
]
