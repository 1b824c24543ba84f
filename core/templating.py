"""Placeholder helpers for prompt content previews.

Prompt content may reference variables as ``{{name}}`` (preferred) or
``{name}``. The executor substitutes each variable in the double-brace form
first and the single-brace form second; :func:`render_preview` applies the
same order so local previews match the server output.

Updates: v0.2.0 - 2026-10-12 - Recognise both placeholder syntaxes.
Updates: v0.1.0 - 2026-10-07 - Add placeholder extraction for input hints.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

_PLACEHOLDER_PATTERN = re.compile(r"\{\{(?P<double>\w+)\}\}|\{(?P<single>\w+)\}")


def extract_placeholders(content: str) -> list[str]:
    """Return variable names in order of first appearance."""
    names: list[str] = []
    for match in _PLACEHOLDER_PATTERN.finditer(content):
        name = match.group("double") or match.group("single")
        if name not in names:
            names.append(name)
    return names


def render_preview(content: str, variables: Mapping[str, str]) -> str:
    """Substitute *variables* into *content*; unknown placeholders stay as written."""
    rendered = content
    for key, value in variables.items():
        rendered = rendered.replace("{{" + key + "}}", value).replace("{" + key + "}", value)
    return rendered


__all__ = ["extract_placeholders", "render_preview"]
