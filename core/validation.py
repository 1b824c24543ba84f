"""Client-side validation rules applied before any request is sent.

Updates:
  v0.2.0 - 2026-10-10 - Add test input and quick test content checks.
  v0.1.0 - 2026-10-07 - Prompt form and version content rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import InputValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from models.test_run_model import TestInput

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000

NAME_REQUIRED = "Prompt title is required"
NAME_TOO_LONG = f"Title must be less than {NAME_MAX_LENGTH} characters"
DESCRIPTION_TOO_LONG = f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters"
CONTENT_REQUIRED = "Initial prompt is required"
VERSION_CONTENT_REQUIRED = "Version content cannot be empty"
VERSION_UNCHANGED = "No changes to save"
INPUTS_REQUIRED = "Add at least one test input"
QUICK_CONTENT_REQUIRED = "Please enter a prompt"


def prompt_form_errors(name: str, description: str, initial_content: str) -> dict[str, str]:
    """Return a field-to-message mapping for the create prompt form."""
    errors: dict[str, str] = {}
    if not name.strip():
        errors["name"] = NAME_REQUIRED
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = NAME_TOO_LONG
    if len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = DESCRIPTION_TOO_LONG
    if not initial_content.strip():
        errors["initial_content"] = CONTENT_REQUIRED
    return errors


def validate_prompt_form(name: str, description: str, initial_content: str) -> None:
    """Raise :class:`InputValidationError` when the create form is invalid."""
    errors = prompt_form_errors(name, description, initial_content)
    if errors:
        raise InputValidationError(next(iter(errors.values())), errors)


def validate_version_content(draft: str, current: str | None) -> str:
    """Return *draft* when it may be saved as a new version."""
    if not draft.strip():
        raise InputValidationError(VERSION_CONTENT_REQUIRED, {"content": VERSION_CONTENT_REQUIRED})
    if current is not None and draft == current:
        raise InputValidationError(VERSION_UNCHANGED, {"content": VERSION_UNCHANGED})
    return draft


def require_test_inputs(inputs: Iterable[TestInput]) -> tuple[TestInput, ...]:
    """Return the non-blank inputs, raising when none remain."""
    kept = tuple(item for item in inputs if not item.is_blank())
    if not kept:
        raise InputValidationError(INPUTS_REQUIRED, {"inputs": INPUTS_REQUIRED})
    return kept


def require_prompt_content(content: str) -> str:
    """Return *content* when it is not blank (quick test form)."""
    if not content.strip():
        raise InputValidationError(QUICK_CONTENT_REQUIRED, {"content": QUICK_CONTENT_REQUIRED})
    return content


__all__ = [
    "CONTENT_REQUIRED",
    "DESCRIPTION_MAX_LENGTH",
    "DESCRIPTION_TOO_LONG",
    "INPUTS_REQUIRED",
    "NAME_MAX_LENGTH",
    "NAME_REQUIRED",
    "NAME_TOO_LONG",
    "QUICK_CONTENT_REQUIRED",
    "VERSION_CONTENT_REQUIRED",
    "VERSION_UNCHANGED",
    "prompt_form_errors",
    "require_prompt_content",
    "require_test_inputs",
    "validate_prompt_form",
    "validate_version_content",
]
