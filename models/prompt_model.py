"""Prompt data model definitions.

Updates: v0.3.0 - 2026-10-12 - Add ``with_version`` so saved versions merge without a reload.
Updates: v0.2.0 - 2026-10-08 - Coerce numeric string identifiers into integers.
Updates: v0.1.0 - 2026-10-05 - Initial Prompt/PromptVersion schema with payload helpers.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, TypeAlias

EntityId: TypeAlias = int | str


def coerce_entity_id(value: Any) -> EntityId:
    """Return *value* as an integer identifier when it is numeric, else as text."""
    if value is None or isinstance(value, bool):
        raise ValueError("an identifier is required")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        raise ValueError("an identifier is required")
    if text.lstrip("-").isdigit():
        return int(text)
    return text


def parse_timestamp(value: Any) -> datetime | None:
    """Parse ISO-8601 timestamps emitted by the backend (naive or zoned)."""
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"invalid timestamp: {value!r}") from exc


def _require_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{kind} payload must be a JSON object")
    return data


@dataclass(frozen=True, slots=True)
class PromptVersion:
    """Immutable snapshot of prompt content plus its sequence number."""
    id: EntityId
    version_number: int
    content: str
    created_at: datetime | None = None

    @classmethod
    def from_payload(cls, data: Any) -> PromptVersion:
        """Build a version from the backend's camelCase JSON."""
        payload = _require_mapping(data, "Prompt version")
        if "id" not in payload:
            raise ValueError("Prompt version payload is missing 'id'")
        raw_number = payload.get("versionNumber")
        try:
            number = int(raw_number) if raw_number is not None else 0
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid versionNumber: {raw_number!r}") from exc
        return cls(
            id=coerce_entity_id(payload["id"]),
            version_number=number,
            content=str(payload.get("content") or ""),
            created_at=parse_timestamp(payload.get("createdAt")),
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase representation used by the backend."""
        return {
            "id": self.id,
            "versionNumber": self.version_number,
            "content": self.content,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    @property
    def label(self) -> str:
        """Short label used by selectors (``V3``)."""
        return f"V{self.version_number}"


@dataclass(slots=True)
class Prompt:
    """Named prompt holding its versions in creation order."""
    id: EntityId
    name: str
    description: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    versions: tuple[PromptVersion, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, data: Any) -> Prompt:
        """Build a prompt (with nested versions when present) from JSON."""
        payload = _require_mapping(data, "Prompt")
        if "id" not in payload:
            raise ValueError("Prompt payload is missing 'id'")
        raw_versions = payload.get("versions") or []
        if not isinstance(raw_versions, list):
            raise ValueError("Prompt 'versions' must be a list")
        return cls(
            id=coerce_entity_id(payload["id"]),
            name=str(payload.get("name") or ""),
            description=str(payload.get("description") or ""),
            created_at=parse_timestamp(payload.get("createdAt")),
            updated_at=parse_timestamp(payload.get("updatedAt")),
            versions=tuple(PromptVersion.from_payload(item) for item in raw_versions),
        )

    @classmethod
    def list_from_payload(cls, data: Any) -> list[Prompt]:
        """Parse the prompt summary list returned by ``GET /api/prompts``."""
        if not isinstance(data, list):
            raise ValueError("Prompt list payload must be a JSON array")
        return [cls.from_payload(item) for item in data]

    @property
    def latest_version(self) -> PromptVersion | None:
        """Return the most recently created version, if any."""
        return self.versions[-1] if self.versions else None

    def find_version(self, version_id: EntityId | None) -> PromptVersion | None:
        """Return the version matching *version_id* or ``None``."""
        if version_id is None:
            return None
        for version in self.versions:
            if version.id == version_id:
                return version
        return None

    def version_ids(self) -> list[EntityId]:
        """Return version identifiers in creation order."""
        return [version.id for version in self.versions]

    def with_version(self, version: PromptVersion) -> Prompt:
        """Return a copy including *version*, replacing any entry with the same id."""
        if self.find_version(version.id) is None:
            return replace(self, versions=(*self.versions, version))
        versions = tuple(version if item.id == version.id else item for item in self.versions)
        return replace(self, versions=versions)


__all__ = [
    "EntityId",
    "Prompt",
    "PromptVersion",
    "coerce_entity_id",
    "parse_timestamp",
]
