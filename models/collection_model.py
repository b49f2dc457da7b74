"""Collection data model definitions.

Updates: v0.1.1 - 2026-10-05 - Carry the public visibility flag used by the remote API.
Updates: v0.1.0 - 2026-09-24 - Initial collection dataclass with record helpers.
"""
from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

MAX_COLLECTION_NAME_LENGTH = 255


def _utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def _ensure_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if value in (None, ""):
        return _utc_now()
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def generate_collection_id() -> str:
    """Return a short random identifier for a new collection."""
    return uuid.uuid4().hex[:12]


@dataclass(slots=True)
class Collection:
    """User-curated, named grouping of prompt identifiers."""
    id: str
    name: str
    description: str = ""
    prompts: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utc_now)
    is_public: bool = True

    def __contains__(self, prompt_id: object) -> bool:
        return prompt_id in self.prompts

    @property
    def prompt_count(self) -> int:
        """Return the number of prompts stored in the collection."""
        return len(self.prompts)

    def to_record(self) -> dict[str, Any]:
        """Return the JSON representation persisted in local storage."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "prompts": list(self.prompts),
            "created_at": self.created_at.isoformat(),
            "is_public": self.is_public,
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Collection:
        """Hydrate a collection from a persisted or remote record.

        Raises:
          ValueError: when the record lacks an identifier or name, or carries
            an unparsable timestamp.
        """
        identifier = str(data.get("id") or "").strip()
        name = str(data.get("name") or "").strip()
        if not identifier or not name:
            raise ValueError("Collection records require an id and a name")
        prompts = data.get("prompts") or []
        if not isinstance(prompts, list):
            raise ValueError("Collection prompts must be a list")
        return cls(
            id=identifier,
            name=name,
            description=str(data.get("description") or ""),
            prompts=[str(prompt_id) for prompt_id in prompts],
            created_at=_ensure_datetime(data.get("created_at")),
            is_public=bool(data.get("is_public", True)),
        )


__all__ = ["Collection", "MAX_COLLECTION_NAME_LENGTH", "generate_collection_id"]
