"""Prompt data model definitions.

Updates: v0.2.0 - 2026-10-05 - Track usage and favourite counters for popularity sorting.
Updates: v0.1.1 - 2026-09-30 - Tolerate partial listing records with explicit defaults.
Updates: v0.1.0 - 2026-09-24 - Initial Prompt record with serialization helpers.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def _ensure_text(value: Any) -> str:
    """Return ``value`` as a string, mapping ``None`` to an empty string."""
    if value is None:
        return ""
    return str(value)


def _ensure_float(value: Any) -> float:
    if value in (None, ""):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _ensure_int(value: Any) -> int:
    if value in (None, ""):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _ensure_datetime(value: Any) -> datetime | None:
    """Parse ISO-8601 strings (including a trailing ``Z``) into aware datetimes."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _serialize_tags(items: Any) -> list[str]:
    if items is None:
        return []
    if isinstance(items, str):
        return [items]
    if isinstance(items, Iterable):
        return [str(item) for item in items]
    return [str(items)]


@dataclass(frozen=True, slots=True)
class Prompt:
    """Read-only representation of a prompt served by the listing endpoint."""
    id: str
    title: str = ""
    content: str = ""
    description: str = ""
    category: str = ""
    author: str = ""
    average_rating: float = 0.0
    total_ratings: int = 0
    is_featured: bool = False
    difficulty_level: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)
    usage_count: int = 0
    total_favorites: int = 0
    created_at: datetime | None = None

    def to_record(self) -> dict[str, Any]:
        """Return the JSON representation used by the listing endpoint."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "description": self.description,
            "category": self.category,
            "author": self.author,
            "average_rating": self.average_rating,
            "total_ratings": self.total_ratings,
            "is_featured": self.is_featured,
            "difficulty_level": self.difficulty_level,
            "tags": list(self.tags),
            "usage_count": self.usage_count,
            "total_favorites": self.total_favorites,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Prompt:
        """Create a Prompt from a loosely typed listing record."""
        return cls(
            id=_ensure_text(data.get("id")),
            title=_ensure_text(data.get("title")),
            content=_ensure_text(data.get("content")),
            description=_ensure_text(data.get("description")),
            category=_ensure_text(data.get("category")),
            author=_ensure_text(data.get("author")),
            average_rating=_ensure_float(data.get("average_rating")),
            total_ratings=_ensure_int(data.get("total_ratings")),
            is_featured=bool(data.get("is_featured", False)),
            difficulty_level=_ensure_text(data.get("difficulty_level")),
            tags=tuple(_serialize_tags(data.get("tags"))),
            usage_count=_ensure_int(data.get("usage_count")),
            total_favorites=_ensure_int(data.get("total_favorites")),
            created_at=_ensure_datetime(data.get("created_at")),
        )


def coerce_prompt(value: Prompt | Mapping[str, Any]) -> Prompt:
    """Return ``value`` as a :class:`Prompt`, parsing mappings when needed."""
    if isinstance(value, Prompt):
        return value
    return Prompt.from_record(value)


__all__ = ["Prompt", "coerce_prompt"]
