"""Prompt listing cache with filtering, sorting, and card rendering.

Updates:
  v0.3.1 - 2026-10-16 - Filter by tags; a prompt must carry every selected tag.
  v0.3.0 - 2026-10-08 - Add popular, recent, and trending sort orders plus the trending filter.
  v0.2.1 - 2026-10-02 - Fall back to packaged sample prompts on any listing failure.
  v0.2.0 - 2026-09-30 - Fetch the listing asynchronously through an injectable HTTPX client.
  v0.1.0 - 2026-09-27 - Initial catalog with conjunctive filters and star ratings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import httpx

from catalog import load_sample_prompts
from config.settings import DEFAULT_API_BASE_URL, DEFAULT_PROMPTS_RESOURCE
from models.prompt_model import Prompt, coerce_prompt

from .exceptions import TransportError
from .notifications import NotificationCenter, NotificationLevel
from .rendering import generate_stars as _generate_stars
from .rendering import parse_fragment, render_collection_card, render_prompt_card

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Callable, Iterable

    from bs4 import Tag

    from config.settings import PromptHeroSettings
    from models.collection_model import Collection

    from .favorites import FavoritesStore

logger = logging.getLogger("prompt_hero.catalog")

ALL_CATEGORIES = "all"
TRENDING_MIN_USAGE = 10
TRENDING_WINDOW = timedelta(days=7)


@dataclass(slots=True)
class PromptFilters:
    """Conjunctive filter criteria applied to the cached prompts."""

    category: str | None = None
    featured: bool | None = None
    difficulty: str | None = None
    query: str | None = None
    sort: str | None = None
    trending: bool = False
    tags: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PromptFilters:
        """Build filters from a loosely typed mapping, ignoring unknown keys."""
        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if "query" not in values and "search" in data:
            values["query"] = data["search"]
        featured = values.get("featured")
        if featured is not None and not isinstance(featured, bool):
            values["featured"] = str(featured).strip().lower() in {"1", "true", "yes"}
        values["trending"] = bool(values.get("trending", False))
        values["tags"] = _normalise_tags(values.get("tags"))
        return cls(**values)


def _normalise_tags(raw: Any) -> tuple[str, ...]:
    if not raw:
        return ()
    items = raw.split(",") if isinstance(raw, str) else raw
    selected: list[str] = []
    for item in items:
        tag = str(item).strip()
        if tag and tag not in selected:
            selected.append(tag)
    return tuple(selected)


def _matches_query(prompt: Prompt, needle: str) -> bool:
    return needle in prompt.title.lower() or needle in prompt.description.lower()


def _created_timestamp(prompt: Prompt) -> float:
    return prompt.created_at.timestamp() if prompt.created_at else float("-inf")


def _is_trending(prompt: Prompt, now: datetime) -> bool:
    if prompt.usage_count <= TRENDING_MIN_USAGE or prompt.created_at is None:
        return False
    return prompt.created_at > now - TRENDING_WINDOW


def sort_prompts(prompts: Iterable[Prompt], sort: str | None) -> list[Prompt]:
    """Return *prompts* ordered by *sort*; ties keep their original order."""
    items = list(prompts)
    if not sort:
        return items
    if sort == "rating":
        return sorted(items, key=lambda prompt: prompt.average_rating, reverse=True)
    if sort == "popular":
        return sorted(items, key=lambda prompt: prompt.usage_count, reverse=True)
    if sort == "recent":
        return sorted(items, key=_created_timestamp, reverse=True)
    if sort == "trending":
        return sorted(
            items,
            key=lambda prompt: prompt.usage_count + prompt.total_favorites,
            reverse=True,
        )
    return sorted(
        items,
        key=lambda prompt: (prompt.is_featured, prompt.average_rating),
        reverse=True,
    )


class PromptCatalog:
    """Cache of the public prompt listing and its card rendering."""

    def __init__(
        self,
        prompts_url: str = f"{DEFAULT_API_BASE_URL}/{DEFAULT_PROMPTS_RESOURCE}",
        *,
        favorites: FavoritesStore | None = None,
        notifications: NotificationCenter | None = None,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.prompts_url = prompts_url
        self._favorites = favorites
        self._notifications = notifications or NotificationCenter()
        self._client_factory = client_factory
        self._clock = clock or (lambda: datetime.now(UTC))
        self._prompts: list[Prompt] = []

    @classmethod
    def from_settings(cls, settings: PromptHeroSettings, **kwargs: Any) -> PromptCatalog:
        return cls(settings.prompts_url, **kwargs)

    @property
    def prompts(self) -> list[Prompt]:
        return list(self._prompts)

    def set_prompts(self, records: Iterable[Prompt | Mapping[str, Any]]) -> list[Prompt]:
        """Replace the cached prompts with *records*."""
        self._prompts = [coerce_prompt(record) for record in records]
        return self.prompts

    def get_prompt(self, prompt_id: object) -> Prompt | None:
        target = str(prompt_id)
        for prompt in self._prompts:
            if prompt.id == target:
                return prompt
        return None

    async def _fetch_listing(self) -> list[Prompt]:
        manage_client = self._client_factory is None
        if self._client_factory is None:
            client = httpx.AsyncClient()
        else:
            client = self._client_factory()
        try:
            response = await client.get(self.prompts_url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"Prompt listing returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Prompt listing request failed: {exc}") from exc
        finally:
            if manage_client:
                await client.aclose()
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError("Prompt listing returned invalid JSON") from exc
        records = payload.get("prompts") if isinstance(payload, dict) else None
        if not isinstance(records, list):
            raise TransportError("Prompt listing is missing the 'prompts' list")
        prompts: list[Prompt] = []
        for record in records:
            if not isinstance(record, Mapping):
                logger.warning("Skipping malformed prompt record: %r", record)
                continue
            prompts.append(Prompt.from_record(record))
        return prompts

    async def load_prompts(self) -> list[Prompt]:
        """Fetch the listing, falling back to the packaged sample prompts."""
        try:
            prompts = await self._fetch_listing()
        except TransportError as exc:
            logger.error("Error loading prompts from %s: %s", self.prompts_url, exc)
            self._notifications.notify("Using sample prompts", NotificationLevel.WARNING)
            prompts = load_sample_prompts()
        self._prompts = prompts
        logger.info("Loaded %d prompts", len(prompts))
        return self.prompts

    def filter_prompts(
        self,
        criteria: PromptFilters | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> list[Prompt]:
        """Return cached prompts matching every criterion, sorted last."""
        if isinstance(criteria, PromptFilters):
            filters = criteria
            if kwargs:
                merged = {item.name: getattr(criteria, item.name) for item in fields(criteria)}
                merged.update(kwargs)
                filters = PromptFilters.from_mapping(merged)
        else:
            merged = dict(criteria or {})
            merged.update(kwargs)
            filters = PromptFilters.from_mapping(merged)

        results = list(self._prompts)
        if filters.category and filters.category != ALL_CATEGORIES:
            results = [prompt for prompt in results if prompt.category == filters.category]
        if filters.featured is not None:
            results = [prompt for prompt in results if prompt.is_featured == filters.featured]
        if filters.difficulty:
            results = [
                prompt for prompt in results if prompt.difficulty_level == filters.difficulty
            ]
        if filters.query:
            needle = filters.query.lower()
            results = [prompt for prompt in results if _matches_query(prompt, needle)]
        if filters.tags:
            results = [
                prompt for prompt in results if all(tag in prompt.tags for tag in filters.tags)
            ]
        if filters.trending:
            now = self._clock()
            results = [prompt for prompt in results if _is_trending(prompt, now)]
        return sort_prompts(results, filters.sort)

    @staticmethod
    def generate_stars(rating: float | None) -> str:
        return _generate_stars(rating)

    def is_favorited(self, prompt_id: str) -> bool:
        return self._favorites is not None and self._favorites.is_favorited(prompt_id)

    def create_prompt_card(self, prompt: Prompt | Mapping[str, Any] | None) -> Tag:
        """Return the parsed card element for *prompt*."""
        if prompt is None:
            return parse_fragment(render_prompt_card(None))
        resolved = coerce_prompt(prompt)
        markup = render_prompt_card(resolved, favorited=self.is_favorited(resolved.id))
        return parse_fragment(markup)

    def create_collection_card(self, collection: Collection) -> Tag:
        return parse_fragment(render_collection_card(collection))


__all__ = ["PromptCatalog", "PromptFilters", "sort_prompts"]
