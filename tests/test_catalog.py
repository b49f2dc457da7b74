"""Tests for the prompt listing fetch, filters, sort orders, and star ratings."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import httpx
import pytest
from pytest import LogCaptureFixture

from config import load_settings
from core import NotificationCenter, NotificationLevel, PromptCatalog, PromptFilters
from models import Prompt

LISTING_URL = "http://api.test/prompts.json"


def _catalog_with_handler(
    handler,
    notifications: NotificationCenter | None = None,
) -> PromptCatalog:
    transport = httpx.MockTransport(handler)
    return PromptCatalog(
        LISTING_URL,
        notifications=notifications,
        client_factory=lambda: httpx.AsyncClient(transport=transport),
    )


@pytest.mark.asyncio()
async def test_load_prompts_parses_listing() -> None:
    """Ensure a successful listing replaces the cached prompts."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == LISTING_URL
        return httpx.Response(
            200,
            json={
                "prompts": [
                    {"id": 10, "title": "Remote", "average_rating": "4", "tags": ["a"]},
                    "not-a-record",
                ]
            },
        )

    catalog = _catalog_with_handler(handler)
    prompts = await catalog.load_prompts()

    assert [prompt.id for prompt in prompts] == ["10"]
    assert prompts[0].average_rating == 4.0
    assert prompts[0].tags == ("a",)
    assert catalog.get_prompt(10) == prompts[0]


@pytest.mark.asyncio()
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404, text="missing"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"items": []}),
    ],
)
async def test_load_prompts_falls_back_to_samples(
    response: httpx.Response,
    caplog: LogCaptureFixture,
) -> None:
    """Ensure listing failures fall back to the packaged sample prompts."""
    notifications = NotificationCenter()
    catalog = _catalog_with_handler(lambda request: response, notifications)

    with caplog.at_level(logging.ERROR, logger="prompt_hero.catalog"):
        prompts = await catalog.load_prompts()

    assert len(prompts) == 5
    assert prompts[0].title == "AI Code Review Assistant"
    assert "Error loading prompts" in caplog.text
    assert notifications.history()[-1].message == "Using sample prompts"
    assert notifications.history()[-1].level is NotificationLevel.WARNING


@pytest.mark.asyncio()
async def test_load_prompts_falls_back_on_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    catalog = _catalog_with_handler(handler)
    prompts = await catalog.load_prompts()

    assert [prompt.id for prompt in prompts] == ["1", "2", "3", "4", "5"]


def test_from_settings_uses_listing_url() -> None:
    settings = load_settings(api_base_url="https://prompts.example/", prompts_resource="/list.json")
    assert PromptCatalog.from_settings(settings).prompts_url == "https://prompts.example/list.json"


def test_filter_by_category_and_all(catalog: PromptCatalog) -> None:
    development = catalog.filter_prompts({"category": "development"})

    assert [prompt.id for prompt in development] == ["1"]
    assert len(catalog.filter_prompts(category="all")) == 5


def test_filter_by_featured_matches_exactly(catalog: PromptCatalog) -> None:
    featured = catalog.filter_prompts(featured=True)
    not_featured = catalog.filter_prompts(featured=False)

    assert featured and all(prompt.is_featured for prompt in featured)
    assert not_featured and not any(prompt.is_featured for prompt in not_featured)
    assert len(featured) + len(not_featured) == 5


def test_filter_by_difficulty(catalog: PromptCatalog) -> None:
    results = catalog.filter_prompts(difficulty="advanced")
    assert results and all(prompt.difficulty_level == "advanced" for prompt in results)


def test_tags_filter_requires_every_selected_tag(catalog: PromptCatalog) -> None:
    assert [prompt.id for prompt in catalog.filter_prompts(tags=["business"])] == ["3"]
    assert [
        prompt.id for prompt in catalog.filter_prompts({"tags": "strategy, analysis"})
    ] == ["3"]
    assert catalog.filter_prompts(tags=("business", "research")) == []
    assert len(catalog.filter_prompts(tags=[])) == 5


def test_query_matches_title_and_description_case_insensitively(
    catalog: PromptCatalog,
) -> None:
    assert [prompt.title for prompt in catalog.filter_prompts(query="CODE REVIEW")] == [
        "AI Code Review Assistant"
    ]
    assert catalog.filter_prompts(query="no such words anywhere") == []


def test_filters_are_conjunctive_and_preserve_order() -> None:
    catalog = PromptCatalog()
    catalog.set_prompts(
        [
            {"id": "a", "title": "Alpha", "category": "x", "is_featured": True},
            {"id": "b", "title": "Beta", "category": "y", "is_featured": True},
            {"id": "c", "title": "Gamma", "category": "x", "is_featured": False},
            {"id": "d", "title": "Delta", "category": "x", "is_featured": True},
        ]
    )

    results = catalog.filter_prompts(PromptFilters(category="x", featured=True))

    assert [prompt.id for prompt in results] == ["a", "d"]


def test_sort_by_rating_is_descending_and_stable() -> None:
    catalog = PromptCatalog()
    catalog.set_prompts(
        [
            Prompt(id="a", average_rating=4.0),
            Prompt(id="b", average_rating=5.0),
            Prompt(id="c", average_rating=4.0),
        ]
    )

    assert [prompt.id for prompt in catalog.filter_prompts(sort="rating")] == ["b", "a", "c"]


def test_other_sort_values_put_featured_first() -> None:
    catalog = PromptCatalog()
    catalog.set_prompts(
        [
            Prompt(id="a", average_rating=5.0),
            Prompt(id="b", average_rating=3.0, is_featured=True),
            Prompt(id="c", average_rating=4.0, is_featured=True),
        ]
    )

    assert [prompt.id for prompt in catalog.filter_prompts(sort="featured")] == ["c", "b", "a"]


def test_popular_recent_and_trending_sorts() -> None:
    now = datetime(2026, 10, 10, tzinfo=UTC)
    catalog = PromptCatalog()
    catalog.set_prompts(
        [
            Prompt(id="old", usage_count=50, created_at=now - timedelta(days=30)),
            Prompt(id="new", usage_count=5, total_favorites=60, created_at=now),
            Prompt(id="undated", usage_count=20, total_favorites=1),
        ]
    )

    assert [p.id for p in catalog.filter_prompts(sort="popular")] == ["old", "undated", "new"]
    assert [p.id for p in catalog.filter_prompts(sort="recent")] == ["new", "old", "undated"]
    assert [p.id for p in catalog.filter_prompts(sort="trending")] == ["new", "old", "undated"]


def test_trending_filter_uses_recent_heavily_used_prompts() -> None:
    now = datetime(2026, 10, 10, tzinfo=UTC)
    catalog = PromptCatalog(clock=lambda: now)
    catalog.set_prompts(
        [
            Prompt(id="hot", usage_count=11, created_at=now - timedelta(days=2)),
            Prompt(id="stale", usage_count=99, created_at=now - timedelta(days=8)),
            Prompt(id="quiet", usage_count=10, created_at=now),
        ]
    )

    assert [prompt.id for prompt in catalog.filter_prompts(trending=True)] == ["hot"]


def test_filter_mapping_accepts_search_alias_and_text_booleans(catalog: PromptCatalog) -> None:
    filters = PromptFilters.from_mapping({"search": "strategy", "featured": "true", "extra": 1})

    assert filters.query == "strategy"
    assert filters.featured is True
    assert [prompt.id for prompt in catalog.filter_prompts(filters)] == ["3"]


@pytest.mark.parametrize(
    ("rating", "expected"),
    [
        (0, "☆☆☆☆☆"),
        (None, "☆☆☆☆☆"),
        (3, "★★★☆☆"),
        (5, "★★★★★"),
        (3.5, "★★★☆"),
        (4.5, "★★★★"),
        (0.5, "☆☆☆☆"),
        (7, "★★★★★"),
        (-2, "☆☆☆☆☆"),
    ],
)
def test_generate_stars(rating: float | None, expected: str) -> None:
    assert PromptCatalog.generate_stars(rating) == expected
