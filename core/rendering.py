"""Jinja2 markup for prompt cards, collection views, and empty states.

All user supplied text passes through Jinja2 autoescaping, so titles,
descriptions, and collection names can never inject markup into the page.

Updates:
  v0.2.0 - 2026-10-07 - Add collection list and collection card templates.
  v0.1.1 - 2026-09-30 - Render an empty placeholder card for missing prompts.
  v0.1.0 - 2026-09-27 - Initial prompt card and no-results templates.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Tag
from jinja2 import DictLoader, Environment, select_autoescape

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from models.collection_model import Collection
    from models.prompt_model import Prompt

FILLED_STAR = "★"
EMPTY_STAR = "☆"
FAVORITED_GLYPH = "❤️"
UNFAVORITED_GLYPH = "🤍"
FAVORITED_TITLE = "Remove from favorites"
UNFAVORITED_TITLE = "Add to favorites"

_PROMPT_CARD_TEMPLATE = """\
<div class="prompt-card" data-prompt-id="{{ prompt.id }}">
  <div class="prompt-header">
    <div class="prompt-rating">
      <span class="stars">{{ stars }}</span>
      <span class="rating-count">({{ prompt.total_ratings }})</span>
    </div>
    <h3>{{ prompt.title }}</h3>
    <div class="prompt-meta">
      <span class="category category-{{ prompt.category }}">{{ prompt.category }}</span>
      <span class="author">@{{ prompt.author or "anonymous" }}</span>
      {%- if prompt.difficulty_level %}
      <span class="difficulty difficulty-{{ prompt.difficulty_level }}">{{ prompt.difficulty_level }}</span>
      {%- endif %}
    </div>
  </div>
  <p>{{ prompt.description }}</p>
  {%- if prompt.tags %}
  <div class="prompt-tags">
    {%- for tag in prompt.tags %}
    <span class="tag">{{ tag }}</span>
    {%- endfor %}
  </div>
  {%- endif %}
  <details class="prompt-content">
    <summary>View prompt</summary>
    <pre>{{ prompt.content }}</pre>
  </details>
  <div class="prompt-actions">
    <button class="copy-prompt-btn copy-btn" data-prompt-id="{{ prompt.id }}">Copy Prompt</button>
    <button class="favorite-btn{% if favorited %} favorited{% endif %}" data-prompt-id="{{ prompt.id }}" \
title="{{ favorite_title }}">{{ favorite_glyph }}</button>
    <button class="add-to-collection-btn" data-prompt-id="{{ prompt.id }}" title="Add to collection">📁</button>
    <button class="rate-btn" data-prompt-id="{{ prompt.id }}" title="Rate this prompt">⭐</button>
  </div>
</div>
"""

_EMPTY_CARD_TEMPLATE = '<div class="prompt-card prompt-card--empty"></div>'

_NO_RESULTS_TEMPLATE = """\
<div class="no-results">
  <h3>No prompts found</h3>
  <p>Try adjusting your search criteria or browse all prompts.</p>
</div>
"""

_COLLECTION_LIST_TEMPLATE = """\
{%- if not collections -%}
{% include "no_collections.html" %}
{%- else -%}
{%- for collection in collections %}
{%- set has_prompt = prompt_id in collection.prompts %}
<div class="collection-item{% if has_prompt %} has-prompt{% endif %}" data-collection-id="{{ collection.id }}">
  <div class="collection-info">
    <h4>{{ collection.name }}</h4>
    <p>{{ collection.description }}</p>
    <span class="prompt-count">{{ collection.prompts | length }} prompts</span>
  </div>
  <button class="collection-action-btn {{ 'remove' if has_prompt else 'add' }}" \
data-collection-id="{{ collection.id }}" data-prompt-id="{{ prompt_id }}">\
{{ 'Remove' if has_prompt else 'Add' }}</button>
</div>
{%- endfor %}
{%- endif %}
"""

_NO_COLLECTIONS_TEMPLATE = (
    '<p class="no-collections">No collections yet. Create your first one below!</p>'
)

_COLLECTION_CARD_TEMPLATE = """\
<div class="collection-card" data-collection-id="{{ collection.id }}">
  <div class="collection-header">
    <div class="collection-icon">📁</div>
    <div class="collection-info">
      <h3>{{ collection.name }}</h3>
      <p>{{ collection.description }}</p>
    </div>
  </div>
  <div class="collection-stats">
    <div class="collection-stat">
      <span>📄</span>
      <span>{{ collection.prompts | length }} prompts</span>
    </div>
  </div>
</div>
"""

_PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
</head>
<body>
  <header>
    <h1>{{ title }}</h1>
    <span class="favorites-count">Favorites: <span id="{{ favorites_count_id }}">0</span></span>
    <span id="resultsCount"></span>
  </header>
  <main>
    <div class="prompts-grid" id="{{ container_id }}"></div>
    <section class="collections">
      <div class="collections-grid" id="collectionsGrid"></div>
    </section>
    <div class="collection-list" id="collectionList"></div>
  </main>
</body>
</html>
"""

_environment = Environment(
    loader=DictLoader(
        {
            "prompt_card.html": _PROMPT_CARD_TEMPLATE,
            "no_results.html": _NO_RESULTS_TEMPLATE,
            "collection_list.html": _COLLECTION_LIST_TEMPLATE,
            "no_collections.html": _NO_COLLECTIONS_TEMPLATE,
            "collection_card.html": _COLLECTION_CARD_TEMPLATE,
            "page.html": _PAGE_TEMPLATE,
        }
    ),
    autoescape=select_autoescape(default_for_string=True, default=True),
    keep_trailing_newline=False,
)


def generate_stars(rating: float | None) -> str:
    """Return the star glyphs shown for *rating*.

    Whole ratings produce five glyphs; fractional ratings produce four, with the
    whole part filled. Ratings are clamped to the 0..5 range.
    """
    value = 0.0 if rating is None else float(rating)
    if math.isnan(value):
        value = 0.0
    value = min(max(value, 0.0), 5.0)
    filled = math.floor(value)
    empty = 5 - filled if value == filled else 4 - filled
    return FILLED_STAR * filled + EMPTY_STAR * empty


def favorite_glyph(favorited: bool) -> str:
    return FAVORITED_GLYPH if favorited else UNFAVORITED_GLYPH


def favorite_title(favorited: bool) -> str:
    return FAVORITED_TITLE if favorited else UNFAVORITED_TITLE


def render_prompt_card(prompt: Prompt | None, *, favorited: bool = False) -> str:
    """Return the card markup for *prompt*, or an empty placeholder for ``None``."""
    if prompt is None:
        return _EMPTY_CARD_TEMPLATE
    template = _environment.get_template("prompt_card.html")
    return template.render(
        prompt=prompt,
        stars=generate_stars(prompt.average_rating),
        favorited=favorited,
        favorite_glyph=favorite_glyph(favorited),
        favorite_title=favorite_title(favorited),
    )


def render_no_results() -> str:
    return _environment.get_template("no_results.html").render()


def render_collection_list(collections: Sequence[Collection], prompt_id: str) -> str:
    """Return collection rows marking those that already contain *prompt_id*."""
    template = _environment.get_template("collection_list.html")
    return template.render(collections=list(collections), prompt_id=prompt_id)


def render_no_collections() -> str:
    return _environment.get_template("no_collections.html").render()


def render_collection_card(collection: Collection) -> str:
    return _environment.get_template("collection_card.html").render(collection=collection)


def render_page(
    *,
    title: str = "PromptHero",
    container_id: str,
    favorites_count_id: str,
) -> str:
    """Return an empty page skeleton exposing the element ids the binder updates."""
    template = _environment.get_template("page.html")
    return template.render(
        title=title,
        container_id=container_id,
        favorites_count_id=favorites_count_id,
    )


def parse_fragment(markup: str) -> Tag:
    """Parse *markup* and return its first top-level element."""
    soup = BeautifulSoup(markup, "html.parser")
    element = soup.find(True)
    if not isinstance(element, Tag):
        raise ValueError("Markup does not contain an element")
    return element


__all__ = [
    "EMPTY_STAR",
    "FAVORITED_GLYPH",
    "FILLED_STAR",
    "UNFAVORITED_GLYPH",
    "favorite_glyph",
    "favorite_title",
    "generate_stars",
    "parse_fragment",
    "render_collection_card",
    "render_collection_list",
    "render_no_collections",
    "render_no_results",
    "render_page",
    "render_prompt_card",
]
