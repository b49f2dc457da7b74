"""Keep the rendered document consistent with favorites and catalog state.

The binder renders listing and collection views into a :class:`DocumentPort`
and routes clicks on card controls to store mutations. Each mutation is
followed by a targeted refresh of the affected controls.

Updates:
  v0.3.1 - 2026-10-16 - Reject missing or zero ratings with a warning.
  v0.3.0 - 2026-10-09 - Track favorite toggles and ratings in the analytics log.
  v0.2.0 - 2026-10-07 - Render collection pickers and the collections grid.
  v0.1.0 - 2026-09-28 - Initial listing renderer and favorite button synchronisation.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from config.settings import DEFAULT_CONTAINER_ID, DEFAULT_FAVORITES_COUNT_ID

from .exceptions import NotFoundError
from .notifications import NotificationCenter, NotificationLevel
from .rendering import (
    favorite_glyph,
    favorite_title,
    generate_stars,
    render_collection_list,
    render_no_collections,
    render_no_results,
)

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Iterable

    from bs4 import Tag

    from models.prompt_model import Prompt

    from .analytics import EventTracker
    from .catalog import PromptCatalog
    from .dom import DocumentPort
    from .favorites import FavoritesStore

logger = logging.getLogger("prompt_hero.binder")

COLLECTION_LIST_ID = "collectionList"
COLLECTIONS_GRID_ID = "collectionsGrid"
RESULTS_COUNT_ID = "resultsCount"

_RATING_COUNT_PATTERN = re.compile(r"\d+")


class DomBinder:
    """Render store and catalog state into a document and handle card clicks."""

    def __init__(
        self,
        document: DocumentPort,
        store: FavoritesStore,
        catalog: PromptCatalog,
        *,
        container_id: str = DEFAULT_CONTAINER_ID,
        favorites_count_id: str = DEFAULT_FAVORITES_COUNT_ID,
        tracker: EventTracker | None = None,
        notifications: NotificationCenter | None = None,
    ) -> None:
        self._document = document
        self._store = store
        self._catalog = catalog
        self._container_id = container_id
        self._favorites_count_id = favorites_count_id
        self._tracker = tracker
        self._notifications = notifications or NotificationCenter()

    @property
    def document(self) -> DocumentPort:
        return self._document

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def render_prompts(self, prompts: Iterable[Prompt]) -> int:
        """Replace the listing container with one card per prompt.

        Returns the number of cards rendered; nothing happens when the
        container is missing from the document.
        """
        container = self._document.get_element_by_id(self._container_id)
        if container is None:
            logger.debug("Listing container '%s' not found", self._container_id)
            return 0
        items = list(prompts)
        if not items:
            self._document.replace_content(container, render_no_results())
            return 0
        self._document.clear(container)
        for prompt in items:
            self._document.append(container, self._catalog.create_prompt_card(prompt))
        return len(items)

    def update_favorites_count(self) -> None:
        element = self._document.get_element_by_id(self._favorites_count_id)
        if element is None:
            return
        self._document.set_text(element, str(self._store.get_favorites_count()))

    def update_results_count(self, count: int) -> None:
        element = self._document.get_element_by_id(RESULTS_COUNT_ID)
        if element is None:
            return
        self._document.set_text(element, f"Found {count} prompts")

    def _favorite_buttons(self, prompt_id: str | None = None) -> list[Tag]:
        buttons = self._document.select(".favorite-btn[data-prompt-id]")
        if prompt_id is None:
            return buttons
        return [
            button
            for button in buttons
            if self._document.get_attribute(button, "data-prompt-id") == prompt_id
        ]

    def _sync_favorite_button(self, button: Tag, favorited: bool) -> None:
        self._document.toggle_class(button, "favorited", favorited)
        self._document.set_text(button, favorite_glyph(favorited))
        self._document.set_attribute(button, "title", favorite_title(favorited))

    def update_favorite_buttons(self) -> None:
        """Synchronise every favorite toggle with the store."""
        for button in self._favorite_buttons():
            prompt_id = self._document.get_attribute(button, "data-prompt-id")
            self._sync_favorite_button(button, self._store.is_favorited(prompt_id))

    def render_collection_list(self, prompt_id: str) -> None:
        """Render the collection picker for *prompt_id*."""
        element = self._document.get_element_by_id(COLLECTION_LIST_ID)
        if element is None:
            return
        markup = render_collection_list(self._store.get_all_collections(), prompt_id)
        self._document.replace_content(element, markup)

    def render_collections(self) -> int:
        """Render one card per collection into the collections grid."""
        grid = self._document.get_element_by_id(COLLECTIONS_GRID_ID)
        if grid is None:
            return 0
        collections = self._store.get_all_collections()
        if not collections:
            self._document.replace_content(grid, render_no_collections())
            return 0
        self._document.clear(grid)
        for collection in collections:
            self._document.append(grid, self._catalog.create_collection_card(collection))
        return len(collections)

    def _find_card(self, prompt_id: str) -> Tag | None:
        for card in self._document.select(".prompt-card[data-prompt-id]"):
            if self._document.get_attribute(card, "data-prompt-id") == prompt_id:
                return card
        return None

    def update_prompt_rating(self, prompt_id: str, rating: float | None) -> bool:
        """Show *rating* on the card of *prompt_id* and count one more rating.

        A missing or zero rating is rejected with a warning and returns ``False``.
        """
        if not rating:
            self._notifications.notify("Please select a rating", NotificationLevel.WARNING)
            return False
        card = self._find_card(prompt_id)
        if card is not None:
            stars = self._document.select_one(".stars", card)
            if stars is not None:
                self._document.set_text(stars, generate_stars(rating))
            counter = self._document.select_one(".rating-count", card)
            if counter is not None:
                match = _RATING_COUNT_PATTERN.search(self._document.get_text(counter))
                current = int(match.group()) if match else 0
                self._document.set_text(counter, f"({current + 1})")
        self._track("rate", prompt_id, rating=rating)
        self._notifications.notify("Rating submitted successfully!", NotificationLevel.SUCCESS)
        return True

    # ------------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------------
    def toggle_favorite(self, prompt_id: str) -> bool:
        """Flip the favorite state of *prompt_id* and refresh its controls."""
        favorited = self._store.toggle_favorite(prompt_id)
        for button in self._favorite_buttons(prompt_id):
            self._sync_favorite_button(button, favorited)
        self.update_favorites_count()
        self._track("favorite", prompt_id, action="add" if favorited else "remove")
        return favorited

    def copy_prompt(self, prompt_id: str) -> str | None:
        """Return the content of *prompt_id* for the clipboard."""
        prompt = self._catalog.get_prompt(prompt_id)
        if prompt is None:
            self._notifications.notify("Prompt not found", NotificationLevel.ERROR)
            return None
        self._track("copy", prompt_id)
        self._notifications.notify("Prompt copied to clipboard!", NotificationLevel.SUCCESS)
        return prompt.content

    def dispatch_click(self, element: Tag, *, rating: float | None = None) -> bool:
        """Route a click on *element* to the matching card control.

        Returns ``True`` when a control handled the click.
        """
        document = self._document

        button = document.closest(element, ".favorite-btn")
        if button is not None:
            prompt_id = document.get_attribute(button, "data-prompt-id")
            if not prompt_id:
                return False
            self.toggle_favorite(prompt_id)
            return True

        button = document.closest(element, ".collection-action-btn")
        if button is not None:
            collection_id = document.get_attribute(button, "data-collection-id")
            prompt_id = document.get_attribute(button, "data-prompt-id")
            if not collection_id or not prompt_id:
                return False
            try:
                self._store.toggle_prompt_in_collection(collection_id, prompt_id)
            except NotFoundError as exc:
                logger.warning("Collection click ignored: %s", exc)
                return False
            self.render_collection_list(prompt_id)
            self.render_collections()
            return True

        button = document.closest(element, ".add-to-collection-btn")
        if button is not None:
            prompt_id = document.get_attribute(button, "data-prompt-id")
            if not prompt_id:
                return False
            self.render_collection_list(prompt_id)
            return True

        button = document.closest(element, ".rate-btn")
        if button is not None:
            prompt_id = document.get_attribute(button, "data-prompt-id")
            if not prompt_id:
                return False
            return self.update_prompt_rating(prompt_id, rating)

        button = document.closest(element, ".copy-prompt-btn")
        if button is not None:
            prompt_id = document.get_attribute(button, "data-prompt-id")
            return bool(prompt_id) and self.copy_prompt(prompt_id) is not None

        return False

    def refresh(self, prompts: Iterable[Prompt] | None = None) -> None:
        """Re-render the listing, counters, and collection views."""
        items = list(self._catalog.prompts if prompts is None else prompts)
        self.render_prompts(items)
        self.update_results_count(len(items))
        self.update_favorites_count()
        self.render_collections()

    def _track(self, event_type: str, prompt_id: str, **metadata: object) -> None:
        if self._tracker is not None:
            self._tracker.track(event_type, prompt_id, **metadata)


__all__ = ["COLLECTIONS_GRID_ID", "COLLECTION_LIST_ID", "RESULTS_COUNT_ID", "DomBinder"]
