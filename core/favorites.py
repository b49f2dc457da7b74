"""Favorites and collections state with local persistence.

The store owns the ordered, duplicate-free favorites list and the user's named
collections. State is loaded once at construction and written back after every
mutation. Storage failures never escape: the store logs them and keeps working
on its in-memory state.

Updates:
  v0.4.1 - 2026-10-16 - Ignore empty prompt ids when toggling collection membership.
  v0.4.0 - 2026-10-10 - Push favorite toggles to the remote API for signed-in users.
  v0.3.0 - 2026-10-05 - Deduplicate prompt ids inside collections.
  v0.2.0 - 2026-09-30 - Validate collection names and reject duplicates.
  v0.1.0 - 2026-09-25 - Initial favorites store with set-backed lookups.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from config.settings import DEFAULT_STORAGE_NAMESPACE
from models.collection_model import (
    MAX_COLLECTION_NAME_LENGTH,
    Collection,
    generate_collection_id,
)

from .exceptions import DuplicateNameError, NotFoundError, TransportError, ValidationError
from .notifications import NotificationCenter, NotificationLevel
from .storage import MemoryStorage, namespaced_key

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Iterable

    from .remote import FavoritesApiClient, RemoteUser
    from .storage import KeyValueStorage

logger = logging.getLogger("prompt_hero.favorites")


def _normalise_prompt_id(prompt_id: object) -> str | None:
    """Return *prompt_id* as text, or ``None`` for falsy identifiers."""
    if not prompt_id:
        return None
    return str(prompt_id)


class FavoritesStore:
    """Own the favorites list and collections for a browsing session."""

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        *,
        namespace: str = DEFAULT_STORAGE_NAMESPACE,
        notifications: NotificationCenter | None = None,
        remote_client: FavoritesApiClient | None = None,
    ) -> None:
        if storage is None:
            logger.warning("Local storage unavailable; favorites are kept in memory only")
            storage = MemoryStorage()
        self._storage = storage
        self._favorites_key = namespaced_key(namespace, "favorites")
        self._collections_key = namespaced_key(namespace, "collections")
        self._notifications = notifications or NotificationCenter()
        self._remote_client = remote_client
        self._current_user: RemoteUser | None = None

        self._favorites: list[str] = []
        self._favorite_index: set[str] = set()
        self._collections: list[Collection] = []
        self._load_favorites()
        self._load_collections()

    # ------------------------------------------------------------------
    # Loading and persistence
    # ------------------------------------------------------------------
    def _load_json_list(self, key: str) -> list[Any]:
        raw = self._storage.load(key)
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Error loading '%s' from local storage: %s", key, exc)
            return []
        if not isinstance(payload, list):
            logger.error("Error loading '%s' from local storage: expected a JSON list", key)
            return []
        return payload

    def _load_favorites(self) -> None:
        self._set_favorites(self._load_json_list(self._favorites_key))

    def _load_collections(self) -> None:
        collections: list[Collection] = []
        for entry in self._load_json_list(self._collections_key):
            if not isinstance(entry, dict):
                logger.warning("Skipping malformed collection entry: %r", entry)
                continue
            try:
                collections.append(Collection.from_record(entry))
            except ValueError as exc:
                logger.warning("Skipping invalid collection entry: %s", exc)
        self._collections = collections

    def _set_favorites(self, prompt_ids: Iterable[object]) -> None:
        favorites: list[str] = []
        index: set[str] = set()
        for raw_id in prompt_ids:
            prompt_id = _normalise_prompt_id(raw_id)
            if prompt_id is None or prompt_id in index:
                continue
            index.add(prompt_id)
            favorites.append(prompt_id)
        self._favorites = favorites
        self._favorite_index = index

    def _save_favorites(self) -> bool:
        return self._storage.save_json(self._favorites_key, self._favorites)

    def _save_collections(self) -> bool:
        records = [collection.to_record() for collection in self._collections]
        return self._storage.save_json(self._collections_key, records)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------
    @property
    def favorites(self) -> list[str]:
        """Return the favorited prompt ids in insertion order."""
        return list(self._favorites)

    @favorites.setter
    def favorites(self, prompt_ids: Iterable[object]) -> None:
        self.replace_favorites(prompt_ids)

    def get_favorites(self) -> list[str]:
        return self.favorites

    def replace_favorites(self, prompt_ids: Iterable[object]) -> None:
        """Replace every favorite with *prompt_ids* and persist the result."""
        self._set_favorites(prompt_ids)
        self._save_favorites()

    def add_to_favorites(self, prompt_id: object) -> None:
        """Append *prompt_id* unless it is falsy or already favorited."""
        normalised = _normalise_prompt_id(prompt_id)
        if normalised is None or normalised in self._favorite_index:
            return
        self._favorites.append(normalised)
        self._favorite_index.add(normalised)
        self._save_favorites()

    def remove_from_favorites(self, prompt_id: object) -> None:
        """Remove every occurrence of *prompt_id* from the favorites."""
        normalised = _normalise_prompt_id(prompt_id)
        if normalised is None or normalised not in self._favorite_index:
            return
        self._favorites = [item for item in self._favorites if item != normalised]
        self._favorite_index.discard(normalised)
        self._save_favorites()

    def is_favorited(self, prompt_id: object) -> bool:
        normalised = _normalise_prompt_id(prompt_id)
        return normalised is not None and normalised in self._favorite_index

    def get_favorites_count(self) -> int:
        return len(self._favorites)

    def clear_favorites(self) -> None:
        """Remove all favorites and persist the empty list."""
        self._favorites = []
        self._favorite_index = set()
        self._save_favorites()

    def toggle_favorite(self, prompt_id: object) -> bool:
        """Flip the favorite state of *prompt_id* and return the new state."""
        normalised = _normalise_prompt_id(prompt_id)
        if normalised is None:
            return False
        if normalised in self._favorite_index:
            self.remove_from_favorites(normalised)
            self._notifications.notify("Removed from favorites", NotificationLevel.INFO)
            favorited = False
        else:
            self.add_to_favorites(normalised)
            self._notifications.notify("Added to favorites", NotificationLevel.SUCCESS)
            favorited = True
        self._push_favorite(normalised, favorited)
        return favorited

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------
    @property
    def collections(self) -> list[Collection]:
        return list(self._collections)

    def _require_collection(self, collection_id: str) -> Collection:
        collection = self.get_collection(collection_id)
        if collection is None:
            raise NotFoundError("Collection not found")
        return collection

    def create_collection(self, name: str | None, description: str | None = None) -> Collection:
        """Create, persist, and return a new empty collection.

        Raises:
          ValidationError: when *name* is blank or longer than 255 characters.
          DuplicateNameError: when a collection with the same name exists.
        """
        cleaned_name = (name or "").strip()
        if not cleaned_name:
            raise ValidationError("Collection name is required")
        if len(cleaned_name) > MAX_COLLECTION_NAME_LENGTH:
            raise ValidationError(
                f"Collection name too long (max {MAX_COLLECTION_NAME_LENGTH} characters)"
            )
        if any(collection.name == cleaned_name for collection in self._collections):
            raise DuplicateNameError("A collection with this name already exists")

        existing_ids = {collection.id for collection in self._collections}
        collection_id = generate_collection_id()
        while collection_id in existing_ids:
            collection_id = generate_collection_id()

        collection = Collection(
            id=collection_id,
            name=cleaned_name,
            description=(description or "").strip(),
            prompts=[],
            created_at=datetime.now(UTC),
        )
        self._collections.append(collection)
        self._save_collections()
        logger.info("Created collection '%s' (%s)", collection.name, collection.id)
        return collection

    def add_to_collection(self, collection_id: str, prompt_id: object) -> Collection:
        """Append *prompt_id* to a collection; ids already present are kept once."""
        collection = self._require_collection(collection_id)
        normalised = _normalise_prompt_id(prompt_id)
        if normalised is not None and normalised not in collection.prompts:
            collection.prompts.append(normalised)
        self._save_collections()
        return collection

    def remove_from_collection(self, collection_id: str, prompt_id: object) -> Collection:
        """Remove every occurrence of *prompt_id* from a collection."""
        collection = self._require_collection(collection_id)
        normalised = _normalise_prompt_id(prompt_id)
        collection.prompts[:] = [item for item in collection.prompts if item != normalised]
        self._save_collections()
        return collection

    def toggle_prompt_in_collection(self, collection_id: str, prompt_id: object) -> bool:
        """Add or remove *prompt_id* and return whether the collection now holds it."""
        collection = self._require_collection(collection_id)
        normalised = _normalise_prompt_id(prompt_id)
        if normalised is None:
            return False
        if normalised in collection.prompts:
            self.remove_from_collection(collection_id, prompt_id)
            self._notifications.notify("Removed from collection", NotificationLevel.INFO)
            return False
        self.add_to_collection(collection_id, prompt_id)
        self._notifications.notify("Added to collection", NotificationLevel.SUCCESS)
        return True

    def delete_collection(self, collection_id: str) -> None:
        """Remove the collection with *collection_id* if it exists."""
        self._collections = [
            collection for collection in self._collections if collection.id != collection_id
        ]
        self._save_collections()

    def get_collection(self, collection_id: str) -> Collection | None:
        for collection in self._collections:
            if collection.id == collection_id:
                return collection
        return None

    def get_all_collections(self) -> list[Collection]:
        return self.collections

    # ------------------------------------------------------------------
    # Remote API
    # ------------------------------------------------------------------
    @property
    def current_user(self) -> RemoteUser | None:
        return self._current_user

    def set_current_user(self, user: RemoteUser | None) -> None:
        """Set the signed-in user whose favorite changes are pushed remotely."""
        self._current_user = user

    def _push_favorite(self, prompt_id: str, favorited: bool) -> None:
        if self._current_user is None or self._remote_client is None:
            return
        try:
            if favorited:
                self._remote_client.add_favorite(self._current_user.id, prompt_id)
            else:
                self._remote_client.remove_favorite(self._current_user.id, prompt_id)
        except TransportError as exc:
            logger.error("Error syncing favorite '%s' with the API: %s", prompt_id, exc)
            self._notifications.notify("Failed to update favorites", NotificationLevel.ERROR)

    def load_favorites_from_api(self) -> bool:
        """Replace local favorites with the signed-in user's remote favorites."""
        if self._current_user is None or self._remote_client is None:
            return False
        try:
            prompt_ids = self._remote_client.fetch_favorites(self._current_user.id)
        except TransportError as exc:
            logger.error("Error loading favorites from API: %s", exc)
            return False
        self.replace_favorites(prompt_ids)
        return True

    def load_collections_from_api(self) -> bool:
        """Replace local collections with the signed-in user's remote collections."""
        if self._current_user is None or self._remote_client is None:
            return False
        try:
            records = self._remote_client.fetch_collections(self._current_user.id)
        except TransportError as exc:
            logger.error("Error loading collections from API: %s", exc)
            return False
        collections: list[Collection] = []
        for record in records:
            try:
                collections.append(Collection.from_record(record))
            except ValueError as exc:
                logger.warning("Skipping invalid remote collection: %s", exc)
        self._collections = collections
        self._save_collections()
        return True


__all__ = ["FavoritesStore"]
