"""Factories for wiring PromptHero client services from validated settings.

Updates:
  v0.2.0 - 2026-10-09 - Attach the remote favorites client when sync is enabled.
  v0.1.0 - 2026-09-28 - Build storage, store, catalog, and binder from settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .analytics import EventTracker
from .binder import DomBinder
from .catalog import PromptCatalog
from .dom import SoupDocument
from .favorites import FavoritesStore
from .notifications import NotificationCenter
from .remote import FavoritesApiClient
from .storage import open_storage

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Callable

    import httpx

    from config import PromptHeroSettings

    from .dom import DocumentPort
    from .storage import KeyValueStorage

factory_logger = logging.getLogger("prompt_hero.factory")


@dataclass(slots=True)
class PromptHeroClient:
    """Bundle of services sharing one storage, document, and notification hub."""

    settings: PromptHeroSettings
    storage: KeyValueStorage
    notifications: NotificationCenter
    store: FavoritesStore
    catalog: PromptCatalog
    document: DocumentPort
    binder: DomBinder
    tracker: EventTracker


def build_client(
    settings: PromptHeroSettings,
    *,
    storage: KeyValueStorage | None = None,
    document: DocumentPort | None = None,
    notifications: NotificationCenter | None = None,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
    remote_client_factory: Callable[[], httpx.Client] | None = None,
) -> PromptHeroClient:
    """Return a fully wired :class:`PromptHeroClient` for *settings*."""
    notification_hub = notifications or NotificationCenter()
    resolved_storage = storage if storage is not None else open_storage(settings)

    remote_client = None
    if settings.remote_sync_enabled:
        remote_client = FavoritesApiClient(
            settings.api_base_url,
            client_factory=remote_client_factory,
        )
        factory_logger.info("Remote favorites sync enabled against %s", settings.api_base_url)

    store = FavoritesStore(
        resolved_storage,
        namespace=settings.storage_namespace,
        notifications=notification_hub,
        remote_client=remote_client,
    )
    catalog = PromptCatalog.from_settings(
        settings,
        favorites=store,
        notifications=notification_hub,
        client_factory=client_factory,
    )
    resolved_document = document or SoupDocument.blank_page(
        container_id=settings.container_id,
        favorites_count_id=settings.favorites_count_id,
    )
    tracker = EventTracker(settings.analytics_path, enabled=settings.analytics_enabled)
    binder = DomBinder(
        resolved_document,
        store,
        catalog,
        container_id=settings.container_id,
        favorites_count_id=settings.favorites_count_id,
        tracker=tracker,
        notifications=notification_hub,
    )
    return PromptHeroClient(
        settings=settings,
        storage=resolved_storage,
        notifications=notification_hub,
        store=store,
        catalog=catalog,
        document=resolved_document,
        binder=binder,
        tracker=tracker,
    )


__all__ = ["PromptHeroClient", "build_client"]
