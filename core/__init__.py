"""Core service layer for the PromptHero client.

Updates:
  v0.3.0 - 2026-10-09 - Export the remote favorites client and analytics tracker.
  v0.2.0 - 2026-10-07 - Export the DOM binder and document adapter.
  v0.1.0 - 2026-09-28 - Surface storage, favorites store, and prompt catalog.
"""

from .analytics import EventTracker
from .binder import DomBinder
from .catalog import PromptCatalog, PromptFilters, sort_prompts
from .dom import DocumentPort, SoupDocument
from .exceptions import (
    DuplicateNameError,
    NotFoundError,
    PersistenceError,
    PromptHeroError,
    TransportError,
    ValidationError,
)
from .factory import PromptHeroClient, build_client
from .favorites import FavoritesStore
from .notifications import (
    Notification,
    NotificationCenter,
    NotificationLevel,
    NotificationSubscription,
)
from .remote import FavoritesApiClient, RemoteUser
from .rendering import generate_stars
from .storage import (
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    namespaced_key,
    open_storage,
)

__all__ = [
    "DocumentPort",
    "DomBinder",
    "DuplicateNameError",
    "EventTracker",
    "FavoritesApiClient",
    "FavoritesStore",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "NotFoundError",
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "NotificationSubscription",
    "PersistenceError",
    "PromptCatalog",
    "PromptFilters",
    "PromptHeroClient",
    "PromptHeroError",
    "RemoteUser",
    "SoupDocument",
    "TransportError",
    "ValidationError",
    "build_client",
    "generate_stars",
    "namespaced_key",
    "open_storage",
    "sort_prompts",
]
