"""HTTPX client for the per-user favorites and collections endpoints.

Updates:
  v0.1.1 - 2026-10-10 - Map non-2xx responses to TransportError with status codes.
  v0.1.0 - 2026-10-09 - Add favorites push/pull and collections pull helpers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from .exceptions import TransportError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("prompt_hero.remote")


@dataclass(frozen=True, slots=True)
class RemoteUser:
    """Signed-in user whose favorites are mirrored to the remote API."""

    id: str
    username: str | None = None


@dataclass(slots=True)
class FavoritesApiClient:
    """Synchronous client for ``/api/favorites`` and ``/api/collections``."""

    base_url: str
    client_factory: Callable[[], httpx.Client] | None = None

    def _open_client(self) -> tuple[httpx.Client, bool]:
        if self.client_factory is None:
            return httpx.Client(base_url=self.base_url), True
        return self.client_factory(), False

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        client, manage_client = self._open_client()
        try:
            response = client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"{method} {path} returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        finally:
            if manage_client:
                client.close()
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"{method} {path} returned invalid JSON") from exc

    def add_favorite(self, user_id: str, prompt_id: str) -> None:
        """Record *prompt_id* as a favorite of *user_id*."""
        self._request(
            "POST",
            "/api/favorites",
            json={"user_id": user_id, "prompt_id": prompt_id},
        )

    def remove_favorite(self, user_id: str, prompt_id: str) -> None:
        """Remove *prompt_id* from the favorites of *user_id*."""
        self._request(
            "DELETE",
            "/api/favorites",
            params={"user_id": user_id, "prompt_id": prompt_id},
        )

    def fetch_favorites(self, user_id: str) -> list[str]:
        """Return the prompt identifiers favorited by *user_id*."""
        payload = self._request("GET", "/api/favorites", params={"user_id": user_id})
        entries = payload.get("favorites") if isinstance(payload, dict) else None
        if not isinstance(entries, list):
            raise TransportError("Favorites response is missing the 'favorites' list")
        prompt_ids: list[str] = []
        for entry in entries:
            if isinstance(entry, dict) and entry.get("prompt_id") not in (None, ""):
                prompt_ids.append(str(entry["prompt_id"]))
        return prompt_ids

    def fetch_collections(self, user_id: str) -> list[dict[str, Any]]:
        """Return raw collection records owned by *user_id*."""
        payload = self._request("GET", "/api/collections", params={"user_id": user_id})
        entries = payload.get("collections") if isinstance(payload, dict) else None
        if not isinstance(entries, list):
            raise TransportError("Collections response is missing the 'collections' list")
        return [entry for entry in entries if isinstance(entry, dict)]


__all__ = ["FavoritesApiClient", "RemoteUser"]
