"""Tests for the remote favorites API client."""

from __future__ import annotations

import httpx
import pytest

from core import FavoritesApiClient, TransportError


def _client(handler) -> FavoritesApiClient:
    transport = httpx.MockTransport(handler)
    return FavoritesApiClient(
        "http://api.test",
        client_factory=lambda: httpx.Client(transport=transport, base_url="http://api.test"),
    )


def test_fetch_favorites_extracts_prompt_ids() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/favorites"
        return httpx.Response(
            200,
            json={"favorites": [{"prompt_id": "1"}, {"prompt_id": None}, "junk", {"prompt_id": 7}]},
        )

    assert _client(handler).fetch_favorites("user-1") == ["1", "7"]


def test_fetch_collections_requires_collections_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    with pytest.raises(TransportError, match="collections"):
        _client(handler).fetch_collections("user-1")


def test_http_errors_carry_status_code() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "Unauthorized"})

    with pytest.raises(TransportError) as excinfo:
        _client(handler).add_favorite("user-1", "1")

    assert excinfo.value.status_code == 401


def test_connection_errors_become_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(TransportError) as excinfo:
        _client(handler).remove_favorite("user-1", "1")

    assert excinfo.value.status_code is None


def test_empty_success_body_is_accepted() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    _client(handler).remove_favorite("user-1", "1")
