"""Tests for collection creation, membership, and validation rules."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime

import pytest
from pytest import LogCaptureFixture

from core import (
    DuplicateNameError,
    FavoritesStore,
    MemoryStorage,
    NotFoundError,
    NotificationCenter,
    ValidationError,
)
from models import MAX_COLLECTION_NAME_LENGTH, Collection


def _persisted_collections(storage: MemoryStorage) -> list[dict[str, object]]:
    return json.loads(storage.snapshot()["promptHero_collections"])


def test_create_collection_returns_persisted_record(
    store: FavoritesStore,
    storage: MemoryStorage,
) -> None:
    before = datetime.now(UTC)
    collection = store.create_collection("  Writing  ", "Prompts for drafts")

    assert collection.name == "Writing"
    assert collection.description == "Prompts for drafts"
    assert collection.prompts == []
    assert collection.created_at >= before
    assert store.get_collection(collection.id) is collection

    persisted = _persisted_collections(storage)
    assert persisted[0]["id"] == collection.id
    assert persisted[0]["name"] == "Writing"
    assert persisted[0]["prompts"] == []
    assert persisted[0]["is_public"] is True


def test_create_collection_defaults_description(store: FavoritesStore) -> None:
    assert store.create_collection("Research").description == ""


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_collection_requires_name(store: FavoritesStore, name: str | None) -> None:
    with pytest.raises(ValidationError, match="Collection name is required"):
        store.create_collection(name)
    assert store.get_all_collections() == []


def test_create_collection_rejects_long_names(store: FavoritesStore) -> None:
    with pytest.raises(ValidationError):
        store.create_collection("x" * (MAX_COLLECTION_NAME_LENGTH + 1))


def test_create_collection_rejects_duplicate_trimmed_names(store: FavoritesStore) -> None:
    store.create_collection("Coding")

    with pytest.raises(DuplicateNameError, match="A collection with this name already exists"):
        store.create_collection(" Coding ")

    store.create_collection("coding")
    assert [collection.name for collection in store.get_all_collections()] == [
        "Coding",
        "coding",
    ]


def test_collection_ids_are_unique(store: FavoritesStore) -> None:
    ids = {store.create_collection(f"Collection {index}").id for index in range(20)}
    assert len(ids) == 20


def test_add_to_collection_appends_once(
    store: FavoritesStore,
    storage: MemoryStorage,
) -> None:
    collection = store.create_collection("Daily")

    store.add_to_collection(collection.id, "1")
    store.add_to_collection(collection.id, "2")
    store.add_to_collection(collection.id, "1")

    assert store.get_collection(collection.id).prompts == ["1", "2"]
    assert _persisted_collections(storage)[0]["prompts"] == ["1", "2"]


def test_collection_mutations_reject_unknown_ids(store: FavoritesStore) -> None:
    with pytest.raises(NotFoundError, match="Collection not found"):
        store.add_to_collection("missing", "1")
    with pytest.raises(NotFoundError, match="Collection not found"):
        store.remove_from_collection("missing", "1")


def test_remove_from_collection_drops_prompt(store: FavoritesStore) -> None:
    collection = store.create_collection("Daily")
    store.add_to_collection(collection.id, "1")
    store.add_to_collection(collection.id, "2")

    store.remove_from_collection(collection.id, "1")
    store.remove_from_collection(collection.id, "unknown")

    assert store.get_collection(collection.id).prompts == ["2"]


def test_delete_collection_is_idempotent(
    store: FavoritesStore,
    storage: MemoryStorage,
) -> None:
    keep = store.create_collection("Keep")
    drop = store.create_collection("Drop")

    store.delete_collection(drop.id)
    store.delete_collection("never-existed")

    assert store.get_collection(drop.id) is None
    assert [collection.id for collection in store.get_all_collections()] == [keep.id]
    assert [record["id"] for record in _persisted_collections(storage)] == [keep.id]


def test_get_all_collections_returns_snapshot(store: FavoritesStore) -> None:
    store.create_collection("One")
    snapshot = store.get_all_collections()
    snapshot.clear()

    assert len(store.get_all_collections()) == 1


def test_toggle_prompt_in_collection_flips_membership(
    store: FavoritesStore,
    notifications: NotificationCenter,
) -> None:
    collection = store.create_collection("Toggle")

    assert store.toggle_prompt_in_collection(collection.id, "3") is True
    assert "3" in store.get_collection(collection.id)
    assert store.toggle_prompt_in_collection(collection.id, "3") is False
    assert store.get_collection(collection.id).prompts == []
    assert [item.message for item in notifications.history()] == [
        "Added to collection",
        "Removed from collection",
    ]


def test_invalid_collection_entries_are_skipped(caplog: LogCaptureFixture) -> None:
    valid = Collection(id="c1", name="Valid", prompts=["1"]).to_record()
    storage = MemoryStorage(
        {"promptHero_collections": json.dumps([valid, {"name": "No id"}, "junk"])}
    )

    with caplog.at_level(logging.WARNING, logger="prompt_hero.favorites"):
        store = FavoritesStore(storage)

    collections = store.get_all_collections()
    assert [collection.id for collection in collections] == ["c1"]
    assert collections[0].prompts == ["1"]
    assert "Skipping" in caplog.text


@pytest.mark.parametrize("prompt_id", ["", None, 0])
def test_toggle_prompt_in_collection_ignores_empty_ids(
    store: FavoritesStore,
    notifications: NotificationCenter,
    prompt_id: object,
) -> None:
    collection = store.create_collection("Empty ids")

    assert store.toggle_prompt_in_collection(collection.id, prompt_id) is False
    assert store.get_collection(collection.id).prompts == []
    assert notifications.history() == ()
