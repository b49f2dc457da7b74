"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.1.1 - 2026-10-07 - Provide a sample-backed catalog and blank document fixture.
  v0.1.0 - 2026-09-29 - Isolate PROMPT_HERO_* environment and working directory.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pytest import MonkeyPatch

from catalog import load_sample_prompts
from core import (
    DomBinder,
    FavoritesStore,
    MemoryStorage,
    NotificationCenter,
    PromptCatalog,
    SoupDocument,
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer configuration files and PROMPT_HERO_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("PROMPT_HERO_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PROMPT_HERO_ENV_FILE", "")
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def notifications() -> NotificationCenter:
    return NotificationCenter()


@pytest.fixture()
def store(storage: MemoryStorage, notifications: NotificationCenter) -> FavoritesStore:
    return FavoritesStore(storage, notifications=notifications)


@pytest.fixture()
def catalog(store: FavoritesStore, notifications: NotificationCenter) -> PromptCatalog:
    prompt_catalog = PromptCatalog(favorites=store, notifications=notifications)
    prompt_catalog.set_prompts(load_sample_prompts())
    return prompt_catalog


@pytest.fixture()
def document() -> SoupDocument:
    return SoupDocument.blank_page(container_id="unifiedGrid", favorites_count_id="favoritesCount")


@pytest.fixture()
def binder(
    document: SoupDocument,
    store: FavoritesStore,
    catalog: PromptCatalog,
    notifications: NotificationCenter,
) -> DomBinder:
    return DomBinder(document, store, catalog, notifications=notifications)
