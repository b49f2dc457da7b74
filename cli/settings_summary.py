"""Printable summaries for PromptHero configuration.

Updates:
  v0.1.1 - 2026-10-09 - Include remote sync and analytics status.
  v0.1.0 - 2026-09-29 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core import namespaced_key

from .utils import describe_path

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import PromptHeroSettings


def print_settings_summary(settings: PromptHeroSettings) -> None:
    """Emit a readable summary of client configuration and health checks."""
    storage_desc = (
        describe_path(settings.storage_path, expect_directory=False, allow_missing_file=True)
        if settings.storage_path is not None
        else "in memory (not persisted)"
    )
    analytics_desc = (
        describe_path(settings.analytics_path, expect_directory=False, allow_missing_file=True)
        if settings.analytics_enabled
        else "disabled"
    )
    lines = [
        "PromptHero configuration summary",
        "--------------------------------",
        f"Storage: {storage_desc}",
        f"Favorites key: {namespaced_key(settings.storage_namespace, 'favorites')}",
        f"Collections key: {namespaced_key(settings.storage_namespace, 'collections')}",
        "",
        "Remote API",
        "----------",
        f"Base URL: {settings.api_base_url}",
        f"Prompt listing: {settings.prompts_url}",
        f"Favorites sync: {'enabled' if settings.remote_sync_enabled else 'disabled'}",
        "",
        "Document",
        "--------",
        f"Listing container id: {settings.container_id}",
        f"Favorites counter id: {settings.favorites_count_id}",
        "",
        f"Analytics log: {analytics_desc}",
    ]
    print("\n".join(lines))


__all__ = ["print_settings_summary"]
