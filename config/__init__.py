"""Configuration helpers for the PromptHero client.

Updates: v0.1.1 - 2026-10-02 - Export DOM id defaults alongside the settings model.
Updates: v0.1.0 - 2026-09-24 - Package scaffold.
"""

from .settings import (
    DEFAULT_API_BASE_URL,
    DEFAULT_CONTAINER_ID,
    DEFAULT_FAVORITES_COUNT_ID,
    DEFAULT_PROMPTS_RESOURCE,
    DEFAULT_STORAGE_NAMESPACE,
    PromptHeroSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_CONTAINER_ID",
    "DEFAULT_FAVORITES_COUNT_ID",
    "DEFAULT_PROMPTS_RESOURCE",
    "DEFAULT_STORAGE_NAMESPACE",
    "PromptHeroSettings",
    "SettingsError",
    "load_settings",
]
