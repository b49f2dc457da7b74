"""Settings management utilities for the PromptHero client.

Updates:
  v0.3.0 - 2026-10-09 - Add analytics log path and remote favorites API toggle.
  v0.2.1 - 2026-10-02 - Resolve listing URLs relative to the API base URL.
  v0.2.0 - 2026-09-28 - Load JSON configuration ahead of environment variables.
  v0.1.0 - 2026-09-24 - Initial pydantic-settings model for storage and DOM ids.
"""

from __future__ import annotations

import json
import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

_DOTENV_FALLBACK_PATH = ".env"

DEFAULT_STORAGE_NAMESPACE = "promptHero"
DEFAULT_API_BASE_URL = "http://localhost:3000"
DEFAULT_PROMPTS_RESOURCE = "prompts.json"
DEFAULT_CONTAINER_ID = "unifiedGrid"
DEFAULT_FAVORITES_COUNT_ID = "favoritesCount"

_ELEMENT_ID_PATTERN = re.compile(r"^[A-Za-z][\w\-:.]*$")
_NAMESPACE_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")

logger = logging.getLogger("prompt_hero.settings")


class SettingsError(Exception):
    """Raised when PromptHero configuration cannot be loaded or validated."""


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv("PROMPT_HERO_ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class PromptHeroSettings(BaseSettings):
    """Client configuration sourced from keyword overrides, JSON files, or the environment."""

    storage_path: Path | None = Field(
        default=Path("data") / "local_storage.json",
        description="JSON file backing the local key/value store (empty keeps state in memory).",
    )
    storage_namespace: str = Field(
        default=DEFAULT_STORAGE_NAMESPACE,
        description="Prefix applied to every persisted key.",
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the PromptHero REST endpoints.",
    )
    prompts_resource: str = Field(
        default=DEFAULT_PROMPTS_RESOURCE,
        description="Listing resource fetched relative to the API base URL.",
    )
    remote_sync_enabled: bool = Field(
        default=False,
        description="Push favorite toggles to the remote favorites API for signed-in users.",
    )
    container_id: str = Field(default=DEFAULT_CONTAINER_ID)
    favorites_count_id: str = Field(default=DEFAULT_FAVORITES_COUNT_ID)
    analytics_enabled: bool = Field(default=True)
    analytics_path: Path = Field(default=Path("data") / "logs" / "events.jsonl")

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": "PROMPT_HERO_",
            "case_sensitive": False,
            "populate_by_name": True,
            "extra": "ignore",
        },
    )

    @field_validator("storage_path", mode="before")
    def _normalise_storage_path(cls, value: Any) -> Path | None:
        """Expand user-relative paths; empty values disable file persistence."""
        if value in (None, ""):
            return None
        return Path(str(value)).expanduser()

    @field_validator("analytics_path", mode="before")
    def _normalise_analytics_path(cls, value: Any) -> Path:
        if value in (None, ""):
            raise ValueError("analytics_path must not be empty")
        return Path(str(value)).expanduser()

    @field_validator("storage_namespace", mode="before")
    def _validate_namespace(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            return DEFAULT_STORAGE_NAMESPACE
        if not _NAMESPACE_PATTERN.match(text):
            raise ValueError("storage_namespace may only contain letters, digits, '-' and '_'")
        return text

    @field_validator("api_base_url", mode="before")
    def _normalise_api_base_url(cls, value: Any) -> str:
        text = str(value or "").strip().rstrip("/")
        if not text:
            return DEFAULT_API_BASE_URL
        if not text.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://")
        return text

    @field_validator("prompts_resource", mode="before")
    def _normalise_prompts_resource(cls, value: Any) -> str:
        text = str(value or "").strip().lstrip("/")
        return text or DEFAULT_PROMPTS_RESOURCE

    @field_validator("container_id", "favorites_count_id", mode="before")
    def _validate_element_id(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not _ELEMENT_ID_PATTERN.match(text):
            raise ValueError(f"'{value}' is not a valid element id")
        return text

    @property
    def prompts_url(self) -> str:
        """Return the absolute listing URL."""
        if self.prompts_resource.startswith(("http://", "https://")):
            return self.prompts_resource
        return f"{self.api_base_url}/{self.prompts_resource}"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(storage_path=...)).
            2. JSON configuration file.
            3. Environment variables, then ``.env`` entries.
            4. File secrets.
        """

        def env_with_dotenv(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            prefix = "PROMPT_HERO_"
            dotenv_entries = _read_dotenv_values()
            for field_name in cls.model_fields:
                key = f"{prefix}{field_name.upper()}"
                value = os.getenv(key)
                if value is None:
                    value = dotenv_entries.get(key)
                if value is None:
                    continue
                data[field_name] = value.strip()
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_dotenv),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv("PROMPT_HERO_CONFIG_JSON")
            candidates: list[Path] = []
            if explicit_path:
                candidates.append(Path(explicit_path).expanduser())
            candidates.append(Path("config") / "config.json")

            for path in candidates:
                if not path.exists():
                    if explicit_path and path == candidates[0]:
                        raise SettingsError(f"Configuration file not found: {path}")
                    continue
                try:
                    raw_contents = path.read_text(encoding="utf-8")
                except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                    raise SettingsError(f"Unable to read configuration file: {path}") from exc
                try:
                    data = json.loads(raw_contents)
                except json.JSONDecodeError as exc:
                    raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
                if not isinstance(data, dict):
                    raise SettingsError(f"Configuration file {path} must contain a JSON object")
                mapping_data = cast("Mapping[object, Any]", data)
                known = set(cls.model_fields)
                mapped: dict[str, Any] = {}
                for raw_key, value in mapping_data.items():
                    key = str(raw_key)
                    if key in known:
                        mapped[key] = value
                    else:
                        logger.warning("Ignoring unknown configuration key '%s' in %s", key, path)
                return mapped
            return {}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptHeroSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptHeroSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid PromptHero configuration") from exc
