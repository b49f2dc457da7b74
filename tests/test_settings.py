"""Tests for configuration loading and validation logic.

Updates:
  v0.1.1 - 2026-10-02 - Cover listing URL resolution against the API base URL.
  v0.1.0 - 2026-09-28 - Cover JSON/env precedence and validation errors.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from pytest import LogCaptureFixture, MonkeyPatch

from config import PromptHeroSettings, SettingsError, load_settings


def test_defaults_without_configuration() -> None:
    """Ensure defaults apply when no JSON, env, or .env values exist."""
    settings = load_settings()

    assert isinstance(settings, PromptHeroSettings)
    assert settings.storage_path == Path("data") / "local_storage.json"
    assert settings.storage_namespace == "promptHero"
    assert settings.prompts_url == "http://localhost:3000/prompts.json"
    assert settings.container_id == "unifiedGrid"
    assert settings.favorites_count_id == "favoritesCount"
    assert settings.remote_sync_enabled is False
    assert settings.analytics_enabled is True


def test_load_settings_reads_json_and_env(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Ensure JSON configuration is loaded and environment fills missing values."""
    config_path = tmp_path / "settings.json"
    config_path.write_text(
        json.dumps({"storage_namespace": "fromJson", "api_base_url": "https://json.example"}),
        encoding="utf-8",
    )
    monkeypatch.setenv("PROMPT_HERO_CONFIG_JSON", str(config_path))
    monkeypatch.setenv("PROMPT_HERO_STORAGE_NAMESPACE", "fromEnv")
    monkeypatch.setenv("PROMPT_HERO_REMOTE_SYNC_ENABLED", "true")

    settings = load_settings()

    # JSON is higher precedence for overlapping keys
    assert settings.storage_namespace == "fromJson"
    assert settings.api_base_url == "https://json.example"
    assert settings.remote_sync_enabled is True


def test_explicit_overrides_win(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPT_HERO_STORAGE_NAMESPACE", "fromEnv")

    assert load_settings(storage_namespace="explicit").storage_namespace == "explicit"


def test_default_config_file_is_read_from_working_directory(
    tmp_path: Path,
    caplog: LogCaptureFixture,
) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(
        json.dumps({"container_id": "grid", "unknown_key": 1}),
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="prompt_hero.settings"):
        settings = load_settings()

    assert settings.container_id == "grid"
    assert "unknown_key" in caplog.text


def test_dotenv_file_is_used_when_env_missing(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("PROMPT_HERO_PROMPTS_RESOURCE=api/prompts\n", encoding="utf-8")
    monkeypatch.setenv("PROMPT_HERO_ENV_FILE", str(env_file))

    assert load_settings().prompts_url == "http://localhost:3000/api/prompts"


def test_empty_storage_path_disables_file_storage() -> None:
    assert load_settings(storage_path="").storage_path is None


def test_missing_explicit_config_file_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PROMPT_HERO_CONFIG_JSON", str(tmp_path / "missing.json"))

    with pytest.raises(SettingsError, match="not found"):
        load_settings()


def test_invalid_json_config_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "broken.json"
    config_path.write_text("{broken", encoding="utf-8")
    monkeypatch.setenv("PROMPT_HERO_CONFIG_JSON", str(config_path))

    with pytest.raises(SettingsError, match="Invalid JSON"):
        load_settings()


@pytest.mark.parametrize(
    "overrides",
    [
        {"api_base_url": "ftp://example.com"},
        {"storage_namespace": "has spaces"},
        {"container_id": "1-starts-with-digit"},
    ],
)
def test_invalid_values_raise_settings_error(overrides: dict[str, str]) -> None:
    with pytest.raises(SettingsError):
        load_settings(**overrides)
