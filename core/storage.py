"""Namespaced local key/value persistence for client state.

The adapters mirror browser ``localStorage`` semantics: values are raw strings
addressed by key, reads of unknown keys return ``None``, and writes report
success instead of raising. Failures are logged and the caller keeps running
on its in-memory state.

Updates:
  v0.2.1 - 2026-10-16 - Rewrite an unreadable JSON store on the next save.
  v0.2.0 - 2026-10-03 - Write the JSON store atomically through a temporary file.
  v0.1.1 - 2026-09-29 - Add save_json helper so serialisation failures are absorbed.
  v0.1.0 - 2026-09-24 - Introduce memory and JSON-file storage backends.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, cast, runtime_checkable

from .exceptions import PersistenceError

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config.settings import PromptHeroSettings

logger = logging.getLogger("prompt_hero.storage")


@runtime_checkable
class KeyValueStorage(Protocol):
    """Protocol implemented by every local persistence backend."""

    def load(self, key: str) -> str | None:
        """Return the raw value stored under *key* or ``None``."""
        ...

    def save(self, key: str, raw: str) -> bool:
        """Store *raw* under *key*, returning ``False`` on failure."""
        ...

    def remove(self, key: str) -> bool:
        """Delete *key*, returning ``False`` on failure."""
        ...

    def save_json(self, key: str, value: Any) -> bool:
        """Serialise *value* as JSON and store it under *key*."""
        ...


def namespaced_key(namespace: str, name: str) -> str:
    """Return the persisted key for *name* inside *namespace*."""
    return f"{namespace}_{name}"


def _dump_json(key: str, value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise PersistenceError(f"Unable to serialise value for '{key}': {exc}") from exc


class _BaseStorage:
    """Shared error handling for storage backends."""

    def load(self, key: str) -> str | None:
        try:
            return self._read(key)
        except PersistenceError as exc:
            logger.error("Error loading '%s' from local storage: %s", key, exc)
            return None

    def save(self, key: str, raw: str) -> bool:
        try:
            self._write(key, raw)
        except PersistenceError as exc:
            logger.error("Error saving '%s' to local storage: %s", key, exc)
            return False
        return True

    def remove(self, key: str) -> bool:
        try:
            self._delete(key)
        except PersistenceError as exc:
            logger.error("Error removing '%s' from local storage: %s", key, exc)
            return False
        return True

    def save_json(self, key: str, value: Any) -> bool:
        try:
            raw = _dump_json(key, value)
        except PersistenceError as exc:
            logger.error("Error saving '%s' to local storage: %s", key, exc)
            return False
        return self.save(key, raw)

    def _read(self, key: str) -> str | None:  # pragma: no cover - abstract
        raise NotImplementedError

    def _write(self, key: str, raw: str) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def _delete(self, key: str) -> None:  # pragma: no cover - abstract
        raise NotImplementedError


class MemoryStorage(_BaseStorage):
    """Process-local storage used in tests and when no file store is available."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> str | None:
        return self._values.get(key)

    def _write(self, key: str, raw: str) -> None:
        self._values[key] = raw

    def _delete(self, key: str) -> None:
        self._values.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every stored key/value pair."""
        return dict(self._values)


class JsonFileStorage(_BaseStorage):
    """Persist raw values inside a single JSON object on disk."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Return the backing file path."""
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            contents = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot read {self._path}: {exc}") from exc
        if not contents.strip():
            return {}
        try:
            payload = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Invalid JSON in {self._path}") from exc
        if not isinstance(payload, dict):
            raise PersistenceError(f"{self._path} must contain a JSON object")
        entries = cast("Mapping[object, object]", payload)
        return {str(key): str(value) for key, value in entries.items() if value is not None}

    def _write_all(self, values: Mapping[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(dict(values), handle, indent=2, ensure_ascii=False)
                os.replace(temp_name, self._path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._path}: {exc}") from exc

    def _read(self, key: str) -> str | None:
        return self._read_all().get(key)

    def _write(self, key: str, raw: str) -> None:
        try:
            values = self._read_all()
        except PersistenceError as exc:
            logger.warning("Replacing unreadable storage file: %s", exc)
            values = {}
        values[key] = raw
        self._write_all(values)

    def _delete(self, key: str) -> None:
        values = self._read_all()
        if values.pop(key, None) is not None:
            self._write_all(values)


def open_storage(settings: PromptHeroSettings) -> KeyValueStorage:
    """Return the storage backend configured in *settings*."""
    if settings.storage_path is None:
        logger.warning("Local storage path not configured; client state is kept in memory")
        return MemoryStorage()
    return JsonFileStorage(settings.storage_path)


__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "namespaced_key",
    "open_storage",
]
