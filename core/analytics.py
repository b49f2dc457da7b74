"""JSONL analytics log for prompt interactions.

Updates:
  v0.1.1 - 2026-10-09 - Record ratings alongside favourite toggles.
  v0.1.0 - 2026-10-06 - Introduce JSONL tracker for favorite/copy/rate events.
"""
from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger("prompt_hero.analytics")


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class EventTracker:
    """Append prompt interaction events to a JSONL file."""
    def __init__(self, path: Path | str | None = None, *, enabled: bool = True) -> None:
        """Optionally disable tracking or override the JSONL output path."""
        self._enabled = enabled
        default_path = Path("data") / "logs" / "events.jsonl"
        self._path = Path(path) if path is not None else default_path

    @property
    def log_path(self) -> Path:
        """Return the resolved path for the event log."""
        return self._path

    @property
    def enabled(self) -> bool:
        return self._enabled

    def track(self, event_type: str, prompt_id: str, **metadata: Any) -> None:
        """Record *event_type* for *prompt_id* with optional metadata."""
        record: dict[str, Any] = {
            "timestamp": _now_iso(),
            "event": event_type,
            "prompt_id": prompt_id,
        }
        if metadata:
            record["metadata"] = metadata
        self._append(record)

    def read_events(self) -> list[dict[str, Any]]:
        """Return previously recorded events, skipping unreadable lines."""
        if not self._path.exists():
            return []
        events: list[dict[str, Any]] = []
        for line in self._path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                logger.debug("Skipping malformed analytics line in %s", self._path)
                continue
            if isinstance(payload, dict):
                events.append(payload)
        return events

    def _append(self, record: dict[str, Any]) -> None:
        if not self._enabled:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(record, ensure_ascii=False))
                handle.write("\n")
        except OSError as exc:  # pragma: no cover - filesystem specific
            logger.warning("Unable to write analytics event: %s", exc)


__all__ = ["EventTracker"]
