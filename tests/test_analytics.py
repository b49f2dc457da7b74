"""Tests for the JSONL interaction event log."""

from __future__ import annotations

from pathlib import Path

from core import EventTracker


def test_track_appends_jsonl_records(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "events.jsonl"
    tracker = EventTracker(path)

    tracker.track("favorite", "1", action="add")
    tracker.track("copy", "2")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    events = tracker.read_events()
    assert events[0]["event"] == "favorite"
    assert events[0]["metadata"] == {"action": "add"}
    assert "metadata" not in events[1]
    assert events[1]["timestamp"]


def test_disabled_tracker_writes_nothing(tmp_path: Path) -> None:
    path = tmp_path / "events.jsonl"
    tracker = EventTracker(path, enabled=False)

    tracker.track("rate", "1", rating=4)

    assert tracker.enabled is False
    assert not path.exists()
    assert tracker.read_events() == []


def test_read_events_skips_malformed_lines(tmp_path: Path) -> None:
    path = tmp_path / "events.jsonl"
    path.write_text('{"event": "copy", "prompt_id": "1"}\nnot json\n\n[1, 2]\n', encoding="utf-8")

    assert EventTracker(path).read_events() == [{"event": "copy", "prompt_id": "1"}]


def test_default_path_is_relative_to_working_directory() -> None:
    assert EventTracker().log_path == Path("data") / "logs" / "events.jsonl"
