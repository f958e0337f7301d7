"""Unit tests for session event logging and timestamps."""

import json
from datetime import datetime, timedelta

import pytest

from tandau.utils.event_logging import get_recent_events, log_session_event
from tandau.utils.timestamp import format_timestamp, session_stamp


@pytest.mark.unit
def test_log_session_event_writes_json_lines(events_file):
    log_session_event("test_submitted", user_id="u-1", source="session", answers=8)
    log_session_event("recommendations_updated", user_id="u-1", source="session")

    lines = events_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2

    event = json.loads(lines[0])
    assert event["event_type"] == "test_submitted"
    assert event["user_id"] == "u-1"
    assert event["source"] == "session"
    assert event["answers"] == 8
    assert "timestamp" in event


@pytest.mark.unit
def test_events_keep_non_ascii_text(events_file):
    log_session_event("assistant_failed", user_id="u-1", source="guide", error="Ошибка")
    assert "Ошибка" in events_file.read_text(encoding="utf-8")


@pytest.mark.unit
def test_get_recent_events_filters(events_file):
    for user_id in ["u-1", "u-2", "u-1"]:
        log_session_event("test_submitted", user_id=user_id, source="session")
    log_session_event("recommendations_updated", user_id="u-1", source="session")

    assert len(get_recent_events(user_id="u-1")) == 3
    assert len(get_recent_events(user_id="u-1", event_type="test_submitted")) == 2
    assert get_recent_events(n=1)[0]["event_type"] == "recommendations_updated"


@pytest.mark.unit
def test_get_recent_events_skips_malformed_lines(events_file):
    log_session_event("test_submitted", user_id="u-1", source="session")
    with open(events_file, "a", encoding="utf-8") as f:
        f.write("not json\n")

    assert len(get_recent_events()) == 1


@pytest.mark.unit
def test_get_recent_events_missing_file(tmp_path):
    assert get_recent_events(events_file=tmp_path / "none.log") == []


@pytest.mark.unit
def test_explicit_events_file(tmp_path, events_file):
    other = tmp_path / "other" / "events.log"
    log_session_event("test_submitted", user_id="u-1", source="cli", events_file=other)

    assert other.exists()
    assert not events_file.exists()


@pytest.mark.unit
def test_session_stamp_format():
    datetime.strptime(session_stamp(), "%Y%m%d_%H%M%S")


@pytest.mark.unit
def test_format_timestamp_relative():
    five_minutes_ago = (datetime.now() - timedelta(minutes=5)).isoformat()
    assert "ago" in format_timestamp(five_minutes_ago, relative=True)
