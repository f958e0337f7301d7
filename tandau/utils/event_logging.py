"""
Session event logging utilities for Tandau (Tier 2 logging).

Appends one JSON object per line to the session event log so that the
history of a user's career plan (test submitted, recommendations updated,
assistant failures) can be followed across runs.

For detailed within-context logging (Tier 1), use tandau.utils.logger instead.

Usage:
    from tandau.utils.event_logging import log_session_event, get_recent_events

    log_session_event(
        event_type="recommendations_updated",
        user_id="u-42",
        source="session",
        categories=["professions", "courses"],
    )
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tandau.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
SESSION_EVENTS_FILE = Path(os.getenv("SESSION_EVENTS_FILE", LOGS_PATH / "session_events.log"))


def log_session_event(
    event_type: str,
    user_id: str,
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> None:
    """
    Log an event to the session event log (JSON Lines).

    Args:
        event_type: Type of event (e.g., "test_submitted", "recommendations_updated")
        user_id: Identity of the user the event belongs to
        source: Event source (e.g., "session", "guide", "cli")
        events_file: Override for SESSION_EVENTS_FILE
        **extra_fields: Additional event-specific fields (must be JSON serializable)
    """
    if events_file is None:
        events_file = SESSION_EVENTS_FILE
    events_file = Path(events_file)
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "user_id": user_id,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, ensure_ascii=False) + "\n")


def get_recent_events(
    n: int = 10,
    user_id: Optional[str] = None,
    event_type: Optional[str] = None,
    events_file: Optional[Path] = None,
) -> list[dict]:
    """
    Get the last n events from the session log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        user_id: Filter to only events for this user (optional)
        event_type: Filter to only events of this type (optional)
        events_file: Override for SESSION_EVENTS_FILE

    Returns:
        List of event dicts (most recent last)
    """
    if events_file is None:
        events_file = SESSION_EVENTS_FILE
    events_file = Path(events_file)
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if user_id:
        events = [e for e in events if e.get("user_id") == user_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
