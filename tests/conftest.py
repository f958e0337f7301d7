from pathlib import Path

import pytest

RESPONSES_PATH = Path(__file__).parent / "fixtures" / "responses"


@pytest.fixture(autouse=True)
def events_file(tmp_path, monkeypatch):
    """Keep session events written during a test inside its tmp_path."""
    path = tmp_path / "session_events.log"
    monkeypatch.setattr("tandau.utils.event_logging.SESSION_EVENTS_FILE", path)
    return path


@pytest.fixture
def load_response():
    def _load(name: str) -> str:
        return (RESPONSES_PATH / name).read_text(encoding="utf-8")

    return _load
