"""Unit tests for loguru setup and context loggers."""

import sys

import pytest
from loguru import logger

from tandau.contexts.guidance.logger import setup_guidance_logger
from tandau.contexts.session.logger import _log_info, setup_session_logger


@pytest.fixture(autouse=True)
def restore_default_handler():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_session_logger_writes_prefixed_messages(tmp_path):
    log_file = setup_session_logger(tmp_path / "run", store_root=tmp_path / "data")

    _log_info("Loaded plan for u-42")

    assert log_file == tmp_path / "run" / "session.log"
    content = log_file.read_text()
    assert "[session] Loaded plan for u-42" in content
    assert f"Store: {tmp_path / 'data'}" in content
    assert "Python:" in content


@pytest.mark.unit
def test_guidance_logger_provenance(tmp_path, capsys):
    log_file = setup_guidance_logger(tmp_path, provider_name="openai/gpt-4o", language="ru")

    content = log_file.read_text()
    assert log_file.name == "guide.log"
    assert "LLM provider: openai/gpt-4o" in content
    assert "Language: ru" in content
    # Console shows warnings and above only
    assert "LLM provider" not in capsys.readouterr().out
