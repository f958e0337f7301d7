"""
Guidance context logger.

Provides logging interface for guidance context with automatic [guide] prefix.
All guidance modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from tandau.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[guide]"


def setup_guidance_logger(
    log_dir: Optional[Path] = None, provider_name: Optional[str] = None, language: str = ""
) -> Path:
    """
    Setup logger for guidance context.

    Configures loguru with provenance tracking and the assistant in use.

    Args:
        log_dir: Directory for this chat session
        provider_name: LLM provider name (e.g., "openai/gpt-4o")
        language: Questionnaire and heading language

    Returns:
        Path to log file

    Example:
        from tandau.contexts.guidance.logger import setup_guidance_logger, _log_info

        log_file = setup_guidance_logger(log_dir, provider_name="openai/gpt-4o")
        _log_info("Starting chat...")
    """
    return _setup_logger(
        context_name="guide",
        log_dir=log_dir,
        extra_provenance={"LLM provider": provider_name, "Language": language},
        console_level="WARNING",
    )


def _log_info(message: str) -> None:
    """Log info message with [guide] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [guide] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [guide] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [guide] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [guide] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
