"""
Session context logger.

Provides logging interface for session context with automatic [session] prefix.
All session modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from tandau.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[session]"


def setup_session_logger(log_dir: Optional[Path] = None, store_root: Optional[Path] = None) -> Path:
    """
    Setup logger for session context.

    Args:
        log_dir: Directory for this logging session
        store_root: Document store location, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="session",
        log_dir=log_dir,
        extra_provenance={"Store": store_root} if store_root else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [session] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [session] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [session] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [session] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [session] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
