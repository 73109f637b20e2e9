"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from typing import List

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_fallback_fields(fields: List[str]) -> None:
    """Log which fields kept their previous value during normalization."""
    if fields:
        _log_debug(f"Kept previous value for {len(fields)} fields: {', '.join(fields)}")
    else:
        _log_debug("All fields taken from submission")


def log_malformed_submission(raw) -> None:
    """Log a submission that is not a record at all."""
    _log_warning(
        f"Submission is {type(raw).__name__}, not a record; keeping previous document"
    )
