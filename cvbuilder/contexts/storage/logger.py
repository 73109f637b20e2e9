"""
Storage context logger.

Provides logging interface for storage context with automatic [store] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[store]"


def _log_info(message: str) -> None:
    """Log info message with [store] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [store] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_document_replaced(doc) -> None:
    """Log a wholesale replacement of the stored document."""
    name = doc.personal.full_name or "(unnamed)"
    _log_debug(
        f"Stored document for {name}: {len(doc.experience)} experience, "
        f"{len(doc.education)} education, {len(doc.skills)} skills"
    )
