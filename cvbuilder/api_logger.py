"""
HTTP API logger.

Provides logging interface for cvbuilder.api with automatic [api] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[api]"


def _log_info(message: str) -> None:
    """Log info message with [api] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [api] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def log_invalid_json() -> None:
    _log_warning("Request body is not valid JSON; keeping previous document")


def log_static_assets(public_dir) -> None:
    _log_info(f"Serving static assets from {public_dir}")


def log_pdf_unavailable(status_code: int, reason: str) -> None:
    """Log a PDF request answered with an error status."""
    _log_warning(f"GET /api/cv/pdf -> {status_code}: {reason}")
