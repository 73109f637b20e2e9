"""
Editor client logger.

Provides logging interface for the editor client with automatic [client] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[client]"


def _log_success(message: str) -> None:
    """Log success message with [client] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [client] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [client] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [client] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_status(message: str, tone: str) -> None:
    """Mirror the editor's status indicator into the log."""
    if tone == "error":
        _log_error(message)
    elif tone == "success":
        _log_success(message)
    else:
        _log_debug(message)


def log_export_result(result) -> None:
    """
    Log the outcome of an export.

    Args:
        result: ExportResult from ResumeEditor.export_pdf()
    """
    for strategy, error in result.errors.items():
        _log_warning(f"Export path '{strategy}' failed: {error.splitlines()[0]}")
    if result.success:
        _log_success(f"Exported with '{result.strategy}' to {result.path}")
    else:
        _log_error("Every export path failed")
