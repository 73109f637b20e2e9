"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_strategy_failed(strategy: str, error: str) -> None:
    """Log a strategy failure that the next strategy may recover from."""
    _log_warning(f"PDF strategy '{strategy}' failed: {error.splitlines()[0] if error else 'unknown error'}")
    _log_debug(f"  Full error: {error}")


def log_page_breaks(breaks, total_height: int) -> None:
    """Log where a snapshot is cut into pages."""
    _log_debug(f"Snapshot of {total_height}px split at {list(breaks)}")


def log_composition_result(result) -> None:
    """
    Log composition result.

    Args:
        result: CompositionResult from compose_pdf()
    """
    if result.success:
        pages = result.page_count if result.page_count is not None else "?"
        _log_success(
            f"PDF composed with '{result.strategy}': {len(result.pdf)} bytes, "
            f"{pages} pages ({result.time_s:.2f}s)"
        )
    else:
        _log_error(f"PDF composition failed ({result.time_s:.2f}s)")
        for strategy, error in result.errors.items():
            _log_error(f"  {strategy}: {error}")
