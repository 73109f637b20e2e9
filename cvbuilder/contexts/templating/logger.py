"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_template_loaded(name: str, cached: bool) -> None:
    """Log a template lookup."""
    source = "cache" if cached else "disk"
    _log_debug(f"Template '{name}' loaded from {source}")


def log_preview_rendered(template: str, length: int, standalone: bool = False) -> None:
    """Log size of a rendered preview."""
    kind = "page" if standalone else "fragment"
    _log_debug(f"Rendered {template} preview {kind} ({length} chars)")
