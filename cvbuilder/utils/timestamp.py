"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Current local time formatted for directory names (e.g. 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today() -> str:
    """Current local date as YYYY-MM-DD."""
    return datetime.now().strftime("%Y-%m-%d")
