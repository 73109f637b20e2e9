"""Custom exceptions for the rendering context."""

from typing import Optional


class PdfStrategyError(Exception):
    """
    Exception raised when one PDF strategy fails to produce a usable file.

    Attributes:
        strategy: Name of the strategy that failed (e.g., 'programmatic')
        message: Error description
        status_code: HTTP status, when the strategy called a server
        content_type: Declared content type of the rejected payload
    """

    def __init__(
        self,
        strategy: str,
        message: str,
        status_code: Optional[int] = None,
        content_type: Optional[str] = None,
    ):
        self.strategy = strategy
        self.message = message
        self.status_code = status_code
        self.content_type = content_type

        parts = [f"[{strategy}] {message}"]
        if status_code is not None:
            parts.append(f"HTTP status: {status_code}")
        if content_type is not None:
            parts.append(f"Content type: {content_type or '(none)'}")

        super().__init__("\n".join(parts))
