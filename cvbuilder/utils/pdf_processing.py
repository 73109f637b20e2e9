"""
PDF inspection utilities.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_text: Plain text of every page, for checking composed output.
    is_pdf_bytes: Cheap signature check on a payload.
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

import pdfplumber
from PyPDF2 import PdfReader

PdfSource = Union[bytes, bytearray, Path, str]


def _open_source(source: PdfSource):
    if isinstance(source, (bytes, bytearray)):
        return BytesIO(bytes(source))
    return str(source)


def is_pdf_bytes(data: Optional[bytes]) -> bool:
    """True when data is non-empty and starts with the %PDF signature."""
    return bool(data) and bytes(data[:5]) == b"%PDF-"


def page_count(source: PdfSource) -> Optional[int]:
    """Get page count from PDF bytes or path, or None if unreadable."""
    try:
        reader = PdfReader(_open_source(source))
        return len(reader.pages)
    except Exception:
        return None


def extract_text(source: PdfSource) -> str:
    """
    Extract text from every page of a PDF.

    Args:
        source: PDF bytes or path to a PDF file

    Returns:
        Page texts joined by newlines (pages without text contribute nothing)
    """
    with pdfplumber.open(_open_source(source)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(text for text in pages if text)
