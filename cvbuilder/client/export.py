"""
Client-side PDF export.

ServerPdfStrategy downloads the server's programmatic PDF and holds it to the
same success predicate as every other strategy, so a 500, an HTML error page
or an empty body all count as failures and let the editor fall back to the
snapshot path.

ExportSession owns the exported files. Each new export releases the previous
file first, so repeated exports never accumulate on disk.
"""

import os
import re
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import requests
from dotenv import load_dotenv

from cvbuilder.client.logger import _log_debug
from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument
from cvbuilder.contexts.rendering.exceptions import PdfStrategyError
from cvbuilder.contexts.rendering.strategies import PdfArtifact, PdfStrategy

load_dotenv()

CVBUILDER_BASE_URL = os.getenv("CVBUILDER_BASE_URL", "http://localhost:3000")
REQUEST_TIMEOUT_S = float(os.getenv("REQUEST_TIMEOUT_S", "15"))
EXPORTS_PATH = os.getenv("EXPORTS_PATH")

DEFAULT_FILE_BASE = "cv-builder"
UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9\-]+", re.IGNORECASE)


def safe_file_name(full_name: str) -> str:
    """
    File base name derived from the person's name.

    Example:
        >>> safe_file_name("Jane O'Neil")
        'Jane-O-Neil'
        >>> safe_file_name("")
        'cv-builder'
    """
    return UNSAFE_FILENAME_CHARS.sub("-", full_name or DEFAULT_FILE_BASE)


class ServerPdfStrategy(PdfStrategy):
    """Fetches GET /api/cv/pdf from a running server."""

    name = "server"

    def __init__(
        self,
        base_url: str = CVBUILDER_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout_s: float = REQUEST_TIMEOUT_S,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout_s = timeout_s

    def _produce(self, doc: ResumeDocument) -> PdfArtifact:
        # The server renders its own stored document; doc is not sent
        url = f"{self.base_url}/api/cv/pdf"
        try:
            response = self.session.get(url, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise PdfStrategyError(self.name, f"Server unavailable: {e}") from e

        content_type = response.headers.get("content-type", "")
        if not response.ok:
            raise PdfStrategyError(
                self.name,
                "Server could not generate the PDF",
                status_code=response.status_code,
                content_type=content_type,
            )
        return PdfArtifact(content=response.content, content_type=content_type)


class ExportSession:
    """
    Directory of exported PDFs holding at most one file at a time.

    Usage:
        with ExportSession() as exports:
            path = exports.write(pdf_bytes, "jane-doe.pdf")
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Args:
            base_dir: Parent for the session directory. Defaults to
                      EXPORTS_PATH, or the system temp directory
        """
        if base_dir is None and EXPORTS_PATH:
            base_dir = Path(EXPORTS_PATH)
        if base_dir is not None:
            Path(base_dir).mkdir(parents=True, exist_ok=True)
        self.directory = Path(tempfile.mkdtemp(prefix="cvbuilder-export-", dir=base_dir))
        self.current: Optional[Path] = None

    def release(self) -> None:
        """Delete the current export, if any."""
        if self.current is not None:
            self.current.unlink(missing_ok=True)
            _log_debug(f"Released previous export {self.current.name}")
            self.current = None

    def write(self, content: bytes, filename: str) -> Path:
        """Release the previous export, then write content as the current one."""
        self.release()
        path = self.directory / filename
        path.write_bytes(content)
        self.current = path
        return path

    def close(self) -> None:
        """Release the current export and remove the session directory."""
        self.release()
        shutil.rmtree(self.directory, ignore_errors=True)

    def __enter__(self) -> "ExportSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


@dataclass
class ExportResult:
    """
    Result of an editor export.

    Attributes:
        success: Whether any path produced a PDF
        path: Written PDF (None if failed)
        strategy: Name of the path that succeeded (None if failed)
        errors: Error message per failed path, in the order tried
        page_count: Number of pages in the PDF (None if not available)
    """

    success: bool
    path: Optional[Path] = None
    strategy: Optional[str] = None
    errors: Dict[str, str] = field(default_factory=dict)
    page_count: Optional[int] = None
