"""
PDF Export Strategies

An export path is a PdfStrategy. Every strategy is judged by the same success
predicate (is_valid_artifact): a non-empty payload declared as application/pdf.
Callers hold an ordered list of strategies and take the first valid artifact.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument
from cvbuilder.contexts.rendering.exceptions import PdfStrategyError
from cvbuilder.contexts.rendering.pdf_layout import build_resume_pdf
from cvbuilder.contexts.rendering.snapshot import PlaywrightRasterizer, snapshot_to_pdf
from cvbuilder.contexts.templating.preview import render_preview_document

PDF_CONTENT_TYPE = "application/pdf"


@dataclass
class PdfArtifact:
    """A produced file plus the content type its producer declared."""

    content: bytes
    content_type: str = PDF_CONTENT_TYPE
    strategy: str = ""


def is_valid_artifact(artifact: Optional[PdfArtifact]) -> bool:
    """
    Uniform success predicate for every export path.

    Content type parameters (e.g. "; charset=binary") are ignored.
    """
    if artifact is None or not artifact.content:
        return False
    media_type = artifact.content_type.split(";")[0].strip().lower()
    return media_type == PDF_CONTENT_TYPE


class PdfStrategy(ABC):
    """
    Abstract base for export paths.

    Subclasses must:
    - Set the name class attribute (used in logs and error reports)
    - Implement _produce(), raising PdfStrategyError or letting library
      errors propagate on failure
    """

    name: str

    @abstractmethod
    def _produce(self, doc: ResumeDocument) -> PdfArtifact:
        """Produce an artifact without validating it. Implemented by subclasses."""
        pass

    def render(self, doc: ResumeDocument) -> PdfArtifact:
        """
        Produce and validate an artifact.

        Raises:
            PdfStrategyError: If the artifact fails the success predicate
        """
        artifact = self._produce(doc)
        if not is_valid_artifact(artifact):
            content_type = artifact.content_type if artifact is not None else None
            size = len(artifact.content) if artifact is not None else 0
            raise PdfStrategyError(
                self.name,
                f"Invalid artifact ({size} bytes)",
                content_type=content_type,
            )
        artifact.strategy = self.name
        return artifact


class ProgrammaticPdfStrategy(PdfStrategy):
    """Draws the document with fpdf2 (selectable text, no browser needed)."""

    name = "programmatic"

    def _produce(self, doc: ResumeDocument) -> PdfArtifact:
        return PdfArtifact(content=build_resume_pdf(doc))


class SnapshotPdfStrategy(PdfStrategy):
    """Rasterizes the HTML preview and paginates the image."""

    name = "snapshot"

    def __init__(self, rasterizer=None):
        """
        Args:
            rasterizer: Object with capture(html) -> Snapshot. Defaults to
                        PlaywrightRasterizer (headless Chromium)
        """
        self.rasterizer = rasterizer or PlaywrightRasterizer()

    def _produce(self, doc: ResumeDocument) -> PdfArtifact:
        html = render_preview_document(doc)
        return PdfArtifact(content=snapshot_to_pdf(html, self.rasterizer))
