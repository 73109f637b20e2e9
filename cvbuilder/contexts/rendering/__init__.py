"""
Rendering Context

Responsibilities:
- Lays out ResumeDocuments as PDF (programmatic fpdf2 drawing)
- Rasterizes the HTML preview and paginates it (snapshot fallback)
- Runs export strategies in order under one success predicate

Owns: PDF generation, page breaking, strategy ordering
Never: Modifies document content
"""

from cvbuilder.contexts.rendering.composer import CompositionResult, compose_pdf
from cvbuilder.contexts.rendering.exceptions import PdfStrategyError
from cvbuilder.contexts.rendering.strategies import (
    PDF_CONTENT_TYPE,
    PdfArtifact,
    PdfStrategy,
    ProgrammaticPdfStrategy,
    SnapshotPdfStrategy,
    is_valid_artifact,
)

__all__ = [
    "CompositionResult",
    "compose_pdf",
    "PdfStrategyError",
    "PDF_CONTENT_TYPE",
    "PdfArtifact",
    "PdfStrategy",
    "ProgrammaticPdfStrategy",
    "SnapshotPdfStrategy",
    "is_valid_artifact",
]
