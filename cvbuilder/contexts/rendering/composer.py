"""
PDF Composition

Runs export strategies in order and returns the first valid PDF.

Strategy failures never propagate: each one is logged and recorded against the
strategy's name, and the next strategy is tried. The outcome is a tagged
CompositionResult the caller inspects.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument
from cvbuilder.contexts.rendering.logger import _log_debug, log_composition_result, log_strategy_failed
from cvbuilder.contexts.rendering.strategies import (
    PdfStrategy,
    ProgrammaticPdfStrategy,
    SnapshotPdfStrategy,
)
from cvbuilder.utils.pdf_processing import page_count


@dataclass
class CompositionResult:
    """
    Result of PDF composition.

    Attributes:
        success: Whether any strategy produced a valid PDF
        pdf: PDF bytes (empty if failed)
        strategy: Name of the strategy that succeeded (None if failed)
        errors: Error message per failed strategy, in the order tried
        page_count: Number of pages in the PDF (None if not available)
        time_s: Total time spent across strategies
    """

    success: bool
    pdf: bytes = b""
    strategy: Optional[str] = None
    errors: Dict[str, str] = field(default_factory=dict)
    page_count: Optional[int] = None
    time_s: float = 0.0


def default_strategies() -> List[PdfStrategy]:
    """Programmatic drawing first, HTML snapshot as the fallback."""
    return [ProgrammaticPdfStrategy(), SnapshotPdfStrategy()]


def compose_pdf(
    doc: ResumeDocument,
    strategies: Optional[Sequence[PdfStrategy]] = None,
) -> CompositionResult:
    """
    Compose a PDF for a document.

    Args:
        doc: Document to export
        strategies: Strategies in preference order. Defaults to
                    default_strategies()

    Returns:
        CompositionResult (never raises for strategy failures)
    """
    if strategies is None:
        strategies = default_strategies()

    start = time.time()
    errors: Dict[str, str] = {}
    result = CompositionResult(success=False)

    for strategy in strategies:
        _log_debug(f"Trying PDF strategy '{strategy.name}'")
        try:
            artifact = strategy.render(doc)
        except Exception as e:
            errors[strategy.name] = str(e) or type(e).__name__
            log_strategy_failed(strategy.name, errors[strategy.name])
            continue

        result = CompositionResult(
            success=True,
            pdf=artifact.content,
            strategy=strategy.name,
            page_count=page_count(artifact.content),
        )
        break

    result.errors = errors
    result.time_s = time.time() - start
    log_composition_result(result)
    return result
