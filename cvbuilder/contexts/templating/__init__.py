"""
Templating Context

Turns a ResumeDocument into display form: the shared view model with
placeholder rules (formatting.py) and the escaped HTML preview (preview.py).
The rendering context reuses the same view model for PDF layout.
"""

from cvbuilder.contexts.templating.formatting import ResumeView, build_resume_view
from cvbuilder.contexts.templating.preview import render_preview, render_preview_document

__all__ = ["ResumeView", "build_resume_view", "render_preview", "render_preview_document"]
