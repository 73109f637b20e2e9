"""
Preview Rendering

Renders a ResumeDocument as the ATS-style HTML preview.

render_preview() returns the fragment the editor shows next to the form.
render_preview_document() wraps the same fragment in a standalone page with the
stylesheet inlined; the snapshot export path rasterizes that page, so the PDF
it produces matches the preview exactly.
"""

from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument
from cvbuilder.contexts.templating.formatting import (
    EMPTY_MESSAGES,
    PLACEHOLDERS,
    SECTION_TITLES,
    build_resume_view,
)
from cvbuilder.contexts.templating.logger import log_preview_rendered
from cvbuilder.contexts.templating.registries import TemplateRegistry

STYLESHEET = "preview.css"

_registry = TemplateRegistry()


def get_registry() -> TemplateRegistry:
    return _registry


def render_preview(doc: ResumeDocument) -> str:
    """
    Render the preview fragment for a document.

    Args:
        doc: Document to render; empty fields show placeholder prompts

    Returns:
        HTML fragment rooted at <div class="cv-page ...">
    """
    view = build_resume_view(doc)
    html = _registry.get_template("preview").render(
        cv=view,
        titles=SECTION_TITLES,
        empty=EMPTY_MESSAGES,
        placeholders=PLACEHOLDERS,
    )
    log_preview_rendered(view.template, len(html))
    return html


def render_preview_document(doc: ResumeDocument, title: str = "CV Preview") -> str:
    """
    Render a standalone HTML page containing the preview.

    Args:
        doc: Document to render
        title: Page <title>

    Returns:
        Complete HTML document with the preview stylesheet inlined
    """
    html = _registry.get_template("preview_page").render(
        title=title,
        stylesheet=_registry.read_asset(STYLESHEET),
        fragment=render_preview(doc),
    )
    log_preview_rendered(doc.preferences.template, len(html), standalone=True)
    return html
