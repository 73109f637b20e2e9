"""
CV Builder - ATS-style resume editor with live preview and PDF export

Lets a user fill a multi-step resume form, keeps the canonical document on the
server, renders an escaped HTML preview and exports the resume as PDF.

Architecture:
- Intake Context: Sanitizes raw submissions into the canonical ResumeDocument
- Templating Context: Renders the HTML preview from a ResumeDocument
- Rendering Context: Composes PDFs (programmatic layout, HTML snapshot fallback)
- Storage Context: Holds the single current document
"""

__version__ = "0.1.0"
