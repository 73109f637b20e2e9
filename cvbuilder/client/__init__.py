"""
Editor Client

Drives a running server the way the browser editor does: debounced saves,
offline fallback on load, and PDF export with snapshot fallback.
"""

from cvbuilder.client.editor import ResumeEditor, SaveStatus
from cvbuilder.client.export import ExportResult, ExportSession, ServerPdfStrategy
from cvbuilder.client.sync import DebouncedSaver

__all__ = [
    "ResumeEditor",
    "SaveStatus",
    "ExportResult",
    "ExportSession",
    "ServerPdfStrategy",
    "DebouncedSaver",
]
