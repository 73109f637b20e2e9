"""
Resume Persistence

Holds the single current ResumeDocument. The HTTP layer receives a ResumeStore
by injection, so a durable backend can replace the in-memory one without
touching request handling.
"""

from abc import ABC, abstractmethod
from typing import Optional

from cvbuilder.contexts.intake.defaults import get_example_resume
from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument
from cvbuilder.contexts.storage.logger import _log_info, log_document_replaced


class ResumeStore(ABC):
    """Single-slot document store. Reads and writes are whole documents."""

    @abstractmethod
    def get(self) -> ResumeDocument:
        """Return the current document."""
        pass

    @abstractmethod
    def set(self, doc: ResumeDocument) -> None:
        """Replace the current document."""
        pass


class InMemoryResumeStore(ResumeStore):
    """
    Process-lifetime store.

    Copies on the way in and on the way out, so no caller holds a reference
    to the stored document.
    """

    def __init__(self, initial: Optional[ResumeDocument] = None):
        """
        Args:
            initial: Starting document. Defaults to the bundled example resume
        """
        if initial is None:
            initial = get_example_resume()
            _log_info("Store initialized with example resume")
        self._document = initial.copy()

    def get(self) -> ResumeDocument:
        return self._document.copy()

    def set(self, doc: ResumeDocument) -> None:
        self._document = doc.copy()
        log_document_replaced(doc)
