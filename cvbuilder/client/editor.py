"""
Resume Editor Client

Python counterpart of the browser editor. It keeps a local payload and its
rendered preview, pushes edits to the server through a DebouncedSaver, and
exports PDFs with server-first, snapshot-fallback ordering.

Status messages mirror the editor's save indicator:
- "muted": work in progress
- "success": server confirmed
- "error": failed or offline
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests

from cvbuilder.client.export import (
    CVBUILDER_BASE_URL,
    REQUEST_TIMEOUT_S,
    ExportResult,
    ExportSession,
    ServerPdfStrategy,
    safe_file_name,
)
from cvbuilder.client.logger import _log_warning, log_export_result, log_status
from cvbuilder.client.sync import SAVE_DEBOUNCE_S, DebouncedSaver
from cvbuilder.contexts.intake.form_parsing import collect_form_data
from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument
from cvbuilder.contexts.rendering.composer import compose_pdf
from cvbuilder.contexts.rendering.strategies import PdfStrategy, SnapshotPdfStrategy
from cvbuilder.contexts.templating.preview import render_preview

STATUS_LOADING = "Loading saved data..."
STATUS_SAVING = "Saving..."
STATUS_SAVED = "All changes saved"
STATUS_SAVE_FAILED = "Failed to save data"
STATUS_OFFLINE = "Offline mode: changes not saved"
STATUS_EXPORTING = "Preparing PDF..."
STATUS_EXPORTED = "PDF created"
STATUS_EXPORTED_FALLBACK = "PDF ready from preview snapshot"
STATUS_EXPORT_FAILED = "Failed to create PDF"


@dataclass
class SaveStatus:
    message: str = ""
    tone: str = "muted"


class ResumeEditor:
    """
    Editor session against one server.

    Attributes:
        payload: Latest document payload (server-confirmed or local)
        preview_html: Preview fragment for payload
        status: Current SaveStatus
        offline: True when the initial load failed
    """

    def __init__(
        self,
        base_url: str = CVBUILDER_BASE_URL,
        session: Optional[requests.Session] = None,
        debounce_s: float = SAVE_DEBOUNCE_S,
        timeout_s: float = REQUEST_TIMEOUT_S,
        fallback_strategy: Optional[PdfStrategy] = None,
        exports: Optional[ExportSession] = None,
    ):
        """
        Args:
            base_url: Server root (e.g. http://localhost:3000)
            session: requests session (one is created if omitted)
            debounce_s: Quiet period before an edit is saved
            timeout_s: Timeout for each HTTP request
            fallback_strategy: Export path used when the server PDF fails.
                               Defaults to SnapshotPdfStrategy
            exports: Where exported files are written
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout_s = timeout_s
        self.saver = DebouncedSaver(self.save, debounce_s)
        self.exports = exports or ExportSession()
        self.export_strategies = [
            ServerPdfStrategy(self.base_url, self.session, timeout_s),
            fallback_strategy or SnapshotPdfStrategy(),
        ]
        self.payload: Dict[str, Any] = {}
        self.preview_html = ""
        self.status = SaveStatus()
        self.offline = False

    @property
    def cv_url(self) -> str:
        return f"{self.base_url}/api/cv"

    def _set_status(self, message: str, tone: str = "muted") -> None:
        self.status = SaveStatus(message, tone)
        log_status(message, tone)

    def _show(self, payload: Mapping[str, Any]) -> None:
        self.payload = dict(payload)
        self.preview_html = render_preview(ResumeDocument.from_dict(payload))

    # ------------------------------------------------------------------------
    # Load and save
    # ------------------------------------------------------------------------

    def load(self, local_form: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Fetch the stored document, or fall back to local form state.

        Args:
            local_form: Current form state, used when the server is unreachable

        Returns:
            The payload now shown in the editor
        """
        self._set_status(STATUS_LOADING)
        try:
            response = self.session.get(self.cv_url, timeout=self.timeout_s)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            _log_warning(f"Initial load failed: {e}")
            self.offline = True
            self._show(collect_form_data(local_form or {}))
            self._set_status(STATUS_OFFLINE, "error")
            return self.payload

        self.offline = False
        self._show(data)
        self._set_status(STATUS_SAVED, "success")
        return self.payload

    def edit(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Apply new form state: re-render the preview now, save after the debounce.

        Returns:
            The local payload collected from form
        """
        payload = collect_form_data(form)
        self._show(payload)
        self._set_status(STATUS_SAVING)
        self.saver.queue(payload)
        return payload

    def save(self, payload: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """
        POST a payload and adopt the server's canonical version.

        Returns:
            Canonical payload, or None if the save failed
        """
        try:
            response = self.session.post(self.cv_url, json=dict(payload), timeout=self.timeout_s)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            _log_warning(f"Save failed: {e}")
            self._set_status(STATUS_SAVE_FAILED, "error")
            return None

        self._show(data)
        self._set_status(STATUS_SAVED, "success")
        return data

    def flush(self) -> Optional[Dict[str, Any]]:
        """Send any pending edit immediately."""
        return self.saver.flush()

    # ------------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------------

    def export_pdf(self) -> ExportResult:
        """
        Export the current document as PDF.

        Pending edits are flushed first so the server renders the latest
        version. The server PDF is tried first, then the fallback strategy.
        The previous export file is released before anything is attempted.

        Returns:
            ExportResult (never raises for export failures)
        """
        self.flush()
        self._set_status(STATUS_EXPORTING)
        self.exports.release()

        doc = ResumeDocument.from_dict(self.payload)
        composition = compose_pdf(doc, self.export_strategies)

        if not composition.success:
            result = ExportResult(success=False, errors=composition.errors)
            self._set_status(STATUS_EXPORT_FAILED, "error")
            log_export_result(result)
            return result

        filename = f"{safe_file_name(doc.personal.full_name)}.pdf"
        path = self.exports.write(composition.pdf, filename)
        result = ExportResult(
            success=True,
            path=path,
            strategy=composition.strategy,
            errors=composition.errors,
            page_count=composition.page_count,
        )
        fallback_used = composition.strategy != self.export_strategies[0].name
        self._set_status(STATUS_EXPORTED_FALLBACK if fallback_used else STATUS_EXPORTED, "success")
        log_export_result(result)
        return result

    def close(self) -> None:
        """Cancel pending saves and remove exported files."""
        self.saver.cancel()
        self.exports.close()
