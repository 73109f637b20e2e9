"""
Integration tests for the editor client against an in-process server.

Requests go through AppSession (FastAPI TestClient converted to
requests.Response), so the client code runs unchanged. The snapshot fallback
uses FakeRasterizer instead of a browser.
"""

import time

import pytest
import requests

from cvbuilder.api import create_app
from cvbuilder.client.editor import (
    STATUS_EXPORT_FAILED,
    STATUS_EXPORTED,
    STATUS_EXPORTED_FALLBACK,
    STATUS_OFFLINE,
    STATUS_SAVE_FAILED,
    STATUS_SAVED,
    STATUS_SAVING,
    ResumeEditor,
)
from cvbuilder.client.export import ExportSession, safe_file_name
from cvbuilder.contexts.rendering.strategies import PdfStrategy, SnapshotPdfStrategy
from cvbuilder.contexts.storage import InMemoryResumeStore
from cvbuilder.utils.pdf_processing import is_pdf_bytes, page_count

BASE_URL = "http://testserver"


class FailingStrategy(PdfStrategy):
    name = "failing"

    def _produce(self, doc):
        raise RuntimeError("layout exploded")


class OfflineSession:
    """Every request fails as if the server were down."""

    def get(self, url, timeout=None):
        raise requests.ConnectionError(f"cannot reach {url}")

    def post(self, url, json=None, timeout=None):
        raise requests.ConnectionError(f"cannot reach {url}")


@pytest.fixture
def store(example_doc):
    return InMemoryResumeStore(example_doc)


@pytest.fixture
def make_editor(store, app_session, fake_rasterizer, tmp_path):
    """Factory for editors bound to an in-process app; closes them afterwards."""
    editors = []

    def factory(pdf_strategies=None, rasterizer=fake_rasterizer, session=None, debounce_s=10):
        if session is None:
            session = app_session(create_app(store=store, pdf_strategies=pdf_strategies, public_dir=None))
        editor = ResumeEditor(
            base_url=BASE_URL,
            session=session,
            debounce_s=debounce_s,
            fallback_strategy=SnapshotPdfStrategy(rasterizer),
            exports=ExportSession(base_dir=tmp_path),
        )
        editors.append(editor)
        return editor

    yield factory

    for editor in editors:
        editor.close()


# ============================================================================
# Load and save
# ============================================================================


@pytest.mark.integration
def test_load_shows_server_document(make_editor, example_doc):
    editor = make_editor()

    payload = editor.load()

    assert payload == example_doc.to_dict()
    assert not editor.offline
    assert "JOHN DOE" in editor.preview_html
    assert editor.status.message == STATUS_SAVED


@pytest.mark.integration
def test_offline_load_uses_local_form(make_editor):
    editor = make_editor(session=OfflineSession())

    payload = editor.load(local_form={"full_name": "Jane Doe", "skills": "Go, Rust"})

    assert editor.offline
    assert payload["personal"]["full_name"] == "Jane Doe"
    assert payload["skills"] == ["Go", "Rust"]
    assert "JANE DOE" in editor.preview_html
    assert editor.status.message == STATUS_OFFLINE
    assert editor.status.tone == "error"


@pytest.mark.integration
def test_edit_then_flush_adopts_canonical_document(make_editor, store, example_doc):
    editor = make_editor()
    editor.load()

    editor.edit({"full_name": "  Jane   Doe ", "title": "Data Engineer"})
    assert editor.status.message == STATUS_SAVING
    # Local preview updates before the save goes out
    assert "JANE" in editor.preview_html

    editor.flush()

    assert store.get().personal.full_name == "Jane Doe"
    # Lists left empty in the form fall back to the stored values
    assert editor.payload["skills"] == example_doc.skills
    assert editor.status.message == STATUS_SAVED


@pytest.mark.integration
def test_rapid_edits_are_debounced(make_editor, store):
    editor = make_editor(debounce_s=0.3)
    editor.load()
    session = editor.session

    for name in ("J", "Ja", "Jan", "Jane"):
        editor.edit({"full_name": name})

    deadline = time.time() + 2
    while store.get().personal.full_name != "Jane" and time.time() < deadline:
        time.sleep(0.02)
    time.sleep(0.15)

    posts = [call for call in session.calls if call[0] == "POST"]
    assert len(posts) == 1
    assert store.get().personal.full_name == "Jane"


@pytest.mark.integration
def test_save_failure_sets_error_status(make_editor):
    editor = make_editor(session=OfflineSession())

    assert editor.save({"personal": {"full_name": "Jane"}}) is None
    assert editor.status.message == STATUS_SAVE_FAILED


# ============================================================================
# Export
# ============================================================================


@pytest.mark.integration
def test_export_uses_server_pdf(make_editor, fake_rasterizer):
    editor = make_editor()
    editor.load()

    result = editor.export_pdf()

    assert result.success
    assert result.strategy == "server"
    assert result.errors == {}
    assert result.path.name == "John-Doe.pdf"
    assert is_pdf_bytes(result.path.read_bytes())
    assert editor.status.message == STATUS_EXPORTED
    assert fake_rasterizer.captured == []


@pytest.mark.integration
def test_export_flushes_pending_edit_first(make_editor, store):
    editor = make_editor()
    editor.load()
    editor.edit({"full_name": "Jane Doe"})

    result = editor.export_pdf()

    assert store.get().personal.full_name == "Jane Doe"
    assert result.path.name == "Jane-Doe.pdf"


@pytest.mark.integration
def test_server_error_falls_back_to_snapshot(make_editor, fake_rasterizer):
    editor = make_editor(pdf_strategies=[FailingStrategy()])
    editor.load()

    result = editor.export_pdf()

    assert result.success
    assert result.strategy == "snapshot"
    assert "HTTP status: 500" in result.errors["server"]
    assert page_count(result.path.read_bytes()) == 2
    assert editor.status.message == STATUS_EXPORTED_FALLBACK
    # The snapshot is taken of the standalone preview page
    assert len(fake_rasterizer.captured) == 1
    assert fake_rasterizer.captured[0].startswith("<!DOCTYPE html>")
    assert "JOHN DOE" in fake_rasterizer.captured[0]


@pytest.mark.integration
def test_disabled_server_pdf_falls_back(store, app_session, make_editor):
    session = app_session(create_app(store=store, server_pdf_enabled=False, public_dir=None))
    editor = make_editor(session=session)
    editor.load()

    result = editor.export_pdf()

    assert result.strategy == "snapshot"
    assert "HTTP status: 503" in result.errors["server"]


@pytest.mark.integration
def test_html_response_is_not_a_pdf(store, app_session, make_editor, response_factory):
    """A 200 that is not application/pdf counts as a failure."""
    base = app_session(create_app(store=store, public_dir=None))

    class HtmlPdfSession:
        def get(self, url, timeout=None):
            if url.endswith("/api/cv/pdf"):
                return response_factory(200, b"<html>login</html>", "text/html; charset=utf-8")
            return base.get(url, timeout)

        def post(self, url, json=None, timeout=None):
            return base.post(url, json, timeout)

    editor = make_editor(session=HtmlPdfSession())
    editor.load()

    result = editor.export_pdf()

    assert result.strategy == "snapshot"
    assert "text/html" in result.errors["server"]


@pytest.mark.integration
def test_all_paths_fail(make_editor, broken_rasterizer, store, example_doc):
    editor = make_editor(pdf_strategies=[FailingStrategy()], rasterizer=broken_rasterizer)
    editor.load()

    result = editor.export_pdf()

    assert not result.success
    assert result.path is None
    assert list(result.errors) == ["server", "snapshot"]
    assert "browser crashed" in result.errors["snapshot"]
    assert editor.status.message == STATUS_EXPORT_FAILED
    # Export failures never touch the stored document
    assert store.get() == example_doc


@pytest.mark.integration
def test_previous_export_is_released(make_editor):
    editor = make_editor()
    editor.load()

    first = editor.export_pdf().path
    editor.edit({"full_name": "Jane Doe"})
    second = editor.export_pdf().path

    assert not first.exists()
    assert second.exists()
    assert list(editor.exports.directory.iterdir()) == [second]


@pytest.mark.integration
def test_failed_export_still_releases_previous(make_editor, broken_rasterizer):
    editor = make_editor(rasterizer=broken_rasterizer)
    editor.load()
    first = editor.export_pdf().path

    editor.export_strategies = editor.export_strategies[1:]
    result = editor.export_pdf()

    assert not result.success
    assert not first.exists()
    assert editor.exports.current is None


@pytest.mark.integration
def test_close_removes_export_directory(make_editor):
    editor = make_editor()
    editor.load()
    editor.export_pdf()
    directory = editor.exports.directory

    editor.close()

    assert not directory.exists()


@pytest.mark.integration
@pytest.mark.parametrize(
    "name,expected",
    [
        ("Jane Doe", "Jane-Doe"),
        ("Zoë O'Neil", "Zo-O-Neil"),
        ("", "cv-builder"),
    ],
)
def test_safe_file_name(name, expected):
    assert safe_file_name(name) == expected
