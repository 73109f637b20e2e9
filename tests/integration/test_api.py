"""Integration tests for the HTTP API, through FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from cvbuilder.api import PDF_DISABLED_MESSAGE, PDF_ERROR_MESSAGE, PDF_FILENAME, create_app
from cvbuilder.contexts.rendering.strategies import PdfArtifact, PdfStrategy
from cvbuilder.contexts.storage import InMemoryResumeStore
from cvbuilder.utils.pdf_processing import is_pdf_bytes, page_count


class FailingStrategy(PdfStrategy):
    name = "failing"

    def _produce(self, doc):
        raise RuntimeError("layout exploded")


class HtmlStrategy(PdfStrategy):
    name = "html"

    def _produce(self, doc):
        return PdfArtifact(content=b"<html></html>", content_type="text/html")


@pytest.fixture
def store(example_doc):
    return InMemoryResumeStore(example_doc)


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store, public_dir=None))


@pytest.fixture
def log_messages():
    messages = []
    sink_id = logger.add(messages.append, format="{message}", level="DEBUG")
    yield messages
    logger.remove(sink_id)


@pytest.mark.integration
def test_get_returns_current_document(client, example_doc):
    response = client.get("/api/cv")

    assert response.status_code == 200
    assert response.json() == example_doc.to_dict()


@pytest.mark.integration
def test_post_sanitizes_and_persists(client, example_doc):
    response = client.post(
        "/api/cv",
        json={"personal": {"full_name": "  Jane   Doe "}, "experience": [{"company": "X"}]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["personal"]["full_name"] == "Jane Doe"
    assert body["personal"]["email"] == example_doc.personal.email
    assert body["experience"] == example_doc.to_dict()["experience"]
    # The sanitized document is what later reads return
    assert client.get("/api/cv").json() == body


@pytest.mark.integration
def test_post_unknown_accent_keeps_previous(client):
    client.post("/api/cv", json={"preferences": {"accent": "purple"}})
    body = client.post("/api/cv", json={"preferences": {"accent": "teal"}}).json()

    assert body["preferences"]["accent"] == "purple"


@pytest.mark.integration
def test_post_invalid_json_keeps_previous(client, example_doc):
    response = client.post(
        "/api/cv",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json() == example_doc.to_dict()


@pytest.mark.integration
@pytest.mark.parametrize("payload", [[1, 2], "text", None])
def test_post_non_object_keeps_previous(client, example_doc, payload):
    response = client.post("/api/cv", json=payload)
    assert response.json() == example_doc.to_dict()


@pytest.mark.integration
def test_pdf_download(client):
    response = client.get("/api/cv/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == f'attachment; filename="{PDF_FILENAME}"'
    assert is_pdf_bytes(response.content)
    assert page_count(response.content) == 1


@pytest.mark.integration
def test_pdf_reflects_latest_save(client):
    from cvbuilder.utils.pdf_processing import extract_text

    client.post("/api/cv", json={"personal": {"full_name": "Jane Doe"}})
    text = extract_text(client.get("/api/cv/pdf").content)

    assert "JANE" in text


@pytest.mark.integration
@pytest.mark.parametrize("strategy", [FailingStrategy(), HtmlStrategy()])
def test_pdf_failure_returns_500(store, strategy):
    client = TestClient(create_app(store=store, pdf_strategies=[strategy], public_dir=None))

    response = client.get("/api/cv/pdf")

    assert response.status_code == 500
    assert response.json() == {"error": PDF_ERROR_MESSAGE}
    assert not response.headers["content-type"].startswith("application/pdf")


@pytest.mark.integration
def test_pdf_disabled_returns_503(store):
    client = TestClient(create_app(store=store, server_pdf_enabled=False, public_dir=None))

    response = client.get("/api/cv/pdf")

    assert response.status_code == 503
    assert response.json() == {"error": PDF_DISABLED_MESSAGE}


@pytest.mark.integration
def test_preview_endpoint(client):
    client.post("/api/cv", json={"summary": {"description": "a < b & c"}})

    response = client.get("/api/cv/preview")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "a &lt; b &amp; c" in response.text
    assert '<div class="cv-page template-minimalist"' in response.text


@pytest.mark.integration
def test_standalone_preview_endpoint(client):
    response = client.get("/api/cv/preview", params={"standalone": "true"})

    assert response.status_code == 200
    assert response.text.startswith("<!DOCTYPE html>")
    assert "<style>" in response.text


@pytest.mark.integration
def test_static_assets_served(store, tmp_path):
    (tmp_path / "index.html").write_text("<html><body>editor</body></html>")
    client = TestClient(create_app(store=store, public_dir=tmp_path))

    assert "editor" in client.get("/").text
    # API routes still take precedence over the static mount
    assert client.get("/api/cv").status_code == 200


@pytest.mark.integration
def test_missing_public_dir_is_skipped(store, tmp_path):
    client = TestClient(create_app(store=store, public_dir=tmp_path / "missing"))

    assert client.get("/").status_code == 404
    assert client.get("/api/cv").status_code == 200


@pytest.mark.integration
def test_api_events_logged_with_prefix(store, log_messages):
    client = TestClient(create_app(store=store, server_pdf_enabled=False, public_dir=None))

    client.post("/api/cv", content=b"{not json", headers={"content-type": "application/json"})
    client.get("/api/cv/pdf")

    api_lines = [str(message).strip() for message in log_messages if "[api]" in message]
    assert api_lines == [
        "[api] Request body is not valid JSON; keeping previous document",
        f"[api] GET /api/cv/pdf -> 503: {PDF_DISABLED_MESSAGE}",
    ]
