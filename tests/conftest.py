"""Shared fixtures for unit and integration tests."""

import io

import pytest
import requests
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw
from requests.structures import CaseInsensitiveDict

from cvbuilder.contexts.intake.defaults import get_example_resume
from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument
from cvbuilder.contexts.rendering.snapshot import Snapshot

SNAPSHOT_WIDTH = 1588
SNAPSHOT_HEIGHT = 4000


class FakeRasterizer:
    """
    Stands in for headless Chromium: draws striped blocks with Pillow.

    Records every html it was asked to capture.
    """

    def __init__(self, width: int = SNAPSHOT_WIDTH, height: int = SNAPSHOT_HEIGHT, block_height: int = 300):
        self.width = width
        self.height = height
        self.block_height = block_height
        self.captured = []

    def capture(self, html: str) -> Snapshot:
        self.captured.append(html)
        image = Image.new("RGB", (self.width, self.height), "white")
        draw = ImageDraw.Draw(image)
        blocks = []
        for top in range(40, self.height - self.block_height, self.block_height + 40):
            bottom = top + self.block_height
            draw.rectangle((80, top, self.width - 80, bottom), fill=(220, 225, 235))
            blocks.append((top, bottom))
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=90)
        return Snapshot(image=buffer.getvalue(), width=self.width, height=self.height, scale=2, blocks=blocks)


class BrokenRasterizer:
    def capture(self, html: str) -> Snapshot:
        raise RuntimeError("browser crashed")


def make_response(status_code: int, content: bytes = b"", content_type: str = "application/json") -> requests.Response:
    """Build a real requests.Response without a network round trip."""
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.headers = CaseInsensitiveDict({"content-type": content_type})
    response.url = "http://testserver/"
    return response


class AppSession:
    """requests-style session that routes calls into a FastAPI app in-process."""

    def __init__(self, app):
        self.client = TestClient(app)
        self.calls = []

    def _convert(self, response) -> requests.Response:
        converted = make_response(response.status_code, response.content)
        converted.headers = CaseInsensitiveDict(response.headers.items())
        converted.url = str(response.url)
        return converted

    def get(self, url, timeout=None):
        self.calls.append(("GET", url))
        return self._convert(self.client.get(url))

    def post(self, url, json=None, timeout=None):
        self.calls.append(("POST", url))
        return self._convert(self.client.post(url, json=json))


@pytest.fixture
def example_doc() -> ResumeDocument:
    return get_example_resume()


@pytest.fixture
def empty_doc() -> ResumeDocument:
    return ResumeDocument()


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def broken_rasterizer() -> BrokenRasterizer:
    return BrokenRasterizer()


@pytest.fixture
def app_session():
    """Factory: app_session(app) -> AppSession."""
    return AppSession


@pytest.fixture
def response_factory():
    """Factory: response_factory(status, content, content_type) -> requests.Response."""
    return make_response
