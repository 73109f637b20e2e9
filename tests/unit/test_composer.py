"""Unit tests for strategy ordering and the shared success predicate."""

import pytest

from cvbuilder.contexts.rendering import PdfStrategyError
from cvbuilder.contexts.rendering.composer import compose_pdf
from cvbuilder.contexts.rendering.strategies import PdfArtifact, PdfStrategy, is_valid_artifact

PDF_BYTES = b"%PDF-1.4\n%fake\n"


class StaticStrategy(PdfStrategy):
    """Returns a fixed artifact and counts calls."""

    def __init__(self, name, content=PDF_BYTES, content_type="application/pdf"):
        self.name = name
        self.content = content
        self.content_type = content_type
        self.calls = 0

    def _produce(self, doc):
        self.calls += 1
        return PdfArtifact(content=self.content, content_type=self.content_type)


class RaisingStrategy(PdfStrategy):
    def __init__(self, name, error):
        self.name = name
        self.error = error

    def _produce(self, doc):
        raise self.error


@pytest.mark.unit
@pytest.mark.parametrize(
    "content,content_type,valid",
    [
        (PDF_BYTES, "application/pdf", True),
        (PDF_BYTES, "Application/PDF; charset=binary", True),
        (PDF_BYTES, "text/html", False),
        (PDF_BYTES, "", False),
        (b"", "application/pdf", False),
    ],
)
def test_is_valid_artifact(content, content_type, valid):
    assert is_valid_artifact(PdfArtifact(content, content_type)) is valid


@pytest.mark.unit
def test_is_valid_artifact_none():
    assert not is_valid_artifact(None)


@pytest.mark.unit
def test_render_rejects_invalid_artifact(example_doc):
    strategy = StaticStrategy("html", content=b"<html>", content_type="text/html")

    with pytest.raises(PdfStrategyError) as exc_info:
        strategy.render(example_doc)

    assert exc_info.value.strategy == "html"
    assert exc_info.value.content_type == "text/html"
    assert "[html]" in str(exc_info.value)


@pytest.mark.unit
def test_first_success_wins(example_doc):
    first = StaticStrategy("first")
    second = StaticStrategy("second")

    result = compose_pdf(example_doc, [first, second])

    assert result.success
    assert result.strategy == "first"
    assert result.pdf == PDF_BYTES
    assert result.errors == {}
    assert second.calls == 0


@pytest.mark.unit
def test_falls_back_after_failures(example_doc):
    strategies = [
        RaisingStrategy("broken", RuntimeError("boom")),
        StaticStrategy("empty", content=b""),
        StaticStrategy("html", content_type="text/html"),
        StaticStrategy("last"),
    ]

    result = compose_pdf(example_doc, strategies)

    assert result.success
    assert result.strategy == "last"
    assert list(result.errors) == ["broken", "empty", "html"]
    assert result.errors["broken"] == "boom"


@pytest.mark.unit
def test_all_strategies_fail(example_doc):
    result = compose_pdf(
        example_doc,
        [RaisingStrategy("a", ValueError()), StaticStrategy("b", content=b"")],
    )

    assert not result.success
    assert result.pdf == b""
    assert result.strategy is None
    # An exception without a message is reported by its type
    assert result.errors["a"] == "ValueError"
    assert "b" in result.errors


@pytest.mark.unit
def test_no_strategies(example_doc):
    result = compose_pdf(example_doc, [])
    assert not result.success
    assert result.errors == {}
