"""Unit tests for snapshot pagination."""

import io

import pytest
from PIL import Image

from cvbuilder.contexts.rendering.snapshot import Snapshot, paginate_snapshot, plan_page_breaks
from cvbuilder.utils.pdf_processing import is_pdf_bytes, page_count


@pytest.mark.unit
def test_short_image_has_no_breaks():
    assert plan_page_breaks(80, 100, []) == []
    assert plan_page_breaks(100, 100, []) == []


@pytest.mark.unit
def test_breaks_at_page_limit_without_blocks():
    assert plan_page_breaks(350, 100, []) == [100, 200, 300]


@pytest.mark.unit
def test_break_moves_above_straddling_block():
    assert plan_page_breaks(250, 100, [(90, 120)]) == [90, 190]


@pytest.mark.unit
def test_blocks_inside_page_do_not_move_break():
    blocks = [(10, 40), (50, 95), (100, 150)]
    assert plan_page_breaks(180, 100, blocks) == [100]


@pytest.mark.unit
def test_earliest_straddling_block_wins():
    # Nested blocks: an entry and one of its lines both cross the limit
    blocks = [(60, 130), (80, 110)]
    assert plan_page_breaks(200, 100, blocks) == [60, 160]


@pytest.mark.unit
def test_block_taller_than_page_is_split():
    assert plan_page_breaks(300, 100, [(50, 220)]) == [100, 200]


@pytest.mark.unit
def test_moved_break_shifts_following_pages():
    blocks = [(90, 120), (260, 300)]
    assert plan_page_breaks(400, 100, blocks) == [90, 190, 260, 360]


@pytest.mark.unit
def test_invalid_page_height():
    with pytest.raises(ValueError, match="page_height"):
        plan_page_breaks(100, 0, [])


def _snapshot(width, height, blocks=None):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), "white").save(buffer, format="JPEG")
    return Snapshot(image=buffer.getvalue(), width=width, height=height, blocks=blocks or [])


@pytest.mark.unit
def test_paginate_snapshot_page_count():
    # A4 page height for a 400px wide image is 566px
    pdf = paginate_snapshot(_snapshot(400, 1200))

    assert is_pdf_bytes(pdf)
    assert page_count(pdf) == 3


@pytest.mark.unit
def test_paginate_short_snapshot_is_one_page():
    pdf = paginate_snapshot(_snapshot(400, 300))
    assert page_count(pdf) == 1
