"""
HTML Snapshot Export

Rasterizes the standalone preview page and paginates the image onto A4 PDF
pages. This is the fallback export path: the PDF matches the on-screen preview
pixel for pixel, at the cost of text not being selectable.

Pipeline:
1. capture: headless Chromium loads the page at its natural width, waits for
   web fonts, measures block elements and takes a 2x JPEG of .cv-page
2. plan_page_breaks: chooses cut lines that never split a block, unless a
   single block is taller than a page
3. paginate_snapshot: crops each page slice and places it on an A4 page
"""

import io
import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from dotenv import load_dotenv
from fpdf import FPDF
from PIL import Image

from cvbuilder.contexts.rendering.logger import _log_debug, log_page_breaks

load_dotenv()

SNAPSHOT_TIMEOUT_MS = int(os.getenv("SNAPSHOT_TIMEOUT_MS", "30000"))

A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
# A4 width in CSS pixels at 96dpi; the preview stylesheet uses the same width
PAGE_WIDTH_PX = 794
PAGE_HEIGHT_PX = 1123
PIXEL_SCALE = 2
JPEG_QUALITY = 98

PAGE_SELECTOR = ".cv-page"
BLOCK_SELECTOR = ".cv-block"

BLOCK_METRICS_SCRIPT = """
([pageSelector, blockSelector]) => {
    const root = document.querySelector(pageSelector);
    const origin = root.getBoundingClientRect();
    return Array.from(root.querySelectorAll(blockSelector)).map((element) => {
        const rect = element.getBoundingClientRect();
        return [rect.top - origin.top, rect.bottom - origin.top];
    });
}
"""

Block = Tuple[int, int]


@dataclass
class Snapshot:
    """
    Rasterized preview page.

    Attributes:
        image: JPEG bytes of the whole page element
        width: Image width in pixels
        height: Image height in pixels
        scale: Device pixels per CSS pixel used for capture
        blocks: (top, bottom) of each unbreakable element, in image pixels
    """

    image: bytes
    width: int
    height: int
    scale: float = PIXEL_SCALE
    blocks: List[Block] = field(default_factory=list)


class PlaywrightRasterizer:
    """Captures HTML with headless Chromium through Playwright's sync API."""

    def __init__(self, scale: float = PIXEL_SCALE, timeout_ms: int = SNAPSHOT_TIMEOUT_MS):
        self.scale = scale
        self.timeout_ms = timeout_ms

    def capture(self, html: str) -> Snapshot:
        """
        Render html and screenshot its .cv-page element.

        Args:
            html: Standalone page from render_preview_document()

        Returns:
            Snapshot with block positions scaled to image pixels

        Raises:
            playwright.sync_api.Error: If the browser fails or times out
        """
        # Deferred: the browser stack is only needed when this path runs
        from playwright.sync_api import sync_playwright

        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=True)
            try:
                page = browser.new_page(
                    viewport={"width": PAGE_WIDTH_PX, "height": PAGE_HEIGHT_PX},
                    device_scale_factor=self.scale,
                )
                page.set_default_timeout(self.timeout_ms)
                page.set_content(html, wait_until="load")
                page.evaluate("() => document.fonts.ready.then(() => true)")
                css_blocks = page.evaluate(BLOCK_METRICS_SCRIPT, [PAGE_SELECTOR, BLOCK_SELECTOR])
                image = page.locator(PAGE_SELECTOR).screenshot(type="jpeg", quality=JPEG_QUALITY)
            finally:
                browser.close()

        with Image.open(io.BytesIO(image)) as decoded:
            width, height = decoded.size
        blocks = [(round(top * self.scale), round(bottom * self.scale)) for top, bottom in css_blocks]
        _log_debug(f"Captured {width}x{height}px snapshot with {len(blocks)} blocks")
        return Snapshot(image=image, width=width, height=height, scale=self.scale, blocks=blocks)


def plan_page_breaks(total_height: int, page_height: int, blocks: Sequence[Block]) -> List[int]:
    """
    Choose where to cut a tall image into pages.

    Each cut is as low as possible on its page while not passing through any
    block. Blocks taller than a page cannot be kept whole and are ignored, so
    the cut falls at the page limit.

    Args:
        total_height: Image height in pixels
        page_height: Height of one page in the same pixels
        blocks: (top, bottom) pairs of unbreakable elements

    Returns:
        Cut positions in increasing order (excludes 0 and total_height)

    Example:
        >>> plan_page_breaks(250, 100, [(90, 120)])
        [90, 190]
    """
    if page_height <= 0:
        raise ValueError(f"page_height must be positive, got {page_height}")

    breaks = []
    top = 0
    while total_height - top > page_height:
        limit = top + page_height
        cut = limit
        for block_top, block_bottom in blocks:
            fits_on_page = block_bottom - block_top <= page_height
            if fits_on_page and top < block_top < limit < block_bottom:
                cut = min(cut, block_top)
        breaks.append(cut)
        top = cut
    return breaks


def paginate_snapshot(snapshot: Snapshot) -> bytes:
    """
    Place a snapshot onto A4 portrait pages, one image slice per page.

    Args:
        snapshot: Captured page

    Returns:
        PDF file contents
    """
    page_height = round(snapshot.width * A4_HEIGHT_MM / A4_WIDTH_MM)
    breaks = plan_page_breaks(snapshot.height, page_height, snapshot.blocks)
    log_page_breaks(breaks, snapshot.height)
    bounds = [0, *breaks, snapshot.height]

    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(0, 0, 0)
    pdf.set_creator("CV Builder")

    with Image.open(io.BytesIO(snapshot.image)) as image:
        image = image.convert("RGB")
        for top, bottom in zip(bounds, bounds[1:]):
            buffer = io.BytesIO()
            image.crop((0, top, snapshot.width, bottom)).save(buffer, format="JPEG", quality=JPEG_QUALITY)
            buffer.seek(0)
            pdf.add_page()
            pdf.image(buffer, x=0, y=0, w=A4_WIDTH_MM)

    return bytes(pdf.output())


def snapshot_to_pdf(html: str, rasterizer: Optional[PlaywrightRasterizer] = None) -> bytes:
    """Capture html with rasterizer (Playwright by default) and paginate it."""
    rasterizer = rasterizer or PlaywrightRasterizer()
    return paginate_snapshot(rasterizer.capture(html))
