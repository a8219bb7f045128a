"""
PDF event source backed by PyMuPDF.

PyMuPDF decodes the content streams; this module replays the decoded page
content as the low-level events the pipeline dispatches on:

    begin_page(page, width, height)
    show_text_with_positioning(page, text, x0, y0, x1, y1, font, size)
    draw_image(page, x0, y0, x1, y1)
    end_page(page)

Pages are 0-indexed. Coordinates are PDF points with the origin at the top
left of the page, as PyMuPDF reports them. One text event is emitted per
span of ``page.get_text("dict")``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pdfextract.ingest.events import EventCallback

logger = logging.getLogger(__name__)

BEGIN_PAGE = "begin_page"
SHOW_TEXT = "show_text_with_positioning"
DRAW_IMAGE = "draw_image"
END_PAGE = "end_page"

PDF_EVENTS: frozenset[str] = frozenset({BEGIN_PAGE, SHOW_TEXT, DRAW_IMAGE, END_PAGE})


class PDFEventSource:
    """Streams page, text and image events from a PDF file.

    Usage:
        source = PDFEventSource("paper.pdf", pages=[0, 1])
        source.for_each(lambda name, *args: print(name, args))
    """

    event_names = PDF_EVENTS

    def __init__(self, pdf_path: str | Path, pages: Optional[list[int]] = None):
        self.pdf_path = Path(pdf_path)
        self.pages = pages

    def for_each(self, callback: EventCallback) -> None:
        try:
            import fitz  # PyMuPDF
        except ImportError:
            raise ImportError("PyMuPDF is required. Install with: pip install PyMuPDF")

        if not self.pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {self.pdf_path}")

        doc = fitz.open(str(self.pdf_path))
        try:
            if self.pages is None:
                page_nums = list(range(len(doc)))
            else:
                page_nums = [p for p in self.pages if 0 <= p < len(doc)]

            logger.debug("Streaming %d pages from %s", len(page_nums), self.pdf_path)
            for page_num in page_nums:
                self._emit_page(doc[page_num], page_num, callback)
        finally:
            doc.close()

    def _emit_page(self, page, page_num: int, callback: EventCallback) -> None:
        import fitz

        callback(BEGIN_PAGE, page_num, page.rect.width, page.rect.height)

        flags = fitz.TEXT_PRESERVE_WHITESPACE | fitz.TEXT_PRESERVE_IMAGES
        blocks = page.get_text("dict", flags=flags)["blocks"]
        for block in blocks:
            if block["type"] == 0:  # Text block
                for line in block.get("lines", []):
                    for span in line.get("spans", []):
                        x0, y0, x1, y1 = span.get("bbox", (0, 0, 0, 0))
                        callback(
                            SHOW_TEXT,
                            page_num,
                            span.get("text", ""),
                            x0, y0, x1, y1,
                            span.get("font", ""),
                            span.get("size", 0.0),
                        )
            elif block["type"] == 1:  # Image block
                x0, y0, x1, y1 = block.get("bbox", (0, 0, 0, 0))
                callback(DRAW_IMAGE, page_num, x0, y0, x1, y1)

        callback(END_PAGE, page_num)
