"""
Spatial types fed directly by document events: pages and text runs.
"""

from __future__ import annotations

from pdfextract.graph import TypeRegistry
from pdfextract.ingest.pdf import BEGIN_PAGE, SHOW_TEXT
from pdfextract.models import SpatialObject


def build_pages(ctx) -> None:
    """One object per page: its size."""

    @ctx.on(BEGIN_PAGE)
    def page(page, width, height):
        return SpatialObject(page=page, x=0, y=0, width=width, height=height)


def build_text_runs(ctx) -> None:
    """One object per positioned text span."""

    @ctx.on(SHOW_TEXT)
    def run(page, text, x0, y0, x1, y1, font, size):
        text = text.strip()
        if not text:
            return None
        return SpatialObject(
            page=page,
            x=x0,
            y=y0,
            width=x1 - x0,
            height=y1 - y0,
            content=text,
            font=font,
            size=size,
        )


def include_in(registry: TypeRegistry) -> None:
    registry.register("pages", builder=build_pages, description="Page boxes")
    registry.register("text_runs", builder=build_text_runs, description="Positioned text spans")
