"""
Margins, rows and columns.

A margin is a band of the page that no text run touches:

- h_margins: horizontal bands (full page width) between lines of text
- v_margins: vertical bands (full page height) between columns of text

Rows are the bands between horizontal margins and columns the bands between
vertical margins, clipped to the vertical extent of the page's rows.
Bands narrower than ``LayoutConfig.min_margin`` are not margins.
"""

from __future__ import annotations

from pdfextract.graph import TypeRegistry
from pdfextract.models import SpatialObject
from pdfextract.utils import group_by_page, interval_gaps


def build_h_margins(ctx) -> None:
    pages = ctx.objects("pages")
    runs = ctx.objects("text_runs")

    @ctx.after
    def margins():
        runs_by_page = group_by_page(runs)
        for page in pages:
            covered = [(r["y"], r["y"] + r["height"]) for r in runs_by_page.get(page["page"], [])]
            for start, end in interval_gaps(covered, 0, page["height"], ctx.config.layout.min_margin):
                yield SpatialObject(
                    page=page["page"], x=0, y=start, width=page["width"], height=end - start,
                )


def build_v_margins(ctx) -> None:
    pages = ctx.objects("pages")
    runs = ctx.objects("text_runs")

    @ctx.after
    def margins():
        runs_by_page = group_by_page(runs)
        for page in pages:
            covered = [(r["x"], r["x"] + r["width"]) for r in runs_by_page.get(page["page"], [])]
            for start, end in interval_gaps(covered, 0, page["width"], ctx.config.layout.min_margin):
                yield SpatialObject(
                    page=page["page"], x=start, y=0, width=end - start, height=page["height"],
                )


def build_rows(ctx) -> None:
    pages = ctx.objects("pages")
    h_margins = ctx.objects("h_margins")

    @ctx.after
    def rows():
        margins_by_page = group_by_page(h_margins)
        for page in pages:
            margins = [(m["y"], m["y"] + m["height"]) for m in margins_by_page.get(page["page"], [])]
            for start, end in interval_gaps(margins, 0, page["height"]):
                yield SpatialObject(
                    page=page["page"], x=0, y=start, width=page["width"], height=end - start,
                )


def build_columns(ctx) -> None:
    pages = ctx.objects("pages")
    v_margins = ctx.objects("v_margins")
    rows = ctx.objects("rows")

    @ctx.after
    def columns():
        margins_by_page = group_by_page(v_margins)
        rows_by_page = group_by_page(rows)
        for page in pages:
            page_rows = rows_by_page.get(page["page"])
            if not page_rows:
                continue
            top = min(r["y"] for r in page_rows)
            bottom = max(r["y"] + r["height"] for r in page_rows)
            margins = [(m["x"], m["x"] + m["width"]) for m in margins_by_page.get(page["page"], [])]
            for index, (start, end) in enumerate(interval_gaps(margins, 0, page["width"])):
                yield SpatialObject(
                    page=page["page"],
                    column=index,
                    x=start,
                    y=top,
                    width=end - start,
                    height=bottom - top,
                )


def include_in(registry: TypeRegistry) -> None:
    registry.register(
        "h_margins", ["pages", "text_runs"], build_h_margins,
        "Horizontal bands free of text",
    )
    registry.register(
        "v_margins", ["pages", "text_runs"], build_v_margins,
        "Vertical bands free of text",
    )
    registry.register("rows", ["pages", "h_margins"], build_rows, "Bands between horizontal margins")
    registry.register(
        "columns", ["pages", "v_margins", "rows"], build_columns,
        "Bands between vertical margins",
    )
