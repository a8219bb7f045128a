"""
Regions and sections.

Regions are clusters of text runs whose boxes touch once grown by
``LayoutConfig.region_padding``: roughly paragraphs, captions, headings.

Sections group the regions of one column, top to bottom, starting a new
section wherever the vertical gap between regions exceeds
``LayoutConfig.section_gap``. Each section carries its text and its
``letter_ratio``, which decides whether it is scanned for references.
"""

from __future__ import annotations

from pdfextract.graph import TypeRegistry
from pdfextract.models import SpatialObject
from pdfextract.spatials.references import letter_ratio
from pdfextract.utils import boxes_intersect, group_by_page


def _union_box(objects) -> tuple[float, float, float, float]:
    boxes = [obj.bbox for obj in objects]
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def _spatial(page: int, box, **attributes) -> SpatialObject:
    x0, y0, x1, y1 = box
    return SpatialObject(page=page, x=x0, y=y0, width=x1 - x0, height=y1 - y0, **attributes)


def cluster_runs(runs: list, padding: float) -> list[list]:
    """Connected components of runs whose padded boxes intersect."""
    runs = sorted(runs, key=lambda r: (r["y"], r["x"]))
    parent = list(range(len(runs)))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i, run in enumerate(runs):
        bottom = run.bbox[3]
        for j in range(i + 1, len(runs)):
            other = runs[j]
            # Sorted by top edge: nothing further down can reach this run.
            if other["y"] - padding >= bottom + padding:
                break
            if boxes_intersect(run.bbox, other.bbox, padding):
                parent[find(j)] = find(i)

    clusters: dict[int, list] = {}
    for i, run in enumerate(runs):
        clusters.setdefault(find(i), []).append(run)
    return list(clusters.values())


def build_regions(ctx) -> None:
    runs = ctx.objects("text_runs")

    @ctx.after
    def regions():
        padding = ctx.config.layout.region_padding
        for page, page_runs in group_by_page(runs).items():
            clusters = cluster_runs(page_runs, padding)
            clusters.sort(key=lambda c: (min(r["y"] for r in c), min(r["x"] for r in c)))
            for cluster in clusters:
                content = " ".join(r["content"] for r in cluster)
                yield _spatial(page, _union_box(cluster), content=content, runs=len(cluster))


def _column_for(region, columns: list) -> int:
    if not columns:
        return 0
    center = region["x"] + region["width"] / 2
    for column in columns:
        if column["x"] <= center <= column["x"] + column["width"]:
            return column["column"]
    nearest = min(columns, key=lambda c: abs(c["x"] + c["width"] / 2 - center))
    return nearest["column"]


def build_sections(ctx) -> None:
    regions = ctx.objects("regions")
    columns = ctx.objects("columns")

    def close(page: int, column: int, group: list) -> SpatialObject:
        content = "\n".join(r["content"] for r in group)
        return _spatial(
            page,
            _union_box(group),
            column=column,
            content=content,
            letter_ratio=letter_ratio(content),
        )

    @ctx.after
    def sections():
        gap = ctx.config.layout.section_gap
        columns_by_page = group_by_page(columns)
        for page, page_regions in group_by_page(regions).items():
            by_column: dict[int, list] = {}
            for region in page_regions:
                index = _column_for(region, columns_by_page.get(page, []))
                by_column.setdefault(index, []).append(region)

            for column in sorted(by_column):
                group: list = []
                for region in sorted(by_column[column], key=lambda r: r["y"]):
                    if group and region["y"] - max(r.bbox[3] for r in group) > gap:
                        yield close(page, column, group)
                        group = []
                    group.append(region)
                if group:
                    yield close(page, column, group)


def include_in(registry: TypeRegistry) -> None:
    registry.register("regions", ["text_runs"], build_regions, "Clusters of touching text runs")
    registry.register(
        "sections", ["regions", "columns"], build_sections,
        "Column-wise groups of regions",
    )
