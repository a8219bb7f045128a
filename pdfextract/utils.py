"""
Utility functions used across the CLI, spatial types and renderers.

Functions:
    parse_pages: Parse user-friendly page selections
    boxes_intersect: Check if two bounding boxes intersect
    merge_intervals: Union of overlapping 1-D intervals
    interval_gaps: Uncovered stretches of an axis
    spatial_name_to_tag_name: Markup tag for a spatial type name
    group_by_page: Bucket spatial objects by page

Example:
    >>> from pdfextract.utils import interval_gaps
    >>> interval_gaps([(10, 20), (15, 30)], 0, 50)
    [(0, 10), (30, 50)]
"""

from typing import Dict, Iterable, List, Optional, Tuple


def parse_pages(pages: Optional[str]) -> Optional[List[int]]:
    """
    Parse a user-friendly page selection into 0-based page indices.

    Supports "all" or empty (every page, returned as None), "5" (single
    page), "1-5" (range), "5-1" (reversed range, automatically corrected)
    and comma-separated combinations such as "1-3,7".

    Example:
        >>> parse_pages("1-3,7")
        [0, 1, 2, 6]
        >>> parse_pages("all") is None
        True
    """
    pages = (pages or "").strip().lower()

    if not pages or pages == "all":
        return None

    selected: List[int] = []
    for part in pages.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            a, b = part.split("-", 1)
            s, e = max(1, int(a)), max(1, int(b))
            if s > e:
                s, e = e, s
            selected.extend(range(s - 1, e))
        else:
            selected.append(max(1, int(part)) - 1)
    return selected


def boxes_intersect(
    a: Tuple[float, float, float, float],
    b: Tuple[float, float, float, float],
    padding: float = 0.0
) -> bool:
    """
    Check if two (x0, y0, x1, y1) bounding boxes intersect.

    ``padding`` grows both boxes on every side before the check, so boxes
    closer than ``2 * padding`` count as intersecting.
    """
    ax0, ay0, ax1, ay1 = a
    bx0, by0, bx1, by1 = b

    ax0 -= padding
    ay0 -= padding
    ax1 += padding
    ay1 += padding
    bx0 -= padding
    by0 -= padding
    bx1 += padding
    by1 += padding

    return not (ax1 <= bx0 or bx1 <= ax0 or ay1 <= by0 or by1 <= ay0)


def merge_intervals(intervals: Iterable[Tuple[float, float]]) -> List[Tuple[float, float]]:
    """Sort intervals and merge the ones that overlap or touch."""
    merged: List[Tuple[float, float]] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def interval_gaps(
    intervals: Iterable[Tuple[float, float]],
    lower: float,
    upper: float,
    min_size: float = 0.0,
) -> List[Tuple[float, float]]:
    """Stretches of [lower, upper] not covered by any interval.

    Gaps narrower than ``min_size`` are dropped.
    """
    gaps = []
    cursor = lower
    for start, end in merge_intervals(intervals):
        if end <= lower or start >= upper:
            continue
        start, end = max(start, lower), min(end, upper)
        if start > cursor:
            gaps.append((cursor, start))
        cursor = max(cursor, end)
    if upper > cursor:
        gaps.append((cursor, upper))
    return [(s, e) for s, e in gaps if e - s >= min_size and e - s > 0]


def spatial_name_to_tag_name(name: str, singular: bool = False) -> str:
    """Markup tag for a spatial type name.

    Example:
        >>> spatial_name_to_tag_name("text_runs")
        'text-runs'
        >>> spatial_name_to_tag_name("text_runs", singular=True)
        'text-run'
    """
    tag = name.strip().lower().replace("_", "-").replace(" ", "-")
    if singular and tag.endswith("s") and not tag.endswith("ss"):
        tag = tag[:-1]
    return tag


def group_by_page(objects: Iterable[dict]) -> Dict[int, list]:
    """Bucket spatial objects by their ``page`` attribute, keeping order."""
    pages: Dict[int, list] = {}
    for obj in objects:
        pages.setdefault(obj.get("page", 0), []).append(obj)
    return pages
