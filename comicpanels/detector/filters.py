"""Post-processing filters for panel detection.

Filters:
- Size/area filtering of grid cells
- Minimum-area filtering of connected components
- Single-pass overlap merging
"""

from __future__ import annotations

from typing import List

from .utils import Panel, overlap_ratio, union


def filter_by_area(
    panels: List[Panel],
    w: int,
    h: int,
    min_area_pct: float,
    max_area_pct: float,
    min_size: float,
) -> List[Panel]:
    """Keep panels whose area lies in [min, max] of the page and whose sides exceed `min_size`.

    Args:
        panels: Candidate panels
        w, h: Image dimensions
        min_area_pct: Minimum area as fraction of the page
        max_area_pct: Maximum area as fraction of the page
        min_size: Minimum width and height in pixels (exclusive)

    Returns:
        Filtered list, original order preserved
    """
    page_area = float(w) * float(h)
    min_area = page_area * min_area_pct
    max_area = page_area * max_area_pct

    return [p for p in panels
            if min_area <= p.area <= max_area
            and p.width > min_size
            and p.height > min_size]


def filter_small_regions(panels: List[Panel], w: int, h: int, min_area_pct: float) -> List[Panel]:
    """Drop regions whose bounding box is not larger than `min_area_pct` of the page."""
    min_area = float(w) * float(h) * min_area_pct
    return [p for p in panels if p.area > min_area]


def merge_overlapping_panels(panels: List[Panel], threshold: float) -> List[Panel]:
    """Merge panels that overlap by more than `threshold`.

    One greedy pass: each surviving panel absorbs every later, unused panel
    whose overlap with the growing union exceeds the threshold. Absorbed
    panels are not revisited, so the result depends on input order.

    Args:
        panels: Panels in grouping order
        threshold: Intersection / smaller-area ratio above which panels merge

    Returns:
        Merged panels; each keeps the id and confidence of its first member
    """
    if len(panels) <= 1:
        return list(panels)

    merged: List[Panel] = []
    used = [False] * len(panels)

    for i, panel in enumerate(panels):
        if used[i]:
            continue
        used[i] = True
        current = panel

        for j in range(i + 1, len(panels)):
            if used[j]:
                continue
            if overlap_ratio(current, panels[j]) > threshold:
                current = union(current, panels[j])
                used[j] = True

        merged.append(current)

    return merged
