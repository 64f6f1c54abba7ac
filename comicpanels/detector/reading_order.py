"""Row-by-row reading order.

Panels are grouped into rows by vertical centre, rows are read top to
bottom and each row left-to-right or right-to-left.
"""

from __future__ import annotations

from typing import List, Optional

from .utils import Panel


def row_threshold(panels: List[Panel], ratio: float, default: float = 50.0) -> float:
    """Row tolerance: `ratio` times the smallest panel height, or `default` when empty."""
    if not panels:
        return default
    return min(p.height for p in panels) * ratio


def group_rows(panels: List[Panel], threshold: float) -> List[List[Panel]]:
    """Greedily cluster panels into rows.

    Panels are visited by ascending top edge. A panel joins the first row
    holding any member whose vertical centre is closer than `threshold`,
    otherwise it opens a new row. Rows are returned in creation order.
    """
    rows: List[List[Panel]] = []
    for panel in sorted(panels, key=lambda p: p.top):
        target: Optional[List[Panel]] = None
        for row in rows:
            if any(abs(other.center_y - panel.center_y) < threshold for other in row):
                target = row
                break
        if target is not None:
            target.append(panel)
        else:
            rows.append([panel])
    return rows


def sort_by_reading_order(
    panels: List[Panel],
    rtl: bool = False,
    ratio: float = 0.5,
    default_threshold: float = 50.0,
) -> List[Panel]:
    """Order panels and assign contiguous reading-order indices from 0.

    Args:
        panels: Panels to order
        rtl: Right-to-left reading inside each row
        ratio: Row tolerance as a fraction of the smallest panel height
        default_threshold: Row tolerance when there are no panels

    Returns:
        New panels sorted by reading order
    """
    if not panels:
        return []

    rows = group_rows(panels, row_threshold(panels, ratio, default_threshold))

    result: List[Panel] = []
    for row in rows:
        # sorted() is stable for reverse=True as well, ties keep row order
        row_sorted = sorted(row, key=lambda p: p.left, reverse=rtl)
        for panel in row_sorted:
            result.append(panel.with_reading_order(len(result)))

    return result
