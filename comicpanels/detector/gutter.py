"""Gutter-based grid construction.

A gutter is a row (or column) whose longest run of non-edge pixels covers
most of the page. Accepted gutters plus the page borders form a grid, and
every grid cell, shrunk by the gutter padding, is a panel candidate.
"""

from __future__ import annotations

from typing import List, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .confidence import grid_confidence
from .utils import Panel

if TYPE_CHECKING:
    from ..config import DetectionConfig


def longest_blank_runs(blank: NDArray) -> NDArray:
    """Length of the longest run of True values in each row of a 2D bool array."""
    n, m = blank.shape
    longest = np.zeros(n, dtype=np.int64)
    if n == 0 or m == 0:
        return longest

    padded = np.zeros((n, m + 2), dtype=np.int8)
    padded[:, 1:-1] = blank
    steps = np.diff(padded, axis=1)

    # nonzero() walks row-major, so starts and ends pair up row by row
    start_rows, start_cols = np.nonzero(steps == 1)
    _, end_cols = np.nonzero(steps == -1)
    if start_rows.size:
        np.maximum.at(longest, start_rows, end_cols - start_cols)
    return longest


def _select_lines(runs: NDArray, min_run: int, margin: int, min_spacing: int) -> List[int]:
    """Greedy scan keeping candidates further than `min_spacing` from the last one."""
    lines: List[int] = []
    for pos in range(margin, len(runs) - margin):
        if runs[pos] > min_run:
            if not lines or pos - lines[-1] > min_spacing:
                lines.append(pos)
    return lines


def find_horizontal_gutters(edges: NDArray, config: "DetectionConfig") -> List[int]:
    """Rows whose longest non-edge run exceeds width × min_gutter_ratio."""
    h, w = edges.shape
    min_run = int(w * config.min_gutter_ratio)
    runs = longest_blank_runs(~edges)
    return _select_lines(runs, min_run, config.margin_pixels, config.min_panel_size)


def find_vertical_gutters(edges: NDArray, config: "DetectionConfig") -> List[int]:
    """Columns whose longest non-edge run exceeds height × min_gutter_ratio."""
    h, w = edges.shape
    min_run = int(h * config.min_gutter_ratio)
    runs = longest_blank_runs(~edges.T)
    return _select_lines(runs, min_run, config.margin_pixels, config.min_panel_size)


def with_page_borders(lines: List[int], extent: int) -> List[int]:
    """Add the page borders to a gutter list, deduplicate and sort."""
    return sorted(set([0, extent] + list(lines)))


def panels_from_grid(
    horizontal: List[int],
    vertical: List[int],
    w: int,
    h: int,
    padding: float,
) -> List[Panel]:
    """Build one padded candidate panel per grid cell, row by row.

    Cells that collapse after padding are dropped before numbering.
    """
    panels: List[Panel] = []
    image_area = float(w) * float(h)
    panel_id = 0

    for top, bottom in zip(horizontal, horizontal[1:]):
        for left, right in zip(vertical, vertical[1:]):
            bounds = (left + padding, top + padding, right - padding, bottom - padding)
            bw = bounds[2] - bounds[0]
            bh = bounds[3] - bounds[1]
            if bw <= 0 or bh <= 0:
                continue

            panels.append(Panel(
                id=panel_id,
                left=float(bounds[0]),
                top=float(bounds[1]),
                right=float(bounds[2]),
                bottom=float(bounds[3]),
                confidence=grid_confidence(bw * bh, image_area),
            ))
            panel_id += 1

    return panels
