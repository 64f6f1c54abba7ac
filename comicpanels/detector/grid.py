"""Grid panel detector.

Assumes panels sit on a roughly rectangular grid separated by blank
gutters:

1. Grayscale conversion
2. Sobel edge map
3. Gutter rows/columns -> grid cells
4. Size/area filter and overlap merge
5. Reading order

The grid path never reports "no panels": an empty result becomes a single
full-page panel.
"""

from __future__ import annotations

from typing import Any

from ..config import ReadingDirection
from ..image_utils import as_pixel_array, pdebug, to_grayscale
from .base import CancellationToken, DetectionResult, PanelDetector, Success
from .edges import detect_edges
from .filters import filter_by_area, merge_overlapping_panels
from .gutter import (
    find_horizontal_gutters,
    find_vertical_gutters,
    panels_from_grid,
    with_page_borders,
)
from .reading_order import sort_by_reading_order
from .utils import DebugInfo, Panel

FALLBACK_CONFIDENCE = 0.5


class GridPanelDetector(PanelDetector):
    """Gutter-grid panel detector.

    Always returns at least one panel, except for a 0-area image, which gives
    an empty `Success`.
    """

    name = "grid"

    def _run(
        self,
        image: Any,
        direction: ReadingDirection,
        token: CancellationToken,
    ) -> DetectionResult:
        config = self.config
        debug = DebugInfo.empty()

        arr = as_pixel_array(image)
        h, w = arr.shape[:2]
        if config.debug:
            pdebug(f"[grid] Image size: {w}x{h}")

        if w == 0 or h == 0:
            # Nothing to fall back to: a 0-area page has no valid rectangle
            return Success((), debug)

        # 1. Grayscale
        gray = to_grayscale(arr)
        self._stage(token, debug, "grayscale", gray.size)

        # 2. Edges
        edges = detect_edges(gray, config.edge_threshold)
        self._stage(token, debug, "edge pixels", int(edges.sum()))

        # 3. Gutters and grid cells
        debug.horizontal_gutters = find_horizontal_gutters(edges, config)
        debug.vertical_gutters = find_vertical_gutters(edges, config)
        if config.debug:
            pdebug(f"[grid] gutters H={debug.horizontal_gutters} V={debug.vertical_gutters}")

        rows = with_page_borders(debug.horizontal_gutters, h)
        cols = with_page_borders(debug.vertical_gutters, w)
        panels = panels_from_grid(rows, cols, w, h, config.gutter_padding)
        self._stage(token, debug, "grid cells", len(panels))

        # 4. Filter and merge
        panels = filter_by_area(
            panels, w, h,
            config.min_panel_area_ratio,
            config.max_panel_area_ratio,
            config.min_panel_size,
        )
        debug.record("filtered", len(panels))
        panels = merge_overlapping_panels(panels, config.merge_overlap_threshold)
        self._stage(token, debug, "merged", len(panels))

        # 5. Reading order
        panels = sort_by_reading_order(
            panels,
            rtl=direction.rtl,
            ratio=config.grid_row_threshold_ratio,
            default_threshold=config.default_row_threshold,
        )

        if not panels:
            if config.debug:
                pdebug("[grid] no panels -> full page")
            panels = [Panel(
                id=0,
                left=0.0,
                top=0.0,
                right=float(w),
                bottom=float(h),
                reading_order=0,
                confidence=FALLBACK_CONFIDENCE,
            )]

        debug.record("ordered", len(panels))
        return Success(tuple(panels), debug)
