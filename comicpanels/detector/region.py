"""Region panel detector.

Treats panel content as dark blobs on a light page: Otsu binarization,
a small dilation to close thin gaps, then one panel per connected
component. Tolerates irregular layouts but cannot separate panels that
touch each other.
"""

from __future__ import annotations

from typing import Any

from ..config import ReadingDirection
from ..image_utils import as_pixel_array, pdebug, to_grayscale
from .base import CancellationToken, DetectionResult, NoPanelsFound, PanelDetector, Success
from .binarize import binarize, dilate, otsu_threshold
from .components import connected_boxes
from .confidence import region_confidence
from .filters import filter_small_regions
from .reading_order import sort_by_reading_order
from .utils import DebugInfo, Panel


class RegionPanelDetector(PanelDetector):
    """Connected-component panel detector."""

    name = "region"

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
            pdebug(f"[region] Image size: {w}x{h}")

        if w == 0 or h == 0:
            return NoPanelsFound()

        image_area = float(w) * float(h)

        # 1. Grayscale
        gray = to_grayscale(arr)
        self._stage(token, debug, "grayscale", gray.size)

        # 2. Binarize and close small gaps
        debug.threshold = otsu_threshold(gray)
        mask = dilate(binarize(gray, debug.threshold), config.dilation_size)
        if config.debug:
            pdebug(f"[region] otsu cutoff={debug.threshold}")
        self._stage(token, debug, "foreground pixels", int(mask.sum()))

        # 3. Components
        boxes = connected_boxes(mask)
        debug.component_count = len(boxes)
        panels = [
            Panel(
                id=index,
                left=float(left),
                top=float(top),
                right=float(right),
                bottom=float(bottom),
                confidence=region_confidence(right - left, bottom - top, image_area),
            )
            for index, (left, top, right, bottom) in enumerate(boxes)
        ]
        self._stage(token, debug, "components", len(panels))

        # 4. Filter
        panels = filter_small_regions(panels, w, h, config.min_panel_area_ratio)
        self._stage(token, debug, "filtered", len(panels))

        # 5. Reading order
        panels = sort_by_reading_order(
            panels,
            rtl=direction.rtl,
            ratio=config.region_row_threshold_ratio,
            default_threshold=config.default_row_threshold,
        )

        if not panels:
            return NoPanelsFound()

        debug.record("ordered", len(panels))
        return Success(tuple(panels), debug)
