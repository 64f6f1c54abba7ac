"""Connected-component bounding boxes for the region detector."""

from __future__ import annotations

from typing import List, Tuple

import cv2
import numpy as np
from numpy.typing import NDArray

Box = Tuple[int, int, int, int]  # min x, min y, max x, max y (inclusive)


def connected_boxes(mask: NDArray) -> List[Box]:
    """Bounding boxes of the 4-connected foreground components of `mask`.

    Components come back in raster order of their first pixel, the same
    order a row-by-row flood fill discovers them.

    Args:
        mask: Boolean foreground map (H, W)

    Returns:
        List of (left, top, right, bottom) boxes
    """
    if mask.size == 0 or not mask.any():
        return []

    num_labels, labels, stats, _ = cv2.connectedComponentsWithStats(
        mask.astype(np.uint8), connectivity=4, ltype=cv2.CV_32S
    )

    # First raster index of every label; label 0 is the background
    found, first_index = np.unique(labels.ravel(), return_index=True)
    order = [int(lab) for _, lab in sorted(zip(first_index, found)) if lab != 0]

    boxes: List[Box] = []
    for lab in order:
        x = int(stats[lab, cv2.CC_STAT_LEFT])
        y = int(stats[lab, cv2.CC_STAT_TOP])
        bw = int(stats[lab, cv2.CC_STAT_WIDTH])
        bh = int(stats[lab, cv2.CC_STAT_HEIGHT])
        boxes.append((x, y, x + bw - 1, y + bh - 1))
    return boxes
