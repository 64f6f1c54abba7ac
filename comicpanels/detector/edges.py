"""Sobel edge map for the grid detector."""

from __future__ import annotations

import cv2
import numpy as np
from numpy.typing import NDArray


def sobel_magnitude(gray: NDArray) -> NDArray:
    """Integer Sobel gradient magnitude, clamped to 255.

    The one-pixel border is left at 0.

    Args:
        gray: Grayscale uint8 image (H, W)

    Returns:
        int32 array of shape (H, W)
    """
    h, w = gray.shape[:2]
    magnitude = np.zeros((h, w), dtype=np.int32)
    if h < 3 or w < 3:
        return magnitude

    # CV_64F keeps the integer kernel sums exact
    gx = cv2.Sobel(gray, cv2.CV_64F, 1, 0, ksize=3)
    gy = cv2.Sobel(gray, cv2.CV_64F, 0, 1, ksize=3)

    inner = np.sqrt(gx[1:-1, 1:-1] ** 2 + gy[1:-1, 1:-1] ** 2)
    magnitude[1:-1, 1:-1] = np.minimum(np.floor(inner), 255).astype(np.int32)
    return magnitude


def detect_edges(gray: NDArray, edge_threshold: int) -> NDArray:
    """Boolean edge map: True where the Sobel magnitude exceeds `edge_threshold`."""
    return sobel_magnitude(gray) > edge_threshold
