"""Otsu binarization and dilation for the region detector."""

from __future__ import annotations

import cv2
import numpy as np
from numpy.typing import NDArray


def otsu_threshold(gray: NDArray) -> int:
    """Select the luminance cutoff separating dark content from background.

    Every split t in 0..255 puts values <= t in the dark class. The first t
    with the largest between-class variance wB·wF·(mB−mF)² wins, and the
    returned cutoff is t + 1 so that `gray < cutoff` selects the dark class.
    A histogram with no valid split (single intensity) returns 0.

    Args:
        gray: Grayscale uint8 image

    Returns:
        Cutoff in 0..256
    """
    hist = np.bincount(gray.ravel(), minlength=256).astype(np.float64)
    total = hist.sum()
    if total == 0:
        return 0

    levels = np.arange(256, dtype=np.float64)
    w_b = np.cumsum(hist)
    w_f = total - w_b
    sum_b = np.cumsum(levels * hist)
    sum_all = sum_b[-1]

    valid = (w_b > 0) & (w_f > 0)
    if not valid.any():
        return 0

    variance = np.zeros(256, dtype=np.float64)
    m_b = sum_b[valid] / w_b[valid]
    m_f = (sum_all - sum_b[valid]) / w_f[valid]
    variance[valid] = w_b[valid] * w_f[valid] * (m_b - m_f) ** 2

    # argmax returns the first maximum, i.e. the lowest split on ties
    best = int(np.argmax(variance))
    if variance[best] <= 0:
        return 0
    return best + 1


def binarize(gray: NDArray, cutoff: int) -> NDArray:
    """Foreground (True) where luminance is strictly below `cutoff`."""
    return gray.astype(np.int32) < cutoff


def dilate(mask: NDArray, size: int = 3) -> NDArray:
    """Square dilation with radius size // 2; pixels outside the image never count."""
    radius = max(size // 2, 0)
    if radius == 0 or mask.size == 0:
        return mask.copy()

    kernel = np.ones((2 * radius + 1, 2 * radius + 1), dtype=np.uint8)
    out = cv2.dilate(
        mask.astype(np.uint8),
        kernel,
        borderType=cv2.BORDER_CONSTANT,
        borderValue=0,
    )
    return out.astype(bool)
