"""Image conversion utilities for comicpanels.

QImage/NumPy conversions with proper stride handling, and the luminance
conversion shared by both detectors.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from numpy.typing import NDArray

from PySide6.QtGui import QImage

log = logging.getLogger("comicpanels")


def pdebug(*parts: object) -> None:
    """Debug logger for panel detection stages."""
    if log.isEnabledFor(logging.DEBUG):
        log.debug("[Panels] " + " ".join(map(str, parts)))


def qimage_to_numpy_rgba(img: QImage) -> NDArray:
    """Convert QImage to NumPy array (HxWx4 RGBA uint8).

    Handles PySide6 memoryview correctly and strips stride padding.

    Args:
        img: QImage to convert

    Returns:
        NumPy array of shape (height, width, 4)
    """
    if img.isNull():
        return np.zeros((0, 0, 4), dtype=np.uint8)

    # Convert to RGBA8888 if needed
    if img.format() != QImage.Format.Format_RGBA8888:
        img = img.convertToFormat(QImage.Format.Format_RGBA8888)

    w, h = img.width(), img.height()
    bpl = img.bytesPerLine()

    arr = np.frombuffer(bytes(img.constBits()), dtype=np.uint8)

    # Handle stride padding (bytesPerLine may be > width * 4)
    arr = arr.reshape((h, bpl))
    arr = arr[:, :w * 4]
    arr = arr.reshape((h, w, 4))

    # Return a contiguous copy, the QImage buffer is not ours
    return np.ascontiguousarray(arr)


def as_pixel_array(image: Any) -> NDArray:
    """Normalize a page image to a uint8 array of shape (H, W), (H, W, 3) or (H, W, 4).

    Raises:
        ValueError: if the image is neither a QImage nor a supported array.
    """
    if isinstance(image, QImage):
        return qimage_to_numpy_rgba(image)

    if not isinstance(image, np.ndarray):
        raise ValueError(f"Unsupported image type: {type(image).__name__}")

    if image.ndim == 2:
        pass
    elif image.ndim == 3 and image.shape[2] in (3, 4):
        pass
    else:
        raise ValueError(f"Unsupported image shape: {image.shape}")

    if image.dtype != np.uint8:
        raise ValueError(f"Unsupported image dtype: {image.dtype} (expected uint8)")

    return image


def to_grayscale(arr: NDArray) -> NDArray:
    """Convert an RGB(A) array to rounded ITU-R 601 luminance.

    Alpha is ignored. A 2D array is assumed to already be luminance.

    Args:
        arr: Array of shape (H, W), (H, W, 3) or (H, W, 4)

    Returns:
        Grayscale uint8 array of shape (H, W)
    """
    if arr.ndim == 2:
        return arr.astype(np.uint8, copy=True)

    rgb = arr[:, :, :3].astype(np.float64)
    lum = 0.299 * rgb[:, :, 0] + 0.587 * rgb[:, :, 1] + 0.114 * rgb[:, :, 2]
    return np.clip(np.rint(lum), 0, 255).astype(np.uint8)
