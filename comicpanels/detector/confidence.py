"""Confidence scores for detected panels.

Both scores are stepped functions; the breakpoints are part of the
detector output and must not be smoothed.
"""

from __future__ import annotations

import math


def grid_confidence(area: float, image_area: float) -> float:
    """Score a grid cell by its share of the page."""
    area_ratio = area / image_area

    # Panels between 5% and 50% of the page are the most plausible
    if area_ratio < 0.02:
        return 0.3
    if area_ratio < 0.05:
        return 0.6
    if area_ratio < 0.5:
        return 0.9
    if area_ratio < 0.8:
        return 0.7
    return 0.5


def region_confidence(width: float, height: float, image_area: float) -> float:
    """Score a connected component by aspect ratio and page share."""
    if height > 0:
        aspect = width / height
    else:
        # One-row component: same outcome as float division by zero
        aspect = math.inf if width > 0 else math.nan
    area_ratio = (width * height) / image_area

    if aspect < 0.2 or aspect > 5:
        aspect_score = 0.5
    elif aspect < 0.5 or aspect > 2:
        aspect_score = 0.8
    else:
        aspect_score = 1.0

    if area_ratio < 0.05:
        area_score = 0.5
    elif area_ratio < 0.1:
        area_score = 0.8
    elif area_ratio > 0.8:
        area_score = 0.6
    else:
        area_score = 1.0

    return aspect_score * area_score
