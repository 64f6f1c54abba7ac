"""Panel detection engines for comicpanels.

Two interchangeable detectors share one contract
(image + config + reading direction -> DetectionResult):

- grid.py: Gutter grid detection from a Sobel edge map
- region.py: Otsu binarization + connected components

Shared stages:
- edges.py / gutter.py: grid-only edge map and gutter discovery
- binarize.py / components.py: region-only binarization and labeling
- filters.py: size/area filters and overlap merging
- reading_order.py: row clustering and ordering
- confidence.py: stepped confidence scores
- utils.py: Panel, DebugInfo and rectangle helpers
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from ..config import DetectionConfig
from .base import (
    CancellationToken,
    DetectionCancelled,
    DetectionResult,
    Error,
    NoPanelsFound,
    PanelDetector,
    Success,
)
from .grid import GridPanelDetector
from .region import RegionPanelDetector
from .utils import DebugInfo, Panel


class DetectorKind(Enum):
    GRID = "grid"
    REGION = "region"


_DETECTORS = {
    DetectorKind.GRID: GridPanelDetector,
    DetectorKind.REGION: RegionPanelDetector,
}


def make_detector(
    kind: Union[DetectorKind, str] = DetectorKind.GRID,
    config: Optional[DetectionConfig] = None,
) -> PanelDetector:
    """Create the detector selected by `kind` ("grid" or "region").

    Raises:
        ValueError: for an unknown kind
    """
    if not isinstance(kind, DetectorKind):
        try:
            kind = DetectorKind(str(kind).lower())
        except ValueError:
            raise ValueError(f"Unknown detector kind: {kind!r}") from None
    return _DETECTORS[kind](config)


__all__ = [
    "CancellationToken",
    "DebugInfo",
    "DetectionCancelled",
    "DetectionResult",
    "DetectorKind",
    "Error",
    "GridPanelDetector",
    "NoPanelsFound",
    "Panel",
    "PanelDetector",
    "RegionPanelDetector",
    "Success",
    "make_detector",
]
