"""comicpanels - heuristic comic panel detection.

Locates the rectangular panels of a comic page image and orders them for
panel-by-panel reading, using NumPy/OpenCV for the pixel work and PySide6
for QImage/QRectF interop.
"""

__version__ = "1.0.0"
__author__ = "comicpanels Contributors"

from .config import DetectionConfig, ReadingDirection, PRESETS
from .detector import (
    CancellationToken,
    DetectionResult,
    DetectorKind,
    Error,
    GridPanelDetector,
    NoPanelsFound,
    Panel,
    PanelDetector,
    RegionPanelDetector,
    Success,
    make_detector,
)
from .async_detection import AsyncDetectionManager, DetectionTask, PageResult

__all__ = [
    "AsyncDetectionManager",
    "CancellationToken",
    "DetectionConfig",
    "DetectionResult",
    "DetectionTask",
    "DetectorKind",
    "Error",
    "GridPanelDetector",
    "NoPanelsFound",
    "PRESETS",
    "PageResult",
    "Panel",
    "PanelDetector",
    "ReadingDirection",
    "RegionPanelDetector",
    "Success",
    "make_detector",
]
