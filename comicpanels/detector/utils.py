"""Shared utilities and data structures for panel detection.

Contains:
- Panel dataclass (detector output)
- DebugInfo dataclass for per-call diagnostics
- Rectangle helpers (overlap ratio, union)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from PySide6.QtCore import QRectF


@dataclass(frozen=True)
class Panel:
    """A detected rectangular panel in image pixel coordinates.

    `reading_order` is 0 until the panels have been ordered. `id` is a
    sequence number from the grouping stage and is not stable across merges.
    """
    id: int
    left: float
    top: float
    right: float
    bottom: float
    reading_order: int = 0
    confidence: float = 1.0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return (left, top, right, bottom)."""
        return (self.left, self.top, self.right, self.bottom)

    def with_bounds(self, left: float, top: float, right: float, bottom: float) -> "Panel":
        return replace(self, left=left, top=top, right=right, bottom=bottom)

    def with_reading_order(self, order: int) -> "Panel":
        return replace(self, reading_order=order)

    def to_qrectf(self, scale: float = 1.0) -> QRectF:
        """Convert bounds to QRectF, dividing by `scale` (pixels per page point)."""
        return QRectF(
            self.left / scale,
            self.top / scale,
            self.width / scale,
            self.height / scale,
        )


@dataclass
class DebugInfo:
    """Diagnostics from one detection pass."""
    horizontal_gutters: List[int] = field(default_factory=list)
    vertical_gutters: List[int] = field(default_factory=list)
    threshold: Optional[int] = None    # Otsu cutoff (region detector)
    component_count: int = 0           # Raw connected components (region detector)
    stage_counts: List[Tuple[str, int]] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "DebugInfo":
        return cls()

    def record(self, stage: str, count: int) -> None:
        self.stage_counts.append((stage, count))


def overlap_ratio(a: Panel, b: Panel) -> float:
    """Intersection area divided by the area of the smaller rectangle."""
    left = max(a.left, b.left)
    top = max(a.top, b.top)
    right = min(a.right, b.right)
    bottom = min(a.bottom, b.bottom)

    if left >= right or top >= bottom:
        return 0.0

    min_area = min(a.area, b.area)
    if min_area <= 0:
        return 0.0
    return (right - left) * (bottom - top) / min_area


def union(a: Panel, b: Panel) -> Panel:
    """Bounding box union, keeping the identity fields of `a`."""
    return a.with_bounds(
        min(a.left, b.left),
        min(a.top, b.top),
        max(a.right, b.right),
        max(a.bottom, b.bottom),
    )
