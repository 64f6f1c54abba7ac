"""Configuration dataclasses for comicpanels.

Using frozen dataclasses provides:
- Type safety and IDE autocompletion
- Easy serialization/deserialization
- Instances that can be shared between concurrent detection calls
"""

from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Dict, Any


class ReadingDirection(Enum):
    """Horizontal reading direction inside a row of panels."""

    LEFT_TO_RIGHT = "ltr"   # Western comics
    RIGHT_TO_LEFT = "rtl"   # Manga

    @property
    def rtl(self) -> bool:
        return self is ReadingDirection.RIGHT_TO_LEFT


@dataclass(frozen=True)
class DetectionConfig:
    """Tunable thresholds for both panel detection engines.

    Pixel values are in image pixels; ratios are relative to the page area
    or page dimensions.
    """

    # Edge detection (grid detector)
    edge_threshold: int = 50          # Sobel magnitude above which a pixel is an edge

    # Gutter discovery (grid detector)
    min_gutter_ratio: float = 0.6     # Blank run needed, as fraction of width/height
    margin_pixels: int = 20           # Rows/columns ignored near the page border
    gutter_padding: float = 5.0       # Inward shrink of each grid cell

    # Panel size filters
    min_panel_size: int = 100         # Minimum panel width/height, also gutter spacing
    min_panel_area_ratio: float = 0.02  # Minimum panel area (2% of the page)
    max_panel_area_ratio: float = 0.95  # Maximum panel area (exclude full-bleed)

    # Merging (grid detector)
    merge_overlap_threshold: float = 0.3  # Intersection / smaller area needed to merge

    # Morphology (region detector)
    dilation_size: int = 3            # Square structuring element side

    # Reading order
    grid_row_threshold_ratio: float = 0.5    # Row tolerance as fraction of smallest height
    region_row_threshold_ratio: float = 0.3
    default_row_threshold: float = 50.0

    debug: bool = False

    def replace(self, **overrides: Any) -> "DetectionConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DetectionConfig":
        """Create from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


# Preset configurations for different comic styles
PRESETS: Dict[str, tuple[DetectionConfig, ReadingDirection]] = {
    "Franco-Belge": (
        DetectionConfig(
            edge_threshold=50,
            min_gutter_ratio=0.6,
            min_panel_size=100,
            gutter_padding=5.0,
        ),
        ReadingDirection.LEFT_TO_RIGHT,
    ),
    "Manga": (
        DetectionConfig(
            edge_threshold=40,
            min_gutter_ratio=0.55,
            min_panel_size=80,
            min_panel_area_ratio=0.015,
            gutter_padding=4.0,
        ),
        ReadingDirection.RIGHT_TO_LEFT,
    ),
    "Newspaper": (
        DetectionConfig(
            edge_threshold=60,
            min_gutter_ratio=0.7,
            min_panel_size=60,
            min_panel_area_ratio=0.01,
            margin_pixels=10,
            gutter_padding=3.0,
        ),
        ReadingDirection.LEFT_TO_RIGHT,
    ),
}
