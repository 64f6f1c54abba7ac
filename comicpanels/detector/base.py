"""Core detector contract shared by the grid and region engines.

A detection call is a sequence of stages over one page image:

    grayscale -> edge/binarize -> grouping -> filter/merge -> order

Every buffer is created inside the call, so a single detector instance can
be used from several threads at once. Cancellation is cooperative and is
checked between stages.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

from ..config import DetectionConfig, ReadingDirection
from ..image_utils import log, pdebug
from .utils import DebugInfo, Panel


class DetectionCancelled(Exception):
    """Raised inside a pipeline when its cancellation token fires."""


class CancellationToken:
    """Thread-safe cancellation flag for one or more detection calls."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise DetectionCancelled()


@dataclass(frozen=True)
class Success:
    """Panels found, sorted by reading order."""
    panels: Tuple[Panel, ...]
    debug: DebugInfo = field(default_factory=DebugInfo.empty, compare=False)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Error:
    """Detection failed; the page should be shown without panels."""
    message: str
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return False

    @property
    def panels(self) -> Tuple[Panel, ...]:
        return ()


@dataclass(frozen=True)
class NoPanelsFound:
    """The region detector found no content blobs large enough to be panels."""

    @property
    def ok(self) -> bool:
        return False

    @property
    def panels(self) -> Tuple[Panel, ...]:
        return ()


DetectionResult = Union[Success, Error, NoPanelsFound]


class PanelDetector(ABC):
    """Base class for panel detection engines.

    Subclasses implement `_run`, the stage pipeline. `detect` wraps it so that
    a failure on one page is reported as an `Error` value and never raised.
    """

    name = "base"

    def __init__(self, config: Optional[DetectionConfig] = None):
        """Initialize detector with configuration.

        Args:
            config: Detection parameters. Uses defaults if None.
        """
        self.config = config or DetectionConfig()

    def detect(
        self,
        image: Any,
        direction: ReadingDirection = ReadingDirection.LEFT_TO_RIGHT,
        cancel: Optional[CancellationToken] = None,
    ) -> DetectionResult:
        """Detect and order the panels of one page image.

        Args:
            image: Page as QImage or uint8 ndarray (H×W, H×W×3 or H×W×4)
            direction: Reading direction used inside each row
            cancel: Optional token checked between stages

        Returns:
            Success, Error or NoPanelsFound
        """
        token = cancel or CancellationToken()
        try:
            return self._run(image, direction, token)
        except DetectionCancelled:
            pdebug(f"[{self.name}] cancelled")
            return Error("Detection cancelled", cancelled=True)
        except Exception as e:
            log.exception("%s panel detection failed", self.name)
            return Error(f"Panel detection failed: {e}")

    def _stage(self, token: CancellationToken, debug: DebugInfo, stage: str, count: int) -> None:
        """Record a finished stage and honour cancellation before the next one."""
        debug.record(stage, count)
        if self.config.debug:
            pdebug(f"[{self.name}] {stage}: {count}")
        token.raise_if_cancelled()

    @abstractmethod
    def _run(
        self,
        image: Any,
        direction: ReadingDirection,
        token: CancellationToken,
    ) -> DetectionResult:
        raise NotImplementedError
