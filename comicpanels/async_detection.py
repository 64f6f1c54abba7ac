"""Background panel detection on a worker pool.

Pages are detected independently, so several pages can run in parallel;
the heavy NumPy/OpenCV work releases the GIL.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import ReadingDirection
from .detector import CancellationToken, DetectionResult, Error, GridPanelDetector, PanelDetector
from .image_utils import log


@dataclass
class DetectionTask:
    """A detection task to be processed."""
    page_num: int
    image: Any
    direction: ReadingDirection = ReadingDirection.LEFT_TO_RIGHT


@dataclass
class PageResult:
    """Result of a detection task."""
    page_num: int
    result: DetectionResult
    elapsed_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.result.ok


class AsyncDetectionManager:
    """Manager for asynchronous panel detection.

    Handles:
    - Worker pool management
    - Per-page cancellation (a newer request for a page replaces the older one)
    - Batch detection with results in task order
    """

    def __init__(self, detector: Optional[PanelDetector] = None, max_workers: int = 2):
        self._detector = detector or GridPanelDetector()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="panel_detect")
        # Reentrant: a cancelled future runs its done callback in the cancelling thread
        self._lock = threading.RLock()
        self._active: Dict[int, Tuple[Future, CancellationToken]] = {}

    @property
    def detector(self) -> PanelDetector:
        return self._detector

    def update_detector(self, detector: PanelDetector) -> None:
        """Use `detector` for tasks submitted from now on."""
        with self._lock:
            self._detector = detector

    def submit(self, task: DetectionTask) -> "Future[PageResult]":
        """Queue detection for a page.

        If the same page is already queued or running, that request is cancelled.

        Args:
            task: Detection task to process

        Returns:
            Future resolving to the PageResult
        """
        with self._lock:
            self._cancel_locked(task.page_num)

            token = CancellationToken()
            future = self._executor.submit(self._detect, self._detector, task, token)
            self._active[task.page_num] = (future, token)
            future.add_done_callback(lambda f, page=task.page_num: self._on_done(page, f))
            return future

    def detect_all(self, tasks: Iterable[DetectionTask]) -> List[PageResult]:
        """Detect a batch of pages and wait for all of them, keeping task order.

        Tasks sharing a page number replace each other as with `submit`: every
        earlier one comes back as `Error(cancelled=True)`.
        """
        submitted = [(task.page_num, self.submit(task)) for task in tasks]
        return [self._collect(page_num, future) for page_num, future in submitted]

    def cancel(self, page_num: int) -> None:
        """Cancel detection for a specific page.

        Args:
            page_num: Page number to cancel
        """
        with self._lock:
            self._cancel_locked(page_num)

    def cancel_all(self) -> None:
        """Cancel all pending and running detections."""
        with self._lock:
            for page_num in list(self._active):
                self._cancel_locked(page_num)

    @property
    def pending_count(self) -> int:
        """Number of queued or running tasks."""
        with self._lock:
            return sum(1 for future, _ in self._active.values() if not future.done())

    @property
    def is_busy(self) -> bool:
        return self.pending_count > 0

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting tasks and release the worker threads."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "AsyncDetectionManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _cancel_locked(self, page_num: int) -> None:
        entry = self._active.pop(page_num, None)
        if entry is None:
            return
        future, token = entry
        token.cancel()
        future.cancel()

    def _on_done(self, page_num: int, future: Future) -> None:
        with self._lock:
            entry = self._active.get(page_num)
            if entry is not None and entry[0] is future:
                del self._active[page_num]

    @staticmethod
    def _detect(detector: PanelDetector, task: DetectionTask, token: CancellationToken) -> PageResult:
        start_time = time.perf_counter()
        result = detector.detect(task.image, task.direction, cancel=token)
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        log.debug("[Panels] page %d: %s in %.1f ms", task.page_num, type(result).__name__, elapsed_ms)
        return PageResult(page_num=task.page_num, result=result, elapsed_ms=elapsed_ms)

    @staticmethod
    def _collect(page_num: int, future: Future) -> PageResult:
        try:
            return future.result()
        except CancelledError:
            return PageResult(page_num=page_num, result=Error("Detection cancelled", cancelled=True))
