"""
Frame scheduling for playback.

The playback controller never sleeps or loops by itself. It asks a
scheduler for one frame at a time (like ``requestAnimationFrame``) and
cancels the pending frame when playback stops.
"""

import itertools
import threading
import time
from typing import Callable, Hashable, Optional, Protocol, Tuple

from .config import DEFAULT_FPS

FrameCallback = Callable[[float], None]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class FrameScheduler(Protocol):
    def request_frame(self, callback: FrameCallback) -> Hashable:
        """Run ``callback(now_ms)`` once, on the next frame."""

    def cancel_frame(self, handle: Hashable) -> None:
        """Drop a requested frame that has not run yet."""


class ManualFrameScheduler:
    """Scheduler pumped by the embedding runtime.

    Holds at most one pending frame; :meth:`run_pending` fires it. Used by
    the Streamlit playback fragment and by tests.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: Optional[Tuple[int, FrameCallback]] = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending = (handle, callback)
        return handle

    def cancel_frame(self, handle: Hashable) -> None:
        if self._pending is not None and self._pending[0] == handle:
            self._pending = None

    def run_pending(self, now_ms: float) -> bool:
        """Fire the pending frame, if any. Returns whether a frame ran."""
        if self._pending is None:
            return False
        _, callback = self._pending
        self._pending = None
        callback(now_ms)
        return True


class ThreadedFrameScheduler:
    """Scheduler firing each frame from a ``threading.Timer`` at a fixed rate."""

    def __init__(
        self, fps: int = DEFAULT_FPS, clock: Callable[[], float] = monotonic_ms
    ) -> None:
        if fps <= 0:
            raise ValueError("fps must be positive.")
        self.interval_s = 1.0 / fps
        self.clock = clock

    def request_frame(self, callback: FrameCallback) -> threading.Timer:
        timer = threading.Timer(self.interval_s, lambda: callback(self.clock()))
        timer.daemon = True
        timer.start()
        return timer

    def cancel_frame(self, handle: Hashable) -> None:
        handle.cancel()
