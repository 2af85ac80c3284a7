"""
Time-based playback over a range of enriched points.

The controller owns the playback clock (elapsed logical time, speed
multiplier, play flag) and is its only mutator. Wall-clock values are
injected through :meth:`PlaybackController.tick`, so a test can drive it
with synthetic times and a real app with a frame scheduler.
"""

import bisect
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Hashable, List, Optional, Sequence, Tuple, Union

from scripts.log import get_logger

from .config import PLAYBACK_SPEEDS, RESYNC_THRESHOLD_MS
from .errors import PlaybackRangeError
from .models import EnrichedPoint
from .scheduler import FrameScheduler
from .utils import to_epoch_ms

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlaybackState:
    elapsed_ms: float
    speed_multiplier: float
    is_playing: bool
    current_index: int
    interpolated_sample: Optional[EnrichedPoint]


def lerp_sample(p1: EnrichedPoint, p2: EnrichedPoint, ratio: float) -> EnrichedPoint:
    """Linear interpolation between two samples at ``ratio`` in [0, 1]."""

    def lerp(a: float, b: float) -> float:
        return a + (b - a) * ratio

    time = None
    if p1.time is not None and p2.time is not None:
        time = p1.time + (p2.time - p1.time) * ratio
    return EnrichedPoint(
        lat=lerp(p1.lat, p2.lat),
        lon=lerp(p1.lon, p2.lon),
        ele=lerp(p1.ele, p2.ele),
        time=time,
        cum_dist=lerp(p1.cum_dist, p2.cum_dist),
        speed=lerp(p1.speed, p2.speed),
        smooth_speed=lerp(p1.smooth_speed, p2.smooth_speed),
    )


class PlaybackController:
    """Play/pause/seek over ``points`` with interpolation between samples.

    Parameters
    ----------
    points : Sequence[EnrichedPoint]
        The active view's points (whole track or one segment). Referenced,
        not copied.
    scheduler : FrameScheduler, optional
        Source of frames while playing. Without one, the caller drives
        :meth:`tick` directly.
    speed_multiplier : float
        Logical milliseconds advanced per wall-clock millisecond.
    """

    def __init__(
        self,
        points: Sequence[EnrichedPoint],
        scheduler: Optional[FrameScheduler] = None,
        speed_multiplier: float = 1.0,
    ) -> None:
        if not points:
            raise PlaybackRangeError("Cannot play back an empty point range.")
        self._points = points
        self._times: List[Optional[float]] = [p.time_ms for p in points]
        self._playable = len(points) >= 2 and all(t is not None for t in self._times)
        self._monotonic = self._playable and all(
            a <= b for a, b in zip(self._times, self._times[1:])
        )
        self._scheduler = scheduler
        self._lock = threading.RLock()

        self._elapsed_ms = 0.0
        self._speed_multiplier = float(speed_multiplier)
        self._is_playing = False
        self._current_index = 0
        self._sample: Optional[EnrichedPoint] = None
        self._last_wall_ms: Optional[float] = None
        self._external_index: Optional[int] = None

        # Frames requested under an older generation are stale and ignored.
        self._frame_generation = 0
        self._frame_handle: Optional[Hashable] = None

    # ---------- State access ----------
    @property
    def points(self) -> Sequence[EnrichedPoint]:
        return self._points

    @property
    def is_playable(self) -> bool:
        return self._playable

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    @property
    def speed_multiplier(self) -> float:
        return self._speed_multiplier

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def interpolated_sample(self) -> Optional[EnrichedPoint]:
        return self._sample

    @property
    def current_point(self) -> EnrichedPoint:
        with self._lock:
            if self._sample is not None:
                return self._sample
            return self._points[self._current_index]

    @property
    def start_ms(self) -> float:
        return self._times[0] if self._playable else 0.0

    @property
    def end_ms(self) -> float:
        return self._times[-1] if self._playable else 0.0

    @property
    def duration_ms(self) -> float:
        return max(0.0, self.end_ms - self.start_ms)

    @property
    def progress(self) -> float:
        if self.duration_ms <= 0:
            return 0.0
        return min(1.0, max(0.0, self._elapsed_ms / self.duration_ms))

    def snapshot(self) -> PlaybackState:
        with self._lock:
            return PlaybackState(
                elapsed_ms=self._elapsed_ms,
                speed_multiplier=self._speed_multiplier,
                is_playing=self._is_playing,
                current_index=self._current_index,
                interpolated_sample=self._sample,
            )

    # ---------- Mutators ----------
    def play(self) -> None:
        with self._lock:
            if self._is_playing or not self._playable:
                return
            last = len(self._points) - 1
            if self._external_index is not None:
                implied = self._times[self._external_index] - self.start_ms
                if abs(self._elapsed_ms - implied) > RESYNC_THRESHOLD_MS:
                    self._elapsed_ms = implied
                self._external_index = None
            if self._current_index >= last:
                self._elapsed_ms = 0.0
            self._is_playing = True
            self._last_wall_ms = None
            logger.debug("play from %.0f ms at %sx", self._elapsed_ms, self._speed_multiplier)
            self._request_frame()

    def pause(self) -> None:
        with self._lock:
            if not self._is_playing:
                return
            self._is_playing = False
            self._cancel_frame()
            logger.debug("paused at %.0f ms", self._elapsed_ms)

    def toggle(self) -> None:
        with self._lock:
            if self._is_playing:
                self.pause()
            else:
                self.play()

    def set_speed_multiplier(self, multiplier: float) -> None:
        if multiplier <= 0:
            logger.warning("ignoring non-positive speed multiplier %s", multiplier)
            return
        with self._lock:
            self._speed_multiplier = float(multiplier)

    def cycle_speed(self) -> float:
        """Switch to the next multiplier of PLAYBACK_SPEEDS and return it."""
        with self._lock:
            try:
                pos = PLAYBACK_SPEEDS.index(self._speed_multiplier)
                nxt = PLAYBACK_SPEEDS[(pos + 1) % len(PLAYBACK_SPEEDS)]
            except ValueError:
                nxt = PLAYBACK_SPEEDS[0]
            self._speed_multiplier = float(nxt)
            return self._speed_multiplier

    def seek(self, target: Union[datetime, float]) -> PlaybackState:
        """Jump to an absolute instant (datetime or epoch ms)."""
        target_ms = to_epoch_ms(target) if isinstance(target, datetime) else float(target)
        with self._lock:
            if not self._playable:
                return self.snapshot()
            self._elapsed_ms = target_ms - self.start_ms
            self._current_index, self._sample = self._locate(target_ms)
            self._external_index = None
            self._last_wall_ms = None
            return self.snapshot()

    def tick(self, now_ms: float) -> PlaybackState:
        """Advance the clock to wall-clock ``now_ms``; no-op unless playing."""
        with self._lock:
            if not self._is_playing:
                return self.snapshot()
            if self._last_wall_ms is None:
                self._last_wall_ms = now_ms
            delta = max(0.0, now_ms - self._last_wall_ms)
            self._last_wall_ms = now_ms
            self._elapsed_ms += delta * self._speed_multiplier

            target_ms = self.start_ms + self._elapsed_ms
            if target_ms >= self.end_ms:
                self._current_index = len(self._points) - 1
                self._sample = None
                self._is_playing = False
                self._cancel_frame()
                logger.debug("playback reached the end of the range")
            else:
                self._current_index, self._sample = self._locate(target_ms)
            return self.snapshot()

    def select_index(self, index: int) -> None:
        """Point the cursor at ``index`` (hover or scrub).

        Does not move the playback clock; a running playback is paused.
        """
        with self._lock:
            if self._is_playing:
                self.pause()
            index = min(max(int(index), 0), len(self._points) - 1)
            self._current_index = index
            self._sample = None
            self._external_index = index

    def close(self) -> None:
        with self._lock:
            self._is_playing = False
            self._cancel_frame()

    # ---------- Internals ----------
    def _first_at_or_after(self, target_ms: float) -> Optional[int]:
        if self._monotonic:
            idx = bisect.bisect_left(self._times, target_ms)
            return idx if idx < len(self._times) else None
        return next((i for i, t in enumerate(self._times) if t >= target_ms), None)

    def _locate(self, target_ms: float) -> Tuple[int, EnrichedPoint]:
        idx = self._first_at_or_after(target_ms)
        if idx is None:
            last = len(self._points) - 1
            return last, self._points[last]
        if idx == 0:
            return 0, self._points[0]
        t1, t2 = self._times[idx - 1], self._times[idx]
        p1, p2 = self._points[idx - 1], self._points[idx]
        if t2 <= t1:
            return idx, p2
        return idx, lerp_sample(p1, p2, (target_ms - t1) / (t2 - t1))

    def _request_frame(self) -> None:
        if self._scheduler is None:
            return
        generation = self._frame_generation
        self._frame_handle = self._scheduler.request_frame(
            lambda now_ms: self._on_frame(generation, now_ms)
        )

    def _cancel_frame(self) -> None:
        self._frame_generation += 1
        if self._scheduler is not None and self._frame_handle is not None:
            self._scheduler.cancel_frame(self._frame_handle)
        self._frame_handle = None

    def _on_frame(self, generation: int, now_ms: float) -> None:
        with self._lock:
            if generation != self._frame_generation or not self._is_playing:
                return
            self._frame_handle = None
            self.tick(now_ms)
            if self._is_playing:
                self._request_frame()
