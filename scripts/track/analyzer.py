from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from scripts.log import get_logger

from .config import TrackSettings
from .geo import distance_meters_array
from .models import EnrichedPoint, RawPoint, Segment
from .summary import Summary, summarize

logger = get_logger(__name__)


@dataclass(frozen=True)
class TrackAnalysis:
    """Result of one analysis run: enriched points, segments and summary.

    ``segments`` is empty and the summary's segment counts are 0 until
    :meth:`with_segments` is applied.
    """

    points: List[EnrichedPoint]
    summary: Summary
    settings: TrackSettings
    segments: List[Segment] = field(default_factory=list)

    def with_segments(self, segments: Sequence[Segment]) -> "TrackAnalysis":
        return replace(
            self,
            segments=list(segments),
            summary=summarize(self.points, segments),
        )

    def to_dataframe(self) -> pd.DataFrame:
        return points_to_dataframe(self.points)


def points_to_dataframe(points: Sequence[EnrichedPoint]) -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "lat": [p.lat for p in points],
            "lon": [p.lon for p in points],
            "ele": [p.ele for p in points],
            "time": [p.time for p in points],
            "cum_dist": [p.cum_dist for p in points],
            "speed": [p.speed for p in points],
            "smooth_speed": [p.smooth_speed for p in points],
        }
    )
    df["km"] = df["cum_dist"] / 1000.0
    return df


@dataclass
class TrackAnalyzer:
    """Turn raw GPS samples into enriched points.

    - Step distance: haversine, optionally combined with the elevation delta
    - Instantaneous speed from step distance and time delta
    - Smoothed speed (centered rolling mean)
    """

    settings: TrackSettings = field(default_factory=TrackSettings)

    def analyze(self, raw_points: Sequence[RawPoint]) -> Optional[TrackAnalysis]:
        if not raw_points:
            logger.debug("analyze called with no points")
            return None

        df = pd.DataFrame(
            {
                "lat": np.array([p.lat for p in raw_points], dtype=float),
                "lon": np.array([p.lon for p in raw_points], dtype=float),
                "ele": np.array(
                    [0.0 if p.ele is None else p.ele for p in raw_points], dtype=float
                ),
                "time_ms": np.array([p.time_ms for p in raw_points], dtype=float),
            }
        )
        df["step_m"] = self._step_distances(df, self.settings.mode_3d)
        df["cum_dist"] = df["step_m"].cumsum()
        df["speed"] = self._instant_speeds(df)
        df["smooth_speed"] = self._smooth_speeds(
            df["speed"], self.settings.smoothing_window
        )

        points = [
            EnrichedPoint(
                lat=raw.lat,
                lon=raw.lon,
                ele=float(ele),
                time=raw.time,
                cum_dist=float(cum_dist),
                speed=float(speed),
                smooth_speed=float(smooth_speed),
            )
            for raw, ele, cum_dist, speed, smooth_speed in zip(
                raw_points, df["ele"], df["cum_dist"], df["speed"], df["smooth_speed"]
            )
        ]
        logger.debug(
            "analyzed %d points (mode_3d=%s, smoothing_window=%d)",
            len(points),
            self.settings.mode_3d,
            self.settings.smoothing_window,
        )
        return TrackAnalysis(
            points=points, summary=summarize(points), settings=self.settings
        )

    @staticmethod
    def _step_distances(df: pd.DataFrame, mode_3d: bool) -> np.ndarray:
        planar = distance_meters_array(df["lat"], df["lon"])
        if not mode_3d:
            return planar
        d_ele = df["ele"].diff().fillna(0.0).to_numpy()
        return np.sqrt(planar * planar + d_ele * d_ele)

    @staticmethod
    def _instant_speeds(df: pd.DataFrame) -> np.ndarray:
        """Speed in km/h; 0 where the time delta is missing or not positive."""
        dt_s = (df["time_ms"].diff() / 1000.0).fillna(0.0).to_numpy()
        step = df["step_m"].to_numpy()
        non_monotonic = int(np.count_nonzero(dt_s[1:] < 0))
        if non_monotonic:
            logger.warning("%d steps with decreasing timestamps; speed set to 0", non_monotonic)
        speed = np.zeros(len(step), dtype=float)
        np.divide(step * 3.6, dt_s, out=speed, where=dt_s > 0)
        return speed

    @staticmethod
    def _smooth_speeds(speed: pd.Series, window: int) -> pd.Series:
        """Mean over ``[i - window, i + window]`` clamped to the track."""
        if window <= 0:
            return speed.copy()
        return speed.rolling(window=2 * window + 1, center=True, min_periods=1).mean()


def analyze(
    raw_points: Sequence[RawPoint], settings: Optional[TrackSettings] = None
) -> Optional[TrackAnalysis]:
    """Analyze ``raw_points``; returns None for an empty track."""
    return TrackAnalyzer(settings or TrackSettings()).analyze(raw_points)
