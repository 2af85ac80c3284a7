from dataclasses import asdict, dataclass
from typing import Dict, Sequence

from .models import EnrichedPoint, Segment, SegmentType
from .utils import format_duration, time_delta_ms


@dataclass(frozen=True)
class Summary:
    """Aggregate statistics over a contiguous range of enriched points."""

    total_distance_km: float
    max_ele: int
    min_ele: int
    elevation_gain: int
    duration_ms: float
    avg_speed_kmh: float
    max_speed_kmh: float
    points_count: int
    runs_count: int = 0
    lifts_count: int = 0

    @property
    def duration(self) -> str:
        return format_duration(self.duration_ms)

    def as_dict(self) -> Dict[str, float | int | str]:
        return {**asdict(self), "duration": self.duration}


def summarize(
    points: Sequence[EnrichedPoint], segments: Sequence[Segment] = ()
) -> Summary:
    """Summarize ``points``; segment counts are taken from ``segments``.

    Distance is measured from the first point of the range, so the same
    function serves the whole track and a single segment's sub-range.
    Degenerate input (no points, no duration) yields zeros, never NaN.
    """
    runs = sum(1 for s in segments if s.segment_type is SegmentType.DESCENT)
    lifts = sum(1 for s in segments if s.segment_type is SegmentType.ASCENT)
    if not points:
        return Summary(0.0, 0, 0, 0, 0.0, 0.0, 0.0, 0, runs, lifts)

    elevations = [p.ele for p in points]
    max_ele = max(elevations)
    min_ele = min(elevations)

    distance_km = (points[-1].cum_dist - points[0].cum_dist) / 1000.0
    duration_ms = time_delta_ms(points[0].time_ms, points[-1].time_ms)
    duration_hours = duration_ms / 3.6e6
    avg_speed = distance_km / duration_hours if duration_hours > 0 else 0.0

    return Summary(
        total_distance_km=round(distance_km, 2),
        max_ele=round(max_ele),
        min_ele=round(min_ele),
        elevation_gain=round(max_ele - min_ele),
        duration_ms=duration_ms,
        avg_speed_kmh=avg_speed,
        max_speed_kmh=max(p.smooth_speed for p in points),
        points_count=len(points),
        runs_count=runs,
        lifts_count=lifts,
    )
