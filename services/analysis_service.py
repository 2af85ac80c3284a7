from typing import Dict, Optional, Sequence

from scripts.track import SkiTrack, TrackSettings, TrackView
from scripts.track.models import RawPoint


def build_track(
    raw_points: Sequence[RawPoint], mode_3d: bool, smoothing_window: int
) -> SkiTrack:
    return SkiTrack(
        raw_points,
        TrackSettings(mode_3d=mode_3d, smoothing_window=smoothing_window),
    )


def compute_route_stats(view: TrackView) -> Dict[str, float | int | str]:
    summary = view.summary
    return {
        "distance_km": summary.total_distance_km,
        "duration": summary.duration,
        "avg_speed_kmh": round(summary.avg_speed_kmh, 1),
        "max_speed_kmh": round(summary.max_speed_kmh, 1),
        "elevation_gain_m": summary.elevation_gain,
        "highest_point": summary.max_ele,
        "lowest_point": summary.min_ele,
        "points": summary.points_count,
        "runs": summary.runs_count,
        "lifts": summary.lifts_count,
    }


def trim_raw_points(
    raw_points: Sequence[RawPoint], start: int, end: Optional[int] = None
) -> list:
    """Keep raw points between two indices (inclusive, in either order)."""
    if end is None:
        end = len(raw_points) - 1
    lo, hi = min(start, end), max(start, end)
    return list(raw_points[max(lo, 0) : hi + 1])
