from typing import List, Sequence, Tuple

import pandas as pd

from scripts.track.models import Segment

FILTER_TYPES = ("all", "descent", "ascent")
SORT_TYPES = ("time", "speed", "distance", "duration")


def default_sort_direction(sort_type: str) -> str:
    """Chronological order ascends, rankings descend."""
    return "asc" if sort_type == "time" else "desc"


def _sort_key(sort_type: str):
    if sort_type == "speed":
        return lambda item: item[1].max_speed_kmh
    if sort_type == "distance":
        return lambda item: item[1].distance_km
    if sort_type == "duration":
        return lambda item: item[1].duration_ms
    return lambda item: item[1].start_idx


def filter_and_sort_segments(
    segments: Sequence[Segment],
    filter_type: str = "all",
    sort_type: str = "time",
    direction: str = "asc",
) -> List[Tuple[int, Segment]]:
    """Return ``(original_index, segment)`` pairs filtered by type and sorted."""
    if filter_type not in FILTER_TYPES:
        raise ValueError(f"filter_type must be one of {FILTER_TYPES}.")
    if sort_type not in SORT_TYPES:
        raise ValueError(f"sort_type must be one of {SORT_TYPES}.")
    if direction not in {"asc", "desc"}:
        raise ValueError("direction must be 'asc' or 'desc'.")

    items = list(enumerate(segments))
    if filter_type != "all":
        items = [item for item in items if item[1].segment_type.value == filter_type]
    return sorted(items, key=_sort_key(sort_type), reverse=direction == "desc")


def segments_to_dataframe(items: Sequence[Tuple[int, Segment]]) -> pd.DataFrame:
    rows = [
        {
            "segment_index": idx,
            "id": seg.global_id,
            "type": seg.segment_type.value,
            "start": seg.start_time,
            "duration": seg.duration,
            "distance_km": round(seg.distance_km, 2),
            "vertical_m": seg.vertical_m,
            "max_speed_kmh": round(seg.max_speed_kmh, 1),
            "avg_speed_kmh": round(seg.avg_speed_kmh, 1),
        }
        for idx, seg in items
    ]
    columns = [
        "segment_index",
        "id",
        "type",
        "start",
        "duration",
        "distance_km",
        "vertical_m",
        "max_speed_kmh",
        "avg_speed_kmh",
    ]
    return pd.DataFrame(rows, columns=columns)
