"""Data models for raw samples, enriched samples and detected segments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .utils import format_duration, to_epoch_ms


@dataclass(frozen=True)
class RawPoint:
    """A single recorded GPS sample.

    Attributes:
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.
        ele: Elevation in meters, 0.0 when the recorder did not store it.
        time: Recording instant, None when missing.
    """

    lat: float
    lon: float
    ele: float = 0.0
    time: Optional[datetime] = None

    @property
    def time_ms(self) -> Optional[float]:
        return to_epoch_ms(self.time)


@dataclass(frozen=True)
class EnrichedPoint:
    """A raw sample plus the values derived during analysis.

    Attributes:
        cum_dist: Distance from the first point of the track in meters.
        speed: Instantaneous speed in km/h.
        smooth_speed: Moving-average speed in km/h.
    """

    lat: float
    lon: float
    ele: float
    time: Optional[datetime]
    cum_dist: float = 0.0
    speed: float = 0.0
    smooth_speed: float = 0.0

    @property
    def time_ms(self) -> Optional[float]:
        return to_epoch_ms(self.time)

    @property
    def km(self) -> float:
        return self.cum_dist / 1000.0


class SegmentType(str, Enum):
    DESCENT = "descent"
    ASCENT = "ascent"


@dataclass(frozen=True)
class Segment:
    """A contiguous descent (run) or ascent (lift ride) of the track.

    ``start_idx`` and ``end_idx`` are inclusive indices into the enriched
    point sequence the segment was detected on.
    """

    segment_type: SegmentType
    start_idx: int
    end_idx: int
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    duration_ms: float
    distance_km: float
    vertical_m: int
    max_speed_kmh: float
    avg_speed_kmh: float
    type_index: int = 0

    @property
    def global_id(self) -> str:
        return f"{self.segment_type.value}-{self.type_index}"

    @property
    def duration(self) -> str:
        return format_duration(self.duration_ms)

    @property
    def is_descent(self) -> bool:
        return self.segment_type is SegmentType.DESCENT

    @property
    def num_points(self) -> int:
        return self.end_idx - self.start_idx + 1
