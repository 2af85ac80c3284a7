from dataclasses import replace
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from scripts.log import get_logger

from .config import SEGMENT_THRESHOLD_M
from .models import EnrichedPoint, Segment, SegmentType
from .utils import time_delta_ms

logger = get_logger(__name__)


class SegmentState(Enum):
    IDLE = "idle"
    DESCENDING = "descending"
    ASCENDING = "ascending"


class Extreme(NamedTuple):
    """Running minimum (descending) or maximum (ascending) elevation."""

    ele: float
    idx: int


# (type, start_idx, end_idx) of a segment closed by a transition
ClosedSpan = Tuple[SegmentType, int, int]


def step(
    state: SegmentState,
    start_ele: float,
    extreme: Extreme,
    index: int,
    ele: float,
    threshold: float = SEGMENT_THRESHOLD_M,
    start_idx: int = 0,
) -> Tuple[SegmentState, Extreme, Optional[ClosedSpan]]:
    """Advance the segmentation state machine by one point.

    Parameters
    ----------
    state : SegmentState
        Current state.
    start_ele : float
        Elevation of the point the open segment starts at.
    extreme : Extreme
        Running extreme of the open segment.
    index, ele
        Index and elevation of the incoming point.
    start_idx : int
        Index the open segment starts at; used for the closed span.

    Returns
    -------
    tuple
        New state, new extreme and the span of the segment closed by this
        point (None when nothing closes). A closed segment always ends at
        the previous extreme, which is where the next one starts.
    """
    here = Extreme(ele, index)

    if state is SegmentState.IDLE:
        if ele < start_ele - threshold:
            return SegmentState.DESCENDING, here, None
        if ele > start_ele + threshold:
            return SegmentState.ASCENDING, here, None
        return state, extreme, None

    if state is SegmentState.DESCENDING:
        if ele < extreme.ele:
            extreme = here
        if ele > extreme.ele + threshold:
            closed = (SegmentType.DESCENT, start_idx, extreme.idx)
            return SegmentState.ASCENDING, here, closed
        return state, extreme, None

    if ele > extreme.ele:
        extreme = here
    if ele < extreme.ele - threshold:
        closed = (SegmentType.ASCENT, start_idx, extreme.idx)
        return SegmentState.DESCENDING, here, closed
    return state, extreme, None


def create_segment(
    points: Sequence[EnrichedPoint],
    start_idx: int,
    end_idx: int,
    segment_type: SegmentType,
    type_index: int = 0,
) -> Segment:
    """Build a segment with its derived metrics over ``points[start_idx:end_idx + 1]``."""
    start = points[start_idx]
    end = points[end_idx]
    distance_km = (end.cum_dist - start.cum_dist) / 1000.0
    duration_ms = time_delta_ms(start.time_ms, end.time_ms)
    max_speed = max(p.smooth_speed for p in points[start_idx : end_idx + 1])
    avg_speed = distance_km / (duration_ms / 3.6e6) if duration_ms > 0 else 0.0

    return Segment(
        segment_type=segment_type,
        start_idx=start_idx,
        end_idx=end_idx,
        start_time=start.time,
        end_time=end.time,
        duration_ms=duration_ms,
        distance_km=distance_km,
        vertical_m=round(abs(end.ele - start.ele)),
        max_speed_kmh=max_speed,
        avg_speed_kmh=avg_speed,
        type_index=type_index,
    )


def number_segments(segments: Sequence[Segment]) -> List[Segment]:
    """Assign the 1-based per-type counter in emission order."""
    counters: Dict[SegmentType, int] = {t: 0 for t in SegmentType}
    numbered: List[Segment] = []
    for seg in segments:
        counters[seg.segment_type] += 1
        numbered.append(replace(seg, type_index=counters[seg.segment_type]))
    return numbered


class Segmenter:
    """Detect descents and ascents with a hysteresis on raw elevation.

    Parameters:
    - threshold: elevation change (m) from the segment start, or rebound
      from the running extreme, that switches state.
    """

    def __init__(self, threshold: float = SEGMENT_THRESHOLD_M) -> None:
        self.threshold = threshold

    def segment(self, points: Sequence[EnrichedPoint]) -> List[Segment]:
        if len(points) < 2:
            return []

        spans: List[ClosedSpan] = []
        state = SegmentState.IDLE
        segment_start = 0
        extreme = Extreme(points[0].ele, 0)

        for i in range(1, len(points)):
            state, extreme, closed = step(
                state,
                points[segment_start].ele,
                extreme,
                i,
                points[i].ele,
                threshold=self.threshold,
                start_idx=segment_start,
            )
            if closed is not None:
                spans.append(closed)
                segment_start = closed[2]

        last = len(points) - 1
        if state is not SegmentState.IDLE and segment_start < last:
            open_type = (
                SegmentType.DESCENT
                if state is SegmentState.DESCENDING
                else SegmentType.ASCENT
            )
            spans.append((open_type, segment_start, last))

        segments = number_segments(
            [create_segment(points, s, e, t) for t, s, e in spans]
        )
        logger.debug("detected %d segments in %d points", len(segments), len(points))
        return segments


def segment(
    points: Sequence[EnrichedPoint], threshold: float = SEGMENT_THRESHOLD_M
) -> List[Segment]:
    return Segmenter(threshold).segment(points)
