import math

import pytest

from scripts.track import TrackSettings, analyze
from scripts.track.models import SegmentType
from scripts.track.segmenter import (
    Extreme,
    SegmentState,
    Segmenter,
    create_segment,
    segment,
    step,
)


def _points(raw):
    return analyze(raw, TrackSettings(mode_3d=False, smoothing_window=0)).points


# ----- transition function -----
def test_idle_within_threshold_stays_idle():
    state, extreme, closed = step(SegmentState.IDLE, 1000, Extreme(1000, 0), 1, 1010)
    assert state is SegmentState.IDLE
    assert extreme == Extreme(1000, 0)
    assert closed is None


@pytest.mark.parametrize(
    "ele, expected",
    [(984, SegmentState.DESCENDING), (1016, SegmentState.ASCENDING)],
)
def test_idle_leaves_on_threshold_crossing(ele, expected):
    state, extreme, closed = step(SegmentState.IDLE, 1000, Extreme(1000, 0), 3, ele)
    assert state is expected
    assert extreme == Extreme(ele, 3)
    assert closed is None


def test_exactly_threshold_is_not_a_crossing():
    state, _, _ = step(SegmentState.IDLE, 1000, Extreme(1000, 0), 1, 985)
    assert state is SegmentState.IDLE


def test_descending_tracks_running_minimum():
    state, extreme, closed = step(SegmentState.DESCENDING, 1000, Extreme(980, 2), 3, 970)
    assert state is SegmentState.DESCENDING
    assert extreme == Extreme(970, 3)
    assert closed is None


def test_descending_small_rebound_keeps_state():
    state, extreme, closed = step(SegmentState.DESCENDING, 1000, Extreme(970, 3), 4, 984)
    assert state is SegmentState.DESCENDING
    assert extreme == Extreme(970, 3)
    assert closed is None


def test_descending_rebound_closes_descent_at_minimum():
    state, extreme, closed = step(
        SegmentState.DESCENDING, 1000, Extreme(970, 3), 5, 990, start_idx=1
    )
    assert state is SegmentState.ASCENDING
    assert extreme == Extreme(990, 5)
    assert closed == (SegmentType.DESCENT, 1, 3)


def test_ascending_drop_closes_ascent_at_maximum():
    state, extreme, closed = step(
        SegmentState.ASCENDING, 900, Extreme(1100, 7), 9, 1080, start_idx=4
    )
    assert state is SegmentState.DESCENDING
    assert extreme == Extreme(1080, 9)
    assert closed == (SegmentType.ASCENT, 4, 7)


# ----- full segmentation -----
def test_steady_climb_is_one_ascent(raw_track):
    segments = segment(_points(raw_track([1000, 1020, 1040])))
    assert len(segments) == 1
    seg = segments[0]
    assert seg.segment_type is SegmentType.ASCENT
    assert (seg.start_idx, seg.end_idx) == (0, 2)


def test_dip_gives_descent_then_open_ascent(raw_track):
    segments = segment(_points(raw_track([1000, 980, 1000])))
    assert [(s.segment_type, s.start_idx, s.end_idx) for s in segments] == [
        (SegmentType.DESCENT, 0, 1),
        (SegmentType.ASCENT, 1, 2),
    ]


def test_fewer_than_two_points(raw_track):
    assert segment([]) == []
    assert segment(_points(raw_track([1000]))) == []


def test_no_excursion_beyond_threshold(raw_track):
    assert segment(_points(raw_track([1000, 1010, 995, 1005, 1000]))) == []


def test_open_segment_ending_at_extreme_is_not_duplicated(raw_track):
    # descent closes at index 1; the ascent starts at 1 and the track ends at 2
    segments = segment(_points(raw_track([1000, 970, 1000])))
    assert segments[-1].end_idx == 2
    assert len(segments) == 2


def test_type_index_counts_per_type(raw_track):
    segments = segment(_points(raw_track([1000, 970, 1000, 970, 1000])))
    assert [s.global_id for s in segments] == [
        "descent-1",
        "ascent-1",
        "descent-2",
        "ascent-2",
    ]
    assert [s.type_index for s in segments] == [1, 1, 2, 2]


def test_segments_do_not_overlap_and_are_ordered(raw_track):
    elevations = [1500 + 120 * math.sin(i / 4.0) + 7 * math.sin(i * 1.7) for i in range(120)]
    segments = segment(_points(raw_track(elevations)))
    assert segments
    for s in segments:
        assert s.end_idx >= s.start_idx
    for a, b in zip(segments, segments[1:]):
        assert a.start_idx < b.start_idx
        assert a.end_idx <= b.start_idx


def test_custom_threshold(raw_track):
    points = _points(raw_track([1000, 990, 1000]))
    assert Segmenter(threshold=15).segment(points) == []
    assert len(Segmenter(threshold=5).segment(points)) == 2


def test_segmentation_is_idempotent(ski_day):
    points = _points(ski_day)
    assert segment(points) == segment(points)


# ----- segment metrics -----
def test_create_segment_metrics(raw_track):
    points = _points(raw_track([1000, 990, 970, 960], step_s=5))
    seg = create_segment(points, 0, 3, SegmentType.DESCENT)
    assert seg.distance_km == pytest.approx(0.03)
    assert seg.vertical_m == 40
    assert seg.duration_ms == 15_000
    assert seg.duration == "00:15"
    assert seg.max_speed_kmh == pytest.approx(7.2)
    assert seg.avg_speed_kmh == pytest.approx(0.03 / (15 / 3600))
    assert seg.start_time == points[0].time
    assert seg.end_time == points[3].time
    assert seg.num_points == 4


def test_create_segment_without_duration_has_zero_avg_speed(raw_track):
    points = _points(raw_track([1000, 980], start=None))
    seg = create_segment(points, 0, 1, SegmentType.DESCENT)
    assert seg.duration_ms == 0
    assert seg.avg_speed_kmh == 0


def test_create_segment_with_mixed_naive_and_aware_times():
    from datetime import datetime, timezone

    from scripts.track.models import EnrichedPoint

    start = EnrichedPoint(46.0, 7.0, 2000.0, datetime(2024, 2, 10, 9, 0, tzinfo=timezone.utc))
    end = EnrichedPoint(46.001, 7.0, 1950.0, datetime(2024, 2, 10, 9, 1), cum_dist=111.0)

    seg = create_segment([start, end], 0, 1, SegmentType.DESCENT)
    assert seg.duration_ms == pytest.approx(end.time_ms - start.time_ms)
