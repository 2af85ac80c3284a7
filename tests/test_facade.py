import matplotlib
import pytest

from scripts.track import SkiTrack, TrackSettings, analyze_track, build_view
from scripts.track.errors import EmptyTrackError
from scripts.track.models import SegmentType

matplotlib.use("Agg")


@pytest.fixture
def track(ski_day):
    return SkiTrack(ski_day, TrackSettings(mode_3d=False, smoothing_window=0))


def test_empty_track_raises():
    with pytest.raises(EmptyTrackError):
        SkiTrack([])
    assert analyze_track([]) is None


def test_summary_is_finalized_with_segment_counts(track):
    assert [s.global_id for s in track.segments] == ["descent-1", "ascent-1", "descent-2"]
    assert track.summary.runs_count == 2
    assert track.summary.lifts_count == 1


def test_whole_track_view(track):
    view = track.view()
    assert not view.is_segment
    assert view.points is track.points
    assert view.summary == track.summary
    assert view.segment_info is None


def test_segment_view_narrows_range(track):
    view = track.view(1)
    seg = track.segments[1]

    assert view.is_segment
    assert view.segment_index == 1
    assert view.segment_info == seg
    assert list(view.points) == track.points[seg.start_idx : seg.end_idx + 1]
    assert view.segment_start_dist == track.points[seg.start_idx].cum_dist
    assert view.summary.lifts_count == 1
    assert view.summary.runs_count == 0
    assert view.summary.total_distance_km == pytest.approx(round(seg.distance_km, 2))

    local = view.segments[0]
    assert local.segment_type is SegmentType.ASCENT
    assert (local.start_idx, local.end_idx) == (0, seg.end_idx - seg.start_idx)


def test_segment_view_does_not_mutate_track(track):
    before = list(track.points)
    track.view(0)
    assert track.points == before


def test_invalid_segment_index(track):
    with pytest.raises(IndexError):
        build_view(track.analysis, 10)


def test_controller_over_segment_view(track):
    controller = track.controller(segment_index=0, speed_multiplier=10)
    seg = track.segments[0]
    assert len(controller.points) == seg.num_points
    assert controller.speed_multiplier == 10
    assert controller.duration_ms == seg.duration_ms


def test_to_dataframe(track):
    df = track.to_dataframe()
    assert df["km"].iloc[-1] == pytest.approx(track.points[-1].cum_dist / 1000)


def test_plot_profile_returns_matplotlib_objects(track):
    fig, axes = track.plot_profile(cursor=track.points[3])
    assert isinstance(fig, matplotlib.figure.Figure)
    assert len(axes) == 2
    assert all(isinstance(ax, matplotlib.axes.Axes) for ax in axes)
    matplotlib.pyplot.close(fig)


def test_plot_segment_profile_without_speed(track):
    fig, axes = track.plot_profile(segment_index=2, show_speed=False)
    assert len(axes) == 1
    matplotlib.pyplot.close(fig)
