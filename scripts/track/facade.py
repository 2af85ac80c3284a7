from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from scripts.log import get_logger

from .analyzer import TrackAnalysis, TrackAnalyzer, points_to_dataframe
from .config import SEGMENT_THRESHOLD_M, TrackSettings
from .errors import EmptyTrackError
from .models import EnrichedPoint, RawPoint, Segment
from .playback import PlaybackController
from .plotter import TrackPlotter
from .scheduler import FrameScheduler
from .segmenter import Segmenter
from .summary import Summary, summarize

logger = get_logger(__name__)


@dataclass(frozen=True)
class TrackView:
    """Read-only scope of analysis: the whole track or one segment."""

    points: Sequence[EnrichedPoint]
    summary: Summary
    segments: List[Segment] = field(default_factory=list)
    is_segment: bool = False
    segment_info: Optional[Segment] = None
    segment_index: Optional[int] = None
    segment_start_dist: float = 0.0

    def to_dataframe(self) -> pd.DataFrame:
        return points_to_dataframe(self.points)


def analyze_track(
    raw_points: Sequence[RawPoint],
    settings: Optional[TrackSettings] = None,
    threshold: float = SEGMENT_THRESHOLD_M,
) -> Optional[TrackAnalysis]:
    """Run the analyzer and the segmenter; None for an empty track."""
    analysis = TrackAnalyzer(settings or TrackSettings()).analyze(raw_points)
    if analysis is None:
        return None
    return analysis.with_segments(Segmenter(threshold).segment(analysis.points))


def build_view(analysis: TrackAnalysis, segment_index: Optional[int] = None) -> TrackView:
    if segment_index is None:
        return TrackView(
            points=analysis.points,
            summary=analysis.summary,
            segments=analysis.segments,
        )

    if not 0 <= segment_index < len(analysis.segments):
        raise IndexError(f"No segment with index {segment_index}.")
    seg = analysis.segments[segment_index]
    logger.debug("Building view for %s (points %d..%d)", seg.global_id, seg.start_idx, seg.end_idx)
    points = analysis.points[seg.start_idx : seg.end_idx + 1]
    # Re-based so index ranges refer to the view's own points.
    local = replace(seg, start_idx=0, end_idx=seg.end_idx - seg.start_idx)
    return TrackView(
        points=points,
        summary=summarize(points, [seg]),
        segments=[local],
        is_segment=True,
        segment_info=seg,
        segment_index=segment_index,
        segment_start_dist=points[0].cum_dist,
    )


class SkiTrack:
    """Facade providing a high-level API over analysis, views and playback.

    Parameters
    ----------
    raw_points : Sequence[RawPoint]
        Track samples in recording order.
    settings : TrackSettings, optional
    threshold : float, default SEGMENT_THRESHOLD_M
    """

    def __init__(
        self,
        raw_points: Sequence[RawPoint],
        settings: Optional[TrackSettings] = None,
        threshold: float = SEGMENT_THRESHOLD_M,
    ) -> None:
        analysis = analyze_track(raw_points, settings, threshold)
        if analysis is None:
            raise EmptyTrackError("The track has no points.")
        self.analysis: TrackAnalysis = analysis

    # ---------- Data access ----------
    @property
    def points(self) -> List[EnrichedPoint]:
        return self.analysis.points

    @property
    def segments(self) -> List[Segment]:
        return self.analysis.segments

    @property
    def summary(self) -> Summary:
        return self.analysis.summary

    @property
    def settings(self) -> TrackSettings:
        return self.analysis.settings

    def to_dataframe(self) -> pd.DataFrame:
        return self.analysis.to_dataframe()

    # ---------- Views & playback ----------
    def view(self, segment_index: Optional[int] = None) -> TrackView:
        return build_view(self.analysis, segment_index)

    def controller(
        self,
        segment_index: Optional[int] = None,
        scheduler: Optional[FrameScheduler] = None,
        speed_multiplier: float = 1.0,
    ) -> PlaybackController:
        return PlaybackController(
            self.view(segment_index).points,
            scheduler=scheduler,
            speed_multiplier=speed_multiplier,
        )

    # ---------- Plotting ----------
    def plot_profile(
        self,
        segment_index: Optional[int] = None,
        cursor: Optional[EnrichedPoint] = None,
        show_speed: bool = True,
    ) -> Tuple[plt.Figure, np.ndarray]:
        view = self.view(segment_index)
        return TrackPlotter(view.points).plot_profile(
            segments=view.segments, cursor=cursor, show_speed=show_speed
        )
