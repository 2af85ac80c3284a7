from .analyzer import TrackAnalysis, TrackAnalyzer, analyze
from .config import TrackSettings
from .facade import SkiTrack, TrackView, analyze_track, build_view
from .models import EnrichedPoint, RawPoint, Segment, SegmentType
from .playback import PlaybackController, PlaybackState
from .segmenter import Segmenter, segment
from .summary import Summary, summarize

__all__ = [
    "EnrichedPoint",
    "PlaybackController",
    "PlaybackState",
    "RawPoint",
    "Segment",
    "SegmentType",
    "Segmenter",
    "SkiTrack",
    "Summary",
    "TrackAnalysis",
    "TrackAnalyzer",
    "TrackSettings",
    "TrackView",
    "analyze",
    "analyze_track",
    "build_view",
    "segment",
    "summarize",
]
