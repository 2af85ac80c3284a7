from dataclasses import dataclass
from typing import Dict, Tuple

from .models import SegmentType

SEGMENT_THRESHOLD_M: float = 15.0
RESYNC_THRESHOLD_MS: float = 2000.0
PLAYBACK_SPEEDS: Tuple[int, ...] = (1, 2, 5, 10, 20, 50)
MAX_SMOOTHING_WINDOW: int = 10
DEFAULT_FPS: int = 30
SEGMENT_COLORS: Dict[SegmentType, str] = {
    SegmentType.DESCENT: "royalblue",
    SegmentType.ASCENT: "orange",
}


@dataclass(frozen=True)
class TrackSettings:
    """
    Settings that change the analysis output.

    Attributes
    ----------
    mode_3d
        Combine horizontal distance with the elevation delta of each step.
    smoothing_window
        Half-width (in samples) of the centered moving average applied to speed.
    """

    mode_3d: bool = True
    smoothing_window: int = 1

    @classmethod
    def default(cls) -> "TrackSettings":
        return cls()

    @classmethod
    def raw(cls) -> "TrackSettings":
        """Preset without elevation in distance and without speed smoothing."""
        return cls(mode_3d=False, smoothing_window=0)
