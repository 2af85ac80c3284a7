from typing import List, Optional, Tuple

import streamlit as st

from scripts.gpx_parser import GPXParser
from scripts.track import SkiTrack
from scripts.track.models import RawPoint
from services.analysis_service import build_track, trim_raw_points


@st.cache_data
def load_raw_points(gpx_bytes: bytes) -> List[RawPoint]:
    parser = GPXParser(gpx_bytes)
    return parser.parse()


@st.cache_data
def load_track(
    gpx_bytes: bytes,
    mode_3d: bool,
    smoothing_window: int,
    trim: Optional[Tuple[int, int]] = None,
) -> SkiTrack:
    """Parse, optionally trim to an inclusive point range, and analyze."""
    raw_points = load_raw_points(gpx_bytes)
    if trim is not None:
        raw_points = trim_raw_points(raw_points, *trim)
    return build_track(raw_points, mode_3d, smoothing_window)
