import os
from typing import Tuple

import streamlit as st

from scripts.track.config import MAX_SMOOTHING_WINDOW
from services.segment_service import FILTER_TYPES, SORT_TYPES, default_sort_direction
from services.validate_settings_service import (
    DEFAULT_SMOOTHING_WINDOW,
    validate_smoothing_window,
)


def render_sidebar() -> tuple:
    st.sidebar.header("Settings")
    uploaded_file = st.sidebar.file_uploader("Upload GPX file:", type="gpx")

    data_dir = "sample_data"
    example_files = (
        [f for f in os.listdir(data_dir) if f.endswith(".gpx")]
        if os.path.isdir(data_dir)
        else []
    )
    options = ["---"] + example_files
    selected_example = st.sidebar.selectbox("Or choose an example:", options)

    gpx_bytes = None
    track_id = None
    if uploaded_file is not None:
        gpx_bytes = uploaded_file.getvalue()
        track_id = uploaded_file.name
    elif selected_example != "---":
        with open(os.path.join(data_dir, selected_example), "rb") as f:
            gpx_bytes = f.read()
        track_id = selected_example

    st.sidebar.subheader("Analysis settings")
    mode_3d = st.sidebar.checkbox(
        "3D distance (include elevation change)", value=True
    )
    smoothing_window = validate_smoothing_window(
        st.sidebar.number_input(
            "Speed smoothing window (samples each side)",
            min_value=0,
            max_value=MAX_SMOOTHING_WINDOW,
            value=DEFAULT_SMOOTHING_WINDOW,
            step=1,
        )
    )

    st.sidebar.subheader("Segment list")
    filter_type = st.sidebar.selectbox("Show", FILTER_TYPES, index=1)
    sort_type = st.sidebar.selectbox("Sort by", SORT_TYPES)
    directions = ["asc", "desc"]
    direction = st.sidebar.radio(
        "Direction",
        directions,
        index=directions.index(default_sort_direction(sort_type)),
        horizontal=True,
    )

    return (
        gpx_bytes,
        track_id,
        mode_3d,
        smoothing_window,
        filter_type,
        sort_type,
        direction,
    )


def render_trim_controls(track_id: str, points_count: int) -> Tuple[int, int]:
    """Inclusive point range kept for analysis; the whole track by default."""
    last = points_count - 1
    if last < 1:
        return 0, last
    st.sidebar.subheader("Trim")
    start, end = st.sidebar.slider(
        "Keep points",
        min_value=0,
        max_value=last,
        value=(0, last),
        key=f"trim_{track_id}",
    )
    return start, end
