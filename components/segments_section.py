from typing import Optional, Sequence

import streamlit as st

from scripts.track.models import Segment
from services.segment_service import filter_and_sort_segments, segments_to_dataframe

SELECTED_SEGMENT_KEY = "selected_segment"


def render_segments_section(
    segments: Sequence[Segment], filter_type: str, sort_type: str, direction: str
) -> Optional[int]:
    """Show the segment table and return the selected segment index (None = whole track)."""
    if not segments:
        st.warning("No runs or lifts detected in this track.")
        return None

    items = filter_and_sort_segments(segments, filter_type, sort_type, direction)
    with st.expander("Detected runs and lifts", expanded=True):
        table = segments_to_dataframe(items).rename(
            columns={
                "id": "Segment",
                "type": "Type",
                "start": "Start",
                "duration": "Duration",
                "distance_km": "Distance (km)",
                "vertical_m": "Vertical (m)",
                "max_speed_kmh": "MAX speed (km/h)",
                "avg_speed_kmh": "AVG speed (km/h)",
            }
        )
        st.dataframe(
            table.drop(columns=["segment_index"]),
            use_container_width=True,
            hide_index=True,
        )

        options = [None] + [idx for idx, _ in items]
        current = st.session_state.get(SELECTED_SEGMENT_KEY)
        selected = st.selectbox(
            "View",
            options,
            index=options.index(current) if current in options else 0,
            format_func=lambda idx: "Whole track"
            if idx is None
            else segments[idx].global_id,
        )
    st.session_state[SELECTED_SEGMENT_KEY] = selected
    return selected
