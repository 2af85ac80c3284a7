import streamlit as st

from components.playback_section import render_playback_section
from components.profile_section import render_main_profile
from components.segments_section import render_segments_section
from components.sidebar import render_sidebar, render_trim_controls
from components.stats_section import render_main_stats
from scripts.track.errors import SkiTrackError
from services.analysis_service import compute_route_stats
from services.gpx_service import load_raw_points, load_track
from services.playback_service import get_controller


def main() -> None:
    st.set_page_config(page_title="Ski track analyzer", layout="wide", page_icon="⛷️")
    st.title("Ski track analyzer")
    (
        gpx_bytes,
        track_id,
        mode_3d,
        smoothing_window,
        filter_type,
        sort_type,
        direction,
    ) = render_sidebar()

    if gpx_bytes is None:
        st.info(
            "Upload a GPX file (or select an example) to detect runs and lifts and replay the day."
        )
        st.stop()

    # Load, trim and analyze
    try:
        raw_points = load_raw_points(gpx_bytes)
        trim = render_trim_controls(track_id, len(raw_points))
        track = load_track(gpx_bytes, mode_3d, smoothing_window, trim)
    except SkiTrackError as e:
        st.error(f"Could not analyze the GPX file: {e}")
        st.stop()

    # Segment selection narrows the view
    segment_index = render_segments_section(
        track.segments, filter_type, sort_type, direction
    )
    view = track.view(segment_index)
    title = "Whole track" if not view.is_segment else view.segment_info.global_id

    controller, scheduler = get_controller(
        st.session_state,
        f"{track_id}:{mode_3d}:{smoothing_window}:{trim[0]}-{trim[1]}",
        view,
    )

    # UI
    render_main_stats(compute_route_stats(view), title=title)
    render_main_profile(view)
    render_playback_section(controller, scheduler, view)


if __name__ == "__main__":
    main()
