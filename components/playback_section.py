from datetime import timezone

import streamlit as st

from scripts.track import PlaybackController, TrackView
from scripts.track.scheduler import ManualFrameScheduler, monotonic_ms
from scripts.track.utils import format_duration
from components.map_section import render_map
from components.profile_section import render_profile
from services.playback_service import SCRUB_KEY, SEEK_KEY, sync_sliders

FRAME_INTERVAL_S = 0.25


def render_playback_section(
    controller: PlaybackController, scheduler: ManualFrameScheduler, view: TrackView
) -> None:
    with st.expander("Map and playback", expanded=True):
        if not controller.is_playable:
            st.info("This range has no timestamps to play back.")
            render_map(view, cursor=controller.current_point)
            return

        # Keyed sliders keep their own value across reruns unless refreshed here.
        sync_sliders(st.session_state, controller)

        col1, col2, col3 = st.columns([1, 1, 4])
        with col1:
            label = "Pause" if controller.is_playing else "Play"
            if st.button(label, use_container_width=True):
                controller.toggle()
                st.rerun()
        with col2:
            if st.button(f"{controller.speed_multiplier:g}x", use_container_width=True):
                controller.cycle_speed()
                st.rerun()
        with col3:

            def _on_seek() -> None:
                controller.seek(controller.start_ms + st.session_state[SEEK_KEY] * 1000.0)

            st.slider(
                "Seek [s]",
                min_value=0.0,
                max_value=max(controller.duration_ms / 1000.0, 1.0),
                key=SEEK_KEY,
                on_change=_on_seek,
                disabled=controller.is_playing,
            )

        def _on_scrub() -> None:
            controller.select_index(st.session_state[SCRUB_KEY])

        st.slider(
            "Point",
            min_value=0,
            max_value=len(view.points) - 1,
            key=SCRUB_KEY,
            on_change=_on_scrub,
            disabled=controller.is_playing,
        )

        _render_live(controller, scheduler, view)


def _render_live(
    controller: PlaybackController, scheduler: ManualFrameScheduler, view: TrackView
) -> None:
    run_every = FRAME_INTERVAL_S if controller.is_playing else None

    @st.fragment(run_every=run_every)
    def live() -> None:
        was_playing = controller.is_playing
        scheduler.run_pending(monotonic_ms())
        point = controller.current_point

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            if point.time is not None:
                ts = point.time.astimezone(timezone.utc) if point.time.tzinfo else point.time
                st.metric("Time", ts.strftime("%H:%M:%S"))
            else:
                st.metric("Time", "--")
        with col2:
            st.metric("Elapsed", format_duration(controller.elapsed_ms))
        with col3:
            st.metric("Elevation", f"{point.ele:.0f} m")
        with col4:
            st.metric("Speed", f"{point.smooth_speed:.1f} km/h")
        st.progress(controller.progress)
        render_map(view, cursor=point)
        render_profile(view, cursor=point)

        if was_playing and not controller.is_playing:
            st.rerun()

    live()
