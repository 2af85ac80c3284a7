from typing import Optional

import matplotlib.pyplot as plt
import streamlit as st

from scripts.track import TrackView
from scripts.track.models import EnrichedPoint
from services.plot_service import plot_view_profile


def render_profile(view: TrackView, cursor: Optional[EnrichedPoint] = None) -> None:
    if len(view.points) < 2:
        st.info("Too few points for a meaningful graph.")
        return
    fig = plot_view_profile(view, cursor=cursor)
    st.pyplot(fig, use_container_width=True)
    plt.close(fig)


def render_main_profile(view: TrackView) -> None:
    with st.expander("Elevation and speed profile", expanded=True):
        render_profile(view)
