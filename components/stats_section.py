import streamlit as st


def render_main_stats(stats, title: str = "Whole track") -> None:
    with st.expander(f"Stats: {title}", expanded=True):
        col1, col2, col3, col4, col5 = st.columns(5)
        with col1:
            st.metric("Distance", f"{stats['distance_km']:.2f} km", border=True)
        with col2:
            st.metric("Duration", stats["duration"], border=True)
        with col3:
            st.metric("AVG speed", f"{stats['avg_speed_kmh']:.1f} km/h", border=True)
        with col4:
            st.metric("MAX speed", f"{stats['max_speed_kmh']:.1f} km/h", border=True)
        with col5:
            st.metric("Vertical", f"{stats['elevation_gain_m']} m", border=True)

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Highest point", f"{stats['highest_point']} m")
        with col2:
            st.metric("Lowest point", f"{stats['lowest_point']} m")
        with col3:
            st.metric("Runs", stats["runs"])
        with col4:
            st.metric("Lifts", stats["lifts"])
