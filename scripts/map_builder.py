from typing import Optional, Sequence

import folium

from scripts.track.config import SEGMENT_COLORS
from scripts.track.models import EnrichedPoint, Segment


def build_track_map(
    points: Sequence[EnrichedPoint],
    segments: Sequence[Segment] = (),
    cursor: Optional[EnrichedPoint] = None,
    default_color: str = "gray",
) -> folium.Map:
    """
    Build an interactive map with the route and its segments colored by type.

    Parameters
    ----------
    points : Sequence[EnrichedPoint]
        Points of the view to draw.
    segments : Sequence[Segment]
        Segments whose index ranges refer to ``points``.
    cursor : EnrichedPoint, optional
        Current playback/hover position, drawn as a circle marker.
    default_color : str, optional
        Color of route parts outside any segment.

    Returns
    -------
    folium.Map
        A Folium map object displaying the route.
    """
    if not points:
        raise ValueError("No points to draw. Cannot build map.")

    start = points[0]
    m = folium.Map(location=(start.lat, start.lon), zoom_start=14, control_scale=True)

    coords = [(p.lat, p.lon) for p in points]
    folium.PolyLine(coords, color=default_color, weight=3, opacity=0.6).add_to(m)

    for seg in segments:
        seg_coords = coords[seg.start_idx : seg.end_idx + 1]
        if len(seg_coords) < 2:
            continue
        folium.PolyLine(
            seg_coords,
            color=SEGMENT_COLORS[seg.segment_type],
            weight=5,
            opacity=0.8,
            tooltip=f"{seg.global_id}: {seg.distance_km:.2f} km, {seg.vertical_m} m",
        ).add_to(m)

    end = points[-1]
    # if start and finish are very close, add only one marker (~1 meter)
    if abs(start.lat - end.lat) < 1e-5 and abs(start.lon - end.lon) < 1e-5:
        folium.Marker(
            (end.lat, end.lon),
            popup="Start/Finish",
            icon=folium.Icon(color="green", icon="play"),
        ).add_to(m)
    else:
        folium.Marker(
            (start.lat, start.lon),
            popup="Start",
            icon=folium.Icon(color="green", icon="play"),
        ).add_to(m)
        folium.Marker(
            (end.lat, end.lon),
            popup="Finish",
            icon=folium.Icon(color="red", icon="stop"),
        ).add_to(m)

    if cursor is not None:
        folium.CircleMarker(
            (cursor.lat, cursor.lon),
            radius=7,
            color="crimson",
            fill=True,
            fill_opacity=0.9,
            popup=f"{cursor.ele:.0f} m, {cursor.smooth_speed:.1f} km/h",
        ).add_to(m)

    return m
