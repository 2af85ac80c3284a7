from typing import Optional

import folium

from scripts.map_builder import build_track_map
from scripts.track import TrackView
from scripts.track.models import EnrichedPoint


def generate_map(view: TrackView, cursor: Optional[EnrichedPoint] = None) -> folium.Map:
    return build_track_map(view.points, view.segments, cursor=cursor)
