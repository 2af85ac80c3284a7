from typing import Optional

import streamlit.components.v1 as components

from scripts.track import TrackView
from scripts.track.models import EnrichedPoint
from services.map_service import generate_map

MAP_HEIGHT = 550


def render_map(view: TrackView, cursor: Optional[EnrichedPoint] = None) -> None:
    base_map = generate_map(view, cursor=cursor)
    components.html(base_map.get_root().render(), height=MAP_HEIGHT)
