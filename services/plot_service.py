from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from scripts.track import TrackView
from scripts.track.models import EnrichedPoint
from scripts.track.plotter import TrackPlotter


def plot_view_profile(
    view: TrackView, cursor: Optional[EnrichedPoint] = None
) -> plt.Figure:
    fig, axes = TrackPlotter(view.points).plot_profile(
        segments=view.segments, cursor=cursor
    )

    total_distance_km = view.summary.total_distance_km
    start_km = view.segment_start_dist / 1000.0
    if total_distance_km < 2:
        step = 0.25
    elif total_distance_km < 25:
        step = 1
    else:
        step = 5
    axes[-1].set_xticks(np.arange(start_km, start_km + total_distance_km + step, step))
    return fig
