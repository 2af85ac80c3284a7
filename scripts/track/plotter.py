from typing import Optional, Sequence, Tuple

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
import numpy as np

from .config import SEGMENT_COLORS
from .models import EnrichedPoint, Segment


class TrackPlotter:
    """Plot elevation and smoothed speed against distance for a view."""

    def __init__(self, points: Sequence[EnrichedPoint]) -> None:
        self.points = points
        self.km = np.array([p.cum_dist for p in points], dtype=float) / 1000.0
        self.ele = np.array([p.ele for p in points], dtype=float)
        self.speed = np.array([p.smooth_speed for p in points], dtype=float)

    def plot_profile(
        self,
        segments: Sequence[Segment] = (),
        cursor: Optional[EnrichedPoint] = None,
        show_speed: bool = True,
        line_color: str = "darkgrey",
        segment_colors: Optional[dict] = None,
    ) -> Tuple[plt.Figure, np.ndarray]:
        """
        Draw the profile.

        Parameters
        ----------
        segments : Sequence[Segment]
            Segments whose index ranges refer to ``self.points``; shaded
            by type under the elevation line.
        cursor : EnrichedPoint, optional
            Current playback/hover point, drawn as a vertical line.
        show_speed : bool
            Add a second axis row with the smoothed speed.

        Returns
        -------
        (Figure, ndarray of Axes)
        """
        if not self.points:
            raise ValueError("Cannot plot an empty point range.")
        colors = segment_colors or SEGMENT_COLORS

        nrows = 2 if show_speed else 1
        fig, axes = plt.subplots(
            nrows, 1, figsize=(12, 3 * nrows), sharex=True, squeeze=False
        )
        axes = axes[:, 0]
        ax_ele = axes[0]
        ax_ele.set_ylabel("Elevation [m]")
        ax_ele.spines[["right", "top"]].set_visible(False)

        ele_min = float(self.ele.min())
        ele_range = float(self.ele.max()) - ele_min or 1.0
        floor = ele_min - ele_range * 0.1

        legend = []
        for seg_type, color in colors.items():
            spans = [s for s in segments if s.segment_type is seg_type]
            for seg in spans:
                sl = slice(seg.start_idx, seg.end_idx + 1)
                ax_ele.fill_between(
                    self.km[sl], self.ele[sl], floor, color=color, alpha=0.5, zorder=1
                )
            if spans:
                legend.append(mpatches.Patch(color=color, label=seg_type.value))

        ax_ele.plot(self.km, self.ele, color=line_color, linewidth=1.0, zorder=2)
        ax_ele.set_ylim(floor, float(self.ele.max()) + ele_range * 0.1)
        if legend:
            ax_ele.legend(handles=legend, loc="upper right")

        if show_speed:
            ax_speed = axes[1]
            ax_speed.plot(self.km, self.speed, color="crimson", linewidth=1.0)
            ax_speed.set_ylabel("Speed [km/h]")
            ax_speed.spines[["right", "top"]].set_visible(False)

        axes[-1].set_xlabel("Kilometers")
        if len(self.km) > 1 and self.km[-1] > self.km[0]:
            axes[-1].set_xlim(float(self.km[0]), float(self.km[-1]))

        if cursor is not None:
            for ax in axes:
                ax.axvline(cursor.km, color="black", linewidth=1.0, zorder=3)

        fig.tight_layout()
        return fig, axes
