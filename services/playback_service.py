from typing import Dict, MutableMapping, Optional, Tuple

from scripts.track import PlaybackController, TrackView
from scripts.track.scheduler import ManualFrameScheduler
from services.validate_settings_service import validate_speed_multiplier

CONTROLLER_KEY = "playback_controller"
VIEW_KEY = "playback_view_key"
SCHEDULER_KEY = "playback_scheduler"
SEEK_KEY = "seek_s"
SCRUB_KEY = "scrub_idx"


def view_key(track_id: str, view: TrackView) -> Tuple[str, Optional[int], int]:
    return track_id, view.segment_index, len(view.points)


def get_controller(
    state: MutableMapping,
    track_id: str,
    view: TrackView,
    speed_multiplier: Optional[float] = None,
) -> Tuple[PlaybackController, ManualFrameScheduler]:
    """Reuse the stored controller while the view is unchanged, else replace it.

    ``state`` is the session state (any mutable mapping). A replaced
    controller is closed so its pending frame never fires. Without an
    explicit ``speed_multiplier`` the new controller keeps the old one's speed.
    """
    key = view_key(track_id, view)
    controller = state.get(CONTROLLER_KEY)
    scheduler = state.get(SCHEDULER_KEY)
    if controller is not None and state.get(VIEW_KEY) == key:
        return controller, scheduler

    if speed_multiplier is None and controller is not None:
        speed_multiplier = controller.speed_multiplier
    if controller is not None:
        controller.close()
    scheduler = ManualFrameScheduler()
    controller = PlaybackController(
        view.points,
        scheduler=scheduler,
        speed_multiplier=validate_speed_multiplier(speed_multiplier),
    )
    state[CONTROLLER_KEY] = controller
    state[SCHEDULER_KEY] = scheduler
    state[VIEW_KEY] = key
    return controller, scheduler


def slider_positions(controller: PlaybackController) -> Dict[str, float]:
    """Seek (seconds) and point-index slider values for the controller's position."""
    duration_s = controller.duration_ms / 1000.0
    return {
        SEEK_KEY: min(max(controller.elapsed_ms / 1000.0, 0.0), duration_s),
        SCRUB_KEY: controller.current_index,
    }


def sync_sliders(state: MutableMapping, controller: PlaybackController) -> None:
    """Write the controller position into the keyed slider state before rendering."""
    state.update(slider_positions(controller))
