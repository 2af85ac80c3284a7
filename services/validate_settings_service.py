from scripts.track.config import MAX_SMOOTHING_WINDOW, PLAYBACK_SPEEDS

DEFAULT_SMOOTHING_WINDOW: int = 1
DEFAULT_SPEED_MULTIPLIER: int = PLAYBACK_SPEEDS[0]


def validate_smoothing_window(value) -> int:
    """
    Coerces the smoothing window to an integer in 0..MAX_SMOOTHING_WINDOW.
    Non-numeric input falls back to the default.
    """
    try:
        window = int(float(value))
    except (ValueError, TypeError, OverflowError):
        return DEFAULT_SMOOTHING_WINDOW
    return min(max(window, 0), MAX_SMOOTHING_WINDOW)


def validate_speed_multiplier(value) -> int:
    """Accepts only the discrete playback speeds; anything else becomes 1x."""
    try:
        multiplier = float(value)
    except (ValueError, TypeError, OverflowError):
        return DEFAULT_SPEED_MULTIPLIER
    if multiplier not in PLAYBACK_SPEEDS:
        return DEFAULT_SPEED_MULTIPLIER
    return int(multiplier)
