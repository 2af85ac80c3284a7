"""
Exception hierarchy for the ski track analyzer.

All errors derive from ValueError so callers that only know about
ValueError (e.g. the GPX upload path) keep working.
"""


class SkiTrackError(ValueError):
    """Base class for all ski track errors."""


class InvalidGpxError(SkiTrackError):
    """GPX data could not be read or did not contain any track points."""


class EmptyTrackError(SkiTrackError):
    """An operation needs at least one track point but got none."""


class PlaybackRangeError(SkiTrackError):
    """Playback was requested over an empty point range."""
