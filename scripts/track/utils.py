from datetime import datetime
from typing import Optional


def to_epoch_ms(value: Optional[datetime]) -> Optional[float]:
    """Convert a datetime to epoch milliseconds; None stays None."""
    if value is None:
        return None
    return value.timestamp() * 1000.0


def time_delta_ms(start_ms: Optional[float], end_ms: Optional[float]) -> float:
    """Milliseconds between two epoch-ms instants; 0 when either side is missing."""
    if start_ms is None or end_ms is None:
        return 0.0
    return end_ms - start_ms


def format_duration(ms: Optional[float]) -> str:
    """Format milliseconds as ``HH:MM:SS``, or ``MM:SS`` below one hour."""
    if ms is None or ms <= 0:
        return "00:00"
    total_seconds = int(ms // 1000)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"
