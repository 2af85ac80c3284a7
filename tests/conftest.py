import math
from datetime import datetime, timedelta, timezone

import pytest

from scripts.track.models import RawPoint

T0 = datetime(2024, 2, 10, 9, 0, 0, tzinfo=timezone.utc)
# 10 m of latitude on the haversine sphere
STEP_DEG = math.degrees(10.0 / 6_371_000.0)


def build_raw_track(elevations, step_s=10.0, start=T0, step_deg=STEP_DEG):
    """Track moving north by 10 m per sample, one sample every ``step_s`` seconds."""
    return [
        RawPoint(
            lat=45.0 + i * step_deg,
            lon=7.0,
            ele=float(ele),
            time=start + timedelta(seconds=i * step_s) if start is not None else None,
        )
        for i, ele in enumerate(elevations)
    ]


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def raw_track():
    """Factory fixture: ``raw_track([1000, 980, 1000])``."""
    return build_raw_track


@pytest.fixture
def ski_day(raw_track):
    """Two runs and a lift ride between them."""
    return raw_track([2000, 1980, 1950, 1920, 1950, 1990, 2010, 1990, 1960, 1930])
