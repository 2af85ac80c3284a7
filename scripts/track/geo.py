import math

import numpy as np

EARTH_RADIUS_M = 6_371_000.0


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle (haversine) distance in meters between two lat/lon points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    )
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def distance_meters_array(lats, lons) -> np.ndarray:
    """
    Haversine distance of every step of a track.

    Parameters
    ----------
    lats, lons : array-like
        Latitudes and longitudes in degrees, in recording order.

    Returns
    -------
    np.ndarray
        Same length as the input; element ``i`` is the distance between
        sample ``i - 1`` and ``i``, element 0 is always 0.
    """
    lat = np.radians(np.asarray(lats, dtype=float))
    lon = np.radians(np.asarray(lons, dtype=float))
    out = np.zeros(len(lat), dtype=float)
    if len(lat) < 2:
        return out

    d_phi = np.diff(lat)
    d_lambda = np.diff(lon)
    a = (
        np.sin(d_phi / 2.0) ** 2
        + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(d_lambda / 2.0) ** 2
    )
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    out[1:] = EARTH_RADIUS_M * c
    return out
