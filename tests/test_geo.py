import math

import numpy as np
import pytest

from scripts.track.geo import EARTH_RADIUS_M, distance_meters, distance_meters_array


def test_identical_points_have_zero_distance():
    assert distance_meters(46.5, 7.9, 46.5, 7.9) == 0.0


def test_one_degree_of_latitude():
    d = distance_meters(0.0, 0.0, 1.0, 0.0)
    assert d == pytest.approx(EARTH_RADIUS_M * math.pi / 180.0, rel=1e-9)
    assert d == pytest.approx(111_194.93, abs=0.01)


def test_distance_is_symmetric():
    a = distance_meters(46.55, 7.98, 46.60, 8.02)
    b = distance_meters(46.60, 8.02, 46.55, 7.98)
    assert a == pytest.approx(b)


def test_array_matches_pairwise_scalar():
    lats = [46.5, 46.501, 46.503, 46.503]
    lons = [7.9, 7.901, 7.899, 7.899]
    steps = distance_meters_array(lats, lons)

    assert steps[0] == 0.0
    for i in range(1, len(lats)):
        expected = distance_meters(lats[i - 1], lons[i - 1], lats[i], lons[i])
        assert steps[i] == pytest.approx(expected, rel=1e-12)
    assert steps[-1] == 0.0


@pytest.mark.parametrize("lats, lons", [([], []), ([46.5], [7.9])])
def test_array_short_inputs(lats, lons):
    steps = distance_meters_array(lats, lons)
    assert len(steps) == len(lats)
    assert np.all(steps == 0.0)
