import pytest

from services.validate_settings_service import (
    DEFAULT_SMOOTHING_WINDOW,
    validate_smoothing_window,
    validate_speed_multiplier,
)


def test_valid_window():
    assert validate_smoothing_window(3) == 3


def test_window_from_string():
    assert validate_smoothing_window("4") == 4


def test_window_is_clamped():
    assert validate_smoothing_window(25) == 10
    assert validate_smoothing_window(-1) == 0


def test_non_numeric_window():
    assert validate_smoothing_window("abc") == DEFAULT_SMOOTHING_WINDOW
    assert validate_smoothing_window(None) == DEFAULT_SMOOTHING_WINDOW


@pytest.mark.parametrize("value, expected", [(1, 1), (20, 20), ("50", 50), (3, 1), ("x", 1)])
def test_speed_multiplier(value, expected):
    assert validate_speed_multiplier(value) == expected


@pytest.mark.parametrize("value", ["inf", float("-inf"), "nan"])
def test_non_finite_window_falls_back_to_default(value):
    assert validate_smoothing_window(value) == DEFAULT_SMOOTHING_WINDOW
