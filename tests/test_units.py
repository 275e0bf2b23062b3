import pytest

from backend.constants import FAIRWAY, FEET, GREEN, ROUGH, YARDS
from backend.services.units import (
    feet_to_yards,
    next_distance,
    parse_distance,
    shot_distance,
    yards_to_feet,
)


def test_yards_to_feet_is_exact_multiply():
    assert yards_to_feet(20) == 60
    assert yards_to_feet(0) == 0
    assert yards_to_feet(7) == 21


@pytest.mark.parametrize(
    "feet, yards",
    [(4, 1), (5, 2), (10, 3), (11, 4), (12, 4), (1.5, 1), (4.5, 2), (1, 0)],
)
def test_feet_to_yards_rounds_to_nearest_half_up(feet, yards):
    assert feet_to_yards(feet) == yards


def test_yards_feet_yards_returns_original_whole_yards():
    for n in range(0, 700):
        assert feet_to_yards(yards_to_feet(n)) == n


@pytest.mark.parametrize(
    "text, expected",
    [
        ("150", 150),
        (" 20 ", 20),
        ("12.7", 12),
        ("-5", -5),
        ("0", 0),
        ("", None),
        ("   ", None),
        (None, None),
        ("abc", None),
        ("nan", None),
        ("inf", None),
    ],
)
def test_parse_distance(text, expected):
    assert parse_distance(text) == expected


def test_shot_distance_stays_in_capture_unit():
    assert shot_distance(400, 150) == 250
    assert shot_distance(60, 0) == 60
    # Overshooting the hole gives a negative figure, left as-is
    assert shot_distance(20, 35) == -15


def test_next_distance_green_from_yards_converts_to_feet():
    assert next_distance(20, YARDS, GREEN) == (60, FEET)


def test_next_distance_green_from_feet_carries_value():
    assert next_distance(8, FEET, GREEN) == (8, FEET)


def test_next_distance_off_green_from_feet_converts_to_yards():
    assert next_distance(10, FEET, ROUGH) == (3, YARDS)
    assert next_distance(11, FEET, FAIRWAY) == (4, YARDS)


def test_next_distance_off_green_in_yards_carries_value():
    assert next_distance(150, YARDS, FAIRWAY) == (150, YARDS)
