import math

from backend.constants import FEET, FEET_PER_YARD, GREEN, YARDS


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def yards_to_feet(yards: int) -> int:
    return yards * FEET_PER_YARD


def feet_to_yards(feet: float) -> int:
    """Convert feet to whole yards, rounding halves up."""
    return _round_half_up(feet / FEET_PER_YARD)


def parse_distance(text: str | None) -> int | None:
    """Parse a typed distance the way an integer entry field does.

    Surrounding whitespace is ignored and decimals are truncated toward zero.
    Returns None when the text is blank or not a number.
    """
    if text is None or not text.strip():
        return None
    try:
        return int(float(text.strip()))
    except (ValueError, OverflowError):
        return None


def shot_distance(before: int, after: int) -> int:
    """Distance travelled, in whatever unit both readings were taken in."""
    return before - after


def next_distance(after: int, unit: str, result: str) -> tuple[int, str]:
    """Distance and unit the following shot starts from.

    Landing on the green switches to feet; any other result switches back
    to yards. A value already in the target unit is carried unchanged.
    """
    if result == GREEN:
        if unit == YARDS:
            return yards_to_feet(after), FEET
        return after, FEET
    if unit == FEET:
        return feet_to_yards(after), YARDS
    return after, YARDS
