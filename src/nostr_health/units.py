"""Unit conversions and time/pace formatting shared by the decoders."""

import math
import re

# Weight
KG_PER_LB = 0.45359237

# Height
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12

# Bounded digit runs; longer runs are not read as numbers
_NUMBER_RE = re.compile(r"^\d{1,9}(?:\.\d{1,9})?$")
_SECONDS_RE = re.compile(r"^\d{1,9}$")
_CLOCK_RE = re.compile(r"^(\d{1,6}):(\d{1,2})(?::(\d{1,2}))?$")


def lbs_to_kg(lbs: float) -> float:
    return lbs * KG_PER_LB


def kg_to_lbs(kg: float) -> float:
    return kg / KG_PER_LB


def ft_in_to_cm(feet: int, inches: float = 0) -> float:
    return ((feet * INCHES_PER_FOOT) + inches) * CM_PER_INCH


def cm_to_inches(cm: float) -> float:
    return cm / CM_PER_INCH


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return math.floor(value + 0.5)


def format_number(value: float) -> str:
    """Format a number without a trailing '.0' for whole values."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


def is_number(text: str | None) -> bool:
    """Whether text is a plain non-negative decimal ("5", "5.25")."""
    return bool(text) and bool(_NUMBER_RE.match(text.strip()))


def parse_number(text: str | None) -> int | float | None:
    """
    Parse a plain number, returning an int for whole values.

    Returns:
        The number, or None when text is missing or not numeric
    """
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value == int(value) else value


def parse_int(text: str | None) -> int | None:
    """Parse a leading-integer value the way producers write them ("150", "150.4")."""
    value = parse_number(text)
    return int(value) if value is not None else None


def format_duration(total_seconds: float) -> str:
    """
    Format seconds as M:SS, or H:MM:SS from one hour up.

    Examples:
        format_duration(1800) -> "30:00"
        format_duration(3725) -> "1:02:05"

    Raises:
        ValueError: If total_seconds is NaN or infinite
    """
    if not math.isfinite(total_seconds):
        raise ValueError(f"Cannot format duration of {total_seconds} seconds")
    total = int(total_seconds)
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def duration_to_seconds(value: str | None) -> int | None:
    """
    Parse a duration written as M:SS, H:MM:SS or bare seconds.

    Returns:
        Total seconds, or None for anything else (including "N/A")
    """
    if not value:
        return None
    text = value.strip()
    if _SECONDS_RE.match(text):
        return int(text)

    match = _CLOCK_RE.match(text)
    if not match:
        return None
    first, second, third = match.groups()
    if third is None:
        return int(first) * 60 + int(second)
    return int(first) * 3600 + int(second) * 60 + int(third)


def format_pace(seconds_per_unit: float, unit: str) -> str:
    """
    Format seconds per km/mi as "M:SS/unit".

    Seconds are rounded half-up; a rounded 60 carries into the minutes.

    Raises:
        ValueError: If seconds_per_unit is NaN or infinite
    """
    if not math.isfinite(seconds_per_unit):
        raise ValueError(f"Cannot format pace of {seconds_per_unit} seconds")
    minutes = int(seconds_per_unit // 60)
    seconds = round_half_up(seconds_per_unit % 60)
    if seconds == 60:
        minutes += 1
        seconds = 0
    return f"{minutes}:{seconds:02d}/{unit}"


def pace_to_seconds(pace: str | None) -> int | None:
    """Seconds of a "M:SS" or "M:SS/unit" pace, None if not in that shape."""
    if not pace:
        return None
    clock = pace.split("/", 1)[0].strip()
    match = _CLOCK_RE.match(clock)
    if not match or match.group(3) is not None or len(match.group(2)) != 2:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def distance_unit_of(text: str | None) -> str:
    """Collapse a unit spelling (km, kilometers, mi, miles, mph...) to 'km' or 'mi'."""
    lowered = (text or "").lower()
    if "mi" in lowered or "mph" in lowered:
        return "mi"
    return "km"


def infer_unit(declared: str | None, distance: str | None) -> str:
    """
    Pick the km/mi unit for paces of one workout.

    A declared distance unit (distance_type / distance_unit tag) wins, then
    the unit inside the distance string, then km.
    """
    if declared:
        return distance_unit_of(declared)
    return distance_unit_of(distance)
