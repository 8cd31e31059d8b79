"""Mapping of known workout tags onto WorkoutRecord fields.

Tag vocabulary changed across producer apps, so most fields have several
aliases. Aliases are tried in priority order and, for duplicate tags, the
first occurrence wins; values are never merged.
"""

import logging
import re

from pydantic import ValidationError

from ..config import DecoderSettings
from ..models import Measurement, Split, Weather
from ..units import (
    distance_unit_of,
    format_duration,
    format_number,
    format_pace,
    infer_unit,
    is_number,
    parse_int,
    parse_number,
)
from .builder import WorkoutBuilder
from .content import RUNSTR_MARKER
from .exercise import ExerciseClassifier
from .tags import Tag, TagIndex

logger = logging.getLogger(__name__)

SOURCE = "tags"

DISTANCE_TAGS = ("distance", "total_distance", "dist", "length")
CALORIE_TAGS = ("calories", "kcal", "energy", "calorie")
DURATION_TAGS = ("duration", "time", "moving_time", "total_time")
PACE_TAGS = ("pace", "pace_avg", "average_pace")
SPEED_TAGS = ("speed_avg", "average_speed")
DISTANCE_UNIT_TAGS = ("distance_type", "distance_unit")
SOURCE_TAGS = ("source", "app")

METER_UNITS = {"m", "meter", "meters", "metre", "metres"}

# "5.2 mi", "10km": a number followed by a unit word
DISTANCE_WITH_UNIT_RE = re.compile(r"^\d{1,9}(?:\.\d{1,9})?\s*[A-Za-z]+\.?$")
CLOCK_RE = re.compile(r"^\d{1,6}:\d{2}(?::\d{2})?$")
SPLIT_PACE_RE = re.compile(r"^\d{1,3}:\d{2}$")
# Digit-only text; is_number rejects it only when it is too long to read
NUMERIC_TEXT_RE = re.compile(r"^[\d.]+$")


def declared_distance_unit(index: TagIndex) -> str | None:
    """Value of the distance_type / distance_unit tag, if any."""
    tag = index.first_of(*DISTANCE_UNIT_TAGS)
    return tag.value if tag and tag.value else None


def pace_unit_for(index: TagIndex, workout: WorkoutBuilder) -> str:
    """The km/mi unit paces of this workout are expressed in."""
    return infer_unit(declared_distance_unit(index), workout.get("distance"))


def _normalize_distance(value: str, unit: str | None) -> str | None:
    if is_number(value):
        unit = (unit or "km").strip()
        if unit.lower() in METER_UNITS:
            return f"{format_number(float(value) / 1000)} km"
        return f"{value.strip()} {distance_unit_of(unit)}"
    if DISTANCE_WITH_UNIT_RE.match(value.strip()):
        return value.strip()
    return None


def map_identity(index: TagIndex, workout: WorkoutBuilder) -> None:
    workout.fill("id", index.first_value("d"), SOURCE)
    workout.fill("title", index.first_value("title"), SOURCE)
    workout.fill("type", index.first_value("type"), SOURCE)


def map_distance(index: TagIndex, workout: WorkoutBuilder) -> None:
    for tag in index.candidates(*DISTANCE_TAGS):
        if not tag.value:
            continue
        distance = _normalize_distance(tag.value, tag.get(2))
        if distance is None:
            logger.debug(f"Ignoring unreadable {tag.name} tag: {tag.value!r}")
            continue
        workout.fill("distance", distance, SOURCE)
        return


def map_calories(index: TagIndex, workout: WorkoutBuilder) -> None:
    for tag in index.candidates(*CALORIE_TAGS):
        if is_number(tag.value):
            workout.fill("calories", int(float(tag.value)), SOURCE)
            return


def map_time_range(index: TagIndex, workout: WorkoutBuilder) -> None:
    """`start`/`end` tags; when both are present and end > start they set the duration."""
    start = parse_int(index.first_value("start"))
    end = parse_int(index.first_value("end"))
    workout.fill("start_time", start, SOURCE)
    workout.fill("end_time", end, SOURCE)

    if start is not None and end is not None and end > start:
        workout.fill("duration", format_duration(end - start), SOURCE)


def map_exercise(index: TagIndex, workout: WorkoutBuilder, settings: DecoderSettings) -> None:
    """Classify the first `exercise` tag."""
    tag = index.first("exercise")
    if tag is None:
        return

    logger.debug(f"Found exercise tag: {list(tag.values)}")
    classifier = ExerciseClassifier(
        workout,
        settings,
        pace_unit=lambda: pace_unit_for(index, workout),
    )
    classifier.classify_tag(list(tag.values))


def map_duration(index: TagIndex, workout: WorkoutBuilder) -> None:
    """Dedicated duration tags; bare numbers are seconds."""
    for tag in index.candidates(*DURATION_TAGS):
        value = (tag.value or "").strip()
        if not value:
            continue
        if is_number(value):
            value = format_duration(float(value))
        elif NUMERIC_TEXT_RE.match(value):
            logger.debug(f"Ignoring unreadable {tag.name} tag: {value!r}")
            continue
        workout.fill("duration", value, SOURCE)
        return


def map_pace(index: TagIndex, workout: WorkoutBuilder) -> None:
    """Dedicated pace tags; bare numbers are seconds per unit."""
    for tag in index.candidates(*PACE_TAGS):
        value = (tag.value or "").strip()
        if not value:
            continue

        unit = distance_unit_of(tag.get(2)) if tag.get(2) else pace_unit_for(index, workout)
        if is_number(value):
            seconds = float(value)
            if seconds <= 0:
                continue
            pace = format_pace(seconds, unit)
        elif "/" in value:
            pace = value
        elif CLOCK_RE.match(value):
            pace = f"{value}/{unit}"
        else:
            logger.debug(f"Ignoring unreadable {tag.name} tag: {value!r}")
            continue

        workout.fill("pace", pace, SOURCE)
        return


def _measurement(tag: Tag | None, default_unit: str) -> Measurement | None:
    if tag is None:
        return None
    value = parse_number(tag.value)
    if value is None:
        return None
    return Measurement(value=value, unit=tag.get(2) or default_unit)


def map_physiology(index: TagIndex, workout: WorkoutBuilder) -> None:
    """Heart rate, cadence, elevation and speed tags."""
    workout.fill("heart_rate", _measurement(index.first("heart_rate_avg"), "bpm"), SOURCE)
    workout.fill("max_heart_rate", _measurement(index.first("heart_rate_max"), "bpm"), SOURCE)
    workout.fill("cadence", _measurement(index.first("cadence_avg"), "spm"), SOURCE)

    workout.fill("elevation_gain", parse_number(index.first_value("elevation_gain")), SOURCE)

    avg_speed = parse_number(index.first_value("speed_avg"))
    if avg_speed is not None:
        workout.fill("avg_speed", float(avg_speed), SOURCE)
    max_speed = parse_number(index.first_value("speed_max"))
    if max_speed is not None:
        workout.fill("max_speed", float(max_speed), SOURCE)


def map_source(index: TagIndex, content: str, workout: WorkoutBuilder) -> None:
    tag = index.first_of(*SOURCE_TAGS)
    if tag is not None and tag.value:
        workout.fill("source", tag.value, SOURCE)
    elif RUNSTR_MARKER in content:
        workout.fill("source", RUNSTR_MARKER, "content")


def map_weather(index: TagIndex, workout: WorkoutBuilder) -> None:
    temp_tag = index.first("weather_temp")
    temp = parse_number(temp_tag.value) if temp_tag else None
    humidity = parse_number(index.first_value("weather_humidity"))
    condition = index.first_value("weather_condition") or None

    if temp is None and humidity is None and condition is None:
        return

    weather = Weather(
        temp=temp,
        unit=(temp_tag.get(2) or "c") if temp is not None else None,
        humidity=humidity,
        condition=condition,
    )
    workout.fill("weather", weather, SOURCE)


def parse_split(tag: Tag) -> Split | None:
    """
    Parse one split tag.

    Layout: ["split", number, distance, unit, time, heartRate?, ...extra]. In
    the extra elements a number followed by "m" is the elevation, and a M:SS
    token other than the split time is the pace (joined with a following
    km / mi / "/km" / "/mi" token).

    Returns:
        The split, or None when number or distance are not numeric
    """
    number = parse_int(tag.get(1))
    distance = parse_number(tag.get(2))
    if number is None or distance is None:
        logger.debug(f"Skipping split tag without number/distance: {list(tag.values)}")
        return None

    time = tag.get(4) or ""
    raw = [tag.get(i) or "" for i in range(len(tag))]

    elevation = None
    for i in range(6, len(raw)):
        if raw[i] == "m" and is_number(raw[i - 1]):
            elevation = float(raw[i - 1])
            break

    pace = None
    for i in range(5, len(raw)):
        if SPLIT_PACE_RE.match(raw[i]) and raw[i] != time:
            pace = raw[i]
            following = raw[i + 1] if i + 1 < len(raw) else ""
            if following in ("km", "mi"):
                pace = f"{pace}/{following}"
            elif "/km" in following or "/mi" in following:
                pace = f"{pace}{following}"
            break

    try:
        return Split(
            number=number,
            distance=distance,
            unit=tag.get(3) or "",
            time=time,
            heart_rate=parse_int(tag.get(5)),
            elevation=elevation,
            pace=pace,
        )
    except ValidationError as e:
        logger.debug(f"Skipping invalid split tag {list(tag.values)}: {e}")
        return None


def map_splits(index: TagIndex, workout: WorkoutBuilder) -> None:
    splits = [split for tag in index.all_matching("split") if (split := parse_split(tag))]
    if splits:
        workout.fill("splits", splits, SOURCE)


def map_labels(index: TagIndex, workout: WorkoutBuilder) -> None:
    """`completed` flag and `t` labels."""
    completed = index.first_value("completed")
    if completed is not None:
        workout.fill("completed", completed.strip().lower() == "true", SOURCE)

    labels: list[str] = []
    for tag in index.all_matching("t"):
        if tag.value and tag.value not in labels:
            labels.append(tag.value)
    if labels:
        workout.fill("tags", labels, SOURCE)


def map_structured_fields(
    index: TagIndex,
    content: str,
    workout: WorkoutBuilder,
    settings: DecoderSettings,
) -> None:
    """
    Fill workout fields from known tags.

    Order matters: dedicated distance/calorie tags and the start/end range
    come before the exercise tag, whose classification depends on what is
    already known, and the dedicated duration/pace tags only fill what the
    exercise tag left empty.

    Args:
        index: Tag index of the event
        content: Event content (only used for the RUNSTR source marker)
        workout: Record under construction
        settings: Decoder settings
    """
    map_identity(index, workout)
    map_distance(index, workout)
    map_calories(index, workout)
    map_time_range(index, workout)
    map_exercise(index, workout, settings)
    map_duration(index, workout)
    map_pace(index, workout)
    map_physiology(index, workout)
    map_source(index, content, workout)
    map_weather(index, workout)
    map_splits(index, workout)
    map_labels(index, workout)
