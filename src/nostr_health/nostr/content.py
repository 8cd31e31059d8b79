"""Heuristic extraction of workout fields from an event's free-text content."""

import json
import logging
import math
import re
from collections.abc import Callable

from ..units import distance_unit_of, format_number, format_pace, is_number
from .builder import WorkoutBuilder

logger = logging.getLogger(__name__)

SOURCE = "content"

# Case-sensitive app marker
RUNSTR_MARKER = "RUNSTR"
RUNNING_TYPE = "Running"
DEFAULT_RUN_TITLE = "Run with RUNSTR"

RUNNING_WORDS_RE = re.compile(r"\b(?:run|running)\b", re.IGNORECASE)
COMPLETED_RUN_RE = re.compile(r"\bcompleted a run\b", re.IGNORECASE)

DISTANCE_RE = re.compile(
    r"\b(\d{1,6}(?:\.\d{1,6})?)\s*(kilometers?|kms?|miles?|mi)\b", re.IGNORECASE
)
PACE_RE = re.compile(
    r"\bpace\b:?\s*(\d{1,3}:\d{2})\s*(?:min\s*)?(?:/|per\s*)\s*(kilometers?|km|miles?|mi)\b",
    re.IGNORECASE,
)
DURATION_RE = re.compile(
    r"\b(?:time|duration)\b:?\s*(\d{1,6}(?::\d{1,2}){0,2})\b", re.IGNORECASE
)
CALORIES_RE = re.compile(r"\b(\d{1,6})\s*(?:kcal|calories|cals?)\b", re.IGNORECASE)

ContentRule = tuple[re.Pattern[str], Callable[[re.Match[str], WorkoutBuilder], bool]]


def _distance(match: re.Match[str], workout: WorkoutBuilder) -> bool:
    unit = distance_unit_of(match.group(2))
    return workout.fill("distance", f"{match.group(1)} {unit}", SOURCE)


def _pace(match: re.Match[str], workout: WorkoutBuilder) -> bool:
    unit = distance_unit_of(match.group(2))
    return workout.fill("pace", f"{match.group(1)}/{unit}", SOURCE)


def _duration(match: re.Match[str], workout: WorkoutBuilder) -> bool:
    return workout.fill("duration", match.group(1), SOURCE)


def _calories(match: re.Match[str], workout: WorkoutBuilder) -> bool:
    return workout.fill("calories", int(match.group(1)), SOURCE)


# Each rule fills one field; the first match in the text is used
CONTENT_RULES: list[ContentRule] = [
    (DISTANCE_RE, _distance),
    (PACE_RE, _pace),
    (DURATION_RE, _duration),
    (CALORIES_RE, _calories),
]


def mentions_running(content: str) -> bool:
    """Whether content carries the RUNSTR marker or running vocabulary."""
    return RUNSTR_MARKER in content or bool(RUNNING_WORDS_RE.search(content))


def mentions_completed_run(content: str) -> bool:
    return bool(COMPLETED_RUN_RE.search(content))


def extract_embedded_json(content: str) -> dict | None:
    """
    Parse the text between the first '{' and the last '}' as a JSON object.

    Returns:
        The object, or None when there is none or it is not valid JSON
    """
    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end <= start:
        return None

    try:
        data = json.loads(content[start : end + 1])
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _json_number(value: object) -> float | None:
    """A finite number from a JSON value (numbers and numeric strings)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return float(value) if is_number(value) else None
    if not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _apply_embedded_json(data: dict, workout: WorkoutBuilder) -> None:
    source = f"{SOURCE}:json"
    unit = distance_unit_of(str(data.get("distanceUnit") or "km"))

    distance = data.get("distance")
    number = _json_number(distance)
    if number is not None:
        workout.fill("distance", f"{format_number(number)} {unit}", source)
    elif isinstance(distance, str):
        workout.fill("distance", distance.strip(), source)

    pace = data.get("pace")
    if isinstance(pace, str):
        workout.fill("pace", pace.strip(), source)
    else:
        seconds = _json_number(pace)
        if seconds is not None and seconds > 0:
            workout.fill("pace", format_pace(seconds, unit), source)

    calories = _json_number(data.get("calories"))
    if calories is not None and calories >= 0:
        workout.fill("calories", int(calories), source)



def extract_from_content(content: str, workout: WorkoutBuilder) -> None:
    """
    Fill still-empty workout fields from free text.

    Looks for distance, pace, duration and calories phrases, then for a JSON
    object embedded in the text, then for running vocabulary. Never raises;
    anything not recognised is left for later stages.

    Args:
        content: Event content
        workout: Record under construction
    """
    if not content:
        return

    workout.fill("notes", content, SOURCE)

    for pattern, handler in CONTENT_RULES:
        match = pattern.search(content)
        if match:
            handler(match, workout)

    data = extract_embedded_json(content)
    if data is not None:
        logger.debug(f"Found embedded JSON in content: {data}")
        _apply_embedded_json(data, workout)

    if mentions_running(content):
        workout.fill("type", RUNNING_TYPE, SOURCE)
        workout.fill("title", DEFAULT_RUN_TITLE, SOURCE)
