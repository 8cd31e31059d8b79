"""Derived values and last-resort estimates for workout fields.

Derived values are computed from other observed fields (pace from speed, from
distance and duration, or from split paces). Estimates come from fixed
heuristics and always carry the "(est.)" marker or appear in `estimated_fields`.
"""

import logging
import math
import re

from ..config import DecoderSettings
from ..models import ESTIMATE_MARKER, NOT_AVAILABLE
from ..units import (
    distance_unit_of,
    duration_to_seconds,
    format_pace,
    pace_to_seconds,
    parse_number,
    round_half_up,
)
from .builder import WorkoutBuilder
from .content import DEFAULT_RUN_TITLE, RUNNING_TYPE, mentions_completed_run
from .mapper import SPEED_TAGS, pace_unit_for
from .tags import TagIndex

logger = logging.getLogger(__name__)

DERIVED = "derived"
ESTIMATED = "estimated"

LEADING_DISTANCE_RE = re.compile(r"^(\d{1,9}(?:\.\d{1,9})?)\s*([A-Za-z]+)?")
PACE_UNIT_RE = re.compile(r"/([A-Za-z]+)")


def derive_pace_from_speed(index: TagIndex, workout: WorkoutBuilder) -> None:
    """pace = 3600 / speed, in the speed tag's unit or the workout's unit."""
    if workout.has("pace"):
        return
    for tag in index.candidates(*SPEED_TAGS):
        speed = parse_number(tag.value)
        if speed is None or speed <= 0 or not math.isfinite(3600 / speed):
            continue

        unit = distance_unit_of(tag.get(2)) if tag.get(2) else pace_unit_for(index, workout)
        workout.fill("pace", format_pace(3600 / speed, unit), DERIVED)
        return


def derive_pace_from_distance(index: TagIndex, workout: WorkoutBuilder) -> None:
    """pace = duration / distance, labelled with the distance's own unit."""
    distance, duration = workout.get("distance"), workout.get("duration")
    if workout.has("pace") or not distance or not duration:
        return

    match = LEADING_DISTANCE_RE.match(distance)
    seconds = duration_to_seconds(duration)
    if not match or not seconds:
        return

    amount = float(match.group(1))
    if amount <= 0:
        return
    unit = distance_unit_of(match.group(2)) if match.group(2) else pace_unit_for(index, workout)
    workout.fill("pace", format_pace(seconds / amount, unit), DERIVED)


def derive_pace_from_splits(index: TagIndex, workout: WorkoutBuilder) -> None:
    """Mean of the per-split paces, in the unit of the first unit-bearing split pace."""
    splits = workout.get("splits") or []
    paces = [split.pace for split in splits if split.pace]
    if workout.has("pace") or not paces:
        return

    unit = pace_unit_for(index, workout)
    for pace in paces:
        match = PACE_UNIT_RE.search(pace)
        if match:
            unit = match.group(1)
            break

    seconds = [s for s in (pace_to_seconds(pace) for pace in paces) if s is not None]
    if not seconds:
        return
    workout.fill("pace", format_pace(sum(seconds) / len(seconds), unit), DERIVED)


def derive_missing_fields(index: TagIndex, workout: WorkoutBuilder) -> None:
    """Fill empty fields that can be computed from observed ones."""
    derive_pace_from_speed(index, workout)
    derive_pace_from_distance(index, workout)
    derive_pace_from_splits(index, workout)


def mark_unknown_run(content: str, workout: WorkoutBuilder) -> None:
    """
    A "Completed a run" note with no duration anywhere is a run of unknown size.

    Duration and distance become the "N/A" sentinel so they read as unknown
    rather than not yet computed.
    """
    if workout.has("duration") or not mentions_completed_run(content):
        return
    workout.fill("type", RUNNING_TYPE, ESTIMATED)
    workout.fill("title", DEFAULT_RUN_TITLE, ESTIMATED)
    workout.fill("duration", NOT_AVAILABLE, ESTIMATED)
    workout.fill("distance", NOT_AVAILABLE, ESTIMATED)


def _known_duration_seconds(workout: WorkoutBuilder) -> int | None:
    duration = workout.get("duration")
    # Bare digits only survive from free text ("time 45") and may be minutes
    if not duration or duration == NOT_AVAILABLE or ":" not in duration:
        return None
    return duration_to_seconds(duration)


def estimate_missing_fields(workout: WorkoutBuilder, settings: DecoderSettings) -> None:
    """
    Estimate distance, pace and calories from the duration alone.

    Only clock-formatted durations (M:SS, H:MM:SS) are estimated from.

    Distance uses a fixed pace (7:30 min/km by default) and is only reported
    from `min_estimated_distance_km` up; the pace is then that fixed pace.
    Calories use a fixed burn rate (10 kcal/min by default).
    """
    seconds = _known_duration_seconds(workout)
    if not seconds:
        return
    minutes = seconds / 60

    if not workout.has("distance"):
        estimated_km = minutes / settings.estimated_pace_min_per_km
        if estimated_km >= settings.min_estimated_distance_km:
            workout.fill(
                "distance", f"~{estimated_km:.1f} km {ESTIMATE_MARKER}", ESTIMATED, estimated=True
            )
            pace = format_pace(settings.estimated_pace_min_per_km * 60, "km")
            workout.fill("pace", f"{pace} {ESTIMATE_MARKER}", ESTIMATED, estimated=True)

    if not workout.has("calories"):
        calories = round_half_up(minutes * settings.estimated_kcal_per_minute)
        workout.fill("calories", calories, ESTIMATED, estimated=True)
