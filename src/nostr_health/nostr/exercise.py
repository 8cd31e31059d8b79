"""Classifier for the loosely formatted RUNSTR `exercise` tag.

Nominal layout::

    ["exercise", "33401:<pubkey>:<uuid>", "<relay>", "<distance>", "<seconds>",
     "<pace>", "<encoded route>", "<calories>"]

Producers have shuffled, dropped and nested these elements over time (some
write a stringified JSON array in place of a scalar), so every element is
classified on its own shape instead of its position.
"""

import json
import logging
import re
from collections.abc import Callable

from ..config import DecoderSettings
from ..units import distance_unit_of, format_duration, format_number
from .builder import WorkoutBuilder

logger = logging.getLogger(__name__)

SOURCE = "exercise"

DISTANCE_RE = re.compile(r"^(\d{1,9}(?:\.\d{1,9})?)\s*(km|mi|m)?$", re.IGNORECASE)
KNOWN_DISTANCE_RE = re.compile(r"^(\d{1,9}(?:\.\d{1,9})?)\s*([A-Za-z]+)?")
CLOCK_RE = re.compile(r"^\d{1,6}:\d{1,2}(?::\d{1,2})?$")
PACE_CLOCK_RE = re.compile(r"^\d{1,6}:\d{1,2}$")
INTEGER_RE = re.compile(r"^\d{1,9}$")
ROUTE_RE = re.compile(r"^[A-Za-z0-9\-_=+/]+$")

# Bare integers strictly inside this range read as a duration in seconds
MIN_DURATION_SECONDS = 30
MAX_DURATION_SECONDS = 86400

# Bare integers inside this range may be calories
MIN_CALORIES = 50
MAX_CALORIES = 5000

MIN_ROUTE_LENGTH = 20

# How deep stringified arrays are unpacked
MAX_NESTING = 4


class ExerciseClassifier:
    """
    Classify exercise tag elements into workout fields.

    Rules run top to bottom for each element; a rule only fires when its
    field is still empty, otherwise the element falls through to the next
    rule. The first rule that stores a value ends the element.

    While no duration is known every bare integer in the calorie range is
    read as seconds first, so `calorie_ambiguity_ceiling` never rejects a
    value that reaches `_calories` through `classify`.
    """

    def __init__(
        self,
        workout: WorkoutBuilder,
        settings: DecoderSettings,
        pace_unit: Callable[[], str],
    ) -> None:
        """
        Args:
            workout: Record under construction
            settings: Decoder settings (calorie ambiguity ceiling)
            pace_unit: Returns the km/mi unit for a pace found in the tag
        """
        self.workout = workout
        self.settings = settings
        self.pace_unit = pace_unit
        self.rules: list[Callable[[str], bool]] = [
            self._distance,
            self._clock_time,
            self._seconds,
            self._calories,
            self._route,
        ]

    def classify_tag(self, elements: list[str]) -> None:
        """Classify every element after the tag name."""
        for element in elements:
            self.classify(element)

    def classify(self, element: object, depth: int = 0) -> None:
        """Classify one element, unpacking stringified JSON arrays."""
        if element is None or isinstance(element, bool):
            return
        if isinstance(element, int):
            element = str(element)
        elif isinstance(element, float):
            element = format_number(element)
        if isinstance(element, list):
            self._classify_nested(element, depth)
            return
        if not isinstance(element, str):
            return

        value = element.strip()
        if not value:
            return

        if value.startswith("[") and value.endswith("]"):
            nested = self._parse_array(value)
            if nested is not None:
                self._classify_nested(nested, depth)
                return

        for rule in self.rules:
            if rule(value):
                return

    def _classify_nested(self, members: list, depth: int) -> None:
        if depth >= MAX_NESTING:
            logger.debug(f"Ignoring exercise data nested deeper than {MAX_NESTING}")
            return
        for member in members:
            self.classify(member, depth + 1)

    @staticmethod
    def _parse_array(value: str) -> list | None:
        try:
            data = json.loads(value)
        except ValueError:
            logger.debug(f"Exercise element looks like an array but is not JSON: {value}")
            return None
        return data if isinstance(data, list) and data else None

    def _duration_found(self) -> bool:
        return self.workout.has("duration")

    def _distance(self, value: str) -> bool:
        match = DISTANCE_RE.match(value)
        if not match:
            return False

        number, unit = match.group(1), (match.group(2) or "km").lower()
        if unit == "m":
            number, unit = format_number(float(number) / 1000), "km"
        if self.workout.has("distance"):
            # The same distance repeated in the tag is consumed, not re-read as seconds
            return self._is_known_distance(float(number), unit if match.group(2) else None)
        return self.workout.fill("distance", f"{number} {unit}", SOURCE)

    def _is_known_distance(self, amount: float, unit: str | None) -> bool:
        known = KNOWN_DISTANCE_RE.match(str(self.workout.get("distance")))
        if not known or float(known.group(1)) != amount:
            return False
        return unit is None or known.group(2) is None or distance_unit_of(known.group(2)) == unit

    def _clock_time(self, value: str) -> bool:
        if not CLOCK_RE.match(value):
            return False
        if not self._duration_found():
            return self.workout.fill("duration", value, SOURCE)
        if (
            PACE_CLOCK_RE.match(value)
            and value != self.workout.get("duration")
            and not self.workout.has("pace")
        ):
            return self.workout.fill("pace", f"{value}/{self.pace_unit()}", SOURCE)
        return False

    def _seconds(self, value: str) -> bool:
        if not INTEGER_RE.match(value) or self._duration_found():
            return False
        seconds = int(value)
        if not MIN_DURATION_SECONDS < seconds < MAX_DURATION_SECONDS:
            return False
        return self.workout.fill("duration", format_duration(seconds), SOURCE)

    def _calories(self, value: str) -> bool:
        if not INTEGER_RE.match(value) or self.workout.has("calories"):
            return False
        calories = int(value)
        if not MIN_CALORIES <= calories <= MAX_CALORIES:
            return False
        # Above the ceiling only once a duration is known; see the class docstring
        if not self._duration_found() and calories > self.settings.calorie_ambiguity_ceiling:
            return False
        return self.workout.fill("calories", calories, SOURCE)

    def _route(self, value: str) -> bool:
        if len(value) <= MIN_ROUTE_LENGTH or not ROUTE_RE.match(value):
            return False
        if self.workout.has("route_data"):
            return False
        return self.workout.fill("route_data", value, SOURCE)
