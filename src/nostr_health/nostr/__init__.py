"""Nostr health event decoding."""

from .metrics import (
    metric_history,
    parse_age,
    parse_height,
    parse_metric_content,
    parse_metric_event,
    parse_weight,
    with_display_units,
)
from .tags import Tag, TagIndex
from .workout_parser import parse_workout_event, parse_workouts

__all__ = [
    "Tag",
    "TagIndex",
    "parse_workout_event",
    "parse_workouts",
    "parse_weight",
    "parse_height",
    "parse_age",
    "parse_metric_content",
    "parse_metric_event",
    "with_display_units",
    "metric_history",
]
