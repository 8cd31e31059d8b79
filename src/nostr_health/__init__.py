"""Decoder for Nostr workout and health metric events."""

from .config import DecoderSettings, get_settings
from .exceptions import InvalidEventError, NostrHealthError
from .models import EventKind, MetricHistoryItem, MetricRecord, NostrEvent, WorkoutRecord
from .nostr import (
    metric_history,
    parse_age,
    parse_height,
    parse_metric_event,
    parse_weight,
    parse_workout_event,
    parse_workouts,
)

__version__ = "0.1.0"

__all__ = [
    "DecoderSettings",
    "get_settings",
    "InvalidEventError",
    "NostrHealthError",
    "EventKind",
    "NostrEvent",
    "WorkoutRecord",
    "MetricRecord",
    "MetricHistoryItem",
    "parse_workout_event",
    "parse_workouts",
    "parse_weight",
    "parse_height",
    "parse_age",
    "parse_metric_event",
    "metric_history",
]
