"""Data models for nostr-health."""

from .event import EventKind, NostrEvent
from .metric import MetricHistoryItem, MetricRecord
from .split import Split
from .workout import (
    ESTIMATE_MARKER,
    NOT_AVAILABLE,
    Measurement,
    Weather,
    WorkoutRecord,
)

__all__ = [
    # Input
    "NostrEvent",
    "EventKind",
    # Workouts
    "WorkoutRecord",
    "Split",
    "Measurement",
    "Weather",
    "ESTIMATE_MARKER",
    "NOT_AVAILABLE",
    # Metrics
    "MetricRecord",
    "MetricHistoryItem",
]
