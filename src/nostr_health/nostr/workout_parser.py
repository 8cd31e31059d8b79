"""Workout event decoding pipeline.

raw event -> tag index -> structured tags -> content heuristics -> derived
values -> "N/A" sentinels -> estimates. Every field is write-once, so an
earlier stage always wins over a later one.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from ..config import DecoderSettings, get_settings
from ..exceptions import InvalidEventError
from ..models import EventKind, NostrEvent, WorkoutRecord
from .builder import WorkoutBuilder
from .content import extract_from_content
from .derivation import derive_missing_fields, estimate_missing_fields, mark_unknown_run
from .mapper import map_structured_fields
from .tags import TagIndex

logger = logging.getLogger(__name__)


def to_event(event: NostrEvent | Mapping[str, Any] | None) -> NostrEvent:
    """
    Validate caller input as a NostrEvent.

    Raises:
        InvalidEventError: If event is missing or has no creation time
    """
    if event is None:
        raise InvalidEventError("Expected a Nostr event, got None")
    if isinstance(event, NostrEvent):
        return event
    if not isinstance(event, Mapping):
        raise InvalidEventError(f"Expected a Nostr event, got {type(event).__name__}")

    try:
        return NostrEvent.model_validate(dict(event))
    except ValidationError as e:
        raise InvalidEventError(f"Invalid Nostr event: {e}") from e


def parse_workout_event(
    event: NostrEvent | Mapping[str, Any] | None,
    settings: DecoderSettings | None = None,
) -> WorkoutRecord:
    """
    Decode a workout event into a WorkoutRecord.

    Malformed tags never raise; fields that cannot be read are left unset.

    Args:
        event: NostrEvent or raw event dict
        settings: Decoder settings (default: environment settings)

    Returns:
        Frozen WorkoutRecord

    Raises:
        InvalidEventError: If event is missing or has no creation time

    Example:
        ```python
        workout = parse_workout_event(
            {"created_at": 1700000000, "content": "", "tags": [["distance", "10"], ["duration", "3000"]]}
        )
        workout.pace  # "5:00/km"
        ```
    """
    nostr_event = to_event(event)
    settings = settings or get_settings()

    index = TagIndex(nostr_event.tags)
    content = nostr_event.content or ""
    workout = WorkoutBuilder(timestamp=nostr_event.created_at)

    map_structured_fields(index, content, workout, settings)
    extract_from_content(content, workout)
    derive_missing_fields(index, workout)
    mark_unknown_run(content, workout)
    estimate_missing_fields(workout, settings)

    record = workout.build()
    logger.debug(f"Decoded workout {record.id or nostr_event.id}: {record.to_dict()}")
    return record


def parse_workouts(
    events: Iterable[NostrEvent | Mapping[str, Any]],
    settings: DecoderSettings | None = None,
) -> list[WorkoutRecord]:
    """
    Decode a batch of events, newest first.

    Events of another kind are skipped; invalid events are logged and skipped.

    Args:
        events: Events as delivered by a relay subscription
        settings: Decoder settings (default: environment settings)

    Returns:
        Workout records sorted by timestamp, descending
    """
    settings = settings or get_settings()
    workouts: list[WorkoutRecord] = []
    skipped = 0

    for position, event in enumerate(events):
        try:
            nostr_event = to_event(event)
        except InvalidEventError as e:
            logger.warning(f"Skipping event {position}: {e}")
            skipped += 1
            continue

        if nostr_event.kind is not None and nostr_event.kind != EventKind.WORKOUT:
            logger.debug(f"Skipping event {position} of kind {nostr_event.kind}")
            continue

        workouts.append(parse_workout_event(nostr_event, settings))

    if skipped:
        logger.warning(f"Skipped {skipped} invalid event(s)")

    workouts.sort(key=lambda w: w.timestamp, reverse=True)
    return workouts
