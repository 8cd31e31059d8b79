"""Parsers for single-value body metric events (weight, height, age).

Each parser is a first-match cascade: a JSON object with a `value` key is
passed through, then format-specific patterns are tried in priority order,
and anything else comes back as `MetricRecord(value=<text>, unit="")`.
"""

import json
import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ..exceptions import InvalidEventError
from ..models import EventKind, MetricHistoryItem, MetricRecord, NostrEvent
from ..units import (
    INCHES_PER_FOOT,
    cm_to_inches,
    format_number,
    ft_in_to_cm,
    kg_to_lbs,
    lbs_to_kg,
    parse_number,
    round_half_up,
)
from .workout_parser import to_event

logger = logging.getLogger(__name__)

KG, LBS = "kg", "lbs"
CM, FT_IN = "cm", "ft-in"
YEARS = "years"

# Largest canonical value given a display conversion (the text rules accept six digits)
MAX_DISPLAY_SOURCE = 999_999

MetricRule = tuple[re.Pattern[str], Callable[[re.Match[str]], MetricRecord]]


def _display_lbs(kg: float) -> str:
    return str(round_half_up(kg_to_lbs(kg)))


def _display_ft_in(cm: float) -> str:
    feet, inches = divmod(round_half_up(cm_to_inches(cm)), INCHES_PER_FOOT)
    return f"{feet}'{inches}\""


def _weight_from_lbs(match: re.Match[str]) -> MetricRecord:
    lbs = float(match.group(1))
    return MetricRecord(
        value=format_number(lbs_to_kg(lbs)),
        unit=KG,
        display_value=str(round_half_up(lbs)),
        display_unit=LBS,
    )


def _weight_from_kg(match: re.Match[str]) -> MetricRecord:
    kg = float(match.group(1))
    return MetricRecord(value=match.group(1), unit=KG, display_value=_display_lbs(kg), display_unit=LBS)


def _height_from_ft_in(match: re.Match[str]) -> MetricRecord:
    feet = int(match.group(1))
    inches = int(match.group(2)) if match.lastindex and match.lastindex >= 2 else 0
    return MetricRecord(
        value=format_number(ft_in_to_cm(feet, inches)),
        unit=CM,
        display_value=f"{feet}'{inches}\"",
        display_unit=FT_IN,
    )


def _height_from_cm(match: re.Match[str]) -> MetricRecord:
    cm = float(match.group(1))
    return MetricRecord(value=match.group(1), unit=CM, display_value=_display_ft_in(cm), display_unit=FT_IN)


def _age_in_years(match: re.Match[str]) -> MetricRecord:
    return MetricRecord(value=match.group(1), unit=YEARS)


WEIGHT_RULES: list[MetricRule] = [
    (
        re.compile(r"^(\d{1,6}(?:\.\d{1,6})?)\s*(?:lbs?|pounds?)$", re.IGNORECASE),
        _weight_from_lbs,
    ),
    (
        re.compile(r"^(\d{1,6}(?:\.\d{1,6})?)\s*(?:kgs?|kilograms?)$", re.IGNORECASE),
        _weight_from_kg,
    ),
    (re.compile(r"^(\d{1,6}(?:\.\d{1,6})?)$"), _weight_from_kg),
]

HEIGHT_RULES: list[MetricRule] = [
    # 5'11", 5ft 11in, 5 feet 11 inches
    (
        re.compile(
            r"^(\d{1,3})[\s'\"]*(?:ft|feet|')[\s'\"]*(\d{1,3})[\s'\"]*(?:in|inches|\")?$",
            re.IGNORECASE,
        ),
        _height_from_ft_in,
    ),
    # 5-11
    (re.compile(r"^(\d{1,3})-(\d{1,3})$"), _height_from_ft_in),
    # 5ft, 5'
    (re.compile(r"^(\d{1,3})[\s'\"]*(?:ft|feet|')$", re.IGNORECASE), _height_from_ft_in),
    (
        re.compile(r"^(\d{1,6}(?:\.\d{1,6})?)\s*(?:cm|centimeters?)$", re.IGNORECASE),
        _height_from_cm,
    ),
    (re.compile(r"^(\d{1,6}(?:\.\d{1,6})?)$"), _height_from_cm),
]

AGE_RULES: list[MetricRule] = [
    (re.compile(r"^(\d{1,3})\s*(?:years?|yrs?|y)$", re.IGNORECASE), _age_in_years),
    (re.compile(r"^(\d{1,3})$"), _age_in_years),
]

RULES_BY_KIND: dict[EventKind, list[MetricRule]] = {
    EventKind.WEIGHT: WEIGHT_RULES,
    EventKind.HEIGHT: HEIGHT_RULES,
    EventKind.AGE: AGE_RULES,
}

CANONICAL_UNITS: dict[EventKind, str] = {
    EventKind.WEIGHT: KG,
    EventKind.HEIGHT: CM,
    EventKind.AGE: YEARS,
}


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _from_json(content: str, default_unit: str) -> MetricRecord | None:
    """Pass-through for JSON objects carrying a `value` key."""
    try:
        data = json.loads(content)
    except ValueError:
        return None
    if not isinstance(data, dict) or data.get("value") in (None, ""):
        return None

    return MetricRecord(
        value=str(data["value"]),
        unit=str(data.get("unit") or default_unit),
        display_value=_optional_str(data.get("displayValue")),
        display_unit=_optional_str(data.get("displayUnit")),
    )


def _parse(content: str, kind: EventKind) -> MetricRecord:
    text = (content or "").strip()

    record = _from_json(text, CANONICAL_UNITS.get(kind, ""))
    if record is not None:
        return record

    for pattern, handler in RULES_BY_KIND.get(kind, []):
        match = pattern.match(text)
        if match:
            return handler(match)

    logger.debug(f"Unrecognised {kind.name.lower()} value: {text!r}")
    return MetricRecord(value=text, unit="")


def parse_weight(content: str) -> MetricRecord:
    """
    Parse a weight ("175 lbs", "80kg", "80", JSON) into kilograms.

    Example:
        parse_weight("175 lbs") -> value="79.37866475", unit="kg",
        display_value="175", display_unit="lbs"
    """
    return _parse(content, EventKind.WEIGHT)


def parse_height(content: str) -> MetricRecord:
    """
    Parse a height (5'11", "5-11", "5ft", "180cm", "180", JSON) into centimeters.

    Example:
        parse_height("5'11\\"") -> value="180.34", unit="cm", display_value="5'11\\""
    """
    return _parse(content, EventKind.HEIGHT)


def parse_age(content: str) -> MetricRecord:
    """Parse an age ("35", "35 years", "35yr") in years."""
    return _parse(content, EventKind.AGE)


def parse_metric_content(content: str, kind: int) -> MetricRecord:
    """
    Parse metric content for any event kind.

    Weight, height and age use their dedicated parsers; other kinds pass a
    JSON object through or keep the raw text.
    """
    try:
        event_kind = EventKind(kind)
    except ValueError:
        event_kind = None

    if event_kind in RULES_BY_KIND:
        return _parse(content, event_kind)

    text = (content or "").strip()
    return _from_json(text, "") or MetricRecord(value=text, unit="")


def with_display_units(record: MetricRecord, kind: int) -> MetricRecord:
    """
    Fill a missing display value for weight (lbs) and height (ft-in).

    Records that already have both display fields, or whose value is not
    numeric or beyond six digits, are returned unchanged.
    """
    if record.display_value and record.display_unit:
        return record

    value = parse_number(record.value)
    if value is None or abs(value) > MAX_DISPLAY_SOURCE:
        return record

    if kind == EventKind.WEIGHT:
        return record.model_copy(update={"display_value": _display_lbs(value), "display_unit": LBS})
    if kind == EventKind.HEIGHT:
        return record.model_copy(
            update={"display_value": _display_ft_in(value), "display_unit": FT_IN}
        )
    return record


def parse_metric_event(
    event: NostrEvent | Mapping[str, Any] | None, kind: int | None = None
) -> MetricRecord:
    """
    Parse the content of a metric event, with display units filled in.

    Args:
        event: NostrEvent or raw event dict
        kind: Metric kind (default: the event's own kind)

    Raises:
        InvalidEventError: If event is missing, invalid, or has no kind
    """
    nostr_event = to_event(event)
    kind = kind if kind is not None else nostr_event.kind
    if kind is None:
        raise InvalidEventError("Metric event has no kind")

    record = parse_metric_content(nostr_event.content, kind)
    return with_display_units(record, kind)


def metric_history(
    events: Iterable[NostrEvent | Mapping[str, Any]], kind: int
) -> list[MetricHistoryItem]:
    """
    Build the numeric history of a metric, newest first.

    Events whose value is not numeric and invalid events are skipped.

    Args:
        events: Metric events as delivered by a relay subscription
        kind: Metric kind to parse the events as
    """
    items: list[MetricHistoryItem] = []

    for position, event in enumerate(events):
        try:
            nostr_event = to_event(event)
        except InvalidEventError as e:
            logger.warning(f"Skipping event {position}: {e}")
            continue

        record = parse_metric_content(nostr_event.content, kind)
        value = parse_number(record.value)
        if value is None:
            logger.debug(f"Skipping non-numeric {kind} event {position}: {record.value!r}")
            continue

        items.append(
            MetricHistoryItem(
                timestamp=nostr_event.created_at,
                value=float(value),
                unit=record.unit,
                display_value=record.display_value,
                display_unit=record.display_unit,
            )
        )

    items.sort(key=lambda item: item.timestamp, reverse=True)
    return items
