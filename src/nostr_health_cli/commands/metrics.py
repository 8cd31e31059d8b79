"""Body metric commands for the nostr-health CLI."""

import json
from enum import StrEnum

import typer

from nostr_health.models import EventKind
from nostr_health.nostr import metric_history, parse_metric_content, with_display_units
from nostr_health_cli import display
from nostr_health_cli.events import load_events


class MetricName(StrEnum):
    WEIGHT = "weight"
    HEIGHT = "height"
    AGE = "age"

    @property
    def kind(self) -> EventKind:
        return EventKind[self.name]


def parse_metric(
    metric: MetricName = typer.Argument(..., help="Metric to parse"),
    value: str = typer.Argument(..., help="Value as written, e.g. \"175 lbs\" or 5'11\""),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the record as JSON"),
) -> None:
    """
    Parse a single weight, height or age value.

    Examples:
        nostr-health metric weight "175 lbs"
        nostr-health metric height "5-11"
    """
    record = with_display_units(parse_metric_content(value, metric.kind), metric.kind)

    if as_json:
        display.display_json(record.model_dump(by_alias=True, exclude_none=True))
        return

    display.display_metric(metric.value, record)
    if not record.unit:
        raise typer.Exit(1)


def show_history(
    path: str = typer.Argument(..., help="JSON / JSON-lines file of events, '-' for stdin"),
    metric: MetricName = typer.Option(..., "--kind", "-k", help="Metric the events hold"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print history as JSON"),
) -> None:
    """Show the numeric history of a metric, newest first."""
    try:
        events = load_events(path)
    except OSError as e:
        display.display_error(f"Could not read {path}: {e}")
        raise typer.Exit(1) from None
    except (json.JSONDecodeError, ValueError) as e:
        display.display_error(f"Invalid event file {path}: {e}")
        raise typer.Exit(1) from None

    items = metric_history(events, metric.kind)

    if as_json:
        display.display_json([item.model_dump(by_alias=True, exclude_none=True) for item in items])
        return

    display.display_history(metric.value, items)
