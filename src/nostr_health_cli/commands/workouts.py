"""Workout commands for the nostr-health CLI."""

import json

import typer

from nostr_health.config import get_settings
from nostr_health.nostr import parse_workouts
from nostr_health_cli import display
from nostr_health_cli.events import load_events


def decode_workouts(
    path: str = typer.Argument(..., help="JSON / JSON-lines file of events, '-' for stdin"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print decoded records as JSON"),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Show the newest N workouts"),
) -> None:
    """
    Decode kind 1301 workout events.

    Examples:
        nostr-health workouts events.json            # Table of workouts
        nostr-health workouts events.jsonl --json    # Decoded records as JSON
        cat events.json | nostr-health workouts -    # Read from stdin
    """
    try:
        events = load_events(path)
    except OSError as e:
        display.display_error(f"Could not read {path}: {e}")
        raise typer.Exit(1) from None
    except (json.JSONDecodeError, ValueError) as e:
        display.display_error(f"Invalid event file {path}: {e}")
        raise typer.Exit(1) from None

    workouts = parse_workouts(events, settings=get_settings())
    if limit:
        workouts = workouts[:limit]

    if as_json:
        display.display_json([workout.to_dict() for workout in workouts])
        return

    if not workouts:
        display.display_info("No workout events found")
        return

    display.display_workouts(workouts)
