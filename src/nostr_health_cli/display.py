"""Rich output helpers for the nostr-health CLI."""

from datetime import UTC, datetime
from typing import Any

from rich.console import Console
from rich.table import Table

from nostr_health.models import MetricHistoryItem, MetricRecord, WorkoutRecord

console = Console()
err_console = Console(stderr=True)


def display_error(message: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {message}")


def display_warning(message: str) -> None:
    err_console.print(f"[yellow]Warning:[/yellow] {message}")


def display_info(message: str) -> None:
    console.print(f"[cyan]{message}[/cyan]")


def display_json(data: Any) -> None:
    console.print_json(data=data)


def _or_dash(value: Any) -> str:
    return "-" if value is None else str(value)


def _estimated(value: Any, estimated: bool) -> str:
    text = _or_dash(value)
    return f"[dim]{text} (est.)[/dim]" if estimated and value is not None else text


def display_workouts(workouts: list[WorkoutRecord]) -> None:
    """Print workouts as a table, estimated values dimmed."""
    table = Table(title=f"Workouts ({len(workouts)})")
    table.add_column("Date", style="dim")
    table.add_column("Title")
    table.add_column("Type")
    table.add_column("Distance", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Pace", justify="right")
    table.add_column("Calories", justify="right")
    table.add_column("HR", justify="right")

    for workout in workouts:
        when = datetime.fromtimestamp(workout.timestamp, UTC).strftime("%Y-%m-%d %H:%M")
        heart_rate = (
            f"{workout.heart_rate.value} {workout.heart_rate.unit}" if workout.heart_rate else None
        )
        table.add_row(
            when,
            _or_dash(workout.title),
            _or_dash(workout.type),
            _or_dash(workout.distance),
            _or_dash(workout.duration),
            _or_dash(workout.pace),
            _estimated(workout.calories, workout.is_estimated("calories")),
            _or_dash(heart_rate),
        )

    console.print(table)


def display_metric(label: str, record: MetricRecord) -> None:
    if not record.unit:
        display_warning(f"Could not understand {label} value: {record.value!r}")
        return

    line = f"[bold]{label.capitalize()}:[/bold] {record.value} {record.unit}"
    if record.display_value and record.display_unit:
        line += f"  [dim]({record.display_value} {record.display_unit})[/dim]"
    console.print(line)


def display_history(label: str, items: list[MetricHistoryItem]) -> None:
    table = Table(title=f"{label.capitalize()} history ({len(items)})")
    table.add_column("Date", style="dim")
    table.add_column("Value", justify="right")
    table.add_column("Display", justify="right")

    for item in items:
        when = datetime.fromtimestamp(item.timestamp, UTC).strftime("%Y-%m-%d")
        display = (
            f"{item.display_value} {item.display_unit}"
            if item.display_value and item.display_unit
            else None
        )
        table.add_row(when, f"{item.value:g} {item.unit}", _or_dash(display))

    console.print(table)
