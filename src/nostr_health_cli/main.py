"""Entry point for the nostr-health CLI."""

import logging

import typer
from rich.logging import RichHandler

from nostr_health.config import get_settings
from nostr_health_cli.commands.metrics import parse_metric, show_history
from nostr_health_cli.commands.workouts import decode_workouts
from nostr_health_cli.display import err_console

app = typer.Typer(
    name="nostr-health",
    help="Decode Nostr workout and health metric events.",
    no_args_is_help=True,
)


def configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every decoded field"),
) -> None:
    level = "DEBUG" if verbose else get_settings().log_level
    configure_logging(level)


app.command("workouts")(decode_workouts)
app.command("metric")(parse_metric)
app.command("history")(show_history)


if __name__ == "__main__":
    app()
