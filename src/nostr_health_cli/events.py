"""Event file loading for the nostr-health CLI."""

import json
import sys
from pathlib import Path
from typing import Any

STDIN = "-"


def read_text(path: str) -> str:
    """Read a file, or stdin for "-"."""
    if path == STDIN:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def load_events(path: str) -> list[dict[str, Any]]:
    """
    Load raw events from a JSON array, a single JSON object, or JSON lines.

    Args:
        path: File path, or "-" for stdin

    Returns:
        List of raw event dicts (not validated)

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the input is neither JSON nor JSON lines
        ValueError: If the JSON is not an event or a list of events
    """
    text = read_text(path).strip()
    if not text:
        return []

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # JSON lines
        data = [json.loads(line) for line in text.splitlines() if line.strip()]

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of events, got {type(data).__name__}")

    events = [event for event in data if isinstance(event, dict)]
    if len(events) != len(data):
        raise ValueError("Every entry must be a JSON object")
    return events
