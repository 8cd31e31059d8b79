"""
Pytest configuration and fixtures for nostr-health tests.

Events mirror what RUNSTR and NIP-101e producers publish to relays.
"""

import pytest

from nostr_health.config import DecoderSettings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; make env overrides in one test invisible to the next."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> DecoderSettings:
    """Default decoder settings, independent of any local .env file."""
    return DecoderSettings(_env_file=None)


@pytest.fixture
def make_event():
    """Build a raw kind 1301 event dict."""

    def _make(tags=None, content="", created_at=1700000000, **extra):
        event = {
            "id": "e" * 64,
            "pubkey": "f" * 64,
            "kind": 1301,
            "created_at": created_at,
            "content": content,
            "tags": tags or [],
        }
        event.update(extra)
        return event

    return _make


@pytest.fixture
def runstr_event(make_event):
    """A full RUNSTR workout with the positional exercise tag."""
    return make_event(
        content="Completed a run with RUNSTR! 🏃",
        tags=[
            ["d", "run-2023-11-14"],
            ["title", "Morning Run"],
            [
                "exercise",
                "33401:abc:running",
                "wss://relay.damus.io",
                "5",
                "1800",
                "6:00",
                "dGhpc2lzYW5lbmNvZGVkcm91dGVwb2x5bGluZQ==",
                "350",
            ],
            ["heart_rate_avg", "152", "bpm"],
            ["t", "running"],
            ["t", "cardio"],
            ["t", "running"],
        ],
    )


@pytest.fixture
def nip101e_event(make_event):
    """A NIP-101e style workout with dedicated tags and splits."""
    return make_event(
        content="Easy 10k along the river",
        tags=[
            ["d", "workout-42"],
            ["title", "River 10k"],
            ["type", "cardio"],
            ["start", "1700000000"],
            ["end", "1700003000"],
            ["distance", "10.00", "km"],
            ["duration", "3000"],
            ["heart_rate_avg", "148"],
            ["heart_rate_max", "171", "bpm"],
            ["cadence_avg", "172"],
            ["elevation_gain", "85"],
            ["speed_avg", "12"],
            ["speed_max", "15.5"],
            ["weather_temp", "18", "c"],
            ["weather_humidity", "60"],
            ["weather_condition", "cloudy"],
            ["split", "1", "1000", "m", "4:58", "145", "bpm", "12", "m", "4:55", "km"],
            ["split", "2", "1000", "m", "5:02", "150", "bpm"],
            ["completed", "True"],
            ["source", "Garmin"],
            ["t", "running"],
        ],
    )
