import pytest
from pydantic import ValidationError

from nostr_health.config import DecoderSettings, find_env_file, get_settings


def test_defaults(settings):
    assert settings.estimated_pace_min_per_km == 7.5
    assert settings.estimated_kcal_per_minute == 10.0
    assert settings.min_estimated_distance_km == 0.1
    assert settings.calorie_ambiguity_ceiling == 2000
    assert settings.log_level == "INFO"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("NOSTR_HEALTH_ESTIMATED_PACE_MIN_PER_KM", "6")
    monkeypatch.setenv("NOSTR_HEALTH_CALORIE_AMBIGUITY_CEILING", "1500")

    settings = DecoderSettings(_env_file=None)
    assert settings.estimated_pace_min_per_km == 6.0
    assert settings.calorie_ambiguity_ceiling == 1500


def test_invalid_override(monkeypatch):
    monkeypatch.setenv("NOSTR_HEALTH_ESTIMATED_KCAL_PER_MINUTE", "-1")
    with pytest.raises(ValidationError):
        DecoderSettings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_find_env_file_walks_up(tmp_path):
    (tmp_path / ".env").write_text("NOSTR_HEALTH_LOG_LEVEL=DEBUG\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_env_file(nested) == (tmp_path / ".env").resolve()


def test_env_file_values(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("NOSTR_HEALTH_LOG_LEVEL=DEBUG\nNOSTR_HEALTH_MIN_ESTIMATED_DISTANCE_KM=0.5\n")

    settings = DecoderSettings(_env_file=env_file)
    assert settings.log_level == "DEBUG"
    assert settings.min_estimated_distance_km == 0.5
