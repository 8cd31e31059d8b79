"""Decoder settings for nostr-health."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_FILE_NAME = ".env"


def find_env_file(start: Path | None = None) -> Path | None:
    """
    Find the nearest .env file, walking up from the working directory.

    Args:
        start: Directory to start searching from (default: cwd)

    Returns:
        Path to the .env file, or None if there is none
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / ENV_FILE_NAME
        if candidate.is_file():
            logger.debug(f"Using env file: {candidate}")
            return candidate

    return None


# Find env file once at module load
_env_file = find_env_file()


class DecoderSettings(BaseSettings):
    """
    Tunable heuristics used by the workout decoder.

    The estimation constants are arbitrary defaults carried over from the
    RUNSTR dashboard, not physiological truths.

    Attributes:
        estimated_pace_min_per_km: Pace assumed when distance must be estimated
        estimated_kcal_per_minute: Burn rate assumed when calories must be estimated
        min_estimated_distance_km: Smallest estimated distance worth reporting
        calorie_ambiguity_ceiling: Largest bare integer accepted as calories
            in an exercise tag before any duration has been found
        log_level: Log level used by the command line tool
    """

    model_config = SettingsConfigDict(
        env_prefix="NOSTR_HEALTH_",
        env_file=_env_file,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    estimated_pace_min_per_km: float = Field(
        default=7.5,
        description="Minutes per kilometer assumed by the distance estimate",
        gt=0,
        allow_inf_nan=False,
    )
    estimated_kcal_per_minute: float = Field(
        default=10.0,
        description="Kilocalories per minute assumed by the calorie estimate",
        gt=0,
        allow_inf_nan=False,
    )
    min_estimated_distance_km: float = Field(
        default=0.1,
        description="Estimated distances below this are dropped",
        ge=0,
        allow_inf_nan=False,
    )
    calorie_ambiguity_ceiling: int = Field(
        default=2000,
        description="Bare integers up to this value may be calories without a known duration",
        ge=0,
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the nostr-health CLI",
    )


@lru_cache
def get_settings() -> DecoderSettings:
    """
    Get decoder settings (cached singleton pattern).

    Returns:
        DecoderSettings instance loaded from environment

    Raises:
        ValidationError: If an environment override is not a valid value
    """
    return DecoderSettings()
