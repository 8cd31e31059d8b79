"""Split data model for per-mile/per-km segments of a workout event."""

from pydantic import BaseModel, ConfigDict, Field


class Split(BaseModel):
    """
    Represents a single split tag from a workout event.

    Tag layout: ["split", number, distance, unit, time, heartRate?, ...extra].
    Elevation and pace are picked out of the trailing elements.
    """

    number: int = Field(
        description="Split number as written by the producer (1, 2, 3, etc.)",
    )
    distance: float = Field(
        description="Split distance in `unit`",
        ge=0,
    )
    unit: str = Field(
        default="",
        description="Unit of the split distance (m, km, mi)",
    )
    time: str = Field(
        default="",
        description="Split time as written (usually M:SS)",
    )

    heart_rate: int | None = Field(
        default=None,
        description="Heart rate during this split (beats per minute)",
        alias="heartRate",
        ge=0,
    )
    elevation: float | None = Field(
        default=None,
        description="Elevation for this split (meters)",
    )
    pace: str | None = Field(
        default=None,
        description="Pace for this split, M:SS with an optional /unit suffix",
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)
