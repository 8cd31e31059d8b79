"""Workout record decoded from a kind 1301 event."""

from pydantic import BaseModel, ConfigDict, Field

from .split import Split

# Marker appended to values produced by the estimation fallback
ESTIMATE_MARKER = "(est.)"

# Sentinel for values known to be unknown (not merely not computed)
NOT_AVAILABLE = "N/A"


class Measurement(BaseModel):
    """A value with its unit, e.g. heart rate 150 bpm."""

    value: int | float = Field(description="Measured value")
    unit: str = Field(description="Unit of the value (bpm, spm, ...)")

    model_config = ConfigDict(frozen=True)


class Weather(BaseModel):
    """Weather conditions reported with the workout."""

    temp: int | float | None = Field(default=None, description="Temperature")
    unit: str | None = Field(default=None, description="Temperature unit (c, f)")
    humidity: int | float | None = Field(default=None, description="Relative humidity (%)")
    condition: str | None = Field(default=None, description="Free-text condition, e.g. sunny")

    model_config = ConfigDict(frozen=True)


class WorkoutRecord(BaseModel):
    """
    Normalized workout reconstructed from a Nostr event.

    Every field except `timestamp` is optional. String values ending in
    "(est.)" and every name in `estimated_fields` come from the estimation
    fallback; "N/A" means the value is known to be unknown.
    """

    timestamp: int = Field(description="Event creation time (unix seconds)")

    # Identity / classification
    id: str | None = Field(default=None, description="Workout id from the 'd' tag")
    title: str | None = Field(default=None)
    type: str | None = Field(default=None, description="Activity type, e.g. Running")
    source: str | None = Field(default=None, description="Producing app or device")
    notes: str | None = Field(default=None, description="Event content")

    # Timing
    start_time: int | None = Field(default=None, alias="startTime")
    end_time: int | None = Field(default=None, alias="endTime")
    duration: str | None = Field(default=None, description="M:SS or H:MM:SS")

    # Performance
    distance: str | None = Field(default=None, description="'<number> <km|mi>'")
    pace: str | None = Field(default=None, description="'M:SS/<km|mi>'")
    calories: int | None = Field(default=None, ge=0)
    elevation_gain: int | float | None = Field(
        default=None,
        description="Total elevation gain (meters)",
        alias="elevationGain",
    )
    avg_speed: float | None = Field(default=None, alias="avgSpeed")
    max_speed: float | None = Field(default=None, alias="maxSpeed")
    heart_rate: Measurement | None = Field(default=None, alias="heartRate")
    max_heart_rate: Measurement | None = Field(default=None, alias="maxHeartRate")
    cadence: Measurement | None = Field(default=None)

    weather: Weather | None = Field(default=None)
    splits: list[Split] | None = Field(default=None)

    completed: bool | None = Field(default=None)
    tags: list[str] | None = Field(default=None, description="Activity labels from 't' tags")
    route_data: str | None = Field(
        default=None,
        description="Encoded route (polyline), passed through unparsed",
        alias="routeData",
    )

    estimated_fields: list[str] = Field(
        default_factory=list,
        description="Fields filled by the estimation fallback",
        alias="estimatedFields",
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def is_estimated(self, field_name: str) -> bool:
        """Whether a field was estimated rather than observed or derived."""
        return field_name in self.estimated_fields

    def to_dict(self) -> dict:
        """Serialize with camelCase keys, dropping unset fields."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if not self.estimated_fields:
            data.pop("estimatedFields", None)
        return data
