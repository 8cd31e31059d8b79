"""Body metric models (weight, height, age)."""

from pydantic import BaseModel, ConfigDict, Field


class MetricRecord(BaseModel):
    """
    A single body metric in its canonical unit.

    `value`/`unit` are always canonical (kg, cm, years). The display pair is a
    human-friendly alternate (lbs, ft-in) derived from the canonical value.
    An unparseable input comes back as `value=<original text>, unit=''`.
    """

    value: str = Field(description="Value in the canonical unit")
    unit: str = Field(default="", description="Canonical unit, '' when the input was not understood")
    display_value: str | None = Field(
        default=None,
        description="Value in the display unit",
        alias="displayValue",
    )
    display_unit: str | None = Field(
        default=None,
        description="Display unit (lbs, ft-in)",
        alias="displayUnit",
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class MetricHistoryItem(BaseModel):
    """One numeric point in a metric's history."""

    timestamp: int = Field(description="Event creation time (unix seconds)")
    value: float = Field(description="Value in the canonical unit")
    unit: str = Field(default="")
    display_value: str | None = Field(default=None, alias="displayValue")
    display_unit: str | None = Field(default=None, alias="displayUnit")

    model_config = ConfigDict(populate_by_name=True, frozen=True)
