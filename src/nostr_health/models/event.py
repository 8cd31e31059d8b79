"""Raw Nostr event model."""

import json
from enum import IntEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class EventKind(IntEnum):
    """Event kinds used by health apps (NIP-101h metrics, NIP-101e workouts)."""

    METADATA = 0
    WORKOUT = 1301
    WEIGHT = 1351
    HEIGHT = 1352
    AGE = 1353
    GENDER = 1354
    FITNESS_LEVEL = 1355


class NostrEvent(BaseModel):
    """
    A raw event as delivered by a relay.

    Only `created_at` is required. Tag contents are untrusted strings;
    numbers that slipped into tags are coerced to strings and entries that
    are not arrays are dropped.
    """

    id: str | None = Field(default=None, description="Event id (hex)")
    pubkey: str | None = Field(default=None, description="Author public key (hex)")
    kind: int | None = Field(default=None, description="Event kind")
    created_at: int = Field(
        description="Creation time (unix seconds)",
        validation_alias=AliasChoices("created_at", "createdAt"),
    )
    content: str = Field(default="", description="Free-text content")
    tags: list[list[str | None]] = Field(
        default_factory=list,
        description="Ordered tags, each a list of strings whose first element is the name",
    )
    sig: str | None = Field(default=None, description="Event signature (hex)")

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    @field_validator("content", mode="before")
    @classmethod
    def none_content_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def drop_non_array_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        return [[_tag_element(item) for item in tag] for tag in value if isinstance(tag, list)]


def _tag_element(item: Any) -> Any:
    # Arrays and objects nested in a tag are kept as their JSON text
    if item is None or isinstance(item, str):
        return item
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        return item
    return json.dumps(item)
