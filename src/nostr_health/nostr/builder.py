"""Write-once accumulator for a workout record."""

import logging
from typing import Any

from ..models import WorkoutRecord

logger = logging.getLogger(__name__)


class WorkoutBuilder:
    """
    Collects workout fields from the decoding stages.

    Every field is a write-once slot: the first stage to fill it wins and later
    attempts are no-ops. Stage order therefore encodes precedence
    (structured tags > content > derived > estimated).
    """

    def __init__(self, timestamp: int) -> None:
        self._values: dict[str, Any] = {"timestamp": timestamp}
        self._sources: dict[str, str] = {}
        self._estimated: list[str] = []

    def has(self, name: str) -> bool:
        return name in self._values

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def source_of(self, name: str) -> str | None:
        """Which stage filled a field."""
        return self._sources.get(name)

    def fill(self, name: str, value: Any, source: str, estimated: bool = False) -> bool:
        """
        Fill a field if it is still empty.

        Args:
            name: WorkoutRecord attribute name
            value: Value to store (None and "" are ignored)
            source: Stage that produced the value, for tracing
            estimated: Record the field as estimated

        Returns:
            True if the value was stored

        Raises:
            KeyError: If `name` is not a WorkoutRecord field
        """
        if name not in WorkoutRecord.model_fields:
            raise KeyError(f"Unknown workout field: {name}")
        if value is None or value == "" or name in self._values:
            return False

        self._values[name] = value
        self._sources[name] = source
        if estimated:
            self._estimated.append(name)
        logger.debug(f"{name} <- {value!r} ({source})")
        return True

    def build(self) -> WorkoutRecord:
        """Freeze the collected values into a WorkoutRecord."""
        return WorkoutRecord(**self._values, estimated_fields=list(self._estimated))
