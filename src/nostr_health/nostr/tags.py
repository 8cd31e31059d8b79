"""Tag index over an event's flat list of tags."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Tag:
    """
    Typed view of one raw tag.

    `["distance", "5.2", "km"]` becomes `Tag(name="distance", values=("5.2", "km"))`;
    positional access is 1-based like the raw array (`tag.get(1) == "5.2"`).
    """

    name: str
    values: tuple[str, ...]

    @property
    def value(self) -> str | None:
        """First positional argument, or None for a bare tag."""
        return self.values[0] if self.values else None

    def get(self, index: int) -> str | None:
        """Element at `index` of the raw tag (index 0 is the name)."""
        if index == 0:
            return self.name
        if 0 < index <= len(self.values):
            return self.values[index - 1]
        return None

    def __len__(self) -> int:
        return len(self.values) + 1

    @classmethod
    def from_raw(cls, raw: Sequence[object]) -> "Tag | None":
        """Build a Tag from a raw array; None for an empty or nameless array."""
        if not raw or not isinstance(raw[0], str) or not raw[0]:
            return None
        return cls(name=raw[0], values=tuple("" if v is None else str(v) for v in raw[1:]))


class TagIndex:
    """
    Lookup structure over an event's tags, built once per event.

    Lookups for absent names return None or an empty list, never raise.
    """

    def __init__(self, tags: Iterable[Sequence[object]] | None) -> None:
        self._by_name: dict[str, list[Tag]] = {}

        for raw in tags or ():
            tag = Tag.from_raw(raw)
            if tag is None:
                continue
            self._by_name.setdefault(tag.name, []).append(tag)

    def first(self, name: str) -> Tag | None:
        """First tag named `name`."""
        matches = self._by_name.get(name)
        return matches[0] if matches else None

    def first_value(self, name: str) -> str | None:
        """Value of the first tag named `name`."""
        tag = self.first(name)
        return tag.value if tag else None

    def all_matching(self, name: str) -> list[Tag]:
        """All tags named `name`, in source order."""
        return list(self._by_name.get(name, ()))

    def first_of(self, *names: str) -> Tag | None:
        """First tag for the highest-priority alias present."""
        for name in names:
            tag = self.first(name)
            if tag is not None:
                return tag
        return None

    def candidates(self, *names: str) -> list[Tag]:
        """Every tag for the given aliases, alias priority first, then source order."""
        found: list[Tag] = []
        for name in names:
            found.extend(self._by_name.get(name, ()))
        return found
