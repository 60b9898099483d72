"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Identifier shared by an account, its session and its Profile."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Positive integer bounding the registrations of an event."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Capacity must be a positive integer")


@dataclass(frozen=True)
class Interests:
    """Profile interest tags.

    Tags are trimmed, blank tags dropped and repeats collapsed. Order is kept
    as given but carries no meaning.
    """

    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        cleaned: list[str] = []
        for tag in self.tags:
            tag = tag.strip()
            if tag and tag not in cleaned:
                cleaned.append(tag)
        object.__setattr__(self, "tags", tuple(cleaned))

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Parse a comma separated list such as ``"Sports, Music"``."""
        return cls(tags=tuple(text.split(",")))

    def as_list(self) -> list[str]:
        return list(self.tags)

    def __iter__(self):
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)
