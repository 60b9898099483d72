"""Domain models representing backend state as seen by the client.

These are pure domain objects with no API input rules.
Django ORM models are in eventhub/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Self

from eventhub.domain.value_objects import Capacity, EventId, Interests, UserId


@dataclass(frozen=True)
class Event:
    """An event joined with the aggregates the backend computes for it."""

    id: EventId
    host_id: UserId
    title: str
    description: str
    event_date: datetime
    location_name: str
    category: str
    capacity: Capacity
    image_url: str | None
    registration_count: int
    host_full_name: str
    host_rating: float | None

    @property
    def is_full(self) -> bool:
        return self.registration_count >= self.capacity.value

    @property
    def spots_left(self) -> int:
        return max(self.capacity.value - self.registration_count, 0)


@dataclass(frozen=True)
class EventDraft:
    """Fields a host submits to create an event."""

    title: str
    description: str
    event_date: datetime
    location_name: str
    category: str
    capacity: int
    image_url: str | None = None


@dataclass(frozen=True)
class EventPage:
    """A window into the filtered feed plus the size of the whole filtered set.

    ``earliest_start`` is the first event date of the whole filtered set, not
    just of the window. Once it passes, both the window and the total shift.
    """

    events: tuple[Event, ...]
    total_count: int
    earliest_start: datetime | None = None

    def is_current(self, now: datetime) -> bool:
        return self.earliest_start is None or self.earliest_start >= now

    @classmethod
    def empty(cls) -> Self:
        return cls(events=(), total_count=0)


@dataclass(frozen=True)
class MyEvents:
    """Events a user hosts and events a user attends, queried independently."""

    hosting: tuple[Event, ...] = ()
    attending: tuple[Event, ...] = ()


@dataclass(frozen=True)
class Profile:
    """A user's public profile with read-only rating aggregates."""

    id: UserId
    full_name: str
    bio: str
    interests: Interests
    host_rating: float | None = None
    total_ratings: int = 0


@dataclass(frozen=True)
class RegistrationState:
    """Registration status of one user for one event, read after the fact."""

    event_id: EventId
    user_id: UserId
    is_registered: bool
    registration_count: int
    capacity: Capacity

    @property
    def is_full(self) -> bool:
        return self.registration_count >= self.capacity.value


@dataclass(frozen=True)
class Session:
    """An authenticated identity and the signed token that proves it."""

    user_id: UserId
    email: str
    token: str
