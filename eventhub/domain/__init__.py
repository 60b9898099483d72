from eventhub.domain.models import (
    Event,
    EventDraft,
    EventPage,
    MyEvents,
    Profile,
    RegistrationState,
    Session,
)
from eventhub.domain.value_objects import Capacity, EventId, Interests, UserId

__all__ = [
    "Event",
    "EventDraft",
    "EventPage",
    "MyEvents",
    "Profile",
    "RegistrationState",
    "Session",
    "EventId",
    "UserId",
    "Capacity",
    "Interests",
]
