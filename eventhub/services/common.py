"""Helpers shared by the services."""

from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from eventhub.domain import EventId, Session, UserId
from eventhub.domain.errors import (
    InvalidEventIdError,
    InvalidUserIdError,
    NotAuthenticatedError,
)

Clock = Callable[[], datetime]

default_clock: Clock = timezone.now


def parse_event_id(event_id: str | EventId) -> EventId:
    if isinstance(event_id, EventId):
        return event_id
    try:
        return EventId.from_string(str(event_id))
    except ValueError:
        raise InvalidEventIdError() from None


def parse_user_id(user_id: str | UserId) -> UserId:
    if isinstance(user_id, UserId):
        return user_id
    try:
        return UserId.from_string(str(user_id))
    except ValueError:
        raise InvalidUserIdError() from None


def require_session(session: Session | None) -> Session:
    if session is None:
        raise NotAuthenticatedError()
    return session
