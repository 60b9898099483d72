"""Event service - single-event reads and event creation.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging

from django.utils import timezone

from eventhub import cache
from eventhub.conf import get_setting
from eventhub.domain import Event, EventDraft, EventId, Session
from eventhub.domain.errors import EventNotFoundError, InvalidEventError
from eventhub.services.common import (
    Clock,
    default_clock,
    parse_event_id,
    require_session,
)
from eventhub.stores.interfaces import BackendGateway

logger = logging.getLogger(__name__)


class EventService:
    """Service for event detail and event creation."""

    def __init__(self, gateway: BackendGateway, clock: Clock = default_clock) -> None:
        self._gateway = gateway
        self._clock = clock

    def get_event(self, event_id: str | EventId) -> Event:
        """Return an aggregated event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_event_id(event_id)
        event = cache.get_or_load(
            cache.event_key(parsed),
            lambda: self._gateway.get_event_with_details(parsed),
        )
        if event is None:
            raise EventNotFoundError(str(parsed))
        return event

    def create_event(self, session: Session | None, draft: EventDraft) -> Event:
        """Create an event hosted by the session user.

        Raises:
            NotAuthenticatedError: If there is no session.
            InvalidEventError: If the draft breaks a creation rule.
        """
        session = require_session(session)
        draft = self._validate(draft)
        event = self._gateway.insert_event(session.user_id, draft)
        cache.invalidate_event_views()
        logger.info("User %s created event %s", session.user_id, event.id)
        return event

    def _validate(self, draft: EventDraft) -> EventDraft:
        title = draft.title.strip()
        description = draft.description.strip()
        location_name = draft.location_name.strip()
        if not title:
            raise InvalidEventError("Title is required")
        if not description:
            raise InvalidEventError("Description is required")
        if not location_name:
            raise InvalidEventError("Location is required")
        if draft.category not in get_setting("CATEGORIES"):
            raise InvalidEventError(f"Unknown category: {draft.category}")
        if draft.capacity < 1:
            raise InvalidEventError("Capacity must be a positive integer")
        if timezone.is_naive(draft.event_date):
            raise InvalidEventError("Event date must include a timezone")
        if draft.event_date < self._clock():
            raise InvalidEventError("Event date must be in the future")
        return EventDraft(
            title=title,
            description=description,
            event_date=draft.event_date,
            location_name=location_name,
            category=draft.category,
            capacity=draft.capacity,
            image_url=(draft.image_url or "").strip() or None,
        )
