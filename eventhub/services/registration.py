"""Registration service - register/unregister with confirmed refetch.

A successful write invalidates the event views and the writer's status view,
then reads the new state back from the backend, so the writer never sees a
count or status from before the write. A failed write leaves every cached
view untouched and propagates.
"""

import logging

from eventhub import cache
from eventhub.domain import EventId, RegistrationState, Session, UserId
from eventhub.domain.errors import EventFullError
from eventhub.services.common import parse_event_id, parse_user_id, require_session
from eventhub.services.event_service import EventService
from eventhub.stores.interfaces import BackendGateway

logger = logging.getLogger(__name__)


class RegistrationService:
    """Service for a viewer's registration to an event."""

    def __init__(self, gateway: BackendGateway, events: EventService) -> None:
        self._gateway = gateway
        self._events = events

    def is_registered(self, event_id: str | EventId, user_id: str | UserId) -> bool:
        parsed_event = parse_event_id(event_id)
        parsed_user = parse_user_id(user_id)
        return cache.get_or_load(
            cache.registration_key(parsed_event, parsed_user),
            lambda: self._gateway.is_registered(parsed_event, parsed_user),
        )

    def get_registration_state(
        self, event_id: str | EventId, user_id: str | UserId
    ) -> RegistrationState:
        """Return the viewer's status together with the event's live count.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        parsed_event = parse_event_id(event_id)
        parsed_user = parse_user_id(user_id)
        event = self._events.get_event(parsed_event)
        return RegistrationState(
            event_id=parsed_event,
            user_id=parsed_user,
            is_registered=self.is_registered(parsed_event, parsed_user),
            registration_count=event.registration_count,
            capacity=event.capacity,
        )

    def set_registration(
        self,
        session: Session | None,
        event_id: str | EventId,
        desired: bool,
        user_id: str | UserId | None = None,
    ) -> RegistrationState:
        """Register (``desired=True``) or unregister the user for an event.

        ``user_id`` defaults to the session user; the backend rejects any
        other user.

        Raises:
            NotAuthenticatedError: If there is no session.
            EventNotFoundError: If the event does not exist.
            EventFullError: If no spots are left.
            AlreadyRegisteredError: If the registration already exists.
            PermissionDeniedError: If user_id is not the session user.
        """
        session = require_session(session)
        parsed_event = parse_event_id(event_id)
        parsed_user = parse_user_id(user_id) if user_id is not None else session.user_id

        if desired:
            # Checked against the last known view; the backend re-checks atomically.
            event = self._events.get_event(parsed_event)
            if event.is_full:
                raise EventFullError(str(parsed_event))
            self._gateway.insert_registration(session.user_id, parsed_event, parsed_user)
            logger.info("User %s registered for event %s", parsed_user, parsed_event)
        else:
            removed = self._gateway.delete_registration(
                session.user_id, parsed_event, parsed_user
            )
            if removed:
                logger.info("User %s unregistered from event %s", parsed_user, parsed_event)
            else:
                logger.info(
                    "User %s was not registered for event %s", parsed_user, parsed_event
                )

        cache.invalidate_registration(parsed_event, parsed_user)
        return self.get_registration_state(parsed_event, parsed_user)

    def toggle_registration(
        self, session: Session | None, event_id: str | EventId
    ) -> RegistrationState:
        """Flip the session user's registration from its current status."""
        session = require_session(session)
        parsed_event = parse_event_id(event_id)
        registered = self.is_registered(parsed_event, session.user_id)
        return self.set_registration(session, parsed_event, not registered)
