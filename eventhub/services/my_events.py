"""My-events aggregator: what a user hosts and what they attend."""

import logging

from eventhub import cache
from eventhub.domain import MyEvents, UserId
from eventhub.domain.errors import BackendUnavailableError
from eventhub.services.common import Clock, default_clock, parse_user_id
from eventhub.stores.interfaces import BackendGateway

logger = logging.getLogger(__name__)


class MyEventsService:
    def __init__(self, gateway: BackendGateway, clock: Clock = default_clock) -> None:
        self._gateway = gateway
        self._clock = clock

    def get_my_events(self, user_id: str | UserId) -> MyEvents:
        """Return upcoming hosted and attended events.

        The two lists are independent: an event a host registered for shows
        up in both. Backend failures degrade to two empty lists.
        """
        parsed = parse_user_id(user_id)
        now = self._clock()
        key = cache.my_events_key(parsed)

        cached = cache.lookup(key)
        if cached is not None and all(
            event.event_date >= now for event in cached.hosting + cached.attending
        ):
            return cached

        try:
            my_events = self._gateway.get_my_events(parsed, now)
        except BackendUnavailableError:
            logger.exception("Error fetching my events")
            return MyEvents()

        cache.store(key, my_events)
        return my_events
