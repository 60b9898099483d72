"""Event feed: upcoming events, searchable, filterable and paginated."""

import logging

from eventhub import cache
from eventhub.conf import get_setting
from eventhub.domain import EventPage
from eventhub.domain.errors import BackendUnavailableError, InvalidPaginationError
from eventhub.services.common import Clock, default_clock
from eventhub.stores.interfaces import BackendGateway

logger = logging.getLogger(__name__)


def _filter_value(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


class EventFeedService:
    """Service for the upcoming-events feed."""

    def __init__(self, gateway: BackendGateway, clock: Clock = default_clock) -> None:
        self._gateway = gateway
        self._clock = clock

    def list_events(
        self,
        search_text: str | None = None,
        category: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> EventPage:
        """Return a page of upcoming events and the filtered total.

        Backend failures are logged and degrade to an empty page; callers
        cannot tell them apart from "no results".

        Raises:
            InvalidPaginationError: If limit or offset is out of range.
        """
        if limit is None:
            limit = get_setting("FEED_PAGE_SIZE")
        max_limit = get_setting("FEED_MAX_LIMIT")
        if not 1 <= limit <= max_limit:
            raise InvalidPaginationError(f"limit must be between 1 and {max_limit}")
        if offset < 0:
            raise InvalidPaginationError("offset cannot be negative")

        search_text = _filter_value(search_text)
        category = _filter_value(category)
        now = self._clock()
        key = cache.feed_key(search_text, category, limit, offset)

        page = cache.lookup(key)
        if page is not None and page.is_current(now):
            return page

        try:
            page = self._gateway.list_events_with_details(
                now=now,
                limit=limit,
                offset=offset,
                search_text=search_text,
                category=category,
            )
        except BackendUnavailableError:
            logger.exception("Error fetching events")
            return EventPage.empty()

        cache.store(key, page)
        return page
