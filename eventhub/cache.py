"""Query cache keys and invalidation.

Every cached read is keyed by its operation and parameters. Aggregated event
views (feed pages, event detail, my-events) embed the current events
generation, so bumping the generation drops all of them at once; any write
that changes a registration count, an event or a host aggregate does that.
Registration status and profile entries are dropped by exact key.
"""

import hashlib
import json
import logging
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

from django.core.cache import cache

from eventhub.conf import get_setting

logger = logging.getLogger(__name__)

T = TypeVar("T")

EVENTS_GENERATION_KEY = "events:generation"


def _events_generation() -> str:
    generation = cache.get(EVENTS_GENERATION_KEY)
    if generation is None:
        cache.add(EVENTS_GENERATION_KEY, uuid.uuid4().hex, timeout=None)
        generation = cache.get(EVENTS_GENERATION_KEY)
    return generation


def _digest(params: dict[str, Any]) -> str:
    payload = json.dumps(params, sort_keys=True, default=str)
    return hashlib.sha1(payload.encode()).hexdigest()


def feed_key(search_text: str | None, category: str | None, limit: int, offset: int) -> str:
    params = {
        "search_text": search_text,
        "category": category,
        "limit": limit,
        "offset": offset,
    }
    return f"events:list:{_events_generation()}:{_digest(params)}"


def event_key(event_id: Any) -> str:
    return f"events:{event_id}:{_events_generation()}"


def registration_key(event_id: Any, user_id: Any) -> str:
    return f"events:{event_id}:registrations:{user_id}"


def my_events_key(user_id: Any) -> str:
    return f"users:{user_id}:events:{_events_generation()}"


def profile_key(user_id: Any) -> str:
    return f"users:{user_id}:profile"


def lookup(key: str) -> Any:
    return cache.get(key)


def store(key: str, value: Any, timeout: int | None = None) -> None:
    if timeout is None:
        timeout = get_setting("CACHE_TIMEOUT")
    cache.set(key, value, timeout)


def get_or_load(key: str, loader: Callable[[], T], timeout: int | None = None) -> T:
    """Return the cached value for ``key`` or load and cache it.

    ``None`` results are not cached.
    """
    value = cache.get(key)
    if value is not None:
        return value
    value = loader()
    if value is not None:
        store(key, value, timeout)
    return value


def invalidate_event_views() -> None:
    cache.set(EVENTS_GENERATION_KEY, uuid.uuid4().hex, timeout=None)
    logger.debug("Event views invalidated")


def invalidate_registration(event_id: Any, user_id: Any) -> None:
    cache.delete(registration_key(event_id, user_id))
    invalidate_event_views()


def invalidate_profile(user_id: Any) -> None:
    cache.delete(profile_key(user_id))
    invalidate_event_views()
