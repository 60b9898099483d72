"""App settings, read from ``settings.EVENTHUB`` with defaults."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    "FEED_PAGE_SIZE": 20,
    "FEED_MAX_LIMIT": 100,
    "CACHE_TIMEOUT": 60,
    "SESSION_MAX_AGE": 60 * 60 * 24 * 7,
    "CATEGORIES": ["Other"],
}


def get_setting(name: str) -> Any:
    overrides = getattr(settings, "EVENTHUB", {})
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
