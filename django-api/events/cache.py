"""Cache keys for event API responses."""

from django.conf import settings
from django.core.cache import cache

EVENT_LIST_KEY = "events:list"


def event_detail_key(slug: str) -> str:
    return f"events:{slug}"


def cache_timeout() -> int:
    return settings.EVENTS_CACHE_TIMEOUT


def invalidate_event(*slugs: str) -> None:
    """Drop the list response and the detail response of each slug."""
    cache.delete_many([EVENT_LIST_KEY, *(event_detail_key(slug) for slug in slugs if slug)])
