"""Revalidating query cache shared by selectors and forms."""

from masterdesk.cache.fetchers import Fetcher, detail_fetcher, option_fetcher
from masterdesk.cache.models import CacheEntry, CacheStatus, Option, QueryKey
from masterdesk.cache.revalidating import Listener, RevalidatingCache

__all__ = [
    "CacheEntry",
    "CacheStatus",
    "Fetcher",
    "Listener",
    "Option",
    "QueryKey",
    "RevalidatingCache",
    "detail_fetcher",
    "option_fetcher",
]
