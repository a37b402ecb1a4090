"""Loading an entity for an edit form through the shared cache."""

from typing import Any

from masterdesk.cache.models import CacheStatus, QueryKey
from masterdesk.cache.revalidating import RevalidatingCache
from masterdesk.errors import FetchError


async def load_entity(cache: RevalidatingCache, resource: str, entity_id: str) -> Any:
    """Return the entity, using a fresh cached copy when there is one.

    Raises:
        FetchError: If the entity could not be loaded and nothing is cached
    """
    key = QueryKey.detail(resource, entity_id)
    entry = cache.get(key)
    if entry.status != CacheStatus.READY or cache.is_stale(entry):
        entry = await cache.refresh(key)

    if entry.status == CacheStatus.ERROR and not entry.has_value:
        raise entry.error or FetchError(f"Could not load {resource} {entity_id}", key=key)
    return entry.value
