"""Stale-while-revalidate query cache.

Entries are addressed by ``QueryKey``. ``subscribe`` answers immediately
with the last known snapshot and starts a background fetch when the entry
is missing, stale, invalidated or failed. Later subscribers share the fetch
in flight. Priming or invalidating a key supersedes fetches already
running for it: their results never overwrite the entry or count as
fresh. A completed fetch replaces the entry for its own key only, so a
slow response for an old filter can never land in a newer filter's slot.

All methods must be called from the event loop thread.
"""

import asyncio
import time
from collections import defaultdict
from collections.abc import Callable

from masterdesk.cache.fetchers import Fetcher
from masterdesk.cache.models import CacheEntry, CacheStatus, QueryKey
from masterdesk.errors import FetchError
from masterdesk.observability.logging import get_logger
from masterdesk.observability.metrics import CACHE_DEDUPLICATED, record_fetch

logger = get_logger(__name__)

Listener = Callable[[CacheEntry], None]

DEFAULT_STALE_AFTER_SECONDS = 2.0


class RevalidatingCache:
    """Keyed cache of remote collections and entities.

    One instance is shared by every selector and form of an application
    context. Readers only ever see complete, immutable ``CacheEntry``
    snapshots.
    """

    def __init__(
        self,
        stale_after_seconds: float = DEFAULT_STALE_AFTER_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            stale_after_seconds: Age after which a READY entry is refetched
                on the next subscription
            clock: Monotonic time source
        """
        self._stale_after = stale_after_seconds
        self._clock = clock
        self._fetchers: dict[str, Fetcher] = {}
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._inflight: dict[QueryKey, asyncio.Task[CacheEntry]] = {}
        self._listeners: defaultdict[QueryKey, list[Listener]] = defaultdict(list)
        self._invalidated: set[QueryKey] = set()
        # Bumped by prime and invalidate; a fetch started under an older
        # generation may not overwrite the entry or clear the stale mark.
        self._generations: dict[QueryKey, int] = {}
        self._inflight_generation: dict[QueryKey, int] = {}
        self._tasks: set[asyncio.Task[CacheEntry]] = set()
        self._closed = False

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, resource: str, fetcher: Fetcher) -> None:
        """Register the fetcher that loads keys of ``resource``."""
        self._fetchers[resource] = fetcher

    def get(self, key: QueryKey) -> CacheEntry:
        """Return the current snapshot for ``key`` without fetching."""
        entry = self._entries.get(key)
        if entry is None:
            return CacheEntry(key=key)
        return entry

    def is_validating(self, key: QueryKey) -> bool:
        """Whether a fetch for ``key`` is in flight."""
        return key in self._inflight

    def is_stale(self, entry: CacheEntry) -> bool:
        """Whether ``entry`` should be refetched on the next subscription."""
        if entry.status != CacheStatus.READY or entry.fetched_at is None:
            return True
        if entry.key in self._invalidated:
            return True
        return self._clock() - entry.fetched_at >= self._stale_after

    def subscribe(self, key: QueryKey, listener: Listener | None = None) -> CacheEntry:
        """Return the snapshot for ``key`` and revalidate it in the background.

        Args:
            key: Query to read
            listener: Called with each new snapshot of this key

        Returns:
            The last known entry, possibly a PENDING placeholder
        """
        entry = self.get(key)
        if self._closed:
            return entry

        if listener is not None:
            self._listeners[key].append(listener)

        if self._has_current_fetch(key):
            CACHE_DEDUPLICATED.labels(resource=key.resource).inc()
            logger.debug("cache_fetch_shared", resource=key.resource, filter_text=key.filter_text)
        elif self.is_stale(entry):
            self._start_fetch(key)

        return entry

    def unsubscribe(self, key: QueryKey, listener: Listener) -> None:
        """Stop notifying ``listener`` about ``key``."""
        listeners = self._listeners.get(key)
        if not listeners:
            return
        if listener in listeners:
            listeners.remove(listener)
        if not listeners:
            del self._listeners[key]

    def revalidate(self, key: QueryKey) -> "asyncio.Task[CacheEntry] | None":
        """Fetch ``key`` now unless a fetch started since its last change is running.

        A fetch that began before the key was primed or invalidated is not
        reused; a new one is started alongside it.

        Returns:
            The task of the (possibly shared) fetch, or None once the cache
            is closed
        """
        if self._closed:
            logger.debug("cache_revalidate_after_close", resource=key.resource)
            return None
        if self._has_current_fetch(key):
            return self._inflight[key]
        return self._start_fetch(key)

    async def refresh(self, key: QueryKey) -> CacheEntry:
        """Revalidate ``key`` and wait for the resulting snapshot."""
        task = self.revalidate(key)
        if task is None:
            return self.get(key)
        return await task

    def prime(self, key: QueryKey, value: object) -> CacheEntry:
        """Store a value known to be current, e.g. an entity just saved.

        Fetches already in flight for ``key`` can no longer overwrite it.
        """
        entry = CacheEntry(
            key=key,
            status=CacheStatus.READY,
            value=value,
            fetched_at=self._clock(),
        )
        self._bump(key)
        self._entries[key] = entry
        self._invalidated.discard(key)
        self._notify(entry)
        return entry

    def invalidate(self, resource: str, revalidate: bool = True) -> int:
        """Mark every cached or loading key of ``resource`` stale.

        Keys that currently have listeners are refetched right away when
        ``revalidate`` is set; the rest refetch on their next subscription.
        A fetch already in flight for an invalidated key does not clear the
        mark when it completes.

        Returns:
            Number of keys invalidated
        """
        keys = {key for key in (*self._entries, *self._inflight) if key.resource == resource}
        for key in keys:
            self._bump(key)
        self._invalidated.update(keys)
        if revalidate and not self._closed:
            for key in keys:
                if self._listeners.get(key):
                    self._start_fetch(key)
        logger.debug("cache_invalidated", resource=resource, key_count=len(keys))
        return len(keys)

    async def settle(self) -> None:
        """Wait until no fetch is running, superseded ones included."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Drain in-flight fetches and drop all listeners."""
        self._closed = True
        await self.settle()
        self._listeners.clear()

    def _bump(self, key: QueryKey) -> None:
        self._generations[key] = self._generations.get(key, 0) + 1

    def _has_current_fetch(self, key: QueryKey) -> bool:
        if key not in self._inflight:
            return False
        return self._inflight_generation[key] == self._generations.get(key, 0)

    def _start_fetch(self, key: QueryKey) -> "asyncio.Task[CacheEntry]":
        fetcher = self._fetchers.get(key.resource)
        if fetcher is None:
            raise LookupError(f"No fetcher registered for resource '{key.resource}'")

        generation = self._generations.get(key, 0)
        logger.debug("cache_fetch_started", resource=key.resource, filter_text=key.filter_text)
        task = asyncio.create_task(self._run_fetch(key, fetcher, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._inflight[key] = task
        self._inflight_generation[key] = generation
        return task

    def _finish(self, key: QueryKey) -> None:
        if self._inflight.get(key) is asyncio.current_task():
            del self._inflight[key]
            del self._inflight_generation[key]

    async def _run_fetch(self, key: QueryKey, fetcher: Fetcher, generation: int) -> CacheEntry:
        started = self._clock()
        try:
            value = await fetcher(key)
        except asyncio.CancelledError:
            self._finish(key)
            raise
        except Exception as e:
            previous = self._entries.get(key)
            entry = CacheEntry(
                key=key,
                status=CacheStatus.ERROR,
                value=previous.value if previous else None,
                fetched_at=previous.fetched_at if previous else None,
                error=FetchError(f"Could not load {key.resource}: {e}", key=key, cause=e),
            )
            logger.warning(
                "cache_fetch_failed",
                resource=key.resource,
                filter_text=key.filter_text,
                entity_id=key.entity_id,
                error=str(e),
                kept_stale_value=entry.has_value,
            )
            record_fetch(key.resource, "error", self._clock() - started)
        else:
            entry = CacheEntry(
                key=key,
                status=CacheStatus.READY,
                value=value,
                fetched_at=self._clock(),
            )
            record_fetch(key.resource, "ok", self._clock() - started)

        self._finish(key)
        if generation != self._generations.get(key, 0):
            return self._complete_superseded(entry)

        if entry.status == CacheStatus.READY:
            self._invalidated.discard(key)
        self._entries[key] = entry
        self._notify(entry)
        return entry

    def _complete_superseded(self, entry: CacheEntry) -> CacheEntry:
        """Handle a fetch that began before its key was primed or invalidated.

        Its result predates the change, so it never replaces an existing
        entry and never clears the invalidation mark. Watched keys get a
        follow-up fetch unless a newer one is already running.
        """
        key = entry.key
        logger.debug("cache_fetch_superseded", resource=key.resource, filter_text=key.filter_text)
        if (
            not self._closed
            and self._listeners.get(key)
            and not self._has_current_fetch(key)
        ):
            self._start_fetch(key)

        if key in self._entries:
            return self._entries[key]
        self._entries[key] = entry
        self._notify(entry)
        return entry

    def _notify(self, entry: CacheEntry) -> None:
        for listener in list(self._listeners.get(entry.key, ())):
            try:
                listener(entry)
            except Exception:
                logger.exception("cache_listener_failed", resource=entry.key.resource)
