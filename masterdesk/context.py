"""Application context: the one place shared collaborators are built.

Everything that would otherwise be a module-level singleton (the query
cache, the notification center, the HTTP client) is created here and
passed down explicitly.

Usage:
    async with AppContext.from_settings() as ctx:
        form = await open_product_edit(ctx, "42")
"""

from typing import Any

import httpx

from masterdesk.cache.fetchers import detail_fetcher, option_fetcher
from masterdesk.cache.revalidating import RevalidatingCache
from masterdesk.client.client import MasterDataClient
from masterdesk.config import get_settings
from masterdesk.config.settings import Settings
from masterdesk.notifications.center import NotificationCenter
from masterdesk.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


class AppContext:
    """Settings plus the shared client, cache and notification center."""

    def __init__(
        self,
        settings: Settings,
        client: MasterDataClient,
        cache: RevalidatingCache,
        notifications: NotificationCenter,
    ) -> None:
        self.settings = settings
        self.client = client
        self.cache = cache
        self.notifications = notifications
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        configure_logging: bool = True,
    ) -> "AppContext":
        """Build a context from configuration.

        Args:
            settings: Settings to use (defaults to ``get_settings()``)
            transport: Optional httpx transport for the backend client
            configure_logging: Whether to configure structlog from settings
        """
        settings = settings or get_settings()
        if configure_logging:
            log = settings.observability.logging
            setup_logging(level=log.level, format=log.format, redact_pii=log.redact_pii)

        client = MasterDataClient.from_config(settings.api, transport=transport)
        cache = RevalidatingCache(stale_after_seconds=settings.cache.stale_after_seconds)
        cache.register(client.brands.name, option_fetcher(client.brands))
        cache.register(client.provinces.name, option_fetcher(client.provinces))
        cache.register(client.products.name, detail_fetcher(client.products))

        notifications = NotificationCenter(
            placement=settings.notifications.placement,
            history_size=settings.notifications.history_size,
        )

        logger.info("app_context_started", base_url=settings.api.base_url)
        return cls(settings, client, cache, notifications)

    @property
    def debounce_seconds(self) -> float:
        return self.settings.selection.debounce_seconds

    async def __aenter__(self) -> "AppContext":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Drain the cache and close the HTTP client."""
        if self._closed:
            return
        self._closed = True
        await self.cache.aclose()
        await self.client.close()
        logger.info("app_context_closed")
