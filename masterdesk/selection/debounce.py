"""Keystroke debouncing for searchable selectors."""

import asyncio
from collections.abc import Callable

from masterdesk.observability.logging import get_logger
from masterdesk.observability.metrics import DEBOUNCED_INPUTS

logger = get_logger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3


class DebouncedQueryController:
    """Coalesce a burst of inputs into a single query.

    Each ``on_input`` cancels the pending timer and schedules a new one;
    only the last text of a burst reaches ``on_query``. Only the trigger is
    debounced: a fetch already started by an earlier query is left alone.
    """

    def __init__(
        self,
        on_query: Callable[[str], None],
        delay_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._on_query = on_query
        self._delay = delay_seconds
        self._handle: asyncio.TimerHandle | None = None
        self._pending_text: str | None = None
        self._closed = False

    @property
    def pending(self) -> bool:
        """Whether a query is scheduled but has not fired yet."""
        return self._handle is not None

    @property
    def pending_text(self) -> str | None:
        return self._pending_text

    def on_input(self, text: str) -> None:
        """Record one keystroke's worth of filter text."""
        if self._closed:
            return
        if self._handle is not None:
            self._handle.cancel()
            DEBOUNCED_INPUTS.inc()

        loop = asyncio.get_running_loop()
        self._pending_text = text
        self._handle = loop.call_later(self._delay, self._fire)

    def flush(self) -> None:
        """Fire the pending query immediately, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._fire()

    def cancel(self) -> None:
        """Drop the pending query without firing it."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending_text = None

    def close(self) -> None:
        """Cancel the pending query and ignore any further input."""
        self.cancel()
        self._closed = True

    def _fire(self) -> None:
        text = self._pending_text or ""
        self._handle = None
        self._pending_text = None
        try:
            self._on_query(text)
        except Exception:
            logger.exception("debounced_query_failed", filter_text=text)
