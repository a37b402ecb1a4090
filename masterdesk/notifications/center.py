"""Notification fan-out to whatever surface renders toasts."""

from collections import deque
from collections.abc import Callable

from masterdesk.notifications.models import Notification, NotificationKind
from masterdesk.observability.logging import get_logger
from masterdesk.observability.metrics import NOTIFICATIONS

logger = get_logger(__name__)

Handler = Callable[[Notification], None]


class NotificationCenter:
    """Delivers notification requests to registered handlers.

    A bounded history of what was sent is kept so headless callers and
    tests can inspect it.
    """

    def __init__(self, placement: str = "bottomRight", history_size: int = 50) -> None:
        self._placement = placement
        self._handlers: list[Handler] = []
        self.history: deque[Notification] = deque(maxlen=history_size)

    def add_handler(self, handler: Handler) -> Callable[[], None]:
        """Register a handler; returns a function that removes it."""
        self._handlers.append(handler)

        def remove() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return remove

    def notify(self, notification: Notification) -> Notification:
        self.history.append(notification)
        NOTIFICATIONS.labels(kind=notification.kind.value).inc()
        for handler in list(self._handlers):
            try:
                handler(notification)
            except Exception:
                logger.exception("notification_handler_failed", title=notification.title)
        return notification

    def success(self, title: str, body: str = "") -> Notification:
        return self.notify(
            Notification(
                kind=NotificationKind.SUCCESS,
                title=title,
                body=body,
                placement=self._placement,
            )
        )

    def error(self, title: str, body: str = "") -> Notification:
        return self.notify(
            Notification(
                kind=NotificationKind.ERROR,
                title=title,
                body=body,
                placement=self._placement,
            )
        )

    def of_kind(self, kind: NotificationKind) -> list[Notification]:
        return [n for n in self.history if n.kind == kind]

    def clear(self) -> None:
        self.history.clear()
