"""User-visible notification requests."""

from masterdesk.notifications.center import Handler, NotificationCenter
from masterdesk.notifications.models import Notification, NotificationKind

__all__ = ["Handler", "Notification", "NotificationCenter", "NotificationKind"]
