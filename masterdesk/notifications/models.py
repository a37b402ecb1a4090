"""Notification request models."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class NotificationKind(str, Enum):
    """Kind of user-visible toast."""

    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A structured request to show a toast; rendering is up to the caller."""

    model_config = ConfigDict(frozen=True)

    kind: NotificationKind
    title: str
    body: str = ""
    placement: str = Field(default="bottomRight", description="Suggested screen corner")
    created_at: datetime = Field(default_factory=utc_now)
