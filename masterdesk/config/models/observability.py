"""Observability and notification configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]
Placement = Literal["topLeft", "topRight", "bottomLeft", "bottomRight"]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Log level")
    format: LogFormat = Field(default="json", description="Output format")
    redact_pii: bool = Field(default=True, description="Redact secrets and PII from logs")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )


class NotificationsConfig(BaseModel):
    """Notification surface configuration."""

    placement: Placement = Field(
        default="bottomRight",
        description="Where the caller should render toasts",
    )
    history_size: int = Field(
        default=50,
        gt=0,
        description="Number of past notifications kept for inspection",
    )
