"""Configuration model exports.

    from masterdesk.config.models import APIConfig, CacheConfig
"""

from masterdesk.config.models.api import APIConfig
from masterdesk.config.models.cache import CacheConfig, SelectionConfig
from masterdesk.config.models.forms import FormsConfig, ProductRulesConfig
from masterdesk.config.models.observability import (
    LoggingConfig,
    NotificationsConfig,
    ObservabilityConfig,
)

__all__ = [
    # API
    "APIConfig",
    # Cache
    "CacheConfig",
    "SelectionConfig",
    # Forms
    "FormsConfig",
    "ProductRulesConfig",
    # Observability
    "LoggingConfig",
    "NotificationsConfig",
    "ObservabilityConfig",
]
