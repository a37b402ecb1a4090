"""Configuration loading for masterdesk.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from masterdesk.config import get_settings

    settings = get_settings()
    base_url = settings.api.base_url
    delay = settings.selection.debounce_ms
"""

from functools import lru_cache

from masterdesk.config.loader import config_files
from masterdesk.config.settings import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for the current ``MASTERDESK_ENV``, cached for the process.

    Call ``reload_settings()`` after changing files or environment.
    """
    return Settings.from_files(config_files())


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["Settings", "get_settings", "reload_settings"]
