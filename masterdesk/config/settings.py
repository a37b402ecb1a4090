"""Root settings model for masterdesk configuration."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from masterdesk.config.loader import read_layers
from masterdesk.config.models.api import APIConfig
from masterdesk.config.models.cache import CacheConfig, SelectionConfig
from masterdesk.config.models.forms import FormsConfig
from masterdesk.config.models.observability import NotificationsConfig, ObservabilityConfig


class LayeredTomlSource(InitSettingsSource):
    """Values from the settings class' ``toml_files``, deep-merged in order.

    pydantic-settings' own TOML source replaces whole tables when several
    files are given; an environment overlay here only overrides the keys
    it names.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        files = getattr(settings_cls, "toml_files", ())
        self.toml_data = read_layers(files)
        super().__init__(settings_cls, self.toml_data)


class Settings(BaseSettings):
    """Root configuration object containing all nested configuration sections.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{MASTERDESK_ENV}.toml (environment overrides)
    4. MASTERDESK_* environment variables (runtime overrides)

    A plain ``Settings()`` reads no files; ``Settings.from_files`` binds the
    TOML layers.
    """

    model_config = SettingsConfigDict(
        env_prefix="MASTERDESK_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # TOML layers read by LayeredTomlSource, lowest priority first
    toml_files: ClassVar[tuple[Path, ...]] = ()

    app_name: str = Field(default="masterdesk", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    api: APIConfig = Field(default_factory=APIConfig, description="Backend API configuration")
    cache: CacheConfig = Field(default_factory=CacheConfig, description="Query cache configuration")
    selection: SelectionConfig = Field(
        default_factory=SelectionConfig,
        description="Searchable selector configuration",
    )
    forms: FormsConfig = Field(default_factory=FormsConfig, description="Form validation rules")
    notifications: NotificationsConfig = Field(
        default_factory=NotificationsConfig,
        description="Notification surface configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def from_files(cls, files: Sequence[Path], **overrides: Any) -> "Settings":
        """Settings layered over ``files``, later files taking precedence.

        Args:
            files: TOML files, lowest priority first
            overrides: Values that win over files and environment
        """

        class FileSettings(cls):  # type: ignore[valid-type,misc]
            toml_files = tuple(files)

        return FileSettings(**overrides)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include the layered TOML files.

        Priority order (highest to lowest):
        1. init_settings (constructor arguments)
        2. env_settings (MASTERDESK_* environment variables)
        3. toml_settings (config/*.toml files)
        4. (defaults from model)
        """
        return (
            init_settings,
            env_settings,
            LayeredTomlSource(settings_cls),
        )
