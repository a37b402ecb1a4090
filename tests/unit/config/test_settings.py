"""Unit tests for Settings class and get_settings function."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from masterdesk.config import get_settings, reload_settings
from masterdesk.config.settings import Settings


class TestSettings:
    """Tests for Settings model."""

    def test_default_values(self) -> None:
        """Settings has sensible defaults."""
        settings = Settings()
        assert settings.app_name == "masterdesk"
        assert settings.debug is False

    def test_selection_and_cache_defaults(self) -> None:
        """Debounce and staleness defaults match the original screens."""
        settings = Settings()
        assert settings.selection.debounce_ms == 300
        assert settings.selection.debounce_seconds == pytest.approx(0.3)
        assert settings.cache.stale_after_seconds == 2.0

    def test_form_rule_defaults(self) -> None:
        """Product floors default to a price of 1000 and a quantity of 1."""
        settings = Settings()
        assert settings.forms.product.min_price == 1000
        assert settings.forms.product.min_quantity == 1

    def test_api_base_url_normalized(self) -> None:
        """Trailing slashes are stripped from the backend URL."""
        settings = Settings(api={"base_url": "http://backend.test/api/be/"})
        assert settings.api.base_url == "http://backend.test/api/be"

    def test_observability_defaults(self) -> None:
        """Observability configuration has defaults."""
        settings = Settings()
        assert settings.observability.logging.level == "INFO"
        assert settings.observability.logging.redact_pii is True

    def test_invalid_values_rejected(self) -> None:
        """Out-of-range values fail validation."""
        with pytest.raises(ValidationError):
            Settings(selection={"debounce_ms": -1})
        with pytest.raises(ValidationError):
            Settings(notifications={"placement": "middle"})


class TestFromFiles:
    """Tests for Settings.from_files."""

    def test_plain_settings_read_no_files(self) -> None:
        """Settings() itself never touches the config directory."""
        assert Settings.toml_files == ()

    def test_overlay_keeps_sibling_keys(self, test_config_dir: Path, mock_toml_files) -> None:
        """An environment overlay merges into nested sections."""
        mock_toml_files(
            {
                "default.toml": "[forms.product]\nmin_price = 1000\nmin_quantity = 2",
                "staging.toml": "[forms.product]\nmin_price = 10",
            }
        )

        settings = Settings.from_files(
            [test_config_dir / "default.toml", test_config_dir / "staging.toml"]
        )

        assert isinstance(settings, Settings)
        assert settings.forms.product.min_price == 10
        assert settings.forms.product.min_quantity == 2

    def test_priority_order(
        self,
        test_config_dir: Path,
        mock_toml_files,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Arguments beat environment variables, which beat files."""
        mock_toml_files({"default.toml": "app_name = 'file'\n[selection]\ndebounce_ms = 500"})
        monkeypatch.setenv("MASTERDESK_SELECTION__DEBOUNCE_MS", "150")
        monkeypatch.setenv("MASTERDESK_APP_NAME", "env")

        settings = Settings.from_files([test_config_dir / "default.toml"], app_name="arg")

        assert settings.app_name == "arg"
        assert settings.selection.debounce_ms == 150

    def test_files_do_not_leak_between_calls(
        self, test_config_dir: Path, mock_toml_files
    ) -> None:
        """Each call binds its own files."""
        mock_toml_files({"one.toml": "app_name = 'one'", "two.toml": "app_name = 'two'"})

        first = Settings.from_files([test_config_dir / "one.toml"])
        second = Settings.from_files([test_config_dir / "two.toml"])

        assert (first.app_name, second.app_name) == ("one", "two")
        assert Settings().app_name == "masterdesk"


class TestGetSettings:
    """Tests for get_settings function."""

    def test_reads_toml(
        self,
        test_config_dir: Path,
        mock_toml_files,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """get_settings builds Settings from the TOML files."""
        mock_toml_files(
            {"default.toml": "app_name = 'test'\n[forms.product]\nmin_price = 50"}
        )
        monkeypatch.setenv("MASTERDESK_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("MASTERDESK_ENV", "nonexistent")

        settings = get_settings()

        assert isinstance(settings, Settings)
        assert settings.app_name == "test"
        assert settings.forms.product.min_price == 50
        assert settings.forms.product.min_quantity == 1

    def test_env_overrides_toml(
        self,
        test_config_dir: Path,
        mock_toml_files,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """MASTERDESK_* variables win over TOML."""
        mock_toml_files({"default.toml": "debug = false"})
        monkeypatch.setenv("MASTERDESK_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("MASTERDESK_ENV", "nonexistent")
        monkeypatch.setenv("MASTERDESK_DEBUG", "true")

        assert get_settings().debug is True

    def test_settings_cached(
        self,
        test_config_dir: Path,
        mock_toml_files,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """get_settings returns cached instance; reload_settings rebuilds it."""
        mock_toml_files({"default.toml": "app_name = 'first'"})
        monkeypatch.setenv("MASTERDESK_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("MASTERDESK_ENV", "nonexistent")

        first = get_settings()
        assert get_settings() is first

        mock_toml_files({"default.toml": "app_name = 'second'"})
        reloaded = reload_settings()

        assert reloaded is not first
        assert reloaded.app_name == "second"
