"""Tests for worldraster.config module."""

import pytest

from worldraster.config import ConfigError, Settings


class TestSettings:
    """Tests for the Settings class."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that default values are set correctly."""
        # Clear any env vars that might be set
        for name in ("LOG_LEVEL", "TRANSFORM_WORKERS", "DEFAULT_FONT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
        )

        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FORMAT == "console"

        # Transform runs in the calling thread unless configured otherwise
        assert settings.TRANSFORM_WORKERS == 1
        assert settings.TRANSFORM_MIN_ROWS_PER_BAND == 32

        assert settings.DEFAULT_FONT == "DejaVuSans.ttf"
        assert settings.DEFAULT_FONT_SIZE == 12
        assert settings.STRICT_FONT_CHECK is False

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables override defaults."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TRANSFORM_WORKERS", "4")
        monkeypatch.setenv("STRICT_FONT_CHECK", "true")

        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
        )

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.TRANSFORM_WORKERS == 4
        assert settings.STRICT_FONT_CHECK is True

    def test_log_format_options(self) -> None:
        """Test that LOG_FORMAT accepts valid options."""
        settings = Settings(
            LOG_FORMAT="json",
            _env_file=None,  # type: ignore[call-arg]
        )
        assert settings.LOG_FORMAT == "json"

    def test_fixture_settings(self, test_settings: Settings) -> None:
        """Test that settings can be created with custom values."""
        assert test_settings.LOG_LEVEL == "DEBUG"
        assert test_settings.TRANSFORM_WORKERS == 1


class TestConfigError:
    """Tests for the ConfigError exception."""

    def test_config_error_message_format(self) -> None:
        """Test ConfigError message includes key name, detail and env var."""
        error = ConfigError("Worker count", "TRANSFORM_WORKERS", "must be >= 1")
        assert "Worker count must be >= 1" in str(error)
        assert "TRANSFORM_WORKERS" in str(error)
        assert ".env" in str(error)

    def test_config_error_attributes(self) -> None:
        """Test ConfigError stores its parts as attributes."""
        error = ConfigError("Test key", "TEST_VAR", "is broken")
        assert error.key_name == "Test key"
        assert error.env_var == "TEST_VAR"
        assert error.detail == "is broken"


class TestRequireMethods:
    """Tests for require_*() methods."""

    def test_require_workers_when_valid(self) -> None:
        settings = Settings(
            TRANSFORM_WORKERS=3,
            _env_file=None,  # type: ignore[call-arg]
        )
        assert settings.require_workers() == 3

    def test_require_band_rows_when_valid(self) -> None:
        settings = Settings(
            TRANSFORM_MIN_ROWS_PER_BAND=8,
            _env_file=None,  # type: ignore[call-arg]
        )
        assert settings.require_band_rows() == 8

    @pytest.mark.parametrize(
        ("settings_kwargs", "method_name", "expected_env_var"),
        [
            ({"TRANSFORM_WORKERS": 0}, "require_workers", "TRANSFORM_WORKERS"),
            ({"TRANSFORM_WORKERS": -2}, "require_workers", "TRANSFORM_WORKERS"),
            (
                {"TRANSFORM_MIN_ROWS_PER_BAND": 0},
                "require_band_rows",
                "TRANSFORM_MIN_ROWS_PER_BAND",
            ),
        ],
    )
    def test_require_methods_reject_non_positive_values(
        self,
        settings_kwargs: dict[str, int],
        method_name: str,
        expected_env_var: str,
    ) -> None:
        """require_* methods reject values below 1."""
        settings = Settings(
            **settings_kwargs,
            _env_file=None,  # type: ignore[call-arg]
        )

        method = getattr(settings, method_name)
        with pytest.raises(ConfigError) as exc_info:
            method()
        assert expected_env_var in str(exc_info.value)
