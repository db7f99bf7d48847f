"""Unit tests for user settings."""

from pathlib import Path

import pytest
from lsi.core.config import ConfigError, ConfigParseError, Settings, load_settings
from pydantic import ValidationError


class TestSettings:
    """Tests for Settings model."""

    def test_defaults(self) -> None:
        """Settings default to unlimited time and two-space indentation."""
        settings = Settings()

        assert settings.indent_width == 2
        assert settings.max_depth == 40
        assert settings.timeout_seconds == 0
        assert settings.long_format is False
        assert settings.follow_links is True

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("indent_width", -1),
            ("indent_width", 17),
            ("max_depth", 0),
            ("max_depth", 256),
            ("timeout_seconds", -0.5),
        ],
    )
    def test_out_of_range(self, field: str, value: float) -> None:
        """Out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            Settings.model_validate({field: value})

    def test_extra_fields_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            Settings.model_validate({"colour": "red"})


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """A missing settings file yields defaults."""
        assert load_settings(tmp_path / "config.toml") == Settings()

    def test_default_path(self, isolated_config: Path) -> None:
        """Without a path the XDG settings file is read."""
        config_dir = isolated_config / "lsi"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("indent_width = 4\n")

        assert load_settings().indent_width == 4

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values from the file override defaults."""
        path = tmp_path / "config.toml"
        path.write_text(
            "indent_width = 3\nmax_depth = 10\ntimeout_seconds = 2.5\n"
            "long_format = true\nfollow_links = false\n"
        )

        settings = load_settings(path)

        assert settings == Settings(
            indent_width=3,
            max_depth=10,
            timeout_seconds=2.5,
            long_format=True,
            follow_links=False,
        )

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("indent_width = [")

        with pytest.raises(ConfigParseError, match="Invalid TOML syntax"):
            load_settings(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text('max_depth = "deep"\n')

        with pytest.raises(ConfigError, match="Invalid settings"):
            load_settings(path)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        """A settings path that cannot be read raises ConfigError."""
        path = tmp_path / "config.toml"
        path.mkdir()

        with pytest.raises(ConfigError, match="Failed to read settings"):
            load_settings(path)
