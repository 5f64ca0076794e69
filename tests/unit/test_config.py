"""
Tests for configuration system.
"""

import pytest
from webdriver_trace.config import Settings, ScreenshotSettings, LoggingSettings


class TestSettings:
    """Test the Settings classes."""

    def test_default_settings(self):
        """Test default settings are created correctly."""
        settings = Settings()

        assert settings.capture_screenshots is False
        assert settings.shorten_log_messages is False
        assert settings.max_logged_script_length == 100
        assert settings.screenshots.output_dir == "./screenshots"
        assert settings.logging.command_level == "DEBUG"

    def test_override_settings(self):
        """Test overriding settings."""
        settings = Settings(
            capture_screenshots=True,
            screenshots=ScreenshotSettings(output_dir="/tmp/shots"),
            logging=LoggingSettings(level="DEBUG"),
        )

        assert settings.capture_screenshots is True
        assert settings.screenshots.output_dir == "/tmp/shots"
        assert settings.logging.level == "DEBUG"

    def test_merge_with_overrides(self):
        """Test merging settings with overrides."""
        settings = Settings()
        new_settings = settings.merge_with({
            "screenshots": {"output_dir": "./artifacts"},
            "shorten_log_messages": True,
        })

        assert new_settings.screenshots.output_dir == "./artifacts"
        assert new_settings.shorten_log_messages is True
        # Other settings should remain default
        assert new_settings.screenshots.format == "png"

    def test_environment_variables(self, monkeypatch):
        """Test loading nested values from the environment."""
        monkeypatch.setenv("WEBDRIVER_TRACE__CAPTURE_SCREENSHOTS", "true")
        monkeypatch.setenv("WEBDRIVER_TRACE__LOGGING__LEVEL", "WARNING")

        settings = Settings()

        assert settings.capture_screenshots is True
        assert settings.logging.level == "WARNING"

    def test_validation(self):
        """Test validation of settings."""
        with pytest.raises(ValueError):
            Settings(max_logged_script_length=1)

        with pytest.raises(ValueError):
            LoggingSettings(command_level="TRACE")

        with pytest.raises(ValueError):
            Settings(highlight_color="blue")


class TestConfigLoader:
    """Test loading configuration files."""

    def test_load_yaml(self, tmp_path, monkeypatch):
        """Test that values come from the config file."""
        from webdriver_trace.config import load_config

        monkeypatch.chdir(tmp_path)
        config = tmp_path / "custom.yaml"
        config.write_text("capture_screenshots: true\nscreenshots:\n  output_dir: ./out\n")

        settings = load_config(config_path=config)

        assert settings.capture_screenshots is True
        assert settings.screenshots.output_dir == "./out"

    def test_overrides_win(self, tmp_path, monkeypatch):
        """Test that explicit overrides beat the config file."""
        from webdriver_trace.config import load_config

        monkeypatch.chdir(tmp_path)
        config = tmp_path / "custom.yaml"
        config.write_text("shorten_log_messages: false\n")

        settings = load_config(config_path=config, shorten_log_messages=True)

        assert settings.shorten_log_messages is True

    def test_invalid_yaml(self, tmp_path):
        """Test that broken files raise ConfigurationError."""
        from webdriver_trace.config import ConfigLoader
        from webdriver_trace.exceptions import ConfigurationError

        config = tmp_path / "broken.yaml"
        config.write_text("screenshots: [unclosed\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader(config).load_yaml_config(config)

    def test_non_mapping_yaml(self, tmp_path):
        """Test that a file must contain a mapping."""
        from webdriver_trace.config import ConfigLoader
        from webdriver_trace.exceptions import ConfigurationError

        config = tmp_path / "list.yaml"
        config.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader(config).load_yaml_config(config)

    def test_invalid_values(self, tmp_path, monkeypatch):
        """Test that validation errors become ConfigurationError."""
        from webdriver_trace.config import load_config
        from webdriver_trace.exceptions import ConfigurationError

        monkeypatch.chdir(tmp_path)
        config = tmp_path / "custom.yaml"
        config.write_text("max_logged_script_length: 0\n")

        with pytest.raises(ConfigurationError):
            load_config(config_path=config)


class TestGlobalSettings:
    """Test the settings singleton."""

    def test_singleton_and_reset(self, tmp_path, monkeypatch):
        """Test that settings are loaded once until reset."""
        from webdriver_trace.config import get_settings, reset_settings

        monkeypatch.chdir(tmp_path)
        first = get_settings()
        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first
