"""
Configuration module - Centralized settings management.

Usage:
    from webdriver_trace.config import get_settings, load_config

    # Get global settings (loaded once)
    settings = get_settings()

    # Or load fresh settings with overrides
    settings = load_config(capture_screenshots=True)

Environment Variables:
    WEBDRIVER_TRACE__CAPTURE_SCREENSHOTS=true
    WEBDRIVER_TRACE__SHORTEN_LOG_MESSAGES=true
    WEBDRIVER_TRACE__HIGHLIGHT_ELEMENTS=true
    WEBDRIVER_TRACE__SCREENSHOTS__OUTPUT_DIR=./artifacts
    WEBDRIVER_TRACE__LOGGING__LEVEL=DEBUG
"""

from webdriver_trace.config.settings import (
    Settings,
    ScreenshotSettings,
    LoggingSettings,
)
from webdriver_trace.config.loader import ConfigLoader, load_config

# Global settings singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Settings are loaded once from environment variables and config files.
    Call reset_settings() to reload.

    Returns:
        Global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset the global settings (forces reload on next get_settings())."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "ScreenshotSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
]
