"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from webdriver_trace.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.capture_screenshots)
    False
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScreenshotSettings(BaseModel):
    """
    Screenshot artifact settings.

    Attributes:
        output_dir: Directory screenshots are written to
        format: Image file extension
    """
    output_dir: str = "./screenshots"
    format: Literal["png"] = "png"


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        format: Log format string
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
        command_level: Level used for the per-command transport log
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    json_format: bool = False
    command_level: Literal["DEBUG", "INFO", "WARNING"] = "DEBUG"


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with WEBDRIVER_TRACE__)
    3. Config file (YAML)
    4. Default values

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(capture_screenshots=True)  # Override
    """

    model_config = SettingsConfigDict(
        env_prefix="WEBDRIVER_TRACE__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Take a screenshot before every triggering command
    capture_screenshots: bool = False

    # Truncate long script bodies in the command log
    shorten_log_messages: bool = False
    max_logged_script_length: int = Field(default=100, ge=10, le=10000)

    # Draw a border around every element a lookup returns
    highlight_elements: bool = False
    highlight_color: str = Field(default="#2C1BD8", pattern=r"^#[0-9A-Fa-f]{6}$")

    screenshots: ScreenshotSettings = Field(default_factory=ScreenshotSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()

        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base

        merged = deep_merge(current, overrides)
        return Settings(**merged)
