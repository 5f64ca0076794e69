"""
Utility helpers.
"""

from webdriver_trace.utils.logging import (
    JsonFormatter,
    setup_logging,
    setup_logging_from_settings,
    get_logger,
)

__all__ = [
    "JsonFormatter",
    "setup_logging",
    "setup_logging_from_settings",
    "get_logger",
]
