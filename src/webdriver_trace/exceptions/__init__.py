"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout webdriver-trace,
providing clear error types for different failure scenarios.
"""

from webdriver_trace.exceptions.base import (
    WebDriverTraceError,
    ConfigurationError,
)
from webdriver_trace.exceptions.driver import (
    WebDriverError,
    NoSuchElementError,
    InvalidArgumentError,
    InvalidSelectorError,
    SessionNotCreatedError,
    UnreachableBrowserError,
    StaleElementReferenceError,
    NoSuchAlertError,
    NoSuchFrameError,
    NoSuchWindowError,
    JavascriptError,
    ScriptTimeoutError,
    TimeoutError as WebDriverTimeoutError,
)

__all__ = [
    # Base exceptions
    "WebDriverTraceError",
    "ConfigurationError",
    # Driver exceptions
    "WebDriverError",
    "NoSuchElementError",
    "InvalidArgumentError",
    "InvalidSelectorError",
    "SessionNotCreatedError",
    "UnreachableBrowserError",
    "StaleElementReferenceError",
    "NoSuchAlertError",
    "NoSuchFrameError",
    "NoSuchWindowError",
    "JavascriptError",
    "ScriptTimeoutError",
    "WebDriverTimeoutError",
]
