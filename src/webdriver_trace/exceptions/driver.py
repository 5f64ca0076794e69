"""
Driver-related exceptions.

Everything the transport or the remote end can report is a ``WebDriverError``.
Diagnostic context (driver class, session id, command, element) is attached
with ``add_info`` while the error travels up through the command wrapper.
"""

from typing import Any

from webdriver_trace.exceptions.base import WebDriverTraceError


class WebDriverError(WebDriverTraceError):
    """Base exception for errors raised while executing a driver command."""

    DRIVER_INFO = "Driver info"
    SESSION_ID = "Session ID"

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, details)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def add_info(self, key: str, value: Any) -> None:
        """Attach a piece of diagnostic context to this error."""
        self.details[key] = value

    def get_info(self, key: str) -> Any:
        """Get a piece of diagnostic context, or None if missing."""
        return self.details.get(key)


class NoSuchElementError(WebDriverError):
    """
    Element not found.

    An expected outcome of single-element resolution, not a defect.
    """
    pass


class InvalidArgumentError(WebDriverError):
    """
    The remote end rejected an argument.

    During element lookup this signals that the locator strategy is not
    supported remotely, so the local mechanism is tried instead.
    """
    pass


class InvalidSelectorError(WebDriverError):
    """The selector expression is malformed."""
    pass


class SessionNotCreatedError(WebDriverError):
    """
    A new session could not be created.

    Possible causes are an invalid remote server address or a browser
    start-up failure.
    """
    pass


class UnreachableBrowserError(WebDriverError):
    """
    Communication with the remote browser failed.

    Raised for low-level failures that are not WebDriver errors themselves,
    e.g. connection resets or I/O errors inside the transport.
    """
    pass


class StaleElementReferenceError(WebDriverError):
    """The element is no longer attached to the DOM."""
    pass


class NoSuchAlertError(WebDriverError):
    """No alert is currently open."""
    pass


class NoSuchFrameError(WebDriverError):
    """The frame to switch to does not exist."""
    pass


class NoSuchWindowError(WebDriverError):
    """The window to switch to does not exist."""
    pass


class JavascriptError(WebDriverError):
    """A script raised an error in the browser."""
    pass


class ScriptTimeoutError(WebDriverError):
    """An asynchronous script did not finish in time."""
    pass


class TimeoutError(WebDriverError):
    """
    Operation timed out.

    Timeouts are enforced by the remote end; this only reports them.
    """
    pass
