"""
Error Handler - Turn failed responses into typed errors.
"""

from typing import Dict, Optional, Type
import logging

from webdriver_trace.exceptions import (
    WebDriverError,
    NoSuchElementError,
    InvalidArgumentError,
    InvalidSelectorError,
    SessionNotCreatedError,
    StaleElementReferenceError,
    NoSuchAlertError,
    NoSuchFrameError,
    NoSuchWindowError,
    JavascriptError,
    ScriptTimeoutError,
    WebDriverTimeoutError,
)
from webdriver_trace.remote.command import Response

logger = logging.getLogger(__name__)


# W3C error code -> exception class
ERROR_CODES: Dict[str, Type[WebDriverError]] = {
    "no such element": NoSuchElementError,
    "invalid argument": InvalidArgumentError,
    "invalid selector": InvalidSelectorError,
    "session not created": SessionNotCreatedError,
    "stale element reference": StaleElementReferenceError,
    "no such alert": NoSuchAlertError,
    "no such frame": NoSuchFrameError,
    "no such window": NoSuchWindowError,
    "javascript error": JavascriptError,
    "script timeout": ScriptTimeoutError,
    "timeout": WebDriverTimeoutError,
}


class ErrorHandler:
    """
    Raise the error a failed response describes.

    Unknown error codes raise a plain WebDriverError.
    """

    def throw_if_response_failed(self, response: Optional[Response], duration_ms: int) -> Optional[Response]:
        """
        Check a response.

        Args:
            response: Response from the transport, may be None
            duration_ms: How long the command took

        Returns:
            The response, if it did not fail

        Raises:
            WebDriverError: Subclass matching the response's error code
        """
        if response is None or response.is_success:
            return response

        error_class = ERROR_CODES.get(response.state, WebDriverError)
        message = self._message_of(response)
        logger.debug(f"Response failed after {duration_ms} ms: {response.state}")
        raise error_class(
            message,
            {"Error code": response.state, "Command duration": f"{duration_ms} ms"},
        )

    @staticmethod
    def _message_of(response: Response) -> str:
        value = response.value
        if isinstance(value, dict):
            message = value.get("message")
            if message:
                return str(message)
        elif value:
            return str(value)
        return response.state or f"Unknown error (status {response.status})"
