"""
Remote module - Traced driver and element facades over a command transport.
"""

from webdriver_trace.remote.command import (
    Command,
    CommandExecutor,
    CommandPayload,
    DriverCommand,
    Response,
)
from webdriver_trace.remote.error_handler import ErrorHandler
from webdriver_trace.remote.file_detector import (
    FileDetector,
    LocalFileDetector,
    UselessFileDetector,
)
from webdriver_trace.remote.webelement import RemoteWebElement, ShadowRoot
from webdriver_trace.remote.switch_to import Alert, SwitchTo
from webdriver_trace.remote.webdriver import RemoteWebDriver, UNTRACED_SCRIPT_TAG

__all__ = [
    "Command",
    "CommandExecutor",
    "CommandPayload",
    "DriverCommand",
    "Response",
    "ErrorHandler",
    "FileDetector",
    "LocalFileDetector",
    "UselessFileDetector",
    "RemoteWebElement",
    "ShadowRoot",
    "Alert",
    "SwitchTo",
    "RemoteWebDriver",
    "UNTRACED_SCRIPT_TAG",
]
