"""
WebDriver Trace - Correlated trace records for remote browser automation.

This package wraps every command of a remote browser session with Before,
After and Exception records and fans them out to listeners: a full trace
log, screenshots before user-visible steps, and a structured step log.

Example:
    >>> from webdriver_trace import RemoteWebDriver, FullListener, By
    >>> full = FullListener()
    >>> driver = RemoteWebDriver(executor, {"browserName": "chrome"}, listeners=[full])
    >>> driver.find_element(By.id("login")).click()
"""

__version__ = "0.1.0"

# Public API exports
from webdriver_trace.events.dispatcher import EventDispatcher
from webdriver_trace.events.event import Cmd, EventType, WebDriverEvent
from webdriver_trace.listeners import FullListener, ScreenshotListener, TestStepListener
from webdriver_trace.locators import By, ElementLocation
from webdriver_trace.remote import RemoteWebDriver, RemoteWebElement
from webdriver_trace.reporting import TestCaseExecution
from webdriver_trace.config.settings import Settings

__all__ = [
    "EventDispatcher",
    "Cmd",
    "EventType",
    "WebDriverEvent",
    "FullListener",
    "ScreenshotListener",
    "TestStepListener",
    "By",
    "ElementLocation",
    "RemoteWebDriver",
    "RemoteWebElement",
    "TestCaseExecution",
    "Settings",
    "__version__",
]
