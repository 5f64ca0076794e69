"""
Listeners module - Consumers of trace records.
"""

from webdriver_trace.listeners.base import (
    IEventListener,
    AbstractEventListener,
    TriggeredListener,
)
from webdriver_trace.listeners.full_listener import FullListener
from webdriver_trace.listeners.screenshot_listener import ScreenshotListener
from webdriver_trace.listeners.test_step_listener import TestStepListener

__all__ = [
    "IEventListener",
    "AbstractEventListener",
    "TriggeredListener",
    "FullListener",
    "ScreenshotListener",
    "TestStepListener",
]
