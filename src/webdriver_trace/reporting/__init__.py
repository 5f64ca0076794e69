"""
Reporting module for webdriver-trace.

Collaborators that listeners hand derived records and artifacts to.
"""

from webdriver_trace.reporting.screenshot_manager import (
    Screenshot,
    ScreenshotCapturer,
    ScreenshotManager,
)
from webdriver_trace.reporting.test_execution import (
    TestEventType,
    TestEvent,
    TestExecutionRecorder,
    TestCaseExecution,
)

__all__ = [
    # Screenshots
    "Screenshot",
    "ScreenshotCapturer",
    "ScreenshotManager",
    # Test execution
    "TestEventType",
    "TestEvent",
    "TestExecutionRecorder",
    "TestCaseExecution",
]
