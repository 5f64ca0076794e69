"""
Test Step Listener - Structured log of user-visible test steps.
"""

from typing import Callable, Optional

from webdriver_trace.events.event import WebDriverEvent
from webdriver_trace.listeners.base import TriggeredListener
from webdriver_trace.reporting.test_execution import TestExecutionRecorder


class TestStepListener(TriggeredListener):
    """
    Append one URL record per triggering command: the page URL at the time
    of the step, the command and the target locator.

    The URL is read through the driver's uninstrumented path.
    """

    # Not a pytest test class
    __test__ = False

    def __init__(
        self,
        recorder: TestExecutionRecorder,
        url_provider: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the listener.

        Args:
            recorder: Where step records are appended
            url_provider: Returns the current page URL; the driver's if None
        """
        super().__init__()
        self.recorder = recorder
        self._url_provider = url_provider

    def attach(self, driver) -> None:
        super().attach(driver)
        if self._url_provider is None:
            self._url_provider = driver.current_url_for_recording

    def on_trigger(self, event: WebDriverEvent) -> None:
        self._log_entries.append(event)
        url = self._url_provider() if self._url_provider is not None else ""
        self.recorder.append_step_record(
            event.sequence_number,
            url,
            event.cmd.long_cmd_string,
            event.locator or "",
        )
