"""
Full Listener - Complete log of every trace record.
"""

from typing import Any, Optional
import logging

from webdriver_trace.events.event import Cmd, WebDriverEvent
from webdriver_trace.listeners.base import AbstractEventListener
from webdriver_trace.reporting.test_execution import TestExecutionRecorder

logger = logging.getLogger(__name__)


class FullListener(AbstractEventListener):
    """
    Keep every Before, After and Exception record, unconditionally.

    Failed commands are also reported to the test execution recorder as
    WARNING records.

    Example:
        >>> full = FullListener(recorder=execution)
        >>> driver = RemoteWebDriver(executor, listeners=[full])
        >>> driver.get("https://example.com")
        >>> len(full.get_list_of_events_recorded())
        2
    """

    def __init__(self, recorder: Optional[TestExecutionRecorder] = None):
        super().__init__()
        self.recorder = recorder

    def attach(self, driver: Any) -> None:
        super().attach(driver)
        if self.recorder is not None and driver.session.session_id:
            logger.info(f"Recording session {driver.session.session_id} (trace id {self.recorder.trace_id or '-'})")

    def before_event(self, event: WebDriverEvent) -> None:
        self._log_entries.append(event)

    def after_event(self, event: WebDriverEvent) -> None:
        self._log_entries.append(event)

    def on_exception(self, event: WebDriverEvent, cmd: Cmd, error: BaseException) -> None:
        self._log_entries.append(event)
        if self.recorder is not None:
            self.recorder.append_exception_record(event)
