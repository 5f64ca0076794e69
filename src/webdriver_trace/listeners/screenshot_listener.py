"""
Screenshot Listener - Screenshot before every user-visible step.
"""

from typing import Any, Optional, TYPE_CHECKING
import logging

from webdriver_trace.events.event import WebDriverEvent
from webdriver_trace.listeners.base import TriggeredListener
from webdriver_trace.reporting.screenshot_manager import ScreenshotCapturer, ScreenshotManager
from webdriver_trace.reporting.test_execution import TestExecutionRecorder

if TYPE_CHECKING:
    from webdriver_trace.config.settings import Settings

logger = logging.getLogger(__name__)


class ScreenshotListener(TriggeredListener):
    """
    Keep the Before record of every triggering command and, if screenshot
    capture is enabled, attach a screenshot of the page to the test case.

    Screenshots are taken through the driver's uninstrumented path, so
    capturing one does not produce trace records of its own.
    """

    def __init__(
        self,
        recorder: TestExecutionRecorder,
        settings: Optional["Settings"] = None,
        capturer: Optional[ScreenshotCapturer] = None,
    ):
        """
        Initialize the listener.

        Args:
            recorder: Where screenshot records are appended
            settings: Settings to read the capture flag from (global settings if None)
            capturer: Screenshot source; a ScreenshotManager over the driver if None
        """
        super().__init__()
        self.recorder = recorder
        self._settings = settings
        self.capturer = capturer

    @property
    def settings(self) -> "Settings":
        if self._settings is None:
            from webdriver_trace.config import get_settings
            self._settings = get_settings()
        return self._settings

    def attach(self, driver: Any) -> None:
        super().attach(driver)
        if self.capturer is None:
            self.capturer = ScreenshotManager(
                output_dir=self.settings.screenshots.output_dir,
                run_id=driver.session.session_id or "no-session",
                source=driver.screenshot_for_recording,
                format=self.settings.screenshots.format,
            )

    def on_trigger(self, event: WebDriverEvent) -> None:
        self._log_entries.append(event)
        if not self.settings.capture_screenshots:
            return

        if self._driver is not None and not self._driver.session.takes_screenshot:
            logger.debug(f"Session does not take screenshots, skipping #{event.sequence_number}")
            return

        if self.capturer is None:
            logger.warning("Screenshot capture enabled but no capturer is attached")
            return

        path = self.capturer.capture()
        self.recorder.append_screenshot_record(
            event.sequence_number,
            str(path.absolute()),
            cmd=event.cmd.long_cmd_string,
            locator=event.locator or "",
        )
