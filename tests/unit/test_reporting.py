"""
Tests for the reporting module.
"""

import json

import pytest
from pathlib import Path
from datetime import datetime


class TestScreenshot:
    """Test the Screenshot dataclass."""

    def test_create_screenshot(self):
        """Test creating a screenshot."""
        from webdriver_trace.reporting.screenshot_manager import Screenshot
        screenshot = Screenshot(
            path=Path("/tmp/screenshot.png"),
            index=1,
            timestamp=datetime.now()
        )
        assert screenshot.index == 1
        assert screenshot.path == Path("/tmp/screenshot.png")


class TestScreenshotManager:
    """Test the ScreenshotManager class."""

    @pytest.fixture
    def manager(self, tmp_path):
        """Create a ScreenshotManager instance."""
        from webdriver_trace.reporting.screenshot_manager import ScreenshotManager
        return ScreenshotManager(output_dir=str(tmp_path), run_id="test123", source=lambda: b"png")

    def test_capture_writes_file(self, manager, tmp_path):
        """Test that capturing writes the source bytes."""
        path = manager.capture()

        assert path.parent == tmp_path / "test123"
        assert path.name.startswith("screenshot_001_")
        assert path.suffix == ".png"
        assert path.read_bytes() == b"png"

    def test_screenshots_are_numbered(self, manager):
        """Test that captures are numbered in order."""
        manager.capture()
        manager.capture()

        screenshots = manager.get_screenshots()
        assert [s.index for s in screenshots] == [1, 2]

    def test_no_source(self, tmp_path):
        """Test that capturing without a source fails."""
        from webdriver_trace.reporting.screenshot_manager import ScreenshotManager
        manager = ScreenshotManager(output_dir=str(tmp_path), run_id="none")

        with pytest.raises(RuntimeError):
            manager.capture()
        assert not (tmp_path / "none").exists()


class TestTestCaseExecution:
    """Test the TestCaseExecution recorder."""

    def test_step_record(self, recorder):
        """Test appending a step record."""
        from webdriver_trace.reporting import TestEventType

        event = recorder.append_step_record(3, "https://example.com", "webElement.click", 'By.id("go")')

        assert event.event_type is TestEventType.URL
        assert event.level == "INFO"
        assert event.value == "https://example.com"
        assert recorder.get_events() == [event]

    def test_screenshot_record(self, recorder):
        """Test appending a screenshot record."""
        from webdriver_trace.reporting import TestEventType

        event = recorder.append_screenshot_record(1, "/tmp/shot.png", cmd="webDriver.get")

        assert event.event_type is TestEventType.SCREENSHOT
        assert event.screenshot_path == "/tmp/shot.png"

    def test_exception_record(self, recorder):
        """Test appending a record for a failed command."""
        from webdriver_trace.events import Cmd, EventType, WebDriverEvent
        from webdriver_trace.reporting import TestEventType

        failed = WebDriverEvent(
            EventType.EXCEPTION, 2, Cmd.CLICK_BY_ELEMENT,
            locator='By.id("go")', param1="Exception Type: x, message: y",
        )
        event = recorder.append_exception_record(failed)

        assert event.event_type is TestEventType.EXCEPTION
        assert event.level == "WARNING"
        assert event.sequence_number == 2
        assert event.locator == 'By.id("go")'

    def test_filter_and_clear(self, recorder):
        """Test filtering by kind and clearing."""
        from webdriver_trace.reporting import TestEventType

        recorder.append_step_record(0, "u", "webDriver.get", "")
        recorder.append_screenshot_record(0, "/tmp/a.png")

        assert len(recorder.get_events_of_type(TestEventType.URL)) == 1
        recorder.clear()
        assert recorder.get_events() == []

    def test_export_json(self, recorder, tmp_path):
        """Test exporting records to JSON."""
        recorder.append_step_record(0, "https://example.com", "webDriver.get", "")
        path = tmp_path / "execution.json"

        recorder.export_json(path)

        data = json.loads(path.read_text())
        assert data["test_name"] == "test_login"
        assert data["trace_id"] == "trace-42"
        assert data["events"][0]["event_type"] == "url"
