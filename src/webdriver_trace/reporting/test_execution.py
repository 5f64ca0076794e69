"""
Test Execution - Derived records for one test case.

Listeners append screenshot, URL and exception records here; each carries
the sequence number of the trace record that triggered it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, TYPE_CHECKING
import json
import logging

if TYPE_CHECKING:
    from webdriver_trace.events.event import WebDriverEvent

logger = logging.getLogger(__name__)


class TestEventType(Enum):
    """Kind of derived record."""
    __test__ = False

    SCREENSHOT = "screenshot"
    URL = "url"
    EXCEPTION = "exception"


@dataclass
class TestEvent:
    """
    A derived record in a test case execution.

    Attributes:
        event_type: Kind of record
        level: Log level name (INFO, WARNING, ...)
        sequence_number: Number of the triggering trace record
        cmd: Long command string of the triggering command
        locator: Locator of the target element
        value: URL for step records, description for exception records
        screenshot_path: Path to the screenshot artifact
        timestamp: When the record was created
    """
    __test__ = False

    event_type: TestEventType
    level: str
    sequence_number: int
    cmd: str = ""
    locator: str = ""
    value: str = ""
    screenshot_path: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "level": self.level,
            "sequence_number": self.sequence_number,
            "cmd": self.cmd,
            "locator": self.locator,
            "value": self.value,
            "screenshot_path": self.screenshot_path,
        }


class TestExecutionRecorder(Protocol):
    """What listeners need from a test execution recorder."""

    trace_id: str

    def append_screenshot_record(
        self,
        sequence_number: int,
        path: str,
        cmd: str = "",
        locator: str = "",
    ) -> TestEvent:
        ...

    def append_step_record(
        self,
        sequence_number: int,
        url: str,
        cmd: str,
        locator: str,
    ) -> TestEvent:
        ...

    def append_exception_record(self, event: "WebDriverEvent") -> TestEvent:
        ...


class TestCaseExecution:
    """
    In-memory recorder for one test case.

    Example:
        >>> execution = TestCaseExecution(test_name="test_login")
        >>> execution.append_step_record(3, "https://example.com", "webElement.click", 'By.id("login")')
        >>> execution.get_events()[0].event_type
        <TestEventType.URL: 'url'>
    """

    # Not a pytest test class
    __test__ = False

    def __init__(self, test_name: str = "", trace_id: str = ""):
        """
        Initialize the recorder.

        Args:
            test_name: Name of the test case
            trace_id: Trace id propagated to the system under test
        """
        self.test_name = test_name
        self.trace_id = trace_id
        self._events: List[TestEvent] = []

    def append_event(self, event: TestEvent) -> TestEvent:
        """Append a derived record."""
        self._events.append(event)
        log_method = getattr(logger, event.level.lower(), logger.info)
        log_method(f"[{event.sequence_number}] {event.event_type.value} {event.cmd} {event.locator}".rstrip())
        return event

    def append_screenshot_record(
        self,
        sequence_number: int,
        path: str,
        cmd: str = "",
        locator: str = "",
    ) -> TestEvent:
        """Append a screenshot record."""
        return self.append_event(TestEvent(
            event_type=TestEventType.SCREENSHOT,
            level="INFO",
            sequence_number=sequence_number,
            cmd=cmd,
            locator=locator,
            screenshot_path=str(path),
        ))

    def append_step_record(
        self,
        sequence_number: int,
        url: str,
        cmd: str,
        locator: str,
    ) -> TestEvent:
        """Append a test step record."""
        return self.append_event(TestEvent(
            event_type=TestEventType.URL,
            level="INFO",
            sequence_number=sequence_number,
            cmd=cmd,
            locator=locator or "",
            value=url,
        ))

    def append_exception_record(self, event: "WebDriverEvent") -> TestEvent:
        """Append a WARNING record for a failed command."""
        return self.append_event(TestEvent(
            event_type=TestEventType.EXCEPTION,
            level="WARNING",
            sequence_number=event.sequence_number,
            cmd=event.cmd.long_cmd_string,
            locator=event.locator or "",
            value=(event.param1 or "") + (event.param2 or ""),
        ))

    def get_events(self) -> List[TestEvent]:
        """Get all records."""
        return self._events.copy()

    def get_events_of_type(self, event_type: TestEventType) -> List[TestEvent]:
        """Get all records of one kind."""
        return [e for e in self._events if e.event_type is event_type]

    def clear(self) -> None:
        """Drop all records, e.g. between test cases."""
        self._events.clear()

    def export_json(self, path: str | Path) -> None:
        """Export records to JSON file."""
        data = {
            "test_name": self.test_name,
            "trace_id": self.trace_id,
            "events": [e.to_dict() for e in self._events],
        }
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
