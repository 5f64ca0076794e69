"""
Pytest configuration and fixtures.
"""

import base64
from typing import Any, Callable, Dict, List, Optional

import pytest

from webdriver_trace.remote.command import Command, DriverCommand, Response
from webdriver_trace.remote.webelement import W3C_ELEMENT_KEY

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


class MockCommandExecutor:
    """
    Transport double answering commands from canned values.

    Handlers are keyed by command name; a handler is either a plain value or
    a callable receiving the Command. Returning a Response uses it as-is.
    """

    def __init__(self, session_id: str = "session-1", capabilities: Optional[Dict[str, Any]] = None):
        self.session_id = session_id
        self.capabilities = capabilities or {"browserName": "chrome", "platformName": "linux"}
        self.commands: List[Command] = []
        self.errors: Dict[str, BaseException] = {}
        self.handlers: Dict[str, Any] = {
            DriverCommand.GET_CURRENT_URL: "https://example.com/home",
            DriverCommand.GET_TITLE: "Example",
            DriverCommand.SCREENSHOT: base64.b64encode(PNG_BYTES).decode("ascii"),
            DriverCommand.FIND_ELEMENT: self._find_element,
            DriverCommand.FIND_ELEMENTS: self._find_elements,
            DriverCommand.FIND_CHILD_ELEMENT: self._find_element,
            DriverCommand.FIND_CHILD_ELEMENTS: self._find_elements,
        }
        self._next_element = 0

    def on(self, name: str, handler: Any) -> None:
        self.handlers[name] = handler

    def fail(self, name: str, state: str, message: str = "") -> None:
        """Answer ``name`` with a failed response."""
        self.handlers[name] = self.failure(state, message)

    def raise_on(self, name: str, error: BaseException) -> None:
        """Make the transport itself raise on ``name``."""
        self.errors[name] = error

    def failure(self, state: str, message: str = "") -> Response:
        return Response(self.session_id, 13, state, {"message": message or state})

    def element_ref(self) -> Dict[str, str]:
        self._next_element += 1
        return {W3C_ELEMENT_KEY: f"element-{self._next_element}"}

    def names(self) -> List[str]:
        return [c.name for c in self.commands]

    def execute(self, command: Command) -> Optional[Response]:
        self.commands.append(command)
        if command.name in self.errors:
            raise self.errors[command.name]

        if command.name == DriverCommand.NEW_SESSION:
            return Response(
                self.session_id,
                0,
                "success",
                {"sessionId": self.session_id, "capabilities": dict(self.capabilities)},
            )

        handler = self.handlers.get(command.name)
        value = handler(command) if callable(handler) else handler
        if isinstance(value, Response):
            return value
        return Response(self.session_id, 0, "success", value)

    def _find_element(self, command: Command) -> Any:
        # W3C remote ends do not know the "id" strategy
        if command.parameters["using"] == "id":
            return self.failure("invalid argument", "invalid locator")
        return self.element_ref()

    def _find_elements(self, command: Command) -> Any:
        if command.parameters["using"] == "id":
            return self.failure("invalid argument", "invalid locator")
        return [self.element_ref(), self.element_ref(), self.element_ref()]


@pytest.fixture
def executor():
    """Provide a mock command executor."""
    return MockCommandExecutor()


@pytest.fixture
def settings(tmp_path):
    """Provide test settings."""
    from webdriver_trace.config import Settings, ScreenshotSettings

    return Settings(
        capture_screenshots=False,
        screenshots=ScreenshotSettings(output_dir=str(tmp_path / "screenshots")),
    )


@pytest.fixture
def recorder():
    """Provide an in-memory test case recorder."""
    from webdriver_trace.reporting import TestCaseExecution

    return TestCaseExecution(test_name="test_login", trace_id="trace-42")


@pytest.fixture
def listeners(recorder, settings):
    """Provide one listener of each kind, sharing the recorder."""
    from webdriver_trace.listeners import FullListener, ScreenshotListener, TestStepListener

    return {
        "full": FullListener(recorder),
        "screenshot": ScreenshotListener(recorder, settings=settings),
        "step": TestStepListener(recorder),
    }


@pytest.fixture
def driver(executor, listeners, settings):
    """Provide a driver with all listeners attached."""
    from webdriver_trace.remote import RemoteWebDriver

    return RemoteWebDriver(
        executor,
        {"browserName": "chrome"},
        listeners=[listeners["full"], listeners["screenshot"], listeners["step"]],
        settings=settings,
    )


@pytest.fixture(autouse=True)
def isolated_settings():
    """Reset the global settings around every test."""
    from webdriver_trace.config import reset_settings

    reset_settings()
    yield
    reset_settings()
