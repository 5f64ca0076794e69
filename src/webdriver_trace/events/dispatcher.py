"""
Event Dispatcher - Fan every command out to the registered listeners.

One dispatcher belongs to one driver session. It holds the sequence counter
and the pending event, and calls the listeners in registration order around
every command. Listener failures are not isolated: they propagate to the
caller like any other error.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple, TYPE_CHECKING
import logging

from webdriver_trace.events.event import Cmd, WebDriverEvent
from webdriver_trace.events.sequencer import Sequencer

if TYPE_CHECKING:
    from webdriver_trace.listeners.base import IEventListener

logger = logging.getLogger(__name__)

# Set on errors that were already replayed through the listeners
REPLAYED_MARKER = "_webdriver_trace_replayed"


@dataclass
class SessionContext:
    """
    Capabilities negotiated once when a session starts.

    Attributes:
        session_id: Remote session id, None before the session exists
        capabilities: Raw capabilities returned by the remote end
        takes_screenshot: Whether listeners may request screenshots
        javascript_enabled: Whether scripts may be run in the page
    """
    session_id: Optional[str] = None
    capabilities: Dict[str, Any] = field(default_factory=dict)
    takes_screenshot: bool = True
    javascript_enabled: bool = True

    @classmethod
    def from_capabilities(cls, session_id: Optional[str], capabilities: Dict[str, Any]) -> "SessionContext":
        """Derive the capability flags from a new-session response."""
        return cls(
            session_id=session_id,
            capabilities=dict(capabilities),
            takes_screenshot=bool(capabilities.get("takesScreenshot", True)),
            javascript_enabled=bool(capabilities.get("javascriptEnabled", True)),
        )


class EventDispatcher:
    """
    Coordinate Before/After/Exception records for one session.

    Example:
        >>> dispatcher = EventDispatcher([FullListener()])
        >>> before = dispatcher.before(Cmd.GET, param1="https://example.com")
        >>> # ... perform the real call ...
        >>> dispatcher.after(before)
    """

    def __init__(self, listeners: Iterable["IEventListener"] = ()):
        """
        Initialize the dispatcher.

        Args:
            listeners: Listeners to notify, in the order they are called
        """
        self._listeners: Tuple["IEventListener", ...] = tuple(listeners)
        self._sequencer = Sequencer()
        self._current_event: Optional[WebDriverEvent] = None

    @property
    def listeners(self) -> Tuple["IEventListener", ...]:
        """The registered listeners (read-only)."""
        return self._listeners

    @property
    def current_event(self) -> Optional[WebDriverEvent]:
        """The most recent Before record, or None if no command ran yet."""
        return self._current_event

    @property
    def sequence_number(self) -> int:
        return self._sequencer.current

    def attach(self, driver: Any) -> None:
        """Bind every listener to the driver facade."""
        for listener in self._listeners:
            listener.attach(driver)

    def before(
        self,
        cmd: Cmd,
        *,
        locator: Optional[str] = None,
        param1: Optional[str] = None,
        param2: Optional[str] = None,
    ) -> WebDriverEvent:
        """
        Record the start of a command.

        Args:
            cmd: The command about to run
            locator: Description of the target element
            param1: First parameter
            param2: Second parameter

        Returns:
            The Before record, to be passed to after()
        """
        event = self._sequencer.begin(cmd, locator=locator, param1=param1, param2=param2)
        self._current_event = event
        for listener in self._listeners:
            listener.before_event(event)
        return event

    def after(
        self,
        before_event: WebDriverEvent,
        *,
        return_value: Optional[str] = None,
        return_object: Any = None,
    ) -> WebDriverEvent:
        """
        Record the successful completion of a command.

        Args:
            before_event: Record returned by before()
            return_value: String summary of the result
            return_object: The raw result

        Returns:
            The After record
        """
        event = self._sequencer.complete(before_event, return_value, return_object)
        for listener in self._listeners:
            listener.after_event(event)
        return event

    def on_exception(self, command_name: Optional[str], error: BaseException) -> None:
        """
        Replay an error through all listeners.

        Without a pending event no session or command was in flight and the
        error is discarded. An error is replayed at most once, however many
        layers it passes through on its way to the caller.

        Args:
            command_name: Transport-level name of the failed command
            error: The error about to be raised to the caller
        """
        pending = self._current_event
        if pending is None:
            logger.debug(f"Discarding exception for {command_name}: no command in flight")
            return
        if getattr(error, REPLAYED_MARKER, False):
            return
        setattr(error, REPLAYED_MARKER, True)

        event = self._sequencer.exception_event(pending, error)
        for listener in self._listeners:
            listener.on_exception(event, pending.cmd, error)
