"""
Listener Interface - Contract for consumers of trace records.

The dispatcher calls ``before_event``/``after_event`` around every command
and ``on_exception`` when a command fails. Implementations subscribe to the
commands they care about by inspecting ``event.cmd``; every hook is a no-op
by default.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, FrozenSet, List, Optional
import json
import logging

from webdriver_trace.events.event import Cmd, WebDriverEvent

logger = logging.getLogger(__name__)


class IEventListener(ABC):
    """
    Abstract interface for trace record consumers.
    """

    @abstractmethod
    def attach(self, driver: Any) -> None:
        """
        Bind the listener to the driver facade of its session.

        Args:
            driver: The RemoteWebDriver the listener observes
        """
        ...

    @abstractmethod
    def before_event(self, event: WebDriverEvent) -> None:
        """Called with the Before record of every command."""
        ...

    @abstractmethod
    def after_event(self, event: WebDriverEvent) -> None:
        """Called with the After record of every successful command."""
        ...

    @abstractmethod
    def on_exception(self, event: WebDriverEvent, cmd: Cmd, error: BaseException) -> None:
        """
        Called with the Exception record of a failed command.

        Args:
            event: The Exception record
            cmd: The command that was in flight
            error: The error about to be raised to the caller
        """
        ...

    @abstractmethod
    def get_list_of_events_recorded(self) -> List[WebDriverEvent]:
        """Snapshot of the records this listener kept."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Drop the kept records, e.g. between test cases."""
        ...


class AbstractEventListener(IEventListener):
    """
    Base class with no-op hooks and an owned, append-only log.

    Subclass this if you are only interested in some events.
    """

    def __init__(self) -> None:
        self._log_entries: List[WebDriverEvent] = []
        self._driver: Any = None

    def attach(self, driver: Any) -> None:
        self._driver = driver

    def before_event(self, event: WebDriverEvent) -> None:
        pass

    def after_event(self, event: WebDriverEvent) -> None:
        pass

    def on_exception(self, event: WebDriverEvent, cmd: Cmd, error: BaseException) -> None:
        pass

    def get_list_of_events_recorded(self) -> List[WebDriverEvent]:
        return self._log_entries.copy()

    def clear(self) -> None:
        self._log_entries.clear()

    def get_events_formatted(self) -> Optional[str]:
        """The kept records as text, one per line, or None if there are none."""
        if not self._log_entries:
            return None
        return "\n".join(str(e) for e in self._log_entries)

    def export_json(self, path: str | Path) -> None:
        """Export the kept records to a JSON file."""
        with open(path, "w") as f:
            json.dump({"logEntries": [e.to_dict() for e in self._log_entries]}, f, indent=2)


class TriggeredListener(AbstractEventListener):
    """
    Listener reacting to the Before record of a fixed set of commands.

    A sendKeys to the same locator as the previous processed sendKeys is
    skipped: it means a test types into one field character by character.
    Any other processed trigger resets that memory. Every instance keeps its
    own memory.
    """

    TRIGGERS: FrozenSet[Cmd] = frozenset({
        Cmd.GET,
        Cmd.TO,
        Cmd.BACK,
        Cmd.FORWARD,
        Cmd.CLOSE,
        Cmd.EXECUTE_SCRIPT,
        Cmd.CLICK_BY_ELEMENT,
        Cmd.CLEAR,
        Cmd.SUBMIT,
        Cmd.SEND_KEYS_BY_ELEMENT,
        Cmd.ACCEPT,
        Cmd.DISMISS,
        Cmd.SEND_KEYS_BY_ALERT,
    })

    def __init__(self) -> None:
        super().__init__()
        self._last_send_keys_locator: Optional[str] = None

    def before_event(self, event: WebDriverEvent) -> None:
        if self.is_triggered_by(event):
            self.on_trigger(event)

    def is_triggered_by(self, event: WebDriverEvent) -> bool:
        """Decide whether ``event`` triggers, updating the sendKeys memory."""
        if event.cmd not in self.TRIGGERS:
            return False

        # Only scripts that click count as a user step
        if event.cmd is Cmd.EXECUTE_SCRIPT and "click" not in (event.param1 or ""):
            return False

        if event.cmd is Cmd.SEND_KEYS_BY_ELEMENT:
            if not self._is_different_locator(event.locator):
                logger.debug(f"{type(self).__name__}: skipping repeated sendKeys to {event.locator}")
                return False
            self._last_send_keys_locator = event.locator
        else:
            self._last_send_keys_locator = None
        return True

    def _is_different_locator(self, locator: Optional[str]) -> bool:
        return self._last_send_keys_locator is None or locator != self._last_send_keys_locator

    @abstractmethod
    def on_trigger(self, event: WebDriverEvent) -> None:
        """Handle a triggering Before record."""
        ...
