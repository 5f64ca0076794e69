"""
Sequencer - Assign sequence numbers to trace records.

Numbers index state-changing steps only: a completed Action advances the
counter, Gather commands are numbered alongside the last Action so that
"the Nth action" can be correlated without read-only noise.
"""

from dataclasses import replace
from datetime import datetime
from typing import Any, Optional

from webdriver_trace.events.event import Cmd, EventType, WebDriverEvent


class Sequencer:
    """
    Build Before/After/Exception records and own the sequence counter.

    Example:
        >>> seq = Sequencer()
        >>> before = seq.begin_action(Cmd.GET, param1="https://example.com")
        >>> after = seq.complete_action(before)
        >>> (before.sequence_number, after.sequence_number, seq.current)
        (0, 0, 1)
    """

    def __init__(self, start: int = 0):
        self._counter = start

    @property
    def current(self) -> int:
        """Number the next record will carry."""
        return self._counter

    def begin_action(self, cmd: Cmd, **fields: Any) -> WebDriverEvent:
        """Build a BeforeAction record. Does not advance the counter."""
        return WebDriverEvent(EventType.BEFORE_ACTION, self._counter, cmd, **fields)

    def complete_action(
        self,
        before: WebDriverEvent,
        return_value: Optional[str] = None,
        return_object: Any = None,
    ) -> WebDriverEvent:
        """Build the AfterAction record for ``before``, then advance the counter."""
        event = self._complete(before, EventType.AFTER_ACTION, return_value, return_object)
        self._counter += 1
        return event

    def begin_gather(self, cmd: Cmd, **fields: Any) -> WebDriverEvent:
        """Build a BeforeGather record."""
        return WebDriverEvent(EventType.BEFORE_GATHER, self._counter, cmd, **fields)

    def complete_gather(
        self,
        before: WebDriverEvent,
        return_value: Optional[str] = None,
        return_object: Any = None,
    ) -> WebDriverEvent:
        """Build the AfterGather record for ``before``."""
        return self._complete(before, EventType.AFTER_GATHER, return_value, return_object)

    def begin(self, cmd: Cmd, **fields: Any) -> WebDriverEvent:
        """Build the Before record matching the command's kind."""
        if cmd.is_action:
            return self.begin_action(cmd, **fields)
        return self.begin_gather(cmd, **fields)

    def complete(
        self,
        before: WebDriverEvent,
        return_value: Optional[str] = None,
        return_object: Any = None,
    ) -> WebDriverEvent:
        """Build the After record matching the Before record's kind."""
        if before.event_type is EventType.BEFORE_ACTION:
            return self.complete_action(before, return_value, return_object)
        return self.complete_gather(before, return_value, return_object)

    def exception_event(self, pending: WebDriverEvent, error: BaseException) -> WebDriverEvent:
        """Build the Exception record correlated to ``pending``."""
        error_type = f"{type(error).__module__}.{type(error).__qualname__}"
        message = getattr(error, "message", None) or str(error)
        return WebDriverEvent(
            EventType.EXCEPTION,
            self._counter,
            pending.cmd,
            locator=pending.locator,
            param1=f"Exception Type: {error_type}, message: {message}",
            return_object=error,
        )

    def _complete(
        self,
        before: WebDriverEvent,
        event_type: EventType,
        return_value: Optional[str],
        return_object: Any,
    ) -> WebDriverEvent:
        return replace(
            before,
            event_type=event_type,
            sequence_number=self._counter,
            return_value=return_value,
            return_object=return_object,
            timestamp=datetime.now(),
        )
