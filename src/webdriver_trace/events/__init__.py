"""
Events module - Trace records, sequencing and dispatch.
"""

from webdriver_trace.events.event import (
    PASSWORD_MASK,
    EventType,
    Cmd,
    GATHER_COMMANDS,
    WebDriverEvent,
    locator_of,
    mask_text_if_password,
    format_script_args,
    summarize_elements,
)
from webdriver_trace.events.sequencer import Sequencer
from webdriver_trace.events.dispatcher import EventDispatcher, SessionContext

__all__ = [
    "PASSWORD_MASK",
    "EventType",
    "Cmd",
    "GATHER_COMMANDS",
    "WebDriverEvent",
    "locator_of",
    "mask_text_if_password",
    "format_script_args",
    "summarize_elements",
    "Sequencer",
    "EventDispatcher",
    "SessionContext",
]
