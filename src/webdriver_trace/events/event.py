"""
WebDriver Event - The correlated record of one command invocation.

Every driver or element command produces a Before record and, depending on
the outcome, an After or an Exception record. Records are numbered by the
dispatcher's sequencer: only completed Action commands advance the number,
Gather commands share the number of the last Action.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

PASSWORD_MASK = "********"


class EventType(Enum):
    """Phase of a command a record was taken in."""
    BEFORE_ACTION = "BeforeAction"
    AFTER_ACTION = "AfterAction"
    BEFORE_GATHER = "BeforeGather"
    AFTER_GATHER = "AfterGather"
    EXCEPTION = "Exception"

    @property
    def is_before(self) -> bool:
        return self in (EventType.BEFORE_ACTION, EventType.BEFORE_GATHER)

    @property
    def is_after(self) -> bool:
        return self in (EventType.AFTER_ACTION, EventType.AFTER_GATHER)


class Cmd(Enum):
    """
    Closed set of instrumented commands.

    The value is the long command string used in derived records,
    e.g. ``"webElement.click"``.
    """
    # WebDriver
    GET = "webDriver.get"
    GET_TITLE = "webDriver.getTitle"
    GET_CURRENT_URL = "webDriver.getCurrentUrl"
    GET_SCREENSHOT_AS = "webDriver.getScreenshotAs"
    FIND_ELEMENT = "webDriver.findElement"
    FIND_ELEMENTS = "webDriver.findElements"
    GET_PAGE_SOURCE = "webDriver.getPageSource"
    CLOSE = "webDriver.close"
    QUIT = "webDriver.quit"
    GET_WINDOW_HANDLES = "webDriver.getWindowHandles"
    GET_WINDOW_HANDLE = "webDriver.getWindowHandle"
    EXECUTE_SCRIPT = "webDriver.executeScript"
    EXECUTE_ASYNC_SCRIPT = "webDriver.executeAsyncScript"
    PERFORM = "webDriver.perform"
    RESET_INPUT_STATE = "webDriver.resetInputState"

    # WebDriver.Options
    ADD_COOKIE = "webDriver.manage.addCookie"
    DELETE_COOKIE_NAMED = "webDriver.manage.deleteCookieNamed"
    DELETE_ALL_COOKIES = "webDriver.manage.deleteAllCookies"
    GET_COOKIES = "webDriver.manage.getCookies"
    GET_COOKIE_NAMED = "webDriver.manage.getCookieNamed"

    # WebDriver.Timeouts
    IMPLICITLY_WAIT = "webDriver.manage.timeouts.implicitlyWait"
    SET_SCRIPT_TIMEOUT = "webDriver.manage.timeouts.setScriptTimeout"
    PAGE_LOAD_TIMEOUT = "webDriver.manage.timeouts.pageLoadTimeout"

    # WebDriver.Window
    SET_SIZE_BY_WINDOW = "webDriver.manage.window.setSize"
    SET_POSITION = "webDriver.manage.window.setPosition"
    GET_SIZE_BY_WINDOW = "webDriver.manage.window.getSize"
    GET_POSITION = "webDriver.manage.window.getPosition"
    MAXIMIZE = "webDriver.manage.window.maximize"
    MINIMIZE = "webDriver.manage.window.minimize"
    FULLSCREEN = "webDriver.manage.window.fullscreen"

    # WebDriver.Navigation
    BACK = "webDriver.navigate.back"
    FORWARD = "webDriver.navigate.forward"
    REFRESH = "webDriver.navigate.refresh"
    TO = "webDriver.navigate.to"

    # WebDriver.TargetLocator
    FRAME_BY_INDEX = "webDriver.switchTo.frameByIndex"
    FRAME_BY_NAME = "webDriver.switchTo.frameByName"
    FRAME_BY_ELEMENT = "webDriver.switchTo.frameByElement"
    PARENT_FRAME = "webDriver.switchTo.parentFrame"
    WINDOW = "webDriver.switchTo.window"
    NEW_WINDOW = "webDriver.switchTo.newWindow"
    DEFAULT_CONTENT = "webDriver.switchTo.defaultContent"
    ACTIVE_ELEMENT = "webDriver.switchTo.activeElement"

    # Alert
    DISMISS = "webDriver.switchTo.alert.dismiss"
    ACCEPT = "webDriver.switchTo.alert.accept"
    GET_TEXT_BY_ALERT = "webDriver.switchTo.alert.getText"
    SEND_KEYS_BY_ALERT = "webDriver.switchTo.alert.sendKeys"

    # WebElement
    CLICK_BY_ELEMENT = "webElement.click"
    SUBMIT = "webElement.submit"
    SEND_KEYS_BY_ELEMENT = "webElement.sendKeys"
    UPLOAD_FILE = "webElement.uploadFile"
    CLEAR = "webElement.clear"
    GET_ATTRIBUTE = "webElement.getAttribute"
    GET_DOM_ATTRIBUTE = "webElement.getDomAttribute"
    GET_DOM_PROPERTY = "webElement.getDomProperty"
    GET_ARIA_ROLE = "webElement.getAriaRole"
    GET_ACCESSIBLE_NAME = "webElement.getAccessibleName"
    GET_TAG_NAME = "webElement.getTagName"
    IS_SELECTED = "webElement.isSelected"
    IS_ENABLED = "webElement.isEnabled"
    IS_DISPLAYED = "webElement.isDisplayed"
    GET_TEXT = "webElement.getText"
    GET_CSS_VALUE = "webElement.getCssValue"
    GET_LOCATION = "webElement.getLocation"
    GET_SIZE_BY_ELEMENT = "webElement.getSize"
    GET_RECT = "webElement.getRect"
    GET_SCREENSHOT_AS_BY_ELEMENT = "webElement.getScreenshotAs"
    GET_SHADOW_ROOT = "webElement.getShadowRoot"

    @property
    def long_cmd_string(self) -> str:
        return self.value

    @property
    def is_action(self) -> bool:
        """True if the command changes browser or session state."""
        return self not in GATHER_COMMANDS


# Read-only commands; everything else is an Action
GATHER_COMMANDS = frozenset({
    Cmd.GET_TITLE,
    Cmd.GET_CURRENT_URL,
    Cmd.GET_SCREENSHOT_AS,
    Cmd.FIND_ELEMENT,
    Cmd.FIND_ELEMENTS,
    Cmd.GET_PAGE_SOURCE,
    Cmd.GET_WINDOW_HANDLES,
    Cmd.GET_WINDOW_HANDLE,
    Cmd.GET_COOKIES,
    Cmd.GET_COOKIE_NAMED,
    Cmd.GET_SIZE_BY_WINDOW,
    Cmd.GET_POSITION,
    Cmd.GET_TEXT_BY_ALERT,
    Cmd.GET_ATTRIBUTE,
    Cmd.GET_DOM_ATTRIBUTE,
    Cmd.GET_DOM_PROPERTY,
    Cmd.GET_ARIA_ROLE,
    Cmd.GET_ACCESSIBLE_NAME,
    Cmd.GET_TAG_NAME,
    Cmd.IS_SELECTED,
    Cmd.IS_ENABLED,
    Cmd.IS_DISPLAYED,
    Cmd.GET_TEXT,
    Cmd.GET_CSS_VALUE,
    Cmd.GET_LOCATION,
    Cmd.GET_SIZE_BY_ELEMENT,
    Cmd.GET_RECT,
    Cmd.GET_SCREENSHOT_AS_BY_ELEMENT,
    Cmd.GET_SHADOW_ROOT,
})


@dataclass(frozen=True)
class WebDriverEvent:
    """
    A single trace record.

    Attributes:
        event_type: Phase of the command
        sequence_number: Number of the Action this record belongs to
        cmd: The command
        locator: Description of the target element, if any
        param1: First free-form parameter
        param2: Second free-form parameter
        return_value: String summary of the command's result
        return_object: The raw result; process-internal, never serialized
        timestamp: When the record was created
    """
    event_type: EventType
    sequence_number: int
    cmd: Cmd
    locator: Optional[str] = None
    param1: Optional[str] = None
    param2: Optional[str] = None
    return_value: Optional[str] = None
    return_object: Any = field(default=None, repr=False, compare=False)
    timestamp: datetime = field(default_factory=datetime.now, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "sequence_number": self.sequence_number,
            "cmd": self.cmd.long_cmd_string,
            "locator": self.locator,
            "param1": self.param1,
            "param2": self.param2,
            "return_value": self.return_value,
        }

    def __str__(self) -> str:
        parts = [f"{self.event_type.value} #{self.sequence_number} {self.cmd.long_cmd_string}"]
        if self.locator:
            parts.append(f"locator={self.locator}")
        if self.param1 is not None:
            parts.append(f"param1={self.param1}")
        if self.param2 is not None:
            parts.append(f"param2={self.param2}")
        if self.return_value is not None:
            parts.append(f"return={self.return_value}")
        return " ".join(parts)


def locator_of(element: Any) -> str:
    """Describe the locator an element was found by."""
    description = getattr(element, "locator_description", None)
    if description:
        return description
    return str(element)


def mask_text_if_password(locator: Optional[str], keys: Sequence[str]) -> str:
    """Return the keys as text, or a fixed mask if the target looks like a password field."""
    if locator and "password" in locator.lower():
        return PASSWORD_MASK
    return "".join(str(k) for k in keys)


def format_script_args(args: Iterable[Any]) -> Optional[str]:
    """
    Render script arguments for a record.

    Strings, booleans and numbers are rendered as-is, elements by their
    locator. Anything else is rendered with ``str`` without drilling deeper.
    """
    rendered: List[str] = []
    for arg in args:
        if isinstance(arg, (str, bool, int, float)):
            rendered.append(str(arg))
        elif hasattr(arg, "locator_description"):
            rendered.append(locator_of(arg))
        else:
            rendered.append(str(arg))
    if not rendered:
        return None
    return ",".join(rendered)


def summarize_elements(elements: Sequence[Any]) -> Optional[str]:
    """Summarize a lookup result as ``"<first> and N more"``."""
    if not elements:
        return None
    first = locator_of(elements[0])
    if len(elements) == 1:
        return first
    return f"{first} and {len(elements) - 1} more"
