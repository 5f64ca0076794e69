"""
Commands - Wire-level command names, payloads and responses.

The transport itself is an external collaborator: anything implementing
``CommandExecutor.execute(command) -> Response`` can drive a session.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@dataclass
class CommandPayload:
    """Name and parameters of a command, before it is bound to a session."""
    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Command:
    """A payload bound to a session."""
    session_id: Optional[str]
    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, session_id: Optional[str], payload: CommandPayload) -> "Command":
        return cls(session_id, payload.name, dict(payload.parameters))

    def __str__(self) -> str:
        return f"[{self.session_id}, {self.name} {self.parameters}]"


@dataclass
class Response:
    """
    What the remote end answered.

    Attributes:
        session_id: Session the response belongs to
        status: 0 on success, anything else is a failure
        state: W3C error code such as "no such element", "success" on success
        value: Decoded response value
    """
    session_id: Optional[str] = None
    status: int = 0
    state: str = "success"
    value: Any = None

    @property
    def is_success(self) -> bool:
        return self.status == 0

    def __str__(self) -> str:
        return f"(Response: SessionID: {self.session_id}, State: {self.state}, Value: {self.value})"


@runtime_checkable
class CommandExecutor(Protocol):
    """Transport sending commands to the remote end."""

    def execute(self, command: Command) -> Optional[Response]:
        ...


class DriverCommand:
    """
    Command names understood by the remote end, and payload factories for
    the commands that take parameters.
    """

    NEW_SESSION = "newSession"
    QUIT = "quit"
    CLOSE = "close"

    GET = "get"
    GET_CURRENT_URL = "getCurrentUrl"
    GET_TITLE = "getTitle"
    GET_PAGE_SOURCE = "getPageSource"
    GO_BACK = "goBack"
    GO_FORWARD = "goForward"
    REFRESH = "refresh"

    SCREENSHOT = "screenshot"
    ELEMENT_SCREENSHOT = "elementScreenshot"

    FIND_ELEMENT = "findElement"
    FIND_ELEMENTS = "findElements"
    FIND_CHILD_ELEMENT = "findChildElement"
    FIND_CHILD_ELEMENTS = "findChildElements"
    FIND_ELEMENT_FROM_SHADOW_ROOT = "findElementFromShadowRoot"
    FIND_ELEMENTS_FROM_SHADOW_ROOT = "findElementsFromShadowRoot"

    EXECUTE_SCRIPT = "executeScript"
    EXECUTE_ASYNC_SCRIPT = "executeAsyncScript"

    ACTIONS = "actions"
    CLEAR_ACTIONS_STATE = "clearActionState"

    GET_WINDOW_HANDLES = "getWindowHandles"
    GET_CURRENT_WINDOW_HANDLE = "getCurrentWindowHandle"
    SWITCH_TO_WINDOW = "switchToWindow"
    SWITCH_TO_NEW_WINDOW = "newWindow"
    SWITCH_TO_FRAME = "switchToFrame"
    SWITCH_TO_PARENT_FRAME = "switchToParentFrame"
    GET_ACTIVE_ELEMENT = "getActiveElement"

    ADD_COOKIE = "addCookie"
    GET_ALL_COOKIES = "getCookies"
    GET_COOKIE = "getCookie"
    DELETE_COOKIE = "deleteCookie"
    DELETE_ALL_COOKIES = "deleteAllCookies"

    SET_TIMEOUTS = "setTimeouts"

    GET_WINDOW_RECT = "getWindowRect"
    SET_WINDOW_RECT = "setWindowRect"
    MAXIMIZE_WINDOW = "maximizeWindow"
    MINIMIZE_WINDOW = "minimizeWindow"
    FULLSCREEN_WINDOW = "fullscreenWindow"

    DISMISS_ALERT = "dismissAlert"
    ACCEPT_ALERT = "acceptAlert"
    GET_ALERT_TEXT = "getAlertText"
    SET_ALERT_VALUE = "setAlertValue"

    CLICK_ELEMENT = "clickElement"
    SUBMIT_ELEMENT = "submitElement"
    SEND_KEYS_TO_ELEMENT = "sendKeysToElement"
    UPLOAD_FILE = "uploadFile"
    CLEAR_ELEMENT = "clearElement"
    GET_ELEMENT_ATTRIBUTE = "getElementAttribute"
    GET_ELEMENT_DOM_ATTRIBUTE = "getElementDomAttribute"
    GET_ELEMENT_DOM_PROPERTY = "getElementProperty"
    GET_ELEMENT_ARIA_ROLE = "getElementAriaRole"
    GET_ELEMENT_ACCESSIBLE_NAME = "getElementAccessibleName"
    GET_ELEMENT_TAG_NAME = "getElementTagName"
    IS_ELEMENT_SELECTED = "isElementSelected"
    IS_ELEMENT_ENABLED = "isElementEnabled"
    IS_ELEMENT_DISPLAYED = "isElementDisplayed"
    GET_ELEMENT_TEXT = "getElementText"
    GET_ELEMENT_VALUE_OF_CSS_PROPERTY = "getElementValueOfCssProperty"
    GET_ELEMENT_RECT = "getElementRect"
    GET_ELEMENT_SHADOW_ROOT = "getElementShadowRoot"

    # Payload factories

    @staticmethod
    def new_session(capabilities: Dict[str, Any]) -> CommandPayload:
        return CommandPayload(
            DriverCommand.NEW_SESSION,
            {"capabilities": {"firstMatch": [{}], "alwaysMatch": dict(capabilities)}},
        )

    @staticmethod
    def get(url: str) -> CommandPayload:
        return CommandPayload(DriverCommand.GET, {"url": url})

    @staticmethod
    def find_element(using: str, value: str) -> CommandPayload:
        return CommandPayload(DriverCommand.FIND_ELEMENT, {"using": using, "value": value})

    @staticmethod
    def find_elements(using: str, value: str) -> CommandPayload:
        return CommandPayload(DriverCommand.FIND_ELEMENTS, {"using": using, "value": value})

    @staticmethod
    def find_child_element(element_id: str, using: str, value: str) -> CommandPayload:
        return CommandPayload(
            DriverCommand.FIND_CHILD_ELEMENT,
            {"id": element_id, "using": using, "value": value},
        )

    @staticmethod
    def find_child_elements(element_id: str, using: str, value: str) -> CommandPayload:
        return CommandPayload(
            DriverCommand.FIND_CHILD_ELEMENTS,
            {"id": element_id, "using": using, "value": value},
        )

    @staticmethod
    def find_element_from_shadow_root(shadow_id: str, using: str, value: str) -> CommandPayload:
        return CommandPayload(
            DriverCommand.FIND_ELEMENT_FROM_SHADOW_ROOT,
            {"shadowId": shadow_id, "using": using, "value": value},
        )

    @staticmethod
    def find_elements_from_shadow_root(shadow_id: str, using: str, value: str) -> CommandPayload:
        return CommandPayload(
            DriverCommand.FIND_ELEMENTS_FROM_SHADOW_ROOT,
            {"shadowId": shadow_id, "using": using, "value": value},
        )

    @staticmethod
    def execute_script(script: str, args: List[Any]) -> CommandPayload:
        return CommandPayload(DriverCommand.EXECUTE_SCRIPT, {"script": script, "args": args})

    @staticmethod
    def execute_async_script(script: str, args: List[Any]) -> CommandPayload:
        return CommandPayload(DriverCommand.EXECUTE_ASYNC_SCRIPT, {"script": script, "args": args})

    @staticmethod
    def element(command_name: str, element_id: str, **parameters: Any) -> CommandPayload:
        """Payload of a command addressed to one element."""
        return CommandPayload(command_name, {"id": element_id, **parameters})

    @staticmethod
    def send_keys_to_element(element_id: str, text: str) -> CommandPayload:
        return CommandPayload(
            DriverCommand.SEND_KEYS_TO_ELEMENT,
            {"id": element_id, "text": text, "value": list(text)},
        )

    @staticmethod
    def upload_file(zipped_file: str) -> CommandPayload:
        return CommandPayload(DriverCommand.UPLOAD_FILE, {"file": zipped_file})
