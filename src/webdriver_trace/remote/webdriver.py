"""
Remote WebDriver - Driver facade whose commands are traced.

Every public operation runs through ``dispatch``: a Before record, the real
transport call, then an After record. Transport calls go through
``execute``, which classifies and annotates errors and replays them through
the listeners before re-raising them.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union, TYPE_CHECKING
import base64
import logging
import threading
import time

from webdriver_trace.config import get_settings
from webdriver_trace.events.dispatcher import EventDispatcher, SessionContext
from webdriver_trace.events.event import (
    Cmd,
    format_script_args,
    locator_of,
    summarize_elements,
)
from webdriver_trace.exceptions import (
    SessionNotCreatedError,
    StaleElementReferenceError,
    UnreachableBrowserError,
    WebDriverError,
)
from webdriver_trace.locators.by import By
from webdriver_trace.locators.element_location import CreatePayload, ElementLocation
from webdriver_trace.remote.command import (
    Command,
    CommandExecutor,
    CommandPayload,
    DriverCommand,
    Response,
)
from webdriver_trace.remote.error_handler import ErrorHandler
from webdriver_trace.remote.file_detector import FileDetector, UselessFileDetector
from webdriver_trace.remote.switch_to import SwitchTo
from webdriver_trace.remote.webelement import (
    LEGACY_ELEMENT_KEY,
    SHADOW_ROOT_KEY,
    W3C_ELEMENT_KEY,
    RemoteWebElement,
    ShadowRoot,
)

if TYPE_CHECKING:
    from webdriver_trace.config.settings import Settings
    from webdriver_trace.listeners.base import IEventListener

logger = logging.getLogger(__name__)

# Scripts starting with this tag run without producing trace records
UNTRACED_SCRIPT_TAG = "webdriver-trace:"

BORDER_SCRIPT = "arguments[0].style.border='3px solid {color}'"

SCRIPT_COMMANDS = frozenset({DriverCommand.EXECUTE_SCRIPT, DriverCommand.EXECUTE_ASYNC_SCRIPT})
SCREENSHOT_COMMANDS = frozenset({DriverCommand.SCREENSHOT, DriverCommand.ELEMENT_SCREENSHOT})


def _summary(result: Any) -> Optional[str]:
    return None if result is None else str(result)


def _no_summary(result: Any) -> Optional[str]:
    return None


class RemoteWebDriver:
    """
    Facade over a remote browser session.

    The session is created when the driver is constructed; the listeners
    are attached once it exists.

    Example:
        >>> full = FullListener()
        >>> driver = RemoteWebDriver(executor, {"browserName": "chrome"}, listeners=[full])
        >>> driver.get("https://example.com")
        >>> driver.find_element(By.id("login")).click()
        >>> [str(e) for e in full.get_list_of_events_recorded()]
    """

    def __init__(
        self,
        command_executor: CommandExecutor,
        capabilities: Optional[Dict[str, Any]] = None,
        *,
        listeners: Iterable["IEventListener"] = (),
        dispatcher: Optional[EventDispatcher] = None,
        settings: Optional["Settings"] = None,
        file_detector: Optional[FileDetector] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        """
        Start a session and attach the listeners.

        Args:
            command_executor: Transport to the remote end
            capabilities: Requested capabilities
            listeners: Listeners of a new dispatcher (ignored if dispatcher is given)
            dispatcher: Dispatcher to use instead of a new one
            settings: Settings (global settings if None)
            file_detector: Detector for file uploads on send_keys
            error_handler: Turns failed responses into errors

        Raises:
            SessionNotCreatedError: If the remote end did not create a session
        """
        self.command_executor = command_executor
        self.dispatcher = dispatcher if dispatcher is not None else EventDispatcher(listeners)
        self.error_handler = error_handler or ErrorHandler()
        self.file_detector: FileDetector = file_detector or UselessFileDetector()
        self.element_location = ElementLocation()
        self.session = SessionContext()
        self._settings = settings
        self._log_level = logging.getLevelName(self.settings.logging.command_level)

        self.start_session(capabilities or {})
        self.dispatcher.attach(self)

    @property
    def settings(self) -> "Settings":
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def session_id(self) -> Optional[str]:
        return self.session.session_id

    @property
    def capabilities(self) -> Dict[str, Any]:
        return self.session.capabilities

    def set_log_level(self, level: Union[int, str]) -> None:
        """Set the level the per-command transport log is written at."""
        self._log_level = logging.getLevelName(level.upper()) if isinstance(level, str) else level

    # Session

    def start_session(self, capabilities: Dict[str, Any]) -> None:
        """
        Create the remote session.

        Raises:
            SessionNotCreatedError: On a missing or malformed response
        """
        response = self.execute(DriverCommand.new_session(capabilities))
        if response is None:
            raise SessionNotCreatedError("The underlying command executor returned a null response.")

        value = response.value
        if value is None:
            raise SessionNotCreatedError(
                f"The underlying command executor returned a response without payload: {response}"
            )
        if not isinstance(value, dict):
            raise SessionNotCreatedError(
                f"The underlying command executor returned a response with a non well formed payload: {response}"
            )

        session_id = response.session_id
        returned = value
        # W3C remote ends wrap the capabilities together with the session id
        if "capabilities" in value and isinstance(value["capabilities"], dict):
            session_id = value.get("sessionId", session_id)
            returned = value["capabilities"]

        self.session = SessionContext.from_capabilities(session_id, returned)
        logger.info(f"Started session {session_id} ({returned.get('browserName', 'unknown browser')})")

    # Correlation

    def dispatch(
        self,
        cmd: Cmd,
        call: Callable[[], Any],
        *,
        locator: Optional[str] = None,
        param1: Optional[str] = None,
        param2: Optional[str] = None,
        summarize: Callable[[Any], Optional[str]] = _no_summary,
    ) -> Any:
        """
        Run ``call`` between a Before and an After record.

        If ``call`` raises, no After record is emitted and the error is
        replayed through the listeners before it propagates. Errors the
        transport raised were already replayed by ``execute`` and are not
        replayed again.

        Args:
            cmd: The command
            call: The real work, returning the command's result
            locator: Description of the target element
            param1: First record parameter
            param2: Second record parameter
            summarize: Turns the result into the After record's return value

        Returns:
            Whatever ``call`` returned
        """
        before = self.dispatcher.before(cmd, locator=locator, param1=param1, param2=param2)
        try:
            result = call()
        except Exception as e:
            self.dispatcher.on_exception(cmd.long_cmd_string, e)
            raise
        self.dispatcher.after(before, return_value=summarize(result), return_object=result)
        return result

    def execute(
        self,
        driver_command: Union[str, CommandPayload],
        params: Optional[Dict[str, Any]] = None,
        *,
        notify_listeners: bool = True,
    ) -> Optional[Response]:
        """
        Send a command to the remote end.

        Args:
            driver_command: Command name, or a complete payload
            params: Parameters, if a command name is given
            notify_listeners: Replay errors through the listeners before raising

        Returns:
            The response, with element references converted to elements

        Raises:
            SessionNotCreatedError: If creating a session failed
            UnreachableBrowserError: If the transport failed for a non-WebDriver reason
            WebDriverError: If the remote end reported an error
        """
        if isinstance(driver_command, CommandPayload):
            payload = driver_command
        else:
            payload = CommandPayload(driver_command, params or {})
        command = Command.from_payload(self.session_id, payload)

        start = time.monotonic()
        thread = threading.current_thread()
        previous_name = thread.name
        thread.name = f"Forwarding {command.name} on session {self.session_id} to remote"
        try:
            self._log(command.name, command, "BEFORE")
            response = self.command_executor.execute(command)
            self._log(command.name, response, "AFTER")

            if response is None:
                return None

            response.value = self._unwrap_value(response.value)
        except Exception as e:
            self._log(command.name, command, "EXCEPTION")
            if command.name == DriverCommand.NEW_SESSION:
                if isinstance(e, SessionNotCreatedError):
                    to_throw: WebDriverError = e
                else:
                    to_throw = SessionNotCreatedError(
                        "Possible causes are invalid address of the remote server or browser start-up failure.",
                        cause=e,
                    )
            elif isinstance(e, WebDriverError):
                to_throw = e
            else:
                to_throw = UnreachableBrowserError(
                    "Error communicating with the remote browser. It may have died.",
                    cause=e,
                )
            self._populate_error(to_throw, command)
            if notify_listeners:
                self.dispatcher.on_exception(payload.name, to_throw)
            if to_throw is e:
                raise
            raise to_throw from e
        finally:
            thread.name = previous_name

        try:
            self.error_handler.throw_if_response_failed(response, int((time.monotonic() - start) * 1000))
        except WebDriverError as e:
            self._populate_error(e, command)
            if notify_listeners:
                self.dispatcher.on_exception(payload.name, e)
            raise
        return response

    def _populate_error(self, error: WebDriverError, command: Command) -> None:
        error.add_info(WebDriverError.DRIVER_INFO, f"{type(self).__module__}.{type(self).__qualname__}")
        if self.session_id is not None:
            error.add_info(WebDriverError.SESSION_ID, self.session_id)
        if self.capabilities:
            error.add_info("Capabilities", str(self.capabilities))
        error.add_info("Command", str(command))

    def _log(self, command_name: str, to_log: Any, when: str) -> None:
        if not logger.isEnabledFor(self._log_level):
            return

        text = str(to_log)
        if command_name in SCRIPT_COMMANDS and self.settings.shorten_log_messages:
            limit = self.settings.max_logged_script_length
            if len(text) > limit:
                text = text[:limit] + "..."

        # No need to log a screenshot response
        if command_name in SCREENSHOT_COMMANDS and isinstance(to_log, Response):
            text = str(Response(to_log.session_id, to_log.status, to_log.state, "*Screenshot response suppressed*"))

        if when == "BEFORE":
            logger.log(self._log_level, f"Executing: {command_name} {text}")
        elif when == "AFTER":
            logger.log(self._log_level, f"Executed: {text}")
        elif when == "EXCEPTION":
            logger.log(self._log_level, f"Exception: {text}")
        else:
            logger.log(self._log_level, text)

    def _unwrap_value(self, value: Any) -> Any:
        """Convert element and shadow root references into objects."""
        if isinstance(value, dict):
            if W3C_ELEMENT_KEY in value:
                return RemoteWebElement(self, value[W3C_ELEMENT_KEY], self.file_detector)
            if LEGACY_ELEMENT_KEY in value:
                return RemoteWebElement(self, value[LEGACY_ELEMENT_KEY], self.file_detector)
            if SHADOW_ROOT_KEY in value:
                return ShadowRoot(self, value[SHADOW_ROOT_KEY])
            return {key: self._unwrap_value(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._unwrap_value(item) for item in value]
        return value

    @staticmethod
    def _wrap_value(value: Any) -> Any:
        """Convert elements in script arguments into references."""
        if isinstance(value, RemoteWebElement):
            return value.to_json()
        if isinstance(value, ShadowRoot):
            return {SHADOW_ROOT_KEY: value.id}
        if isinstance(value, dict):
            return {key: RemoteWebDriver._wrap_value(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [RemoteWebDriver._wrap_value(item) for item in value]
        return value

    # Uninstrumented paths used by listeners

    def screenshot_for_recording(self) -> bytes:
        """PNG screenshot of the page, without trace records."""
        response = self.execute(DriverCommand.SCREENSHOT)
        return base64.b64decode(self._screenshot_value(response, DriverCommand.SCREENSHOT))

    def current_url_for_recording(self) -> str:
        """URL of the current page, without trace records."""
        response = self.execute(DriverCommand.GET_CURRENT_URL)
        if response is None or response.value is None:
            return ""
        return str(response.value)

    @staticmethod
    def _screenshot_value(response: Optional[Response], command_name: str) -> str:
        result = response.value if response is not None else None
        if isinstance(result, bytes):
            result = result.decode("ascii")
        if not isinstance(result, str):
            raise WebDriverError(
                f"Unexpected result for {command_name} command: "
                f"{'null' if result is None else type(result).__name__ + ' instance'}"
            )
        return result

    # Navigation

    def get(self, url: str) -> None:
        self.dispatch(Cmd.GET, lambda: self.execute(DriverCommand.get(url)), param1=url)

    def navigate_to(self, url: str) -> None:
        self.dispatch(Cmd.TO, lambda: self.execute(DriverCommand.get(url)), param1=url)

    def back(self) -> None:
        self.dispatch(Cmd.BACK, lambda: self.execute(DriverCommand.GO_BACK))

    def forward(self) -> None:
        self.dispatch(Cmd.FORWARD, lambda: self.execute(DriverCommand.GO_FORWARD))

    def refresh(self) -> None:
        self.dispatch(Cmd.REFRESH, lambda: self.execute(DriverCommand.REFRESH))

    @property
    def title(self) -> str:
        def call() -> str:
            value = self.execute(DriverCommand.GET_TITLE).value
            return "" if value is None else str(value)

        return self.dispatch(Cmd.GET_TITLE, call, summarize=_summary)

    @property
    def current_url(self) -> str:
        def call() -> str:
            response = self.execute(DriverCommand.GET_CURRENT_URL)
            if response is None or response.value is None:
                raise WebDriverError("Remote browser did not respond to getCurrentUrl")
            return str(response.value)

        return self.dispatch(Cmd.GET_CURRENT_URL, call, summarize=_summary)

    @property
    def page_source(self) -> str:
        return self.dispatch(
            Cmd.GET_PAGE_SOURCE,
            lambda: self.execute(DriverCommand.GET_PAGE_SOURCE).value,
            summarize=_summary,
        )

    # Screenshots

    def get_screenshot_as_base64(self) -> str:
        return self.dispatch(
            Cmd.GET_SCREENSHOT_AS,
            lambda: self._screenshot_value(self.execute(DriverCommand.SCREENSHOT), DriverCommand.SCREENSHOT),
            param1="base64",
        )

    def get_screenshot_as_png(self) -> bytes:
        return self.dispatch(
            Cmd.GET_SCREENSHOT_AS,
            lambda: base64.b64decode(
                self._screenshot_value(self.execute(DriverCommand.SCREENSHOT), DriverCommand.SCREENSHOT)
            ),
            param1="png",
        )

    # Lookup

    def find_element(self, by: By) -> RemoteWebElement:
        return self.find_element_from(self, DriverCommand.find_element, by)

    def find_elements(self, by: By) -> List[RemoteWebElement]:
        return self.find_elements_from(self, DriverCommand.find_elements, by)

    def find_element_from(self, context: Any, create_payload: CreatePayload, by: By) -> RemoteWebElement:
        """Find one element below ``context`` (the driver, an element or a shadow root)."""
        element = self.dispatch(
            Cmd.FIND_ELEMENT,
            lambda: self.element_location.find_element(self, context, create_payload, by),
            param1=str(by),
            summarize=lambda element: locator_of(element) if element is not None else None,
        )
        self._highlight(element)
        return element

    def find_elements_from(self, context: Any, create_payload: CreatePayload, by: By) -> List[RemoteWebElement]:
        """Find all elements below ``context``."""
        elements = self.dispatch(
            Cmd.FIND_ELEMENTS,
            lambda: self.element_location.find_elements(self, context, create_payload, by),
            param1=str(by),
            summarize=summarize_elements,
        )
        for element in elements:
            self._highlight(element)
        return elements

    def find_by_strategy(self, using: str, value: str, many: bool = False) -> Any:
        """Evaluate a wire strategy against the whole page without tracing it."""
        if many:
            payload = DriverCommand.find_elements(using, value)
        else:
            payload = DriverCommand.find_element(using, value)
        response = self.execute(payload)
        return response.value if response is not None else None

    def _highlight(self, element: Any) -> None:
        """Draw a border around a found element, without trace records."""
        if not self.settings.highlight_elements or not self.session.javascript_enabled:
            return
        if not isinstance(element, RemoteWebElement):
            return

        script = BORDER_SCRIPT.format(color=self.settings.highlight_color)
        try:
            self.execute_script(UNTRACED_SCRIPT_TAG + script, element)
        except StaleElementReferenceError:
            # Elements of a multi-element result may be gone already
            logger.debug(f"Not highlighting stale element {element.id}")

    # Windows

    def close(self) -> None:
        self.dispatch(Cmd.CLOSE, lambda: self.execute(DriverCommand.CLOSE))

    def quit(self) -> None:
        """End the session. Does nothing if there is no session."""
        if self.session_id is None:
            return

        def call() -> None:
            try:
                self.execute(DriverCommand.QUIT)
            finally:
                self.session.session_id = None

        self.dispatch(Cmd.QUIT, call)

    @property
    def window_handles(self) -> List[str]:
        def call() -> List[str]:
            value = self.execute(DriverCommand.GET_WINDOW_HANDLES).value
            if not isinstance(value, list):
                raise WebDriverError(f"Returned value cannot be converted to List<String>: {value}")
            # Unique, in the order the remote end returned them
            return list(dict.fromkeys(value))

        return self.dispatch(Cmd.GET_WINDOW_HANDLES, call, summarize=_summary)

    @property
    def current_window_handle(self) -> str:
        return self.dispatch(
            Cmd.GET_WINDOW_HANDLE,
            lambda: str(self.execute(DriverCommand.GET_CURRENT_WINDOW_HANDLE).value),
            summarize=_summary,
        )

    @property
    def switch_to(self) -> SwitchTo:
        return SwitchTo(self)

    def set_window_size(self, width: int, height: int) -> None:
        self.dispatch(
            Cmd.SET_SIZE_BY_WINDOW,
            lambda: self.execute(DriverCommand.SET_WINDOW_RECT, {"width": int(width), "height": int(height)}),
            param1=f"{height}x{width}",
        )

    def get_window_size(self) -> Dict[str, int]:
        def call() -> Dict[str, int]:
            rect = self.execute(DriverCommand.GET_WINDOW_RECT).value
            return {"width": int(rect["width"]), "height": int(rect["height"])}

        return self.dispatch(Cmd.GET_SIZE_BY_WINDOW, call, summarize=_summary)

    def set_window_position(self, x: int, y: int) -> None:
        self.dispatch(
            Cmd.SET_POSITION,
            lambda: self.execute(DriverCommand.SET_WINDOW_RECT, {"x": int(x), "y": int(y)}),
            param1=f"x:{x},y:{y}",
        )

    def get_window_position(self) -> Dict[str, int]:
        def call() -> Dict[str, int]:
            rect = self.execute(DriverCommand.GET_WINDOW_RECT).value
            return {"x": int(rect["x"]), "y": int(rect["y"])}

        return self.dispatch(Cmd.GET_POSITION, call, summarize=_summary)

    def maximize_window(self) -> None:
        self.dispatch(Cmd.MAXIMIZE, lambda: self.execute(DriverCommand.MAXIMIZE_WINDOW))

    def minimize_window(self) -> None:
        self.dispatch(Cmd.MINIMIZE, lambda: self.execute(DriverCommand.MINIMIZE_WINDOW))

    def fullscreen_window(self) -> None:
        self.dispatch(Cmd.FULLSCREEN, lambda: self.execute(DriverCommand.FULLSCREEN_WINDOW))

    # Scripts

    def execute_script(self, script: str, *args: Any) -> Any:
        """
        Run a synchronous script in the page.

        A script starting with ``UNTRACED_SCRIPT_TAG`` runs without trace
        records, and its errors are not replayed through the listeners; the
        tag is stripped before sending.
        """
        return self._run_script(Cmd.EXECUTE_SCRIPT, DriverCommand.execute_script, script, args)

    def execute_async_script(self, script: str, *args: Any) -> Any:
        """Run an asynchronous script in the page."""
        return self._run_script(Cmd.EXECUTE_ASYNC_SCRIPT, DriverCommand.execute_async_script, script, args)

    def _run_script(
        self,
        cmd: Cmd,
        create_payload: Callable[[str, List[Any]], CommandPayload],
        script: str,
        args: Sequence[Any],
    ) -> Any:
        converted = [self._wrap_value(arg) for arg in args]

        if script.startswith(UNTRACED_SCRIPT_TAG):
            script = script[len(UNTRACED_SCRIPT_TAG):]
            return self.execute(create_payload(script, converted), notify_listeners=False).value

        return self.dispatch(
            cmd,
            lambda: self.execute(create_payload(script, converted)).value,
            param1=script,
            param2=format_script_args(args),
            summarize=_summary,
        )

    # Actions

    def perform(self, actions: List[Dict[str, Any]]) -> None:
        """Perform a sequence of W3C input source actions."""
        self.dispatch(
            Cmd.PERFORM,
            lambda: self.execute(DriverCommand.ACTIONS, {"actions": self._wrap_value(actions)}),
            param1=str(actions),
        )

    def reset_input_state(self) -> None:
        self.dispatch(Cmd.RESET_INPUT_STATE, lambda: self.execute(DriverCommand.CLEAR_ACTIONS_STATE))

    # Cookies

    def add_cookie(self, cookie: Dict[str, Any]) -> None:
        self.dispatch(
            Cmd.ADD_COOKIE,
            lambda: self.execute(DriverCommand.ADD_COOKIE, {"cookie": cookie}),
            param1=str(cookie),
        )

    def delete_cookie(self, name: str) -> None:
        self.dispatch(
            Cmd.DELETE_COOKIE_NAMED,
            lambda: self.execute(DriverCommand.DELETE_COOKIE, {"name": name}),
            param1=name,
        )

    def delete_all_cookies(self) -> None:
        self.dispatch(Cmd.DELETE_ALL_COOKIES, lambda: self.execute(DriverCommand.DELETE_ALL_COOKIES))

    def get_cookies(self) -> List[Dict[str, Any]]:
        return self.dispatch(
            Cmd.GET_COOKIES,
            lambda: self.execute(DriverCommand.GET_ALL_COOKIES).value or [],
            summarize=_summary,
        )

    def get_cookie(self, name: str) -> Optional[Dict[str, Any]]:
        return self.dispatch(
            Cmd.GET_COOKIE_NAMED,
            lambda: self.execute(DriverCommand.GET_COOKIE, {"name": name}).value,
            param1=name,
            summarize=_summary,
        )

    # Timeouts

    def implicitly_wait(self, time_to_wait: float) -> None:
        self._set_timeout(Cmd.IMPLICITLY_WAIT, "implicit", time_to_wait)

    def set_script_timeout(self, time_to_wait: float) -> None:
        self._set_timeout(Cmd.SET_SCRIPT_TIMEOUT, "script", time_to_wait)

    def set_page_load_timeout(self, time_to_wait: float) -> None:
        self._set_timeout(Cmd.PAGE_LOAD_TIMEOUT, "pageLoad", time_to_wait)

    def _set_timeout(self, cmd: Cmd, kind: str, seconds: float) -> None:
        self.dispatch(
            cmd,
            lambda: self.execute(DriverCommand.SET_TIMEOUTS, {kind: int(float(seconds) * 1000)}),
            param1=f"{seconds}s",
        )

    def __enter__(self) -> "RemoteWebDriver":
        return self

    def __exit__(self, *args: Any) -> None:
        self.quit()

    def __str__(self) -> str:
        browser = self.capabilities.get("browserName", "unknown")
        platform = self.capabilities.get("platformName", "any")
        return f"{type(self).__name__}: {browser} on {platform} ({self.session_id})"
