"""
Switch To - Frame, window and alert targeting.
"""

from typing import Any, Optional, TYPE_CHECKING, Union
import re

from webdriver_trace.events.event import Cmd, locator_of
from webdriver_trace.exceptions import NoSuchFrameError
from webdriver_trace.remote.command import DriverCommand
from webdriver_trace.remote.webelement import RemoteWebElement

if TYPE_CHECKING:
    from webdriver_trace.remote.webdriver import RemoteWebDriver

# Characters that must be escaped in a CSS identifier or attribute value
CSS_SPECIAL_CHARACTERS = re.compile(r"""(['"\\#.:;,!?+<>=~*^$|%&@`{}\-/\[\]()])""")


class Alert:
    """The currently open alert, confirm or prompt dialog."""

    def __init__(self, driver: "RemoteWebDriver"):
        self._driver = driver

    @property
    def text(self) -> str:
        return self._driver.dispatch(
            Cmd.GET_TEXT_BY_ALERT,
            lambda: self._driver.execute(DriverCommand.GET_ALERT_TEXT).value,
        )

    def accept(self) -> None:
        self._driver.dispatch(Cmd.ACCEPT, lambda: self._driver.execute(DriverCommand.ACCEPT_ALERT))

    def dismiss(self) -> None:
        self._driver.dispatch(Cmd.DISMISS, lambda: self._driver.execute(DriverCommand.DISMISS_ALERT))

    def send_keys(self, keys_to_send: str) -> None:
        self._driver.dispatch(
            Cmd.SEND_KEYS_BY_ALERT,
            lambda: self._driver.execute(DriverCommand.SET_ALERT_VALUE, {"text": keys_to_send}),
            param1=keys_to_send,
        )


class SwitchTo:
    """
    Change the target of subsequent commands.

    Example:
        >>> driver.switch_to.frame("content")
        >>> driver.switch_to.default_content()
        >>> driver.switch_to.alert.accept()
    """

    def __init__(self, driver: "RemoteWebDriver"):
        self._driver = driver

    @property
    def alert(self) -> Alert:
        return Alert(self._driver)

    @property
    def active_element(self) -> RemoteWebElement:
        return self._driver.dispatch(
            Cmd.ACTIVE_ELEMENT,
            lambda: self._driver.execute(DriverCommand.GET_ACTIVE_ELEMENT).value,
            summarize=lambda element: locator_of(element) if element is not None else None,
        )

    def default_content(self) -> None:
        self._driver.dispatch(
            Cmd.DEFAULT_CONTENT,
            lambda: self._driver.execute(DriverCommand.SWITCH_TO_FRAME, {"id": None}),
        )

    def frame(self, frame_reference: Union[int, str, RemoteWebElement]) -> None:
        """
        Switch to a frame by index, by name or id, or by its element.

        Raises:
            NoSuchFrameError: If no frame has the given name or id
        """
        if isinstance(frame_reference, bool):
            raise TypeError("Frame reference must be an index, a name or an element")

        if isinstance(frame_reference, int):
            self._driver.dispatch(
                Cmd.FRAME_BY_INDEX,
                lambda: self._driver.execute(DriverCommand.SWITCH_TO_FRAME, {"id": frame_reference}),
                param1=str(frame_reference),
            )
        elif isinstance(frame_reference, str):
            self._driver.dispatch(
                Cmd.FRAME_BY_NAME,
                lambda: self._switch_to_frame_element(self._frame_named(frame_reference)),
                param1=frame_reference,
            )
        else:
            self._driver.dispatch(
                Cmd.FRAME_BY_ELEMENT,
                lambda: self._switch_to_frame_element(frame_reference),
                param1=locator_of(frame_reference),
            )

    def parent_frame(self) -> None:
        self._driver.dispatch(
            Cmd.PARENT_FRAME,
            lambda: self._driver.execute(DriverCommand.SWITCH_TO_PARENT_FRAME),
        )

    def window(self, window_name: str) -> None:
        self._driver.dispatch(
            Cmd.WINDOW,
            lambda: self._driver.execute(DriverCommand.SWITCH_TO_WINDOW, {"handle": window_name}),
            param1=window_name,
        )

    def new_window(self, type_hint: Optional[str] = "tab") -> None:
        """Open a new tab or window and switch to it."""
        def call() -> Any:
            response = self._driver.execute(DriverCommand.SWITCH_TO_NEW_WINDOW, {"type": type_hint})
            handle = response.value["handle"]
            self._driver.execute(DriverCommand.SWITCH_TO_WINDOW, {"handle": handle})
            return handle

        self._driver.dispatch(Cmd.NEW_WINDOW, call, param1=str(type_hint))

    def _frame_named(self, name_or_id: str) -> Any:
        name = CSS_SPECIAL_CHARACTERS.sub(r"\\\1", name_or_id)
        # Frames are addressed by name first, then by id
        for selector in (
            f"frame[name='{name}'],iframe[name='{name}']",
            f"frame#{name},iframe#{name}",
        ):
            frames = self._driver.find_by_strategy("css selector", selector, many=True)
            if frames:
                return frames[0]
        raise NoSuchFrameError(f"No frame element found by name or id {name_or_id}")

    def _switch_to_frame_element(self, element: Any) -> Any:
        reference = element.to_json() if isinstance(element, RemoteWebElement) else element
        return self._driver.execute(DriverCommand.SWITCH_TO_FRAME, {"id": reference})
