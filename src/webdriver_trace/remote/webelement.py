"""
Remote Web Element - Element facade whose commands are traced.

An element remembers how it was found (search context and locator); that
description is the ``locator`` of every record its commands produce.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING
import base64
import io
import logging
import zipfile

from webdriver_trace.events.event import Cmd, locator_of, mask_text_if_password
from webdriver_trace.exceptions import WebDriverError
from webdriver_trace.remote.command import CommandPayload, DriverCommand, Response
from webdriver_trace.remote.file_detector import FileDetector, UselessFileDetector

if TYPE_CHECKING:
    from webdriver_trace.locators.by import By
    from webdriver_trace.remote.webdriver import RemoteWebDriver

logger = logging.getLogger(__name__)

# JSON keys identifying element and shadow root references on the wire
W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"
LEGACY_ELEMENT_KEY = "ELEMENT"
SHADOW_ROOT_KEY = "shadow-6066-11e4-a52e-4f735466cecf"


def _summary(result: Any) -> Optional[str]:
    return None if result is None else str(result)


def _no_summary(result: Any) -> Optional[str]:
    return None


class RemoteWebElement:
    """
    A DOM element of the remote session.

    Example:
        >>> button = driver.find_element(By.id("submit"))
        >>> button.locator_description
        'By.id("submit")'
        >>> button.click()
    """

    def __init__(
        self,
        parent: "RemoteWebDriver",
        id_: str,
        file_detector: Optional[FileDetector] = None,
    ):
        self._parent = parent
        self._id = id_
        self.file_detector: FileDetector = file_detector or UselessFileDetector()
        self._found_from: Any = None
        self._found_by: Optional["By"] = None

    @property
    def id(self) -> str:
        """Opaque id the remote end assigned to this element."""
        return self._id

    @property
    def parent(self) -> "RemoteWebDriver":
        return self._parent

    @parent.setter
    def parent(self, driver: "RemoteWebDriver") -> None:
        self._parent = driver

    @property
    def locator_description(self) -> Optional[str]:
        """The locator this element was found by, None if unknown."""
        if self._found_by is None:
            return None
        return str(self._found_by)

    def set_found_by(self, context: Any, locator: "By") -> None:
        self._found_from = context
        self._found_by = locator

    def to_json(self) -> Dict[str, str]:
        """Wire representation, e.g. as a script argument."""
        return {LEGACY_ELEMENT_KEY: self._id, W3C_ELEMENT_KEY: self._id}

    # Actions

    def click(self) -> None:
        self._traced(Cmd.CLICK_BY_ELEMENT, lambda: self._execute(DriverCommand.CLICK_ELEMENT))

    def submit(self) -> None:
        self._traced(Cmd.SUBMIT, lambda: self._execute(DriverCommand.SUBMIT_ELEMENT))

    def clear(self) -> None:
        self._traced(Cmd.CLEAR, lambda: self._execute(DriverCommand.CLEAR_ELEMENT))

    def send_keys(self, *value: Any) -> None:
        """
        Type into the element.

        If every line of the keys names a local file (as decided by the file
        detector), the files are uploaded first and their remote paths are
        typed instead.

        Raises:
            ValueError: If no keys, or a None key, are given
        """
        if not value or any(v is None for v in value):
            raise ValueError("Keys to send should be a not null CharSequence")

        keys = "".join(str(v) for v in value)
        files = [self.file_detector.get_local_file(part) for part in keys.split("\n")]
        if files and all(f is not None for f in files):
            keys = "\n".join(self._upload(f) for f in files)

        locator = locator_of(self)
        self._parent.dispatch(
            Cmd.SEND_KEYS_BY_ELEMENT,
            lambda: self._execute_payload(DriverCommand.send_keys_to_element(self._id, keys)),
            locator=locator,
            param1=mask_text_if_password(locator, [keys]),
            summarize=_no_summary,
        )

    def _upload(self, local_file: Path) -> str:
        if not local_file.is_file():
            raise WebDriverError(f"You may only upload files: {local_file}")

        try:
            buffer = io.BytesIO()
            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
                archive.write(local_file, local_file.name)
            zipped = base64.b64encode(buffer.getvalue()).decode("ascii")
        except OSError as e:
            raise WebDriverError(f"Cannot upload {local_file}", cause=e) from e

        response = self._traced(
            Cmd.UPLOAD_FILE,
            lambda: self._execute_payload(DriverCommand.upload_file(zipped)),
            param1=str(local_file),
            summarize=lambda r: _summary(r.value if r is not None else None),
        )
        return str(response.value) if response is not None else ""

    # Queries

    @property
    def tag_name(self) -> str:
        return self._query(Cmd.GET_TAG_NAME, DriverCommand.GET_ELEMENT_TAG_NAME)

    @property
    def text(self) -> str:
        return self._query(Cmd.GET_TEXT, DriverCommand.GET_ELEMENT_TEXT)

    @property
    def aria_role(self) -> str:
        return self._query(Cmd.GET_ARIA_ROLE, DriverCommand.GET_ELEMENT_ARIA_ROLE)

    @property
    def accessible_name(self) -> str:
        return self._query(Cmd.GET_ACCESSIBLE_NAME, DriverCommand.GET_ELEMENT_ACCESSIBLE_NAME)

    def get_attribute(self, name: str) -> Optional[str]:
        return _summary(self._query(Cmd.GET_ATTRIBUTE, DriverCommand.GET_ELEMENT_ATTRIBUTE, name, name=name))

    def get_dom_attribute(self, name: str) -> Optional[str]:
        return _summary(self._query(Cmd.GET_DOM_ATTRIBUTE, DriverCommand.GET_ELEMENT_DOM_ATTRIBUTE, name, name=name))

    def get_property(self, name: str) -> Any:
        return self._query(Cmd.GET_DOM_PROPERTY, DriverCommand.GET_ELEMENT_DOM_PROPERTY, name, name=name)

    def value_of_css_property(self, property_name: str) -> str:
        return self._query(
            Cmd.GET_CSS_VALUE,
            DriverCommand.GET_ELEMENT_VALUE_OF_CSS_PROPERTY,
            property_name,
            propertyName=property_name,
        )

    def is_selected(self) -> bool:
        return self._query_bool(Cmd.IS_SELECTED, DriverCommand.IS_ELEMENT_SELECTED)

    def is_enabled(self) -> bool:
        return self._query_bool(Cmd.IS_ENABLED, DriverCommand.IS_ELEMENT_ENABLED)

    def is_displayed(self) -> bool:
        # Some remote ends answer null for detached elements
        value = self._query(Cmd.IS_DISPLAYED, DriverCommand.IS_ELEMENT_DISPLAYED)
        return bool(value) if value is not None else False

    @property
    def location(self) -> Dict[str, int]:
        rect = self._query(Cmd.GET_LOCATION, DriverCommand.GET_ELEMENT_RECT)
        return {"x": int(rect["x"]), "y": int(rect["y"])}

    @property
    def size(self) -> Dict[str, int]:
        rect = self._query(Cmd.GET_SIZE_BY_ELEMENT, DriverCommand.GET_ELEMENT_RECT)
        return {"width": int(rect["width"]), "height": int(rect["height"])}

    @property
    def rect(self) -> Dict[str, int]:
        rect = self._query(Cmd.GET_RECT, DriverCommand.GET_ELEMENT_RECT)
        return {key: int(rect[key]) for key in ("x", "y", "width", "height")}

    @property
    def screenshot_as_base64(self) -> str:
        return self._screenshot("base64")

    @property
    def screenshot_as_png(self) -> bytes:
        return base64.b64decode(self._screenshot("png").encode("ascii"))

    def _screenshot(self, output_type: str) -> str:
        def call() -> str:
            result = self._execute(DriverCommand.ELEMENT_SCREENSHOT).value
            if isinstance(result, bytes):
                result = result.decode("ascii")
            if not isinstance(result, str):
                raise WebDriverError(
                    f"Unexpected result for {DriverCommand.ELEMENT_SCREENSHOT} command: "
                    f"{'null' if result is None else type(result).__name__ + ' instance'}"
                )
            return result

        return self._traced(Cmd.GET_SCREENSHOT_AS_BY_ELEMENT, call, param1=output_type, summarize=_no_summary)

    @property
    def shadow_root(self) -> "ShadowRoot":
        return self._traced(
            Cmd.GET_SHADOW_ROOT,
            lambda: self._execute(DriverCommand.GET_ELEMENT_SHADOW_ROOT).value,
            summarize=_no_summary,
        )

    # Lookup

    def find_element(self, by: "By") -> "RemoteWebElement":
        return self._parent.find_element_from(
            self,
            lambda using, value: DriverCommand.find_child_element(self._id, using, value),
            by,
        )

    def find_elements(self, by: "By") -> List["RemoteWebElement"]:
        return self._parent.find_elements_from(
            self,
            lambda using, value: DriverCommand.find_child_elements(self._id, using, value),
            by,
        )

    def find_by_strategy(self, using: str, value: str, many: bool = False) -> Any:
        """Evaluate a wire strategy below this element without tracing it."""
        if many:
            payload = DriverCommand.find_child_elements(self._id, using, value)
        else:
            payload = DriverCommand.find_child_element(self._id, using, value)
        response = self._execute_payload(payload)
        return response.value if response is not None else None

    # Plumbing

    def _traced(
        self,
        cmd: Cmd,
        call: Callable[[], Any],
        *,
        param1: Optional[str] = None,
        summarize: Callable[[Any], Optional[str]] = _no_summary,
    ) -> Any:
        return self._parent.dispatch(cmd, call, locator=locator_of(self), param1=param1, summarize=summarize)

    def _query(self, cmd: Cmd, command: str, param1: Optional[str] = None, **params: Any) -> Any:
        return self._traced(
            cmd,
            lambda: self._execute(command, **params).value,
            param1=param1,
            summarize=_summary,
        )

    def _query_bool(self, cmd: Cmd, command: str) -> bool:
        value = self._query(cmd, command)
        if not isinstance(value, bool):
            raise WebDriverError(f"Returned value cannot be converted to Boolean: {value}")
        return value

    def _execute(self, command: str, **params: Any) -> Response:
        return self._execute_payload(DriverCommand.element(command, self._id, **params))

    def _execute_payload(self, payload: CommandPayload) -> Response:
        try:
            return self._parent.execute(payload)
        except WebDriverError as e:
            e.add_info("Element", str(self))
            raise

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteWebElement):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        if self._found_by is None:
            return f"[RemoteWebElement {self._id} -> unknown locator]"
        return f"[[{self._found_from}] -> {self._found_by}]"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self._id!r} locator={self.locator_description!r}>"


class ShadowRoot:
    """The shadow root of an element; a search context of its own."""

    def __init__(self, parent: "RemoteWebDriver", id_: str):
        self._parent = parent
        self._id = id_

    @property
    def id(self) -> str:
        return self._id

    def find_element(self, by: "By") -> RemoteWebElement:
        return self._parent.find_element_from(
            self,
            lambda using, value: DriverCommand.find_element_from_shadow_root(self._id, using, value),
            by,
        )

    def find_elements(self, by: "By") -> List[RemoteWebElement]:
        return self._parent.find_elements_from(
            self,
            lambda using, value: DriverCommand.find_elements_from_shadow_root(self._id, using, value),
            by,
        )

    def find_by_strategy(self, using: str, value: str, many: bool = False) -> Any:
        if many:
            payload = DriverCommand.find_elements_from_shadow_root(self._id, using, value)
        else:
            payload = DriverCommand.find_element_from_shadow_root(self._id, using, value)
        response = self._parent.execute(payload)
        return response.value if response is not None else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShadowRoot):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return f"ShadowRoot {self._id}"
