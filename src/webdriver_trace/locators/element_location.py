"""
Element Location - Adaptive choice between remote and local resolution.

For every locator kind the mechanism that worked first is remembered and
used exclusively from then on. Remote resolution is preferred when the kind
supports it; an invalid-argument answer from the remote end means the kind
is not understood there, and the local mechanism takes over.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING
import logging

from webdriver_trace.exceptions import InvalidArgumentError, NoSuchElementError
from webdriver_trace.locators.by import By, W3C_KINDS

if TYPE_CHECKING:
    from webdriver_trace.remote.command import CommandPayload
    from webdriver_trace.remote.webelement import RemoteWebElement
    from webdriver_trace.remote.webdriver import RemoteWebDriver

logger = logging.getLogger(__name__)

CreatePayload = Callable[[str, str], "CommandPayload"]


class ElementFinder(Enum):
    """Resolution mechanism."""
    REMOTE = "remote"
    CONTEXT = "local"

    def find_element(
        self,
        driver: "RemoteWebDriver",
        context: Any,
        create_payload: CreatePayload,
        locator: By,
    ) -> "RemoteWebElement":
        if self is ElementFinder.REMOTE:
            using, value = locator.remote_parameters()
            response = driver.execute(create_payload(using, value))
            element = response.value if response is not None else None
        else:
            element = locator.find_element(context)

        if element is None:
            raise NoSuchElementError(
                f"Unable to find element with locator {locator}",
                {"locator": str(locator)},
            )
        return massage(driver, context, element, locator)

    def find_elements(
        self,
        driver: "RemoteWebDriver",
        context: Any,
        create_payload: CreatePayload,
        locator: By,
    ) -> List["RemoteWebElement"]:
        if self is ElementFinder.REMOTE:
            using, value = locator.remote_parameters()
            response = driver.execute(create_payload(using, value))
            elements = response.value if response is not None else None
        else:
            elements = locator.find_elements(context)

        # Some remote ends answer an empty lookup with null
        if elements is None:
            return []
        return [massage(driver, context, e, locator) for e in elements]


def massage(driver: "RemoteWebDriver", context: Any, element: Any, locator: By) -> Any:
    """
    Enrich a resolved element so that its own commands are correlated
    like driver commands.
    """
    if not hasattr(element, "set_found_by"):
        return element

    element.set_found_by(context, locator)
    element.file_detector = driver.file_detector
    element.parent = driver
    return element


class LocatorStrategyCache:
    """
    Locator kind -> resolution mechanism.

    Entries are only ever added; the W3C kinds start out as remote.
    """

    def __init__(self, seed: Optional[Dict[str, ElementFinder]] = None):
        if seed is None:
            seed = {kind: ElementFinder.REMOTE for kind in W3C_KINDS}
        self._finders: Dict[str, ElementFinder] = dict(seed)

    def get(self, kind: str) -> Optional[ElementFinder]:
        return self._finders.get(kind)

    def put(self, kind: str, finder: ElementFinder) -> None:
        if self._finders.get(kind) is not finder:
            logger.debug(f"Resolving '{kind}' locators with the {finder.value} mechanism")
        self._finders[kind] = finder

    def __contains__(self, kind: object) -> bool:
        return kind in self._finders

    def snapshot(self) -> Dict[str, ElementFinder]:
        return dict(self._finders)


class ElementLocation:
    """
    Resolve locators into elements, memoizing the mechanism per locator kind.

    Example:
        >>> location = ElementLocation()
        >>> element = location.find_element(driver, driver, DriverCommand.find_element, By.id("q"))
        >>> location.cache.get("id")
        <ElementFinder.CONTEXT: 'local'>
    """

    def __init__(self, cache: Optional[LocatorStrategyCache] = None):
        self.cache = cache or LocatorStrategyCache()

    def find_element(
        self,
        driver: "RemoteWebDriver",
        context: Any,
        create_payload: CreatePayload,
        locator: By,
    ) -> "RemoteWebElement":
        """
        Resolve a single element.

        Raises:
            NoSuchElementError: If nothing matches
        """
        finder = self.cache.get(locator.kind)
        if finder is not None:
            return finder.find_element(driver, context, create_payload, locator)

        # Prefer the remote mechanism where the kind allows it
        if locator.remote_capable:
            try:
                element = ElementFinder.REMOTE.find_element(driver, context, create_payload, locator)
                self.cache.put(locator.kind, ElementFinder.REMOTE)
                return element
            except NoSuchElementError:
                self.cache.put(locator.kind, ElementFinder.REMOTE)
                raise
            except InvalidArgumentError:
                logger.debug(f"Remote end rejected '{locator.kind}', falling back to local resolution")

        try:
            element = ElementFinder.CONTEXT.find_element(driver, context, create_payload, locator)
        except NoSuchElementError:
            self.cache.put(locator.kind, ElementFinder.CONTEXT)
            raise
        self.cache.put(locator.kind, ElementFinder.CONTEXT)
        return element

    def find_elements(
        self,
        driver: "RemoteWebDriver",
        context: Any,
        create_payload: CreatePayload,
        locator: By,
    ) -> List["RemoteWebElement"]:
        """Resolve all matching elements; an empty list is a valid result."""
        finder = self.cache.get(locator.kind)
        if finder is not None:
            return finder.find_elements(driver, context, create_payload, locator)

        if locator.remote_capable:
            try:
                elements = ElementFinder.REMOTE.find_elements(driver, context, create_payload, locator)
                self.cache.put(locator.kind, ElementFinder.REMOTE)
                return elements
            except NoSuchElementError:
                self.cache.put(locator.kind, ElementFinder.REMOTE)
                raise
            except InvalidArgumentError:
                logger.debug(f"Remote end rejected '{locator.kind}', falling back to local resolution")

        elements = ElementFinder.CONTEXT.find_elements(driver, context, create_payload, locator)
        # Only remember the mechanism once it completed
        self.cache.put(locator.kind, ElementFinder.CONTEXT)
        return elements
