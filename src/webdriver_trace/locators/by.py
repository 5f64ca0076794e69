"""
Locators - Symbolic element-locating expressions.

A locator has a kind (by id, by CSS selector, ...) and a value. It can be
resolved remotely, by sending its kind and value to the remote end, or
locally, by evaluating it against a search context. Locally, kinds the W3C
protocol does not know are translated into CSS selectors.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, List, Tuple


class LocatorKind(str, Enum):
    """Built-in locator kinds, valued by their wire strategy name."""
    ID = "id"
    NAME = "name"
    CLASS_NAME = "class name"
    CSS_SELECTOR = "css selector"
    XPATH = "xpath"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    TAG_NAME = "tag name"


# Kinds the W3C protocol resolves remotely
W3C_KINDS = frozenset({
    LocatorKind.CSS_SELECTOR.value,
    LocatorKind.XPATH.value,
    LocatorKind.LINK_TEXT.value,
    LocatorKind.PARTIAL_LINK_TEXT.value,
    LocatorKind.TAG_NAME.value,
})

_DESCRIPTIONS = {
    LocatorKind.ID.value: "id",
    LocatorKind.NAME.value: "name",
    LocatorKind.CLASS_NAME.value: "className",
    LocatorKind.CSS_SELECTOR.value: "cssSelector",
    LocatorKind.XPATH.value: "xpath",
    LocatorKind.LINK_TEXT.value: "linkText",
    LocatorKind.PARTIAL_LINK_TEXT.value: "partialLinkText",
    LocatorKind.TAG_NAME.value: "tagName",
}


@dataclass(frozen=True)
class By:
    """
    A locator.

    Subclasses may introduce their own kind tag; set ``remote_capable`` to
    False if the remote end cannot resolve it, and override
    ``local_parameters`` (or ``find_element``/``find_elements``) to resolve it
    through the search context.

    Example:
        >>> By.id("login")
        By.id("login")
        >>> By.id("login").local_parameters()
        ('css selector', '[id="login"]')
    """
    kind: str
    value: str

    remote_capable: ClassVar[bool] = True

    # Factories

    @classmethod
    def id(cls, value: str) -> "By":
        return cls(LocatorKind.ID.value, value)

    @classmethod
    def name(cls, value: str) -> "By":
        return cls(LocatorKind.NAME.value, value)

    @classmethod
    def class_name(cls, value: str) -> "By":
        return cls(LocatorKind.CLASS_NAME.value, value)

    @classmethod
    def css_selector(cls, value: str) -> "By":
        return cls(LocatorKind.CSS_SELECTOR.value, value)

    @classmethod
    def xpath(cls, value: str) -> "By":
        return cls(LocatorKind.XPATH.value, value)

    @classmethod
    def link_text(cls, value: str) -> "By":
        return cls(LocatorKind.LINK_TEXT.value, value)

    @classmethod
    def partial_link_text(cls, value: str) -> "By":
        return cls(LocatorKind.PARTIAL_LINK_TEXT.value, value)

    @classmethod
    def tag_name(cls, value: str) -> "By":
        return cls(LocatorKind.TAG_NAME.value, value)

    # Resolution

    def remote_parameters(self) -> Tuple[str, str]:
        """Strategy and value sent to the remote end."""
        return self.kind, self.value

    def local_parameters(self) -> Tuple[str, str]:
        """Strategy and value used when resolving through the search context."""
        if self.kind == LocatorKind.ID.value:
            return LocatorKind.CSS_SELECTOR.value, f'[id="{_escape(self.value)}"]'
        if self.kind == LocatorKind.NAME.value:
            return LocatorKind.CSS_SELECTOR.value, f'[name="{_escape(self.value)}"]'
        if self.kind == LocatorKind.CLASS_NAME.value:
            if " " in self.value.strip():
                raise ValueError(f"Compound class names are not supported: {self.value!r}")
            return LocatorKind.CSS_SELECTOR.value, f".{self.value.strip()}"
        return self.kind, self.value

    def find_element(self, context: Any) -> Any:
        """Resolve one element through ``context``."""
        using, value = self.local_parameters()
        return context.find_by_strategy(using, value, many=False)

    def find_elements(self, context: Any) -> List[Any]:
        """Resolve all matching elements through ``context``."""
        using, value = self.local_parameters()
        return context.find_by_strategy(using, value, many=True)

    def __str__(self) -> str:
        method = _DESCRIPTIONS.get(self.kind, self.kind)
        return f'By.{method}("{self.value}")'

    def __repr__(self) -> str:
        return str(self)


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')
