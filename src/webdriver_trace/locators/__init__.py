"""
Locators module - Locators and adaptive element resolution.
"""

from webdriver_trace.locators.by import By, LocatorKind, W3C_KINDS
from webdriver_trace.locators.element_location import (
    ElementFinder,
    ElementLocation,
    LocatorStrategyCache,
)

__all__ = [
    "By",
    "LocatorKind",
    "W3C_KINDS",
    "ElementFinder",
    "ElementLocation",
    "LocatorStrategyCache",
]
