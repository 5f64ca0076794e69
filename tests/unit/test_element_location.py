"""
Tests for locators and adaptive element resolution.
"""

import pytest
from unittest.mock import MagicMock

from webdriver_trace.locators import By


class ByLabel(By):
    """Locator kind only the local mechanism understands."""
    remote_capable = False


class TestBy:
    """Test the By locator."""

    def test_factories_and_str(self):
        """Test locator construction and description."""
        assert By.id("login").kind == "id"
        assert str(By.id("login")) == 'By.id("login")'
        assert str(By.css_selector("#a > b")) == 'By.cssSelector("#a > b")'
        assert str(By.partial_link_text("More")) == 'By.partialLinkText("More")'

    def test_remote_parameters(self):
        """Test the strategy sent to the remote end."""
        assert By.xpath("//a").remote_parameters() == ("xpath", "//a")
        assert By.id("q").remote_parameters() == ("id", "q")

    def test_local_parameters(self):
        """Test translation of non-W3C kinds into CSS."""
        assert By.id("q").local_parameters() == ("css selector", '[id="q"]')
        assert By.name("email").local_parameters() == ("css selector", '[name="email"]')
        assert By.class_name("btn").local_parameters() == ("css selector", ".btn")
        assert By.tag_name("a").local_parameters() == ("tag name", "a")

    def test_compound_class_name_rejected(self):
        """Test that compound class names are refused."""
        with pytest.raises(ValueError):
            By.class_name("btn primary").local_parameters()

    def test_equality(self):
        """Test that locators compare by kind and value."""
        assert By.id("q") == By.id("q")
        assert By.id("q") != By.name("q")


class TestElementLocation:
    """Test the ElementLocation class."""

    @pytest.fixture
    def driver(self):
        driver = MagicMock()
        driver.file_detector = MagicMock(name="file_detector")
        return driver

    @pytest.fixture
    def context(self):
        return MagicMock(name="context")

    @pytest.fixture
    def location(self):
        from webdriver_trace.locators import ElementLocation

        return ElementLocation()

    @staticmethod
    def respond(driver, value):
        from webdriver_trace.remote import Response

        driver.execute.return_value = Response("s1", 0, "success", value)

    @staticmethod
    def element(driver, id_="e1"):
        from webdriver_trace.remote import RemoteWebElement

        return RemoteWebElement(driver, id_)

    @staticmethod
    def payload(using, value):
        from webdriver_trace.remote import DriverCommand

        return DriverCommand.find_element(using, value)

    def test_w3c_kinds_preseeded_remote(self, location):
        """Test that W3C kinds start out as remote."""
        from webdriver_trace.locators import ElementFinder

        for kind in ("css selector", "xpath", "link text", "partial link text", "tag name"):
            assert location.cache.get(kind) is ElementFinder.REMOTE
        assert location.cache.get("id") is None

    def test_remote_success(self, location, driver, context):
        """Test a remote lookup and the enrichment of its result."""
        element = self.element(driver)
        self.respond(driver, element)

        found = location.find_element(driver, context, self.payload, By.css_selector("#login"))

        assert found is element
        assert found.locator_description == 'By.cssSelector("#login")'
        assert found.parent is driver
        assert found.file_detector is driver.file_detector
        context.find_by_strategy.assert_not_called()

    def test_invalid_argument_falls_back_to_local(self, location, driver, context):
        """Test that a rejected kind is resolved locally and remembered."""
        from webdriver_trace.exceptions import InvalidArgumentError
        from webdriver_trace.locators import ElementFinder

        driver.execute.side_effect = InvalidArgumentError("invalid locator")
        element = self.element(driver)
        context.find_by_strategy.return_value = element

        found = location.find_element(driver, context, self.payload, By.id("q"))

        assert found is element
        context.find_by_strategy.assert_called_once_with("css selector", '[id="q"]', many=False)
        assert location.cache.get("id") is ElementFinder.CONTEXT

    def test_cached_kind_not_retried_remotely(self, location, driver, context):
        """Test that a cached local kind never goes to the remote end again."""
        from webdriver_trace.exceptions import InvalidArgumentError

        driver.execute.side_effect = InvalidArgumentError("invalid locator")
        element = self.element(driver)
        context.find_by_strategy.side_effect = lambda using, value, many: [element] if many else element

        location.find_element(driver, context, self.payload, By.id("q"))
        location.find_element(driver, context, self.payload, By.id("other"))
        location.find_elements(driver, context, self.payload, By.id("more"))

        assert driver.execute.call_count == 1
        assert context.find_by_strategy.call_count == 3

    def test_remote_success_for_unseeded_kind(self, location, driver, context):
        """Test that a remote end understanding a kind keeps it remote."""
        from webdriver_trace.locators import ElementFinder

        self.respond(driver, self.element(driver))

        location.find_element(driver, context, self.payload, By.name("email"))

        assert location.cache.get("name") is ElementFinder.REMOTE

    def test_remote_not_found_cached_and_raised(self, location, driver, context):
        """Test that not-found on the remote end still decides the mechanism."""
        from webdriver_trace.exceptions import NoSuchElementError
        from webdriver_trace.locators import ElementFinder

        driver.execute.side_effect = NoSuchElementError("no such element")

        with pytest.raises(NoSuchElementError):
            location.find_element(driver, context, self.payload, By.name("missing"))

        assert location.cache.get("name") is ElementFinder.REMOTE
        context.find_by_strategy.assert_not_called()

    def test_seeded_kind_not_found_stays_remote(self, location, driver, context):
        """Test that a W3C kind never falls back to local resolution."""
        from webdriver_trace.exceptions import NoSuchElementError
        from webdriver_trace.locators import ElementFinder

        driver.execute.side_effect = NoSuchElementError("no such element")

        with pytest.raises(NoSuchElementError):
            location.find_element(driver, context, self.payload, By.css_selector(".missing"))

        assert location.cache.get("css selector") is ElementFinder.REMOTE
        context.find_by_strategy.assert_not_called()

    def test_local_not_found_cached(self, location, driver, context):
        """Test that a local not-found still caches the local mechanism."""
        from webdriver_trace.exceptions import NoSuchElementError
        from webdriver_trace.locators import ElementFinder

        context.find_by_strategy.return_value = None

        with pytest.raises(NoSuchElementError):
            location.find_element(driver, context, self.payload, ByLabel("label", "Email"))

        assert location.cache.get("label") is ElementFinder.CONTEXT
        driver.execute.assert_not_called()

    def test_local_only_kind(self, location, driver, context):
        """Test that kinds the remote end cannot resolve go straight to local."""
        element = self.element(driver)
        context.find_by_strategy.return_value = element

        found = location.find_element(driver, context, self.payload, ByLabel("label", "Email"))

        assert found is element
        context.find_by_strategy.assert_called_once_with("label", "Email", many=False)
        driver.execute.assert_not_called()

    def test_find_elements_null_response(self, location, driver, context):
        """Test that a null remote answer is an empty result."""
        self.respond(driver, None)

        assert location.find_elements(driver, context, self.payload, By.tag_name("li")) == []

    def test_find_elements_enriches_each(self, location, driver, context):
        """Test that every element of a result is enriched."""
        elements = [self.element(driver, "e1"), self.element(driver, "e2")]
        self.respond(driver, elements)

        found = location.find_elements(driver, context, self.payload, By.tag_name("li"))

        assert found == elements
        assert all(e.locator_description == 'By.tagName("li")' for e in found)

    def test_find_elements_local_empty_is_success(self, location, driver, context):
        """Test that an empty local result caches the local mechanism."""
        from webdriver_trace.exceptions import InvalidArgumentError
        from webdriver_trace.locators import ElementFinder

        driver.execute.side_effect = InvalidArgumentError("invalid locator")
        context.find_by_strategy.return_value = []

        assert location.find_elements(driver, context, self.payload, By.class_name("row")) == []
        assert location.cache.get("class name") is ElementFinder.CONTEXT
        context.find_by_strategy.assert_called_once_with("css selector", ".row", many=True)
