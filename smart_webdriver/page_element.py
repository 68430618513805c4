"""Declarative descriptions of elements on a page."""

from enum import Enum
from typing import Optional, Tuple

from selenium.webdriver.common.by import By

from .exceptions import LocatorError


class ElementLocator(Enum):
    """Strategy used to find a page element."""

    NONE = "none"
    ID = "id"
    NAME = "name"
    LINK_INNER_TEXT = "link_inner_text"
    HREF = "href"
    CLASS = "class_name"
    TAG = "tag"
    CSS = "css"
    XPATH = "xpath"


class PageElement:
    """
    A named element on a page, located by exactly one strategy.

    The element is not looked up until a browser action needs it, so page
    elements can be declared once as class attributes of a page object:

        SUBMIT = PageElement("Submit button", css="form button[type=submit]")
        HOME_LINK = PageElement("Home link", link_inner_text="Home")

    Setting a second locator on the same element raises LocatorError.
    """

    def __init__(
        self,
        description: str,
        *,
        id: Optional[str] = None,
        name: Optional[str] = None,
        link_inner_text: Optional[str] = None,
        href: Optional[str] = None,
        class_name: Optional[str] = None,
        tag: Optional[str] = None,
        css: Optional[str] = None,
        xpath: Optional[str] = None,
    ):
        self.description = description
        self._locator_used = ElementLocator.NONE
        self._values: dict[ElementLocator, str] = {}

        for locator, value in (
            (ElementLocator.ID, id),
            (ElementLocator.NAME, name),
            (ElementLocator.LINK_INNER_TEXT, link_inner_text),
            (ElementLocator.HREF, href),
            (ElementLocator.CLASS, class_name),
            (ElementLocator.TAG, tag),
            (ElementLocator.CSS, css),
            (ElementLocator.XPATH, xpath),
        ):
            if value is not None:
                self._set(locator, value)

    def __repr__(self) -> str:
        if self._locator_used is ElementLocator.NONE:
            return f"PageElement({self.description!r})"
        return f"PageElement({self.description!r}, {self._locator_used.value}={self._values[self._locator_used]!r})"

    @property
    def locator_used(self) -> ElementLocator:
        return self._locator_used

    @locator_used.setter
    def locator_used(self, value: ElementLocator) -> None:
        if self._locator_used is not ElementLocator.NONE:
            raise LocatorError("You can only set 1 locator for a page element")
        self._locator_used = value

    def _set(self, locator: ElementLocator, value: str) -> None:
        self.locator_used = locator
        self._values[locator] = value

    @property
    def id(self) -> Optional[str]:
        return self._values.get(ElementLocator.ID)

    @id.setter
    def id(self, value: str) -> None:
        self._set(ElementLocator.ID, value)

    @property
    def name(self) -> Optional[str]:
        return self._values.get(ElementLocator.NAME)

    @name.setter
    def name(self, value: str) -> None:
        self._set(ElementLocator.NAME, value)

    @property
    def link_inner_text(self) -> Optional[str]:
        return self._values.get(ElementLocator.LINK_INNER_TEXT)

    @link_inner_text.setter
    def link_inner_text(self, value: str) -> None:
        self._set(ElementLocator.LINK_INNER_TEXT, value)

    @property
    def href(self) -> Optional[str]:
        return self._values.get(ElementLocator.HREF)

    @href.setter
    def href(self, value: str) -> None:
        self._set(ElementLocator.HREF, value)

    @property
    def class_name(self) -> Optional[str]:
        return self._values.get(ElementLocator.CLASS)

    @class_name.setter
    def class_name(self, value: str) -> None:
        self._set(ElementLocator.CLASS, value)

    @property
    def tag(self) -> Optional[str]:
        return self._values.get(ElementLocator.TAG)

    @tag.setter
    def tag(self, value: str) -> None:
        self._set(ElementLocator.TAG, value)

    @property
    def css(self) -> Optional[str]:
        return self._values.get(ElementLocator.CSS)

    @css.setter
    def css(self, value: str) -> None:
        self._set(ElementLocator.CSS, value)

    @property
    def xpath(self) -> Optional[str]:
        return self._values.get(ElementLocator.XPATH)

    @xpath.setter
    def xpath(self, value: str) -> None:
        self._set(ElementLocator.XPATH, value)

    def to_locator(self) -> Tuple[str, str]:
        """
        Return the selenium (By.TYPE, value) tuple for this element.

        Raises:
            LocatorError: If no locator has been set
        """
        locator = self._locator_used
        if locator is ElementLocator.NONE:
            raise LocatorError(
                "Need to specify at least 1 method (ID, Name, XPath, etc...) for finding the page element"
            )
        value = self._values[locator]

        if locator is ElementLocator.ID:
            return (By.ID, value)
        elif locator is ElementLocator.NAME:
            return (By.NAME, value)
        elif locator is ElementLocator.LINK_INNER_TEXT:
            return (By.PARTIAL_LINK_TEXT, value)
        elif locator is ElementLocator.HREF:
            return (By.CSS_SELECTOR, f'a[href*="{value}"]')
        elif locator is ElementLocator.CLASS:
            return (By.CLASS_NAME, value)
        elif locator is ElementLocator.TAG:
            return (By.TAG_NAME, value)
        elif locator is ElementLocator.CSS:
            return (By.CSS_SELECTOR, value)
        return (By.XPATH, value)

    @property
    def selector_description(self) -> str:
        """Human readable form of the locator, used in error messages."""
        labels = {
            ElementLocator.ID: "id",
            ElementLocator.NAME: "name",
            ElementLocator.LINK_INNER_TEXT: "Link Innertext",
            ElementLocator.HREF: "href",
            ElementLocator.CLASS: "class",
            ElementLocator.TAG: "tag",
            ElementLocator.CSS: "css",
            ElementLocator.XPATH: "xPath",
        }
        if self._locator_used is ElementLocator.NONE:
            return "none"
        return f"{labels[self._locator_used]}: {self._values[self._locator_used]}"
