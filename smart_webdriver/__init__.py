"""Declarative page elements and retrying browser actions on top of Selenium WebDriver."""

from .browser import WebBrowser
from .browser_factory import BrowserFactory
from .config import BrowserOptions, Timeouts
from .exceptions import (
    AssertionFailedError,
    BrowserSetupError,
    ElementInteractionError,
    ElementNotFoundError,
    LocatorError,
    NavigationError,
    SmartWebDriverError,
    WaitTimeoutError,
)
from .page_element import ElementLocator, PageElement
from .test_response import TestResponse
from .wait import Wait

__all__ = [
    "WebBrowser",
    "BrowserFactory",
    "BrowserOptions",
    "Timeouts",
    "PageElement",
    "ElementLocator",
    "TestResponse",
    "Wait",
    "SmartWebDriverError",
    "BrowserSetupError",
    "LocatorError",
    "ElementNotFoundError",
    "ElementInteractionError",
    "NavigationError",
    "WaitTimeoutError",
    "AssertionFailedError",
]
