"""Custom exceptions for the browser automation layer."""


class SmartWebDriverError(Exception):
    """Base exception for all browser automation failures."""

    pass


class BrowserSetupError(SmartWebDriverError):
    """Browser initialization failed."""

    pass


class LocatorError(SmartWebDriverError):
    """Page element has no locator, or more than one."""

    pass


class ElementNotFoundError(SmartWebDriverError):
    """Element was not found on the page."""

    pass


class ElementInteractionError(SmartWebDriverError):
    """Element was found but acting on it failed."""

    pass


class NavigationError(SmartWebDriverError):
    """Page failed to load or redirect as expected."""

    pass


class WaitTimeoutError(SmartWebDriverError):
    """Condition was not met before the wait expired."""

    pass


class AssertionFailedError(SmartWebDriverError, AssertionError):
    """Accumulated test response did not have the expected outcome."""

    pass
