"""Configuration classes for browser sessions."""

from dataclasses import dataclass
from typing import Literal, Optional


class Timeouts:
    """Timeout constants (seconds) for different wait scenarios."""

    PAGE_LOAD = 30  # Selenium page load timeout
    ELEMENT_WAIT = 30  # Waiting for an element to appear or disappear
    CONDITION_WAIT = 10  # Css values, classes, select options, iframes
    POPUP_WAIT = 5  # New window handle after triggering a popup
    POPUP_POLL = 0.1
    SILENT_VISIBLE_WAIT = 5
    BODY_TEXT_PAGE_LOAD = 5  # Page load timeout while reading the body text
    POLL_INTERVAL = 1  # Default interval between polling attempts
    CLEAR_SETTLE = 0.5  # Clearing a field is slightly delayed in some browsers
    CLICK_SETTLE = 0.2
    SCROLL_SETTLE = 0.1  # Between full-page screenshot tiles
    ANGULAR_SETTLE = 0.5


@dataclass
class BrowserOptions:
    """Settings used when launching a browser."""

    browser: Literal["chrome", "firefox"] = "chrome"
    incognito: bool = False
    allow_insecure_content: bool = False
    headless: bool = False
    # Directory containing the driver executable, or the executable itself
    driver_path: Optional[str] = None
    # Download a matching driver with webdriver-manager instead of Selenium Manager
    use_driver_manager: bool = False
    maximize: bool = True
    page_load_timeout: int = Timeouts.PAGE_LOAD
    # Directory to save debug artifacts (screenshots, page sources)
    artifacts_dir: str = "/tmp/smart-webdriver-artifacts"
