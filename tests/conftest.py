"""Shared fixtures for smart_webdriver tests."""

import time
from unittest.mock import MagicMock

import pytest
from smart_webdriver import browser as browser_module
from smart_webdriver import screenshot as screenshot_module
from smart_webdriver import wait as wait_module
from smart_webdriver.browser import WebBrowser
from smart_webdriver.config import BrowserOptions


class FakeClock:
    """Stands in for the time module so waits finish instantly."""

    strftime = staticmethod(time.strftime)

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock(monkeypatch):
    """Replace time in the modules that poll or sleep."""
    clock = FakeClock()
    for module in (wait_module, browser_module, screenshot_module):
        monkeypatch.setattr(module, "time", clock)
    return clock


@pytest.fixture
def mock_driver():
    """Create mock WebDriver."""
    driver = MagicMock()
    driver.current_url = "http://test.com/page"
    driver.title = "Test Page"
    driver.page_source = "<html><body>Test</body></html>"
    driver.window_handles = ["main"]
    driver.current_window_handle = "main"
    return driver


@pytest.fixture
def browser(mock_driver, fake_clock, tmp_path):
    """Create WebBrowser around the mock driver."""
    return WebBrowser(mock_driver, BrowserOptions(artifacts_dir=str(tmp_path / "artifacts")))
