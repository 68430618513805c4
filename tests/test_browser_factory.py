"""Tests for BrowserFactory."""

from unittest.mock import MagicMock, patch

import pytest
from smart_webdriver.browser_factory import BrowserFactory
from smart_webdriver.config import BrowserOptions
from smart_webdriver.exceptions import BrowserSetupError


@pytest.fixture(autouse=True)
def x86_machine():
    """Pretend to run on x86_64 so Selenium Manager is used by default."""
    with patch("smart_webdriver.browser_factory.platform.machine", return_value="x86_64"):
        yield


@patch("smart_webdriver.browser_factory.webdriver.Chrome")
def test_create_chrome_driver(mock_chrome):
    """Test creating Chrome driver with Selenium Manager."""
    mock_driver = MagicMock()
    mock_chrome.return_value = mock_driver

    driver = BrowserFactory.create_driver(BrowserOptions(browser="chrome"))

    assert driver == mock_driver
    mock_chrome.assert_called_once()
    mock_driver.set_page_load_timeout.assert_called_once_with(30)
    arguments = mock_chrome.call_args.kwargs["options"].arguments
    assert "--dns-prefetch-disable" in arguments
    assert "start-maximized" in arguments
    assert "test-type" in arguments
    assert "--incognito" not in arguments
    assert "service" not in mock_chrome.call_args.kwargs


@patch("smart_webdriver.browser_factory.webdriver.Chrome")
def test_create_chrome_driver_options(mock_chrome):
    """Incognito, insecure content and headless map to Chrome arguments."""
    BrowserFactory.create_driver(
        BrowserOptions(browser="chrome", incognito=True, allow_insecure_content=True, headless=True)
    )

    arguments = mock_chrome.call_args.kwargs["options"].arguments
    assert "--incognito" in arguments
    assert "--allow-running-insecure-content" in arguments
    assert "--headless=new" in arguments


@patch("smart_webdriver.browser_factory.ChromeService")
@patch("smart_webdriver.browser_factory.webdriver.Chrome")
def test_create_chrome_driver_from_directory(mock_chrome, mock_service, tmp_path):
    """A driver directory is joined with the driver executable name."""
    BrowserFactory.create_driver(BrowserOptions(browser="chrome", driver_path=str(tmp_path)))

    mock_service.assert_called_once_with(executable_path=str(tmp_path / "chromedriver"))
    assert mock_chrome.call_args.kwargs["service"] == mock_service.return_value


@patch("smart_webdriver.browser_factory.ChromeService")
@patch("smart_webdriver.browser_factory.ChromeDriverManager")
@patch("smart_webdriver.browser_factory.webdriver.Chrome")
def test_create_chrome_driver_with_driver_manager(mock_chrome, mock_manager, mock_service):
    """webdriver-manager provides the driver binary when requested."""
    mock_manager.return_value.install.return_value = "/cache/chromedriver"

    BrowserFactory.create_driver(BrowserOptions(browser="chrome", use_driver_manager=True))

    mock_service.assert_called_once_with(executable_path="/cache/chromedriver")


@patch("smart_webdriver.browser_factory.ChromeService")
@patch("smart_webdriver.browser_factory.shutil.which")
@patch("smart_webdriver.browser_factory.webdriver.Chrome")
def test_create_chrome_driver_on_arm(mock_chrome, mock_which, mock_service):
    """On ARM the system chromium and chromedriver are used."""
    mock_which.side_effect = lambda name: f"/usr/bin/{name}"

    with patch("smart_webdriver.browser_factory.platform.machine", return_value="aarch64"):
        BrowserFactory.create_driver(BrowserOptions(browser="chrome"))

    assert mock_chrome.call_args.kwargs["options"].binary_location == "/usr/bin/chromium"
    mock_service.assert_called_once_with(executable_path="/usr/bin/chromedriver")


@patch("smart_webdriver.browser_factory.webdriver.Firefox")
def test_create_firefox_driver(mock_firefox):
    """Test creating Firefox driver with Selenium Manager."""
    mock_driver = MagicMock()
    mock_firefox.return_value = mock_driver

    driver = BrowserFactory.create_driver(BrowserOptions(browser="firefox", incognito=True, headless=True))

    assert driver == mock_driver
    mock_firefox.assert_called_once()
    mock_driver.maximize_window.assert_called_once()
    mock_driver.set_page_load_timeout.assert_called_once_with(30)
    arguments = mock_firefox.call_args.kwargs["options"].arguments
    assert "-private" in arguments
    assert "--headless" in arguments


@patch("smart_webdriver.browser_factory.webdriver.Firefox")
def test_create_firefox_driver_not_maximized(mock_firefox):
    """Maximizing can be turned off."""
    BrowserFactory.create_driver(BrowserOptions(browser="firefox", maximize=False))

    mock_firefox.return_value.maximize_window.assert_not_called()


def test_create_driver_invalid_browser():
    """Test creating driver with invalid browser type."""
    with pytest.raises(BrowserSetupError, match="Unsupported browser type"):
        BrowserFactory.create_driver(BrowserOptions(browser="invalid"))  # type: ignore[arg-type]


@patch("smart_webdriver.browser_factory.webdriver.Chrome")
def test_create_driver_failure(mock_chrome):
    """Test browser creation failure with Selenium Manager."""
    mock_chrome.side_effect = Exception("Browser failed")

    with pytest.raises(BrowserSetupError, match="Failed to create chrome browser"):
        BrowserFactory.create_driver()
