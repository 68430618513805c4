"""Tests for the command line smoke check."""

import logging
from unittest.mock import MagicMock, call, patch

import pytest
from smart_webdriver import cli
from smart_webdriver.exceptions import BrowserSetupError, WaitTimeoutError


@pytest.fixture
def launched_browser():
    """Patch WebBrowser.launch to hand out a mock browser."""
    with patch("smart_webdriver.cli.setup_logging"), patch("smart_webdriver.cli.WebBrowser") as mock_browser_cls:
        browser = MagicMock()
        browser.get_title.return_value = "Example Domain"
        browser.get_url.return_value = "https://example.com/"
        mock_browser_cls.launch.return_value.__enter__.return_value = browser
        yield mock_browser_cls, browser


def test_options_from_args():
    """Command line flags map onto BrowserOptions."""
    args = cli.build_parser().parse_args(
        [
            "https://example.com",
            "--browser",
            "firefox",
            "--headless",
            "--incognito",
            "--driver-path",
            "/opt/drivers",
            "--artifacts-dir",
            "/tmp/run-1",
        ]
    )

    options = cli.options_from_args(args)

    assert options.browser == "firefox"
    assert options.headless is True
    assert options.incognito is True
    assert options.allow_insecure_content is False
    assert options.driver_path == "/opt/drivers"
    assert options.artifacts_dir == "/tmp/run-1"


def test_main_success(launched_browser):
    """All checks passing exits with 0."""
    mock_browser_cls, browser = launched_browser

    assert cli.main(["https://example.com", "--expect-title", "Example", "--timeout", "5"]) == 0

    browser.navigate_to.assert_called_once_with("https://example.com")
    browser.wait_for_title.assert_called_once_with("Example", 5)
    browser.wait_for_url.assert_not_called()


def test_main_failed_expectation(launched_browser):
    """A failed expectation exits with 1."""
    mock_browser_cls, browser = launched_browser
    browser.wait_for_url.side_effect = WaitTimeoutError("Tried to wait for the url '/login'")

    assert cli.main(["https://example.com", "--expect-url", "/login"]) == 1


def test_main_screenshot(launched_browser):
    """The full-page screenshot result counts as a check."""
    mock_browser_cls, browser = launched_browser
    browser.capture_web_page_to_file.return_value = False

    assert cli.main(["https://example.com", "--screenshot", "/tmp/page.jpg"]) == 1
    browser.capture_web_page_to_file.assert_called_once_with("/tmp/page.jpg")


def test_main_browser_setup_failure(launched_browser):
    """Browser start-up errors exit with 1."""
    mock_browser_cls, browser = launched_browser
    mock_browser_cls.launch.side_effect = BrowserSetupError("Failed to create chrome browser")

    assert cli.main(["https://example.com"]) == 1


def test_setup_logging_keeps_selenium_quiet():
    """Debug runs still keep the per-command selenium and urllib3 chatter out."""
    with patch("smart_webdriver.cli.logging.basicConfig") as mock_config, patch(
        "smart_webdriver.cli.logging.getLogger"
    ) as mock_get_logger:
        cli.setup_logging(logging.DEBUG)

    assert mock_config.call_args.kwargs["level"] == logging.DEBUG
    assert mock_get_logger.call_args_list == [call("selenium"), call("urllib3")]
    assert mock_get_logger.return_value.setLevel.call_args_list == [call(logging.INFO), call(logging.INFO)]
