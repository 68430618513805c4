"""
Command line smoke check: open a page in a real browser and verify it.

    smart-webdriver https://example.com --browser firefox --headless --expect-title "Example Domain"
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .browser import WebBrowser
from .config import BrowserOptions, Timeouts
from .exceptions import SmartWebDriverError, WaitTimeoutError
from .test_response import TestResponse

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(name)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S")
    # Selenium logs every remote command at DEBUG
    logging.getLogger("selenium").setLevel(max(level, logging.INFO))
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Open a page in a browser and check it loaded as expected")
    parser.add_argument("url", help="URL to open")
    parser.add_argument(
        "--browser",
        choices=["chrome", "firefox"],
        default="chrome",
        help="Browser to use (default: chrome)",
    )
    parser.add_argument("--headless", action="store_true", default=False, help="Run browser without a window")
    parser.add_argument("--no-headless", action="store_false", dest="headless", help="Run browser with GUI")
    parser.add_argument("--incognito", action="store_true", help="Open a private browsing window")
    parser.add_argument("--allow-insecure-content", action="store_true", help="Allow mixed http/https content")
    parser.add_argument("--driver-path", help="Driver executable, or the directory containing it")
    parser.add_argument(
        "--use-driver-manager", action="store_true", help="Download a matching driver with webdriver-manager"
    )
    parser.add_argument("--expect-title", help="Text the page title must contain")
    parser.add_argument("--expect-url", help="Text the final URL must contain (e.g. after a redirect)")
    parser.add_argument(
        "--timeout",
        type=int,
        default=Timeouts.ELEMENT_WAIT,
        help=f"Seconds to wait for each expectation (default: {Timeouts.ELEMENT_WAIT})",
    )
    parser.add_argument("--screenshot", help="Save a full-page JPEG screenshot to this path")
    parser.add_argument("--artifacts-dir", help="Where to save debug artifacts if the run fails")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    return parser


def options_from_args(args: argparse.Namespace) -> BrowserOptions:
    options = BrowserOptions(
        browser=args.browser,
        headless=args.headless,
        incognito=args.incognito,
        allow_insecure_content=args.allow_insecure_content,
        driver_path=args.driver_path,
        use_driver_manager=args.use_driver_manager,
    )
    if args.artifacts_dir:
        options.artifacts_dir = args.artifacts_dir
    return options


def run_checks(browser: WebBrowser, args: argparse.Namespace) -> TestResponse:
    """Open the page and collect the result of every requested check."""
    response = TestResponse()

    browser.navigate_to(args.url)
    browser.wait_for_page_load()
    logger.info(f"Loaded '{browser.get_title()}' at {browser.get_url()}")

    if args.expect_url:
        try:
            browser.wait_for_url(args.expect_url, args.timeout)
        except WaitTimeoutError as e:
            response.add(False, str(e))

    if args.expect_title:
        try:
            browser.wait_for_title(args.expect_title, args.timeout)
        except WaitTimeoutError as e:
            response.add(False, str(e))

    if args.screenshot:
        response.add(
            browser.capture_web_page_to_file(args.screenshot),
            f"Failed to save a full-page screenshot to {args.screenshot}",
        )

    return response


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        0 on success, 1 on failure
    """
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        with WebBrowser.launch(options_from_args(args)) as browser:
            response = run_checks(browser, args)
    except SmartWebDriverError as e:
        logger.error(f"Browser run failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error during browser run: {e}")
        return 1

    if response:
        logger.info("All checks passed")
        return 0
    logger.error(f"Checks failed:\n{response.messages_text}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
