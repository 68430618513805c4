"""Browser factory for creating WebDriver instances."""

import logging
import os
import platform
import shutil
from typing import Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.webdriver import WebDriver
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager

from .config import BrowserOptions
from .exceptions import BrowserSetupError

logger = logging.getLogger(__name__)

ARM_ARCHITECTURES = ("aarch64", "arm64", "armv7l")


class BrowserFactory:
    """Factory for creating browser instances."""

    @staticmethod
    def create_driver(options: Optional[BrowserOptions] = None) -> WebDriver:
        """
        Create a WebDriver instance.

        Args:
            options: Browser settings, defaults to a visible Chrome window

        Returns:
            Configured WebDriver instance

        Raises:
            BrowserSetupError: If browser creation fails
        """
        options = options or BrowserOptions()
        try:
            if options.browser == "chrome":
                driver = BrowserFactory._create_chrome(options)
            elif options.browser == "firefox":
                driver = BrowserFactory._create_firefox(options)
            else:
                raise ValueError(f"Unsupported browser type: {options.browser}")
            driver.set_page_load_timeout(options.page_load_timeout)
            return driver
        except Exception as e:
            raise BrowserSetupError(f"Failed to create {options.browser} browser: {e}") from e

    @staticmethod
    def _resolve_driver_executable(options: BrowserOptions, executable: str) -> Optional[str]:
        """
        Find the driver binary to use, or None to let Selenium Manager decide.

        An explicit driver_path wins, then webdriver-manager, then (on ARM,
        where Selenium Manager has no drivers) whatever is on the PATH.
        """
        if options.driver_path:
            if os.path.isdir(options.driver_path):
                return os.path.join(options.driver_path, executable)
            return options.driver_path

        if options.use_driver_manager:
            logger.info(f"Resolving {executable} with webdriver-manager")
            if executable == "chromedriver":
                return ChromeDriverManager().install()
            return GeckoDriverManager().install()

        arch = platform.machine().lower()
        if arch in ARM_ARCHITECTURES:
            logger.info(f"Detected ARM architecture ({arch}), using system {executable}")
            path = shutil.which(executable)
            if not path:
                # Let Selenium try without explicit service (may work if in PATH)
                logger.warning(f"{executable} not found in PATH, attempting without explicit path")
            return path

        logger.info(f"Detected {arch} architecture, using Selenium Manager")
        return None

    @staticmethod
    def _create_chrome(options: BrowserOptions) -> WebDriver:
        """Create Chrome WebDriver with standard options."""
        logger.info("Creating Chrome browser...")
        chrome_options = ChromeOptions()
        chrome_options.add_argument("--dns-prefetch-disable")
        chrome_options.add_argument("test-type")
        if options.maximize:
            chrome_options.add_argument("start-maximized")

        if options.incognito:
            # Private window, immune to cookies of other (non-private) windows
            chrome_options.add_argument("--incognito")
        if options.allow_insecure_content:
            chrome_options.add_argument("--allow-running-insecure-content")
        if options.headless:
            chrome_options.add_argument("--headless=new")
            chrome_options.add_argument("--no-sandbox")
            chrome_options.add_argument("--disable-dev-shm-usage")

        if platform.machine().lower() in ARM_ARCHITECTURES and not options.driver_path:
            chromium_path = shutil.which("chromium") or shutil.which("chromium-browser")
            if chromium_path:
                chrome_options.binary_location = chromium_path
                logger.info(f"Using chromium at: {chromium_path}")

        executable = BrowserFactory._resolve_driver_executable(options, "chromedriver")
        if executable:
            logger.info(f"Using chromedriver at: {executable}")
            driver = webdriver.Chrome(service=ChromeService(executable_path=executable), options=chrome_options)
        else:
            driver = webdriver.Chrome(options=chrome_options)

        logger.info("Chrome browser created successfully")
        return driver

    @staticmethod
    def _create_firefox(options: BrowserOptions) -> WebDriver:
        """Create Firefox WebDriver with standard options."""
        logger.info("Creating Firefox browser...")
        firefox_options = FirefoxOptions()

        if options.incognito:
            firefox_options.add_argument("-private")
        if options.headless:
            firefox_options.add_argument("--headless")
        if options.allow_insecure_content:
            firefox_options.set_preference("security.mixed_content.block_active_content", False)
            firefox_options.set_preference("security.mixed_content.block_display_content", False)
        firefox_options.set_preference("dom.webnotifications.enabled", False)

        if platform.machine().lower() in ARM_ARCHITECTURES and not options.driver_path:
            firefox_path = shutil.which("firefox") or shutil.which("firefox-esr")
            if firefox_path:
                firefox_options.binary_location = firefox_path
                logger.info(f"Using firefox at: {firefox_path}")

        executable = BrowserFactory._resolve_driver_executable(options, "geckodriver")
        if executable:
            logger.info(f"Using geckodriver at: {executable}")
            driver = webdriver.Firefox(service=FirefoxService(executable_path=executable), options=firefox_options)
        else:
            driver = webdriver.Firefox(options=firefox_options)

        if options.maximize:
            driver.maximize_window()

        logger.info("Firefox browser created successfully")
        return driver
