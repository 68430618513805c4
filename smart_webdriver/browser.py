"""Browser wrapper driving a live WebDriver session through PageElements."""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import Select, WebDriverWait

from .browser_factory import BrowserFactory
from .config import BrowserOptions, Timeouts
from .exceptions import (
    ElementInteractionError,
    ElementNotFoundError,
    LocatorError,
    NavigationError,
    SmartWebDriverError,
    WaitTimeoutError,
)
from .page_element import PageElement
from .screenshot import capture_full_page
from .test_response import TestResponse
from .wait import Duration, Wait, as_seconds

logger = logging.getLogger(__name__)

ANGULAR_IDLE_SCRIPT = """
    return (function(selector) {
        var idle = false;
        var callback = function() { idle = true; };
        var el = document.querySelector(selector);
        angular.element(el).injector().get('$browser').notifyWhenNoOutstandingRequests(callback);
        return idle;
    })(arguments[0]);
"""


class WebBrowser:
    """
    High level browser actions on PageElements.

    Wrap an existing driver, or start one from BrowserOptions:

        with WebBrowser.launch(BrowserOptions(browser="firefox")) as browser:
            browser.navigate_to("https://example.com")
            browser.click(PageElement("More information link", link_inner_text="More"))

    Leaving the with block quits the browser. If the block raised, a
    screenshot and the page source are saved to options.artifacts_dir first.
    """

    def __init__(self, driver: WebDriver, options: Optional[BrowserOptions] = None):
        """
        Args:
            driver: Selenium WebDriver instance
            options: Settings the driver was started with
        """
        self.driver = driver
        self.options = options or BrowserOptions()
        self.page_load_timeout = self.options.page_load_timeout

    @classmethod
    def launch(cls, options: Optional[BrowserOptions] = None) -> "WebBrowser":
        """Start a new browser session."""
        options = options or BrowserOptions()
        return cls(BrowserFactory.create_driver(options), options)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            artifacts = self.save_debug_artifacts(self.options.artifacts_dir, "failure")
            logger.info(f"Saved debug artifacts: {artifacts}")
        self.quit()

    # Element lookup

    def get_element(self, page_element: PageElement) -> WebElement:
        """
        Find the first element matching a PageElement.

        Raises:
            LocatorError: If the PageElement has no locator
            ElementNotFoundError: If no element matches
        """
        locator = page_element.to_locator()
        try:
            return self.driver.find_element(*locator)
        except WebDriverException as e:
            raise ElementNotFoundError(
                f"Failed to find element '{page_element.description}'.\n"
                f"Selector used: {page_element.selector_description}\nException thrown: {e.msg}"
            ) from e

    def get_elements(self, page_element: PageElement) -> list[WebElement]:
        """Find every element matching a PageElement (possibly none)."""
        locator = page_element.to_locator()
        try:
            return self.driver.find_elements(*locator)
        except WebDriverException as e:
            raise ElementNotFoundError(
                f"Failed to find elements '{page_element.description}'.\n"
                f"Selector used: {page_element.selector_description}\nException thrown: {e.msg}"
            ) from e

    def find_all(self, page_element: PageElement) -> list[WebElement]:
        return self.get_elements(page_element)

    def get_section(self, page_element: PageElement, section_index: int) -> WebElement:
        """Return the element at section_index among all matches of page_element."""
        elements = self.get_elements(page_element)
        try:
            return elements[section_index]
        except IndexError as e:
            raise ElementNotFoundError(
                f"Section {section_index} of '{page_element.description}' does not exist, "
                f"only {len(elements)} found"
            ) from e

    def exists(self, page_element: PageElement) -> bool:
        """Check if at least one matching element is present in the DOM."""
        try:
            return len(self.get_elements(page_element)) > 0
        except SmartWebDriverError:
            return False

    # Navigation and page state

    def navigate_to(self, url: str) -> None:
        """
        Load a URL.

        A page load timeout is tolerated when the browser already reached
        the URL, since slow subresources often trigger it after the page is usable.

        Raises:
            NavigationError: If the page could not be loaded
        """
        logger.info(f"Navigating to: {url}")
        try:
            self.driver.set_page_load_timeout(self.page_load_timeout)
            self.driver.get(url)
        except TimeoutException as e:
            if url not in self.get_url():
                raise NavigationError(f"Timed out navigating to '{url}', current url: {self.get_url()}") from e
            logger.warning(f"Page load timed out, but the browser is on {url}. Continuing")
        except WebDriverException as e:
            raise NavigationError(f"Tried to navigate to '{url}' but got an exception") from e

    def navigate_to_and_confirm_redirect(self, url: str, expected_redirect_url: str) -> None:
        """
        Load a URL and confirm it redirects to expected_redirect_url.

        Tries once more if the first attempt does not end on the expected URL.
        """
        timeout = Timeouts.ELEMENT_WAIT
        try:
            self.navigate_to(url)
            self.wait_for_url(expected_redirect_url, timeout)
        except (NavigationError, WaitTimeoutError) as first_error:
            current_url = self.get_url()
            if expected_redirect_url in current_url:
                return
            logger.warning(f"Redirect to {expected_redirect_url} not seen ({first_error}), trying again")
            try:
                self.navigate_to(url)
                self.wait_for_url(expected_redirect_url, timeout)
            except (NavigationError, WaitTimeoutError) as e:
                raise NavigationError(
                    f"Tried to navigate to:\n{url},\nexpecting it to redirect to:\n{expected_redirect_url}.\n"
                    f"Waited for {timeout} seconds, but instead I got an error.\nCurrent url: {self.get_url()}"
                ) from e

    def go_back(self) -> None:
        self.driver.back()

    def refresh(self) -> None:
        try:
            self.driver.refresh()
        except TimeoutException:
            logger.debug("Timed out refreshing the page, trying to proceed anyway")

    def get_title(self) -> str:
        return self.driver.title

    def get_url(self) -> str:
        return self.driver.current_url

    def get_page_source(self) -> str:
        return self.driver.page_source

    def get_page_body_text(self) -> str:
        """Return the text of the page body, or "" if it can't be read."""
        try:
            self.driver.set_page_load_timeout(Timeouts.BODY_TEXT_PAGE_LOAD)
            return self.driver.find_element(By.TAG_NAME, "body").text
        except WebDriverException:
            return ""
        finally:
            try:
                self.driver.set_page_load_timeout(self.page_load_timeout)
            except WebDriverException as e:
                logger.debug(f"Could not restore page load timeout: {e}")

    def get_number_of_open_tabs(self) -> int:
        return len(self.driver.window_handles)

    def execute_script(self, script: str, *args):
        """Run JavaScript in the page and return its result."""
        return self.driver.execute_script(script, *args)

    def close(self) -> None:
        """Close the current window, quitting the browser if it was the last one."""
        self.driver.close()

    def quit(self) -> None:
        """Close the driver and every associated window."""
        self.driver.quit()

    # Alerts, frames and windows

    def accept_alert(self) -> None:
        self.driver.switch_to.alert.accept()

    def dismiss_alert(self) -> None:
        self.driver.switch_to.alert.dismiss()

    def switch_to_default_frame(self) -> None:
        self.driver.switch_to.default_content()

    def switch_to_iframe(self, iframe_index: int) -> None:
        """Wait for the page to have enough iframes, then switch to the one at iframe_index."""
        desired_count = iframe_index + 1
        iframe = PageElement("Iframe", css="iframe")

        def enough_iframes() -> TestResponse:
            count = len(self.get_elements(iframe))
            return TestResponse(
                count >= desired_count,
                f"Failed to wait for enough iFrames, current count '{count}', required: {desired_count}",
            )

        Wait.up_to(Timeouts.CONDITION_WAIT).until(enough_iframes)
        self.driver.switch_to.frame(iframe_index)

    def switch_to_iframe_element(self, page_element: PageElement) -> None:
        self.wait_for_any(page_element, Timeouts.ELEMENT_WAIT)
        self.driver.switch_to.frame(self.get_element(page_element))

    def switch_to_tab(self, tab_index: int) -> None:
        """Wait for the given tab index to exist, then switch to it."""
        try:
            WebDriverWait(self.driver, Timeouts.ELEMENT_WAIT).until(lambda d: tab_index + 1 <= len(d.window_handles))
        except TimeoutException as e:
            raise WaitTimeoutError(
                f"Waited {Timeouts.ELEMENT_WAIT} seconds for tab {tab_index} to open, "
                f"but only {self.get_number_of_open_tabs()} tabs are open"
            ) from e
        self.driver.switch_to.window(self.driver.window_handles[tab_index])

    def trigger_popup_and_perform_action_within_it(
        self, cause_popup_action: Callable[[], None], in_popup_action: Callable[[], None]
    ) -> None:
        """
        Open a popup window and do something inside it.

        Args:
            cause_popup_action: Action that opens the popup
            in_popup_action: Anything to do within the popup, e.g. data entry and assertions

        The popup is closed afterwards and the original window is selected again.
        """
        original_handle = self.driver.current_window_handle
        original_handles = list(self.driver.window_handles)

        cause_popup_action()

        popup_handle = None

        def popup_opened() -> TestResponse:
            nonlocal popup_handle
            new_handles = [handle for handle in self.driver.window_handles if handle not in original_handles]
            response = TestResponse(len(new_handles) > 0, "Was expecting a popup window to load, but it didn't")
            if response:
                popup_handle = new_handles[0]
            return response

        Wait.up_to(Timeouts.POPUP_WAIT).checking_every(Timeouts.POPUP_POLL).until(popup_opened)

        self.driver.switch_to.window(popup_handle)
        in_popup_action()

        self.driver.close()
        self.driver.switch_to.window(original_handle)

    # Clicking

    def click(self, page_element: PageElement, scroll_into_view_before_click: bool = True) -> None:
        time.sleep(Timeouts.CLICK_SETTLE)
        web_element = self.get_element(page_element)
        if scroll_into_view_before_click:
            self._scroll_web_element_into_view(web_element, page_element.description)
        self.click_web_element(web_element, page_element.description)

    def click_web_element(self, web_element: WebElement, description: str) -> None:
        """
        Click an element previously found through a PageElement.

        A driver timeout during the click is logged and ignored: the page has
        often already moved on, and a real failure shows up in the next step.
        """
        try:
            web_element.click()
        except TimeoutException:
            logger.warning(
                f"Attempted to click the element '{description}' and got a timeout exception, trying to continue anyway"
            )
        except WebDriverException as e:
            raise ElementInteractionError(f"Attempted to click the element '{description}' but failed") from e

    def javascript_click(self, page_element: PageElement) -> None:
        self.javascript_click_web_element(self.get_element(page_element), page_element.description)

    def javascript_click_web_element(self, web_element: WebElement, description: str = "element") -> None:
        try:
            self.execute_script("arguments[0].click();", web_element)
        except WebDriverException as e:
            raise ElementInteractionError(f"Tried to click '{description}' via Javascript, but got an error") from e

    def right_click(self, page_element: PageElement, scroll_into_view_before_click: bool = True) -> None:
        time.sleep(Timeouts.CLICK_SETTLE)
        web_element = self.get_element(page_element)
        if scroll_into_view_before_click:
            self._scroll_web_element_into_view(web_element, page_element.description)
        self.right_click_web_element(web_element, page_element.description)

    def right_click_web_element(self, web_element: WebElement, description: str) -> None:
        try:
            ActionChains(self.driver).context_click(web_element).perform()
        except WebDriverException as e:
            raise ElementInteractionError(f"Attempted to right click the element '{description}' but failed") from e

    def drag_and_drop(self, element_to_drag: PageElement, target_element: PageElement) -> None:
        self.drag_and_drop_web_elements(
            self.get_element(element_to_drag),
            element_to_drag.description,
            self.get_element(target_element),
            target_element.description,
        )

    def drag_and_drop_web_elements(
        self, element_to_drag: WebElement, drag_description: str, target_element: WebElement, target_description: str
    ) -> None:
        try:
            ActionChains(self.driver).drag_and_drop(element_to_drag, target_element).perform()
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Attempted to drag and drop '{drag_description}' to '{target_description}' but failed"
            ) from e

    def check(self, page_element: PageElement) -> None:
        """Make sure a checkbox is ticked."""
        self.wait_for_any(page_element, Timeouts.ELEMENT_WAIT)
        web_element = self.get_element(page_element)
        try:
            if not web_element.is_selected():
                web_element.click()
        except WebDriverException as e:
            raise ElementInteractionError(f"Tried to check '{page_element.description}' but it failed") from e

    def uncheck(self, page_element: PageElement) -> None:
        web_element = self.get_element(page_element)
        try:
            if web_element.is_selected():
                web_element.click()
        except WebDriverException as e:
            raise ElementInteractionError(f"Tried to uncheck '{page_element.description}' but it failed") from e

    # Text entry and keys

    def clear(self, page_element: PageElement) -> None:
        web_element = self.get_element(page_element)
        try:
            web_element.clear()
            time.sleep(Timeouts.CLEAR_SETTLE)
        except WebDriverException as e:
            raise ElementInteractionError(f"Tried to clear: {page_element.description}, but got an error: {e.msg}") from e

    def enter_text(self, page_element: PageElement, text: str) -> None:
        """Replace the contents of an input field."""
        web_element = self.get_element(page_element)
        try:
            web_element.clear()
            time.sleep(Timeouts.CLEAR_SETTLE)
            web_element.send_keys(text)
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Tried to enter the text '{text}' into element '{page_element.description}' but failed"
            ) from e

    def send_keys(self, page_element: PageElement, text: str) -> None:
        """Type into an element without clearing it first."""
        web_element = self.get_element(page_element)
        try:
            web_element.send_keys(text)
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Tried to submit text '{text}' to element '{page_element.description}' but got an error"
            ) from e

    def send_keys_to_page(self, text: str) -> None:
        """Type into whatever currently has focus."""
        try:
            ActionChains(self.driver).send_keys(text).perform()
        except WebDriverException as e:
            raise ElementInteractionError(f"Tried to submit text '{text}' but it failed") from e

    def send_keys_one_char_at_a_time(self, text: str) -> None:
        try:
            actions = ActionChains(self.driver)
            for char in text:
                actions.send_keys(char)
            actions.perform()
        except WebDriverException as e:
            raise ElementInteractionError(f"Tried to submit text '{text}' one char at a time but it failed") from e

    def select_all_then_delete(self, page_element: PageElement) -> None:
        """Clear a field with Ctrl+A, Delete. Useful for custom editors that ignore clear()."""
        web_element = self.get_element(page_element)
        try:
            try:
                # Some elements are not directly clickable but already have focus
                web_element.click()
                time.sleep(Timeouts.CLEAR_SETTLE)
            except WebDriverException as e:
                logger.info(
                    f"Tried to click on '{page_element.description}' in order to clear it, "
                    f"but the click failed. Continuing.\nException details: {e.msg}"
                )
            (
                ActionChains(self.driver)
                .key_down(Keys.CONTROL)
                .send_keys("a")
                .key_up(Keys.CONTROL)
                .send_keys(Keys.DELETE)
                .perform()
            )
            time.sleep(Timeouts.CLEAR_SETTLE)
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Tried to remove the text from '{page_element.description}' using Ctrl+A, Delete but it failed!"
            ) from e

    def _send_key_to_element(self, page_element: PageElement, key: str, key_name: str) -> None:
        web_element = self.get_element(page_element)
        try:
            self._scroll_web_element_into_view(web_element, page_element.description)
            web_element.send_keys(key)
        except (WebDriverException, ElementInteractionError) as e:
            raise ElementInteractionError(
                f"Tried to send '{key_name}' to element: {page_element.description}.\nBut got an error"
            ) from e

    def press_enter(self, page_element: PageElement) -> None:
        self._send_key_to_element(page_element, Keys.ENTER, "ENTER")

    def press_tab(self, page_element: PageElement) -> None:
        self._send_key_to_element(page_element, Keys.TAB, "TAB")

    def press_escape(self) -> None:
        try:
            ActionChains(self.driver).send_keys(Keys.ESCAPE).perform()
        except WebDriverException as e:
            raise ElementInteractionError("Tried to send 'ESCAPE' to the page.\nBut got an error") from e

    def file_upload(self, page_element: PageElement, file_path: str) -> None:
        web_element = self.get_element(page_element)
        try:
            self._scroll_web_element_into_view(web_element, page_element.description)
            web_element.send_keys(file_path)
        except (WebDriverException, ElementInteractionError) as e:
            raise ElementInteractionError(
                f"Tried to upload a file from '{file_path}' into element: {page_element.description}\nBut I got an error"
            ) from e

    # Attributes and state

    def get_attribute_value(self, page_element: PageElement, attribute_name: str) -> Optional[str]:
        web_element = self.get_element(page_element)
        try:
            return web_element.get_attribute(attribute_name)
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Failed to get the '{attribute_name}' attribute value of the element: {page_element.description}"
            ) from e

    def get_inner_html(self, page_element: PageElement) -> Optional[str]:
        return self.get_attribute_value(page_element, "innerHTML")

    def set_attribute_value(self, page_element: PageElement, attribute: str, value: str) -> None:
        web_element = self.get_element(page_element)
        try:
            self.execute_script("arguments[0].setAttribute(arguments[1], arguments[2]);", web_element, attribute, value)
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Failed to set the '{attribute}' attribute of the element: {page_element.description}"
            ) from e

    def set_text(self, page_element: PageElement, text: str) -> None:
        """Set the value attribute directly, for inputs where send_keys doesn't work."""
        self.set_attribute_value(page_element, "value", text)

    def get_text(self, page_element: PageElement) -> str:
        web_element = self.get_element(page_element)
        try:
            return web_element.text
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Tried to get the text for the element '{page_element.description}' but got an error."
            ) from e

    def is_enabled(self, page_element: PageElement) -> bool:
        web_element = self.get_element(page_element)
        try:
            self._scroll_web_element_into_view(web_element, page_element.description)
            return web_element.is_enabled()
        except (WebDriverException, ElementInteractionError):
            return False

    def is_selected(self, page_element: PageElement) -> bool:
        web_element = self.get_element(page_element)
        try:
            return web_element.is_selected()
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Tried to determine if the '{page_element.description}' element was selected, but got an error."
            ) from e

    def is_visible(self, page_element: PageElement) -> bool:
        """Check if the element exists and is displayed. Never raises."""
        try:
            web_element = self.get_element(page_element)
            self._scroll_web_element_into_view(web_element, page_element.description)
            return web_element.is_displayed()
        except (WebDriverException, SmartWebDriverError):
            return False

    def scroll_into_view(self, page_element: PageElement, align_to_top: bool = False) -> None:
        self._scroll_web_element_into_view(self.get_element(page_element), page_element.description, align_to_top)

    def _scroll_web_element_into_view(self, web_element: WebElement, description: str, align_to_top: bool = False) -> None:
        try:
            self.execute_script("arguments[0].scrollIntoView(arguments[1]);", web_element, align_to_top)
        except WebDriverException as e:
            raise ElementInteractionError(f"Tried to scroll to element '{description}', but got an error:\n{e.msg}") from e

    # Select lists

    def get_select_options(self, page_element: PageElement) -> list[str]:
        """Return the text of every option of a select element."""
        self.wait_for_any(page_element, Timeouts.ELEMENT_WAIT)
        web_element = self.get_element(page_element)
        try:
            return [option.text for option in Select(web_element).options]
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Tried to get the list of options for the select element '{page_element.description}' but got an error."
            ) from e

    def get_selected_options(self, page_element: PageElement) -> list[str]:
        web_element = self.get_element(page_element)
        try:
            return [option.text for option in Select(web_element).all_selected_options]
        except WebDriverException as e:
            raise ElementInteractionError(
                f"Tried to get the currently selected option(s) from '{page_element.description}' but there was an error"
            ) from e

    def select(self, page_element: PageElement, option_to_select: str, partial_match: bool = False) -> None:
        """
        Choose an option of a select element by its visible text.

        Args:
            page_element: The select element
            option_to_select: Visible text of the option
            partial_match: Choose the first option whose text contains option_to_select

        Raises:
            WaitTimeoutError: If the select element never gets any options
            ElementInteractionError: If no option matches
        """
        self.wait_for_any(page_element, Timeouts.ELEMENT_WAIT)
        web_element = self.get_element(page_element)
        select_element = Select(web_element)

        Wait.up_to(Timeouts.CONDITION_WAIT).until(
            lambda: TestResponse(
                len(select_element.options) > 0,
                f"Expected the Select element '{page_element.description}' to have at least 1 option, "
                f"so I could select '{option_to_select}' but it had none available",
            )
        )

        try:
            if not partial_match:
                select_element.select_by_visible_text(option_to_select)
                return

            for option in select_element.options:
                if option_to_select in option.text:
                    if not option.is_selected():
                        option.click()
                    return
            raise ElementInteractionError(f"No option contains the text '{option_to_select}'")
        except (WebDriverException, ElementInteractionError) as e:
            current_options = ", ".join(option.text for option in select_element.options)
            raise ElementInteractionError(
                f"Tried to select the option '{option_to_select}' from the select element "
                f"'{page_element.description}'.\nBut it failed, current options: {current_options}"
            ) from e

    def verify_select_option_exists(self, page_element: PageElement, option_name: str) -> TestResponse:
        self.silent_wait_for_visible(page_element, Timeouts.SILENT_VISIBLE_WAIT)
        if self.exists(page_element):
            self.scroll_into_view(page_element)

        if not self.is_visible(page_element):
            return TestResponse(
                False,
                f"Couldn't find the select element '{page_element.description}', "
                f"was waiting for it to verify it had the option: {option_name}",
            )

        options = self.get_select_options(page_element)
        return TestResponse(
            option_name in options,
            f"Option '{option_name}' not found in select list '{page_element.description}'.\nList contains:\n"
            + (", ".join(options) if options else "n/a"),
        )

    # Waits

    def wait_for_any(self, page_element: PageElement, timeout: Duration) -> None:
        """
        Wait for at least one matching element to be present.

        Raises:
            ElementNotFoundError: If nothing matched within the timeout
        """
        locator = page_element.to_locator()
        seconds = as_seconds(timeout)
        try:
            WebDriverWait(self.driver, seconds).until(lambda d: len(d.find_elements(*locator)) > 0)
        except TimeoutException as e:
            raise ElementNotFoundError(
                f"Waited {seconds:g} seconds for element '{page_element.description}', but it never appeared.\n"
                f"Selector used: {page_element.selector_description}"
            ) from e

    def wait_for_exists(self, page_element: PageElement, timeout: Duration) -> None:
        seconds = as_seconds(timeout)
        Wait.up_to(seconds).until(
            lambda: TestResponse(
                self.exists(page_element), f"'{page_element.description}' doesn't exist, waited {seconds:g} seconds"
            )
        )

    def wait_for_visible(self, page_element: PageElement, timeout: Duration) -> None:
        Wait.up_to(timeout).until(
            lambda: TestResponse(
                self.is_visible(page_element),
                f"Failed to wait for the element '{page_element.description}' to be visible",
            )
        )

    def silent_wait_for_visible(self, page_element: PageElement, timeout: Duration) -> None:
        """Wait for the element to be visible, but carry on quietly if it never is."""
        try:
            Wait.up_to(timeout).until(lambda: self.is_visible(page_element))
        except WaitTimeoutError:
            logger.debug(f"'{page_element.description}' did not become visible within {as_seconds(timeout):g} seconds")

    def wait_for_not_visible(self, page_element: PageElement, timeout: Duration = Timeouts.ELEMENT_WAIT) -> None:
        Wait.up_to(timeout).until(
            lambda: TestResponse(
                not self.is_visible(page_element),
                f"Waited for the '{page_element.description}' element to disappear but it didn't",
            )
        )

    def wait_while_ensuring_not_visible(
        self, page_element: PageElement, timeout: Duration = Timeouts.ELEMENT_WAIT
    ) -> None:
        """Check the element stays hidden for the whole timeout."""
        Wait.up_to(timeout).while_ensuring(
            lambda: TestResponse(
                not self.is_visible(page_element),
                f"Expected '{page_element.description}' to remain not visible, but it became visible",
            )
        )

    def wait_for_enabled(self, page_element: PageElement, timeout: Duration) -> None:
        self.wait_for_any(page_element, timeout)
        web_element = self.get_element(page_element)
        Wait.up_to(timeout).until(
            lambda: TestResponse(
                web_element.is_enabled(), f"Failed waiting for '{page_element.description}' to be enabled"
            )
        )

    def wait_for_disabled(self, page_element: PageElement, timeout: Duration) -> None:
        self.wait_for_any(page_element, timeout)
        web_element = self.get_element(page_element)
        Wait.up_to(timeout).until(
            lambda: TestResponse(
                not web_element.is_enabled(), f"Failed waiting for '{page_element.description}' to be disabled"
            )
        )

    def wait_for_text(self, page_element: PageElement, text: str, timeout: Duration) -> None:
        """Wait for the element's text to contain text, ignoring case."""
        seconds = as_seconds(timeout)
        self.wait_for_exists(page_element, seconds)
        web_element = self.get_element(page_element)
        try:
            WebDriverWait(self.driver, seconds).until(lambda d: text.lower() in web_element.text.lower())
        except TimeoutException as e:
            raise WaitTimeoutError(
                f"Tried to wait for the element '{page_element.description}' to have the text '{text}'.\n"
                f"Current text: {web_element.text}"
            ) from e

    def wait_for_title(self, title: str, timeout: Duration) -> None:
        """Wait for the page title to contain title, ignoring case."""
        seconds = as_seconds(timeout)
        try:
            WebDriverWait(self.driver, seconds).until(lambda d: title.lower() in d.title.lower())
        except TimeoutException as e:
            raise WaitTimeoutError(
                f"Tried to wait for the page title {title} for {seconds:g} seconds.\nCurrent title: {self.driver.title}"
            ) from e

    def wait_for_url(self, partial_url: str, timeout: Duration) -> None:
        """Wait for the current URL to contain partial_url, ignoring case."""
        seconds = as_seconds(timeout)
        try:
            WebDriverWait(self.driver, seconds).until(lambda d: partial_url.lower() in d.current_url.lower())
        except TimeoutException as e:
            raise WaitTimeoutError(
                f"Tried to wait for the url '{partial_url}' for {seconds:g} seconds.\n"
                f"Current url: {self.driver.current_url}"
            ) from e
        except WebDriverException as e:
            # The driver may time out talking to the browser even though the page loaded fine
            if partial_url.lower() in self.get_url().lower():
                logger.warning(f"Driver error while waiting for url '{partial_url}', but the url matches: {e.msg}")
                return
            raise WaitTimeoutError(f"Tried to wait for the url '{partial_url}' but got an error") from e

    def wait_for_page_load(self) -> None:
        try:
            self.driver.find_element(By.TAG_NAME, "html")
        except WebDriverException as e:
            raise WaitTimeoutError(f"Tried to wait for page to load, but got an error:\n{e.msg}") from e

    def wait_for_css_style_value(self, page_element: PageElement, style_property: str, desired_value: str) -> None:
        web_element = self.get_element(page_element)
        Wait.up_to(Timeouts.CONDITION_WAIT).until(
            lambda: TestResponse.equal(
                desired_value,
                web_element.value_of_css_property(style_property),
                f"Failed to wait for the '{page_element.description}' element to have the expected value "
                f"in the '{style_property}' property",
            )
        )

    def wait_for_any_css_style_value(self, page_element: PageElement, style_property: str, *desired_values: str) -> None:
        """Wait for a css property of the element to take one of desired_values."""
        web_element = self.get_element(page_element)

        def has_desired_value() -> TestResponse:
            css_value = web_element.value_of_css_property(style_property)
            return TestResponse(
                css_value in desired_values,
                f"Failed to wait for the '{page_element.description}' element to have one of the expected values "
                f"({', '.join(desired_values)}) in the '{style_property}' property, but it was: {css_value}",
            )

        Wait.up_to(Timeouts.CONDITION_WAIT).until(has_desired_value)

    def wait_for_css_style_values_not_present(
        self, page_element: PageElement, style_property: str, *non_desired_values: str
    ) -> None:
        web_element = self.get_element(page_element)

        def lacks_values() -> TestResponse:
            css_value = web_element.value_of_css_property(style_property)
            return TestResponse(
                css_value not in non_desired_values,
                f"Waiting for '{page_element.description}' to not have any of these values "
                f"'{', '.join(non_desired_values)}' in the style attribute: {style_property}.\n"
                f"But it had the value: {css_value}",
            )

        Wait.up_to(Timeouts.CONDITION_WAIT).until(lacks_values)

    def wait_for_class_not_contains(self, web_element: WebElement, non_desired_class: str) -> None:
        def class_removed() -> TestResponse:
            current_class = web_element.get_attribute("class") or ""
            return TestResponse(
                non_desired_class not in current_class,
                f"Failed to wait for element to not have the class {non_desired_class}. Current class: {current_class}",
            )

        Wait.up_to(Timeouts.CONDITION_WAIT).until(class_removed)

    def wait_for_located_on_screen(self, page_element: PageElement, timeout: Duration = Timeouts.ELEMENT_WAIT) -> None:
        self.wait_for_any(page_element, timeout)
        self.wait_for_web_element_located_on_screen(self.get_element(page_element), page_element.description)

    def wait_for_web_element_located_on_screen(self, web_element: WebElement, description: str) -> None:
        def on_screen() -> TestResponse:
            x_location = web_element.location["x"]
            return TestResponse(
                x_location >= 0,
                f"Tried to wait for the element {description} to be located on screen but it wasn't.\n"
                f"Current X location: {x_location}",
            )

        Wait.up_to(Timeouts.CONDITION_WAIT).until(on_screen)

    def wait_for_angular_requests_to_stop(self, page_element: PageElement) -> None:
        """Wait until the Angular app around the element has no outstanding HTTP requests."""
        if page_element.css is None:
            raise LocatorError(
                f"Unable to wait for angular on '{page_element.description}' since it doesn't have a css selector value"
            )
        Wait.up_to(Timeouts.ELEMENT_WAIT).until(
            lambda: TestResponse(
                self._angular_is_idle(page_element.css),
                f"Tried to wait for the element: {page_element.description}' to have no more angular requests "
                f"but it was still busy. Consider increasing the timeout or checking network speed.",
            )
        )

    def _angular_is_idle(self, css_selector: str) -> bool:
        idle = bool(self.execute_script(ANGULAR_IDLE_SCRIPT, css_selector))
        if idle:
            time.sleep(Timeouts.ANGULAR_SETTLE)
        return idle

    # Screenshots and debug artifacts

    def capture_web_page_to_file(self, file_path: str) -> bool:
        """Save a JPEG of the whole page. Failures are logged, not raised."""
        return capture_full_page(self.driver, file_path)

    def save_screenshot(self, artifacts_dir: str, name: str) -> str:
        """
        Save a screenshot of the viewport.

        Args:
            artifacts_dir: Directory to write the screenshot into
            name: Base name for the screenshot file (no extension)

        Returns:
            Path to the saved screenshot file, or "" on failure
        """
        try:
            Path(artifacts_dir).mkdir(parents=True, exist_ok=True)
            timestamp = time.strftime("%Y%m%d-%H%M%S")
            path = Path(artifacts_dir) / f"{name}-{timestamp}.png"
            self.driver.save_screenshot(str(path))
            return str(path)
        except Exception as e:
            logger.warning(f"Failed to save screenshot: {e}")
            return ""

    def save_page_source(self, artifacts_dir: str, name: str) -> str:
        """
        Save the current page source to a file.

        Returns:
            Path to the saved page source file, or "" on failure
        """
        try:
            Path(artifacts_dir).mkdir(parents=True, exist_ok=True)
            timestamp = time.strftime("%Y%m%d-%H%M%S")
            path = Path(artifacts_dir) / f"{name}-{timestamp}.html"
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.driver.page_source)
            return str(path)
        except Exception as e:
            logger.warning(f"Failed to save page source: {e}")
            return ""

    def save_debug_artifacts(self, artifacts_dir: str, name: str) -> dict:
        """Save screenshot and page source and return their paths."""
        return {
            "screenshot": self.save_screenshot(artifacts_dir, name),
            "page_source": self.save_page_source(artifacts_dir, name),
        }
