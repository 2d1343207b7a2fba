"""
Browser automation using Selenium WebDriver.

This module provides a wrapper around Selenium WebDriver with:
- Result<T> pattern for consistent error handling
- Explicit waits for reliable element location
- URL-pattern and network-quiescence waits for redirect-driven forms
- Context manager support for automatic cleanup
"""

import logging
import time
from pathlib import Path
from typing import Any, Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from selenium.common.exceptions import (
    TimeoutException,
    WebDriverException,
    ElementNotInteractableException,
    ElementClickInterceptedException,
)
from webdriver_manager.chrome import ChromeDriverManager

from .interfaces import WebBrowser
from .browser_config import BrowserConfig
from ..models.result import Result


logger = logging.getLogger(__name__)

# True once the document is loaded and jQuery (used by INV24) has no
# requests in flight.
_IDLE_SCRIPT = """
    if (document.readyState !== 'complete') { return false; }
    if (window.jQuery && window.jQuery.active > 0) { return false; }
    return true;
"""

# Consecutive idle polls required before the page counts as quiet
_IDLE_POLLS = 2


class Browser(WebBrowser):
    """
    Chrome WebDriver wrapper implementing WebBrowser interface.

    Examples:
        >>> with Browser(config=BrowserConfig(headless=True)) as browser:
        ...     browser.navigate("https://www.inv24.com/bg/")
        ...     # Automatically closed
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        """
        Start Chrome.

        Args:
            config: Browser configuration (default: headless)

        Raises:
            WebDriverException: If ChromeDriver initialization fails
        """
        self.config = config or BrowserConfig()
        self.driver = None

        try:
            options = Options()

            if self.config.headless:
                options.add_argument("--headless=new")
                options.add_argument("--disable-gpu")

            if self.config.no_sandbox:
                options.add_argument("--no-sandbox")
                options.add_argument("--disable-setuid-sandbox")
                options.add_argument("--disable-dev-shm-usage")

            width, height = self.config.window_size
            options.add_argument(f"--window-size={width},{height}")
            options.add_argument(f"--lang={self.config.language}")

            if self.config.disable_automation_flags:
                options.add_argument("--disable-blink-features=AutomationControlled")
                options.add_experimental_option("excludeSwitches", ["enable-automation"])
                options.add_experimental_option("useAutomationExtension", False)

            if self.config.user_agent:
                options.add_argument(f"--user-agent={self.config.user_agent}")

            service = Service(ChromeDriverManager().install())
            self.driver = webdriver.Chrome(service=service, options=options)

            logger.info(
                f"Browser initialized (headless={self.config.headless}, "
                f"timeout={self.config.timeout})"
            )

        except Exception as e:
            logger.error(f"Failed to initialize browser: {e}", exc_info=True)
            self.close()
            raise WebDriverException(f"Browser initialization failed: {e}")

    def _timeout(self, timeout: Optional[float]) -> float:
        return self.config.timeout if timeout is None else timeout

    def navigate(self, url: str) -> Result[None]:
        """Navigate to URL."""
        try:
            logger.debug(f"Navigating to: {url}")
            self.driver.get(url)
            return Result.success(None, f"Navigated to {url}")

        except WebDriverException as e:
            logger.error(f"Navigation failed: {e}")
            return Result.failure(f"Navigation failed: {url}", e)

    def find_element(
        self,
        by: str,
        value: str,
        timeout: Optional[float] = None
    ) -> Result[WebElement]:
        """Find a single element with explicit wait."""
        timeout = self._timeout(timeout)

        try:
            logger.debug(f"Finding element: {by}={value} (timeout={timeout}s)")

            wait = WebDriverWait(self.driver, timeout)
            element = wait.until(
                EC.presence_of_element_located((by, value))
            )

            return Result.success(element, f"Element found: {by}={value}")

        except TimeoutException as e:
            logger.debug(f"Element not found within {timeout}s: {by}={value}")
            return Result.failure(
                f"Element not found: {by}={value} (timeout={timeout}s)",
                e
            )

        except Exception as e:
            logger.error(f"Error finding element: {e}")
            return Result.failure(f"Error finding element: {by}={value}", e)

    def find_element_within(
        self,
        parent: WebElement,
        by: str,
        value: str,
        timeout: Optional[float] = None
    ) -> Result[WebElement]:
        """Find an element inside ``parent`` with explicit wait."""
        timeout = self._timeout(timeout)

        try:
            wait = WebDriverWait(parent, timeout)
            element = wait.until(lambda node: node.find_element(by, value))
            return Result.success(element, f"Element found in parent: {by}={value}")

        except TimeoutException as e:
            logger.debug(f"Element not found in parent within {timeout}s: {by}={value}")
            return Result.failure(
                f"Element not found in parent: {by}={value} (timeout={timeout}s)",
                e
            )

        except Exception as e:
            logger.error(f"Error finding element in parent: {e}")
            return Result.failure(f"Error finding element in parent: {by}={value}", e)

    def click(
        self,
        by: str,
        value: str,
        timeout: Optional[float] = None
    ) -> Result[None]:
        """Click an element once it is clickable."""
        timeout = self._timeout(timeout)

        try:
            logger.debug(f"Clicking element: {by}={value}")

            wait = WebDriverWait(self.driver, timeout)
            element = wait.until(
                EC.element_to_be_clickable((by, value))
            )

            return self.click_element(element)

        except TimeoutException as e:
            logger.error(f"Element not clickable within {timeout}s: {by}={value}")
            return Result.failure(
                f"Element not clickable: {by}={value} (timeout={timeout}s)",
                e
            )

        except Exception as e:
            logger.error(f"Click failed: {e}")
            return Result.failure(f"Click failed: {by}={value}", e)

    def click_element(self, element: WebElement) -> Result[None]:
        """
        Click an element.

        Falls back to a JavaScript click when the element is covered by an
        overlay (INV24 shows tooltips over the list icons).
        """
        try:
            element.click()
            return Result.success(None, "Clicked element")

        except ElementClickInterceptedException:
            logger.info("Click intercepted, retrying with JavaScript click")
            try:
                self.driver.execute_script(
                    "arguments[0].scrollIntoView({block: 'center'});", element
                )
                self.driver.execute_script("arguments[0].click();", element)
                return Result.success(None, "Clicked element (JS)")
            except Exception as e:
                logger.error(f"JavaScript click failed: {e}")
                return Result.failure("JavaScript click failed", e)

        except ElementNotInteractableException as e:
            logger.error("Element not interactable")
            return Result.failure("Element not interactable", e)

        except Exception as e:
            logger.error(f"Click failed: {e}")
            return Result.failure("Click failed", e)

    def input_text(
        self,
        by: str,
        value: str,
        text: str,
        timeout: Optional[float] = None
    ) -> Result[None]:
        """Replace the content of a text input or textarea."""
        timeout = self._timeout(timeout)

        try:
            logger.debug(f"Inputting text into: {by}={value}")

            element_result = self.find_element(by, value, timeout)
            if element_result.is_failure:
                return Result.failure(
                    f"Cannot input text: element not found: {value}",
                    element_result.error
                )

            element = element_result.value
            element.clear()
            element.send_keys(text)

            return Result.success(None, f"Text input: {by}={value}")

        except ElementNotInteractableException as e:
            logger.error(f"Element not interactable: {by}={value}")
            return Result.failure(f"Element not interactable: {by}={value}", e)

        except Exception as e:
            logger.error(f"Text input failed: {e}")
            return Result.failure(f"Text input failed: {by}={value}", e)

    def wait_for_url(self, pattern: str, timeout: float) -> Result[str]:
        """Wait until the current URL matches ``pattern`` (regex search)."""
        try:
            WebDriverWait(self.driver, timeout).until(EC.url_matches(pattern))
            url = self.driver.current_url
            return Result.success(url, f"URL matched {pattern}: {url}")

        except TimeoutException as e:
            current = self.driver.current_url
            logger.warning(f"URL did not match {pattern} within {timeout}s (at {current})")
            return Result.failure(
                f"Timed out after {timeout:g}s waiting for URL matching {pattern}",
                e
            )

        except Exception as e:
            logger.error(f"URL wait failed: {e}")
            return Result.failure("URL wait failed", e)

    def wait_for_network_idle(self, timeout: Optional[float] = None) -> Result[None]:
        """
        Wait for the page to load and go quiet.

        Selenium has no network-idle event, so this polls document
        readiness and jQuery's active request count until the page is idle
        on consecutive polls.
        """
        timeout = self._timeout(timeout)
        idle_polls = [0]

        def page_is_idle(driver) -> bool:
            if driver.execute_script(_IDLE_SCRIPT):
                idle_polls[0] += 1
            else:
                idle_polls[0] = 0
            return idle_polls[0] >= _IDLE_POLLS

        try:
            WebDriverWait(self.driver, timeout, poll_frequency=0.25).until(page_is_idle)
            return Result.success(None, "Page idle")

        except TimeoutException as e:
            logger.warning(f"Page did not become idle within {timeout}s")
            return Result.failure(f"Page did not become idle within {timeout:g}s", e)

        except Exception as e:
            logger.error(f"Idle wait failed: {e}")
            return Result.failure("Idle wait failed", e)

    def pause(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

    def get_current_url(self) -> Result[str]:
        try:
            return Result.success(self.driver.current_url)

        except Exception as e:
            logger.error(f"Failed to read current URL: {e}")
            return Result.failure("Failed to read current URL", e)

    def get_page_source(self) -> Result[str]:
        """Get current page HTML source."""
        try:
            source = self.driver.page_source
            return Result.success(source, "Page source retrieved")

        except Exception as e:
            logger.error(f"Failed to get page source: {e}")
            return Result.failure("Failed to get page source", e)

    def screenshot(self, filepath: str) -> Result[bool]:
        """Take screenshot and save to file."""
        try:
            path = Path(filepath)
            path.parent.mkdir(parents=True, exist_ok=True)

            if self.driver.save_screenshot(str(path)):
                logger.debug(f"Screenshot saved: {filepath}")
                return Result.success(True, f"Screenshot saved: {filepath}")
            return Result.failure("Screenshot save failed")

        except Exception as e:
            logger.error(f"Screenshot failed: {e}")
            return Result.failure(f"Screenshot failed: {filepath}", e)

    def close(self):
        """Close browser and clean up resources."""
        try:
            if self.driver:
                self.driver.quit()
                self.driver = None
                logger.info("Browser closed")

        except Exception as e:
            logger.warning(f"Error closing browser: {e}")


def create_browser(config: BrowserConfig) -> Browser:
    """Default browser factory used by the workflows."""
    return Browser(config=config)
