"""
Unit tests for the Selenium Browser wrapper.

ChromeDriver is never started: webdriver.Chrome is patched with a mock.
"""

import pytest
from unittest.mock import MagicMock, patch

from selenium.common.exceptions import ElementClickInterceptedException, WebDriverException

from inv24_automation.automation import browser as browser_module
from inv24_automation.automation.browser import Browser, create_browser
from inv24_automation.automation.browser_config import BrowserConfig


@pytest.fixture
def chrome():
    with patch.object(browser_module, "ChromeDriverManager"), \
            patch.object(browser_module, "Service"), \
            patch.object(browser_module.webdriver, "Chrome") as chrome_class:
        chrome_class.return_value = MagicMock()
        yield chrome_class


@pytest.fixture
def browser(chrome):
    return Browser(BrowserConfig.for_testing())


class TestBrowser:
    """Test suite for Browser."""

    def test_headless_options(self, chrome):
        Browser(BrowserConfig.for_testing())

        options = chrome.call_args.kwargs["options"]
        assert "--headless=new" in options.arguments
        assert "--lang=bg" in options.arguments

    def test_init_failure(self, chrome):
        chrome.side_effect = Exception("chromedriver missing")

        with pytest.raises(WebDriverException):
            Browser(BrowserConfig.for_testing())

    def test_factory(self, chrome):
        assert isinstance(create_browser(BrowserConfig.for_debug()), Browser)

    def test_navigate(self, browser):
        result = browser.navigate("https://www.inv24.com/bg/")

        assert result.is_success
        browser.driver.get.assert_called_once_with("https://www.inv24.com/bg/")

    def test_navigate_failure(self, browser):
        browser.driver.get.side_effect = WebDriverException("net::ERR_NAME_NOT_RESOLVED")

        result = browser.navigate("https://www.inv24.com/bg/")

        assert result.is_failure
        assert isinstance(result.error, WebDriverException)

    def test_wait_for_url_match(self, browser):
        browser.driver.current_url = "https://www.inv24.com/index.php?class=invoices&action=viewManage"

        result = browser.wait_for_url(r"viewManage|invoices", timeout=1)

        assert result.is_success
        assert result.value.endswith("viewManage")

    def test_wait_for_url_timeout(self, browser):
        browser.driver.current_url = "https://www.inv24.com/bg/"

        result = browser.wait_for_url(r"viewManage|invoices", timeout=0)

        assert result.is_failure
        assert result.message.startswith("Timed out after 0s")

    def test_network_idle(self, browser):
        browser.driver.execute_script.return_value = True

        assert browser.wait_for_network_idle(timeout=2).is_success
        assert browser.driver.execute_script.call_count >= 2

    def test_click_intercepted_falls_back_to_js(self, browser):
        element = MagicMock()
        element.click.side_effect = ElementClickInterceptedException("covered by tooltip")

        result = browser.click_element(element)

        assert result.is_success
        browser.driver.execute_script.assert_called_with("arguments[0].click();", element)

    def test_page_source(self, browser):
        browser.driver.page_source = "<html>успешно</html>"

        assert browser.get_page_source().value == "<html>успешно</html>"

    def test_close_is_idempotent(self, browser):
        driver = browser.driver

        browser.close()
        browser.close()

        driver.quit.assert_called_once()
        assert browser.driver is None

    def test_close_swallows_quit_error(self, browser):
        browser.driver.quit.side_effect = WebDriverException("session deleted")

        browser.close()

    def test_context_manager(self, browser):
        driver = browser.driver

        with browser:
            pass

        driver.quit.assert_called_once()
