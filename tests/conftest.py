"""
Shared fixtures.

FakeBrowser implements WebBrowser with scripted URLs and page sources and
records every call, so the workflows can be driven without Chrome.
"""

import pytest

from inv24_automation.automation.interfaces import WebBrowser
from inv24_automation.automation.inv24.timings import Timings
from inv24_automation.models.result import Result
from inv24_automation.utils.config import AppConfig


BASE_URL = "https://www.inv24.com"
LISTING_URL = f"{BASE_URL}/index.php?lang=bg&class=invoices&action=viewManage"
ADD_FORM_URL = f"{BASE_URL}/index.php?lang=bg&class=invoices&action=viewAdd&invoice_type=1"
SAVE_BUTTON = 'input[name="save_button"]'
SEND_ICON = 'img.sendInvImg'

LISTING_HTML = """
<html><body>
<table class="layout"><tr><td>
  <table id="invoices">
    <tr><th>No</th><th>Client</th><th></th></tr>
    <tr>
      <td>100000000024</td><td>Other Client</td>
      <td><a href="index.php?lang=bg&amp;class=invoices&amp;action=send&amp;id=1119420">
        <img class="sendInvImg"></a></td>
    </tr>
    <tr>
      <td>100000000023</td><td>Test Company Ltd</td>
      <td><a href="index.php?lang=bg&amp;class=invoices&amp;action=send&amp;id=1119419">
        <img class="sendInvImg"></a></td>
    </tr>
  </table>
</td></tr></table>
</body></html>
"""


class FakeElement:
    """Element handle returned by FakeBrowser lookups."""

    def __init__(self, locator: str):
        self.locator = locator


class FakeBrowser(WebBrowser):
    """
    Scripted WebBrowser.

    Attributes:
        sources: URL fragment -> page source served while the current URL
            contains that fragment
        redirects: Locator -> URL the browser moves to when it is clicked
        missing: Locators that fail every lookup
        login_confirms: Whether wait_for_url finds the post-login URL
        fail_navigation: URL fragments whose navigation fails
    """

    def __init__(self):
        self.current_url = "about:blank"
        self.sources = {}
        self.default_source = "<html><body></body></html>"
        self.redirects = {}
        self.missing = set()
        self.login_confirms = True
        self.fail_navigation = set()
        self.raise_on_click = None

        self.calls = []
        self.navigations = []
        self.inputs = []
        self.clicks = []
        self.pauses = []
        self.screenshots = []
        self.close_count = 0

    def navigate(self, url):
        self.calls.append(("navigate", url))
        if any(fragment in url for fragment in self.fail_navigation):
            return Result.failure(f"Navigation failed: {url}")
        self.navigations.append(url)
        self.current_url = url
        return Result.success(None)

    def _lookup(self, value):
        if value in self.missing:
            return Result.failure(f"Element not found: {value}")
        return Result.success(FakeElement(value))

    def find_element(self, by, value, timeout=None):
        self.calls.append(("find_element", value))
        return self._lookup(value)

    def find_element_within(self, parent, by, value, timeout=None):
        self.calls.append(("find_element_within", value))
        return self._lookup(value)

    def _clicked(self, locator):
        if self.raise_on_click:
            raise self.raise_on_click
        self.clicks.append(locator)
        if locator in self.redirects:
            self.current_url = self.redirects[locator]
        return Result.success(None)

    def click(self, by, value, timeout=None):
        self.calls.append(("click", value))
        if value in self.missing:
            return Result.failure(f"Element not clickable: {value}")
        return self._clicked(value)

    def click_element(self, element):
        self.calls.append(("click_element", element.locator))
        return self._clicked(element.locator)

    def input_text(self, by, value, text, timeout=None):
        self.calls.append(("input_text", value))
        if value in self.missing:
            return Result.failure(f"Element not found: {value}")
        self.inputs.append((value, text))
        return Result.success(None)

    def wait_for_url(self, pattern, timeout):
        self.calls.append(("wait_for_url", pattern))
        if not self.login_confirms:
            return Result.failure(
                f"Timed out after {timeout:g}s waiting for URL matching '{pattern}'"
            )
        self.current_url = LISTING_URL
        return Result.success(self.current_url)

    def wait_for_network_idle(self, timeout=None):
        self.calls.append(("wait_for_network_idle", timeout))
        return Result.success(None)

    def pause(self, seconds):
        self.pauses.append(seconds)

    def get_current_url(self):
        return Result.success(self.current_url)

    def get_page_source(self):
        for fragment, source in self.sources.items():
            if fragment in self.current_url:
                return Result.success(source)
        return Result.success(self.default_source)

    def screenshot(self, filepath):
        self.screenshots.append(filepath)
        return Result.success(True)

    def close(self):
        self.close_count += 1

    def inputs_for(self, selector):
        return [text for locator, text in self.inputs if locator == selector]


class BrowserFactory:
    """Browser factory handing out one FakeBrowser and recording its configs."""

    def __init__(self, browser: FakeBrowser):
        self.browser = browser
        self.configs = []

    def __call__(self, browser_config):
        self.configs.append(browser_config)
        return self.browser

    @property
    def call_count(self) -> int:
        return len(self.configs)


def make_config(tmp_path, **overrides) -> AppConfig:
    values = {
        "inv24_email": "owner@example.com",
        "inv24_password": "s3cret",
        "output_dir": str(tmp_path / "output"),
        "timeouts": Timings.instant().to_dict(),
    }
    values.update(overrides)
    return AppConfig(values)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer credentials and config paths out of the tests."""
    for name in ("INV24_EMAIL", "INV24_PASSWORD", "INV24_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_browser():
    return FakeBrowser()


@pytest.fixture
def browser_factory(fake_browser):
    return BrowserFactory(fake_browser)


@pytest.fixture
def config(tmp_path):
    return make_config(tmp_path)
