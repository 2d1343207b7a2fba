"""
Shared plumbing for the INV24 workflows.
"""

import logging
from typing import Callable

from ..automation.browser import create_browser
from ..automation.browser_config import BrowserConfig
from ..automation.interfaces import WebBrowser
from ..automation.inv24.client import Inv24Client
from ..automation.inv24.selectors import Inv24Pages
from ..utils.config import AppConfig


logger = logging.getLogger(__name__)

BrowserFactory = Callable[[BrowserConfig], WebBrowser]


class BaseWorkflow:
    """
    Holds configuration and the browser factory.

    Each run opens its own browser through the factory and must close it
    on every exit path; the factory is the seam tests use to inject a fake.
    """

    def __init__(self, config: AppConfig, browser_factory: BrowserFactory = create_browser):
        self.config = config
        self.browser_factory = browser_factory
        self.pages = Inv24Pages(config.base_url)
        self.screenshot_dir = config.output_dir / "inv24_screenshots"

    def open_browser(self, debug: bool) -> WebBrowser:
        """
        Start a browser for one run.

        Exceptions from the factory propagate: without a browser there is
        nothing to report on.
        """
        browser_config = BrowserConfig.for_run(debug, timeout=self.config.browser_timeout)
        return self.browser_factory(browser_config)

    def new_client(self, browser: WebBrowser) -> Inv24Client:
        return Inv24Client(
            browser,
            pages=self.pages,
            timings=self.config.timings,
            screenshot_dir=self.screenshot_dir,
        )
