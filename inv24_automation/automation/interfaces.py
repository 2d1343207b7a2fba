"""
Abstract interfaces for automation components.

The invoice workflows only talk to ``WebBrowser``. The Selenium-backed
``Browser`` is one implementation; tests drive the workflows with a
scripted fake.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..models.result import Result


class WebBrowser(ABC):
    """
    Abstract interface for browser operations.

    Every operation returns a Result so that a timeout or a missing
    element ends the current workflow as a reported error. ``close`` must
    never raise.
    """

    @abstractmethod
    def navigate(self, url: str) -> Result[None]:
        """Navigate to the specified URL."""
        pass

    @abstractmethod
    def find_element(
        self,
        by: str,
        value: str,
        timeout: Optional[float] = None
    ) -> Result[Any]:
        """
        Find a single element with explicit wait.

        Args:
            by: Selenium locator strategy (By.CSS_SELECTOR, By.XPATH, ...)
            value: Locator value
            timeout: Maximum wait time in seconds (None = browser default)

        Returns:
            Result containing the element on success
        """
        pass

    @abstractmethod
    def find_element_within(
        self,
        parent: Any,
        by: str,
        value: str,
        timeout: Optional[float] = None
    ) -> Result[Any]:
        """Find an element inside ``parent`` (e.g. a button inside a table row)."""
        pass

    @abstractmethod
    def click(
        self,
        by: str,
        value: str,
        timeout: Optional[float] = None
    ) -> Result[None]:
        """Click the element matching the locator."""
        pass

    @abstractmethod
    def click_element(self, element: Any) -> Result[None]:
        """Click an element obtained from find_element/find_element_within."""
        pass

    @abstractmethod
    def input_text(
        self,
        by: str,
        value: str,
        text: str,
        timeout: Optional[float] = None
    ) -> Result[None]:
        """Replace the content of a form field with ``text``."""
        pass

    @abstractmethod
    def wait_for_url(self, pattern: str, timeout: float) -> Result[str]:
        """
        Wait until the current URL matches a regular expression.

        Returns:
            Result containing the matching URL, failure on timeout
        """
        pass

    @abstractmethod
    def wait_for_network_idle(self, timeout: Optional[float] = None) -> Result[None]:
        """Wait until the page has loaded and has no pending requests."""
        pass

    @abstractmethod
    def pause(self, seconds: float) -> None:
        """Sleep for a fixed interval (settle time for the remote UI)."""
        pass

    @abstractmethod
    def get_current_url(self) -> Result[str]:
        pass

    @abstractmethod
    def get_page_source(self) -> Result[str]:
        pass

    @abstractmethod
    def screenshot(self, filepath: str) -> Result[bool]:
        pass

    @abstractmethod
    def close(self):
        """Close the browser and clean up resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
