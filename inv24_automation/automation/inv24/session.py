"""
INV24 session management.

This module performs the login against INV24 and tracks the login state
of the browser session it belongs to.
"""

import logging
from datetime import datetime
from typing import Optional
from enum import Enum

from selenium.webdriver.common.by import By

from ..interfaces import WebBrowser
from .selectors import Inv24Pages, Inv24Selectors, LOGIN_SUCCESS_URL_PATTERN
from .timings import Timings
from ...models.result import Result
from ...utils.config import Credentials
from ...utils.logger import mask_email


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Session states."""

    NOT_LOGGED_IN = "not_logged_in"
    LOGGED_IN = "logged_in"
    FAILED = "failed"


class SessionManager:
    """
    Logs a browser into INV24 and remembers the outcome.

    A session is never retried: a failed login ends the invocation.

    Examples:
        >>> session = SessionManager(browser, Inv24Pages(config.base_url))
        >>> result = session.login(config.credentials())
        >>> if result.is_success:
        ...     print(session.get_session_info())
    """

    def __init__(
        self,
        browser: WebBrowser,
        pages: Optional[Inv24Pages] = None,
        selectors: Optional[Inv24Selectors] = None,
        timings: Optional[Timings] = None
    ):
        self.browser = browser
        self.pages = pages or Inv24Pages()
        self.selectors = selectors or Inv24Selectors()
        self.timings = timings or Timings()
        self._state = SessionState.NOT_LOGGED_IN
        self._login_time: Optional[datetime] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_logged_in(self) -> bool:
        return self._state == SessionState.LOGGED_IN

    def mark_logged_in(self):
        self._state = SessionState.LOGGED_IN
        self._login_time = datetime.now()
        logger.info("Session marked as logged in")

    def mark_failed(self):
        self._state = SessionState.FAILED
        self._login_time = None

    def login(self, credentials: Credentials) -> Result[None]:
        """
        Log in to INV24.

        Fills the entry page login form and waits for the browser to land
        on an invoices page within ``timings.login_confirmation``.

        Args:
            credentials: Login email and password

        Returns:
            Result[None]; failure on missing credentials (before any
            navigation), on a form step failure, or on confirmation timeout
        """
        login = credentials.login if credentials else ""
        secret = credentials.secret.get_value() if credentials and credentials.secret else ""
        if not login or not secret:
            self.mark_failed()
            return Result.failure("INV24 credentials not configured")

        logger.info(f"Logging in to INV24 as {mask_email(login)}")

        steps = (
            lambda: self.browser.navigate(self.pages.entry()),
            lambda: self.browser.input_text(
                By.CSS_SELECTOR, self.selectors.login.email_input, login,
                timeout=self.timings.element
            ),
            lambda: self.browser.input_text(
                By.CSS_SELECTOR, self.selectors.login.password_input, secret,
                timeout=self.timings.element
            ),
            lambda: self.browser.click(
                By.CSS_SELECTOR, self.selectors.login.login_button,
                timeout=self.timings.element
            ),
        )
        for step in steps:
            result = step()
            if result.is_failure:
                self.mark_failed()
                return Result.failure(f"Login failed: {result.message}", result.error)

        timeout = self.timings.login_confirmation
        confirmation = self.browser.wait_for_url(LOGIN_SUCCESS_URL_PATTERN, timeout)
        if confirmation.is_failure:
            self.mark_failed()
            return Result.failure(
                f"Login confirmation timed out after {timeout:g}s - check INV24 credentials",
                confirmation.error
            )

        self.mark_logged_in()
        logger.info(f"Logged in (landed on {confirmation.value})")
        return Result.success(None, "Login successful")

    def require_login(self) -> Result[None]:
        """Failure unless ``login`` has succeeded on this session."""
        if not self.is_logged_in:
            return Result.failure("Not logged in")
        return Result.success(None, "Logged in")

    def get_session_info(self) -> dict:
        """Session details for debugging."""
        info = {
            "state": self._state.value,
            "logged_in": self.is_logged_in,
            "login_time": self._login_time.isoformat() if self._login_time else None,
        }
        if self._login_time:
            info["session_duration_seconds"] = (datetime.now() - self._login_time).total_seconds()
        return info
