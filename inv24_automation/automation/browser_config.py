"""
Browser configuration dataclass.

This module provides a configuration dataclass for browser settings.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class BrowserConfig:
    """
    Configuration for Browser initialization.

    Attributes:
        headless: Run browser in headless mode (False = visible debug session)
        window_size: Browser window size (width, height)
        timeout: Default timeout for element operations in seconds
        no_sandbox: Pass --no-sandbox/--disable-setuid-sandbox (containers, CI)
        disable_automation_flags: Disable automation detection flags
        user_agent: Custom user agent string
        language: Browser UI/accept language; INV24 markers are Bulgarian

    Examples:
        >>> config = BrowserConfig(headless=True, timeout=60)

        >>> # Visible browser for --debug runs
        >>> config = BrowserConfig.for_debug()
    """

    headless: bool = True
    window_size: Tuple[int, int] = (1920, 1080)
    timeout: int = 30
    no_sandbox: bool = True
    disable_automation_flags: bool = True
    user_agent: Optional[str] = None
    language: str = "bg"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if len(self.window_size) != 2:
            raise ValueError(
                f"window_size must be a tuple of (width, height), "
                f"got: {self.window_size}"
            )

        width, height = self.window_size
        if width < 800 or height < 600:
            raise ValueError(
                f"window_size too small (minimum 800x600), "
                f"got: {self.window_size}"
            )

        if self.timeout <= 0:
            raise ValueError(
                f"timeout must be positive, got: {self.timeout}"
            )

    @classmethod
    def for_testing(cls) -> 'BrowserConfig':
        """Headless with a short timeout."""
        return cls(headless=True, timeout=5)

    @classmethod
    def for_debug(cls, timeout: int = 30) -> 'BrowserConfig':
        """Visible browser so the form filling can be watched."""
        return cls(headless=False, timeout=timeout)

    @classmethod
    def for_run(cls, debug: bool, timeout: int = 30) -> 'BrowserConfig':
        """
        Configuration for a workflow run.

        Examples:
            >>> BrowserConfig.for_run(debug=False).headless
            True
        """
        return cls.for_debug(timeout) if debug else cls(headless=True, timeout=timeout)

    def to_dict(self) -> dict:
        return {
            "headless": self.headless,
            "window_size": self.window_size,
            "timeout": self.timeout,
            "no_sandbox": self.no_sandbox,
            "disable_automation_flags": self.disable_automation_flags,
            "user_agent": self.user_agent,
            "language": self.language,
        }
