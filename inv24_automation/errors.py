"""
Exceptions raised at the edges of a workflow run.

Step-level problems (timeouts, missing elements, rejected forms) are
reported through Result objects. These exceptions cover the cases that
must stop an invocation before any browser session is opened.
"""


class Inv24Error(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(Inv24Error):
    """Configuration is missing or unusable (e.g. empty credentials)."""


class UsageError(Inv24Error):
    """Invalid invocation: bad order input or missing selectors."""
