"""
Configuration management with environment variables and a JSON document.

Configuration is built once at process entry (``AppConfig.load``) and passed
explicitly to the components that need credentials or defaults.
"""

import json
import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

from dotenv import load_dotenv

from ..automation.inv24.timings import Timings
from ..errors import ConfigurationError
from ..models.invoice import InvoiceType
from ..validation.request_validator import CredentialsValidator


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("data") / "config.json"

DEFAULT_VAT = "20"
DEFAULT_MEASUREMENT = "бр"


class SecureString:
    """
    Wrapper for sensitive strings that prevents accidental exposure.

    Examples:
        >>> password = SecureString("secret123")
        >>> str(password)  # Returns "********"
        >>> password.get_value()  # Returns actual value
    """

    def __init__(self, value: str):
        self._value = value

    def get_value(self) -> str:
        """
        Get the actual value.

        Warning:
            Use only to type the secret into the login form. Never log it.
        """
        return self._value

    def __bool__(self) -> bool:
        return bool(self._value)

    def __str__(self) -> str:
        return "********"

    def __repr__(self) -> str:
        return "SecureString(********)"

    def __eq__(self, other) -> bool:
        if isinstance(other, SecureString):
            return self._value == other._value
        return False

    def __hash__(self) -> int:
        return hash(self._value)


@dataclass(frozen=True)
class Credentials:
    """INV24 login identifier (an email address) and password."""

    login: str
    secret: SecureString


def _default_values() -> Dict[str, Any]:
    """
    Defaults used when no configuration file value is present.

    Credentials come from ``INV24_EMAIL`` / ``INV24_PASSWORD`` (a ``.env``
    file is honoured); everything else is a fixed default.
    """
    return {
        "inv24_email": os.getenv("INV24_EMAIL", ""),
        "inv24_password": os.getenv("INV24_PASSWORD", ""),
        "invoice_type": "1",
        "default_vat": DEFAULT_VAT,
        "default_measurement": DEFAULT_MEASUREMENT,
        "base_url": "https://www.inv24.com",
        "output_dir": "output",
        "log_level": "INFO",
        "log_file": None,
        "browser_timeout": 30,
        "strict_classification": False,
        "timeouts": {},
    }


class AppConfig:
    """
    Application configuration.

    Values are resolved as: configuration file > environment (``.env``
    included) > built-in default. Environment variables only fill in the
    defaults, so once the file stores a value it wins.

    Attributes:
        inv24_email: INV24 login email
        inv24_password: INV24 password (SecureString)
        invoice_type: Default document type code
        default_vat: VAT rate for items that do not specify one
        default_measurement: Unit of measure for items that do not specify one
        base_url: INV24 site root
        output_dir: Where reports and screenshots are written
        log_level: Logging level name
        log_file: Log file path (default: <output_dir>/logs/inv24.log)
        browser_timeout: Default browser operation timeout in seconds
        strict_classification: Treat ambiguous outcomes as failures
        timings: Named waits (see Timings)

    Examples:
        >>> config = AppConfig.load()
        >>> credentials = config.credentials()
        >>> print(config.default_measurement)
        бр
    """

    def __init__(self, values: Optional[Dict[str, Any]] = None, source: Optional[Path] = None):
        """
        Initialize from an already merged mapping.

        Args:
            values: Overrides applied on top of the defaults
            source: Path of the file the values came from (diagnostics only)
        """
        merged = _default_values()
        merged.update(values or {})
        self._values = merged
        self.source = source

        password = merged.get("inv24_password") or ""
        self._inv24_password = SecureString(str(password))

        try:
            self._timings = Timings.from_dict(merged.get("timeouts"))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid timeouts in configuration: {e}")

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "AppConfig":
        """
        Load configuration from ``.env``, the environment and a JSON file.

        Args:
            path: Configuration file; defaults to ``$INV24_CONFIG`` or
                ``data/config.json``. A missing file is not an error.

        Returns:
            AppConfig instance

        Raises:
            ConfigurationError: If the file exists but cannot be parsed
        """
        load_dotenv()

        if path is None:
            path = os.getenv("INV24_CONFIG") or DEFAULT_CONFIG_PATH
        path = Path(path)

        file_values: Dict[str, Any] = {}
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    file_values = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigurationError(f"Cannot read configuration file {path}: {e}")

            if not isinstance(file_values, dict):
                raise ConfigurationError(
                    f"Configuration file {path} must contain a JSON object"
                )
            logger.debug(f"Loaded configuration from {path}")
        else:
            logger.debug(f"No configuration file at {path}, using environment and defaults")

        return cls(file_values, source=path)

    @property
    def inv24_email(self) -> str:
        return str(self._values.get("inv24_email") or "")

    @property
    def inv24_password(self) -> SecureString:
        return self._inv24_password

    @property
    def invoice_type(self) -> Optional[str]:
        value = self._values.get("invoice_type")
        return str(value) if value not in (None, "") else None

    @property
    def default_vat(self) -> Any:
        value = self._values.get("default_vat")
        return DEFAULT_VAT if value in (None, "") else value

    @property
    def default_measurement(self) -> str:
        return str(self._values.get("default_measurement") or DEFAULT_MEASUREMENT)

    @property
    def base_url(self) -> str:
        return str(self._values.get("base_url")).rstrip("/")

    @property
    def output_dir(self) -> Path:
        return Path(self._values.get("output_dir") or "output")

    @property
    def log_level(self) -> str:
        return str(self._values.get("log_level") or "INFO").upper()

    @property
    def log_file(self) -> Path:
        """Rotating log file; defaults to <output_dir>/logs/inv24.log."""
        value = self._values.get("log_file")
        return Path(value) if value else self.output_dir / "logs" / "inv24.log"

    @property
    def browser_timeout(self) -> int:
        return int(self._values.get("browser_timeout"))

    @property
    def strict_classification(self) -> bool:
        return bool(self._values.get("strict_classification"))

    @property
    def timings(self) -> Timings:
        return self._timings

    def credentials(self) -> Credentials:
        """
        Return the login credentials.

        Raises:
            ConfigurationError: If the email or the password is empty
        """
        validation = CredentialsValidator().validate({
            "login": self.inv24_email,
            "secret": self._inv24_password.get_value(),
        })
        if not validation.is_valid:
            raise ConfigurationError(
                "INV24 credentials not configured. Set inv24_email/inv24_password "
                "in the configuration file or INV24_EMAIL/INV24_PASSWORD in the "
                "environment."
            )
        for warning in validation.warnings:
            logger.warning(warning)

        return Credentials(login=self.inv24_email, secret=self._inv24_password)

    @staticmethod
    def _validate_url(url: str) -> Optional[str]:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            return f"base_url must use http or https scheme, got: {url}"
        if not parsed.netloc:
            return f"base_url must have a valid domain, got: {url}"
        return None

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all values are usable

        Raises:
            ConfigurationError: Listing every problem found
        """
        errors = []

        if not self.inv24_email:
            errors.append("INV24 credentials not configured: inv24_email (or INV24_EMAIL) is required")
        if not self._inv24_password:
            errors.append("INV24 credentials not configured: inv24_password (or INV24_PASSWORD) is required")

        url_error = self._validate_url(self.base_url)
        if url_error:
            errors.append(url_error)

        if self.invoice_type is not None:
            try:
                InvoiceType.parse(self.invoice_type)
            except ValueError as e:
                errors.append(str(e))

        try:
            if self.browser_timeout <= 0:
                errors.append("browser_timeout must be positive")
        except (TypeError, ValueError):
            errors.append("browser_timeout must be an integer")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level not in valid_levels:
            errors.append(f"log_level must be one of: {', '.join(valid_levels)}")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Configuration values with the password masked."""
        data = dict(self._values)
        data["inv24_password"] = str(self._inv24_password)
        data["timeouts"] = self._timings.to_dict()
        return data
