"""
Logging utilities with security features.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Sensitive data masking (passwords, emails)
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


PACKAGE_LOGGER = "inv24_automation"


def mask_email(email: str) -> str:
    """
    Mask email address for safe logging.

    Examples:
        >>> mask_email("owner@example.com")
        'o***@example.com'
        >>> mask_email("invalid")
        '***'
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.split("@", 1)
    masked_local = local[0] + "***" if len(local) > 0 else "***"
    return f"{masked_local}@{domain}"


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that masks password-like values before output.

    Covers ``password=...``, ``userPassword: ...``, ``inv24_password`` and
    ``pass``/``pwd`` style pairs.
    """

    _PATTERNS = (
        (re.compile(r'(\w*password)["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', re.IGNORECASE),
         r'\1: ********'),
        (re.compile(r'\b(pass|pwd)["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', re.IGNORECASE),
         r'\1: ********'),
    )

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for pattern, replacement in self._PATTERNS:
            message = pattern.sub(replacement, message)
        record.msg = message
        record.args = None
        return True


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Module loggers are created with ``logging.getLogger(__name__)`` and so
    live under ``inv24_automation``; configuring that one logger covers the
    whole package.

    Args:
        name: Logger name (default: "inv24_automation")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger(level=logging.DEBUG, log_file="output/logs/inv24.log")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # stderr, so stdout carries only the result JSON
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SensitiveDataFilter())
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SensitiveDataFilter())
        logger.addHandler(file_handler)

    return logger
