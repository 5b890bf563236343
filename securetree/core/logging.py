"""
Secure Logging Module
=====================

Provides security-aware logging with secret filtering.

Security Features:
- Redaction of hex key material, base64 blobs and wire strings
- No plaintext values in codec log records
- Console output on stderr only, so encrypted documents on stdout stay clean
"""

from __future__ import annotations

import logging
import sys
from typing import Final, Optional, Pattern, TextIO
import re

from securetree.core.config import LoggingConfig


# Patterns for sensitive data detection
_SENSITIVE_PATTERNS: Final[list[tuple[str, Pattern[str]]]] = [
    ("secret", re.compile(r'(?i)(encryption[_-]?key|encryption[_-]?iv|secret)\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    # Wire strings: "<base64>.<base64 tag>" (tag is 24 chars with padding)
    ("wire", re.compile(r'[A-Za-z0-9+/]*={0,2}\.[A-Za-z0-9+/]{22}==')),
    # Base64 encoded secrets (longer than 40 chars)
    ("base64_secret", re.compile(r'[A-Za-z0-9+/]{40,}={0,2}')),
    # Hex encoded secrets (nonce is 32 chars, key 64)
    ("hex_secret", re.compile(r'(?i)(?:0x)?[a-f0-9]{32,}')),
]

_REDACTED_TEXT: Final[str] = "[REDACTED]"

_CONSOLE_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class SecureLogFilter(logging.Filter):
    """
    Log filter that removes sensitive information from log messages.

    Scans messages and string arguments for key material and encrypted
    values and replaces them with [REDACTED].
    """

    def __init__(self, name: str = "", additional_patterns: Optional[list[Pattern[str]]] = None) -> None:
        """
        Initialize the secure log filter.

        Args:
            name: Logger name filter (empty string matches all)
            additional_patterns: Additional regex patterns to redact
        """
        super().__init__(name)
        self._additional_patterns = additional_patterns or []

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter log record by redacting sensitive information.

        Returns:
            Always True (record is always kept, just sanitized)
        """
        if record.msg and isinstance(record.msg, str):
            record.msg = self._sanitize(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._sanitize(v) if isinstance(v, str) else v
                               for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    self._sanitize(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        return True

    def _sanitize(self, text: str) -> str:
        """Remove sensitive data from text."""
        result = text

        for name, pattern in _SENSITIVE_PATTERNS:
            result = pattern.sub(f"{name}={_REDACTED_TEXT}", result)

        for pattern in self._additional_patterns:
            result = pattern.sub(_REDACTED_TEXT, result)

        return result


def get_secure_logger(
    name: str,
    level: str = "WARNING",
    enable_console: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Create a secure logger with automatic secret filtering.

    Args:
        name: Logger name (typically "securetree.<area>")
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Whether to output to the console
        stream: Console stream (default: stderr)

    Returns:
        Configured secure logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper()))

    if enable_console:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        console_handler.addFilter(SecureLogFilter())
        logger.addHandler(console_handler)

    return logger


def configure_root_logger(
    config: Optional[LoggingConfig] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the "securetree" package logger from LoggingConfig.

    Called once at application startup (the CLI does this). Library code
    only ever calls logging.getLogger("securetree.<area>").

    Returns:
        The configured package logger
    """
    config = config or LoggingConfig()
    logger = logging.getLogger("securetree")
    logger.setLevel(getattr(logging, config.level.upper()))

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if config.enable_console:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
        console_handler.addFilter(SecureLogFilter())
        logger.addHandler(console_handler)
    else:
        logger.addHandler(logging.NullHandler())

    return logger
