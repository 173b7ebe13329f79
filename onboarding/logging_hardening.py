"""Logging Hardening and Redaction.

This module provides filters to prevent sensitive data (envelope components
and social security numbers) from appearing in application logs.
"""
import logging
import re

# Envelope components are base64; match them by their JSON/dict keys.
SECRET_PATTERNS = [
    (re.compile(r'''(["'](?:encrypted|iv|tag|salt)["']:\s*["'])[A-Za-z0-9+/=]+(["'])'''), r'\1[REDACTED]\2'),
    (re.compile(r'\b\d{3}-\d{2}-\d{4}\b'), '[REDACTED_SSN]'),
]

def redact_string(text: str) -> str:
    """Redact secret-like patterns from a string."""
    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text

class SecretRedactionFilter(logging.Filter):
    """Filter that redacts secret-like patterns from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not isinstance(record.msg, str):
            return True

        record.msg = redact_string(record.msg)

        # Also redact arguments if they are strings
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                redact_string(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True

def setup_logging_redaction(level: str = "INFO") -> None:
    """Configure root logging and apply the SecretRedactionFilter to all existing loggers."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO))
    redact_filter = SecretRedactionFilter()

    root_logger = logging.getLogger()

    # Remove existing filters if any (to avoid duplicates)
    for f in root_logger.filters[:]:
        if isinstance(f, SecretRedactionFilter):
            root_logger.removeFilter(f)

    root_logger.addFilter(redact_filter)

    # Filters on the root logger do not apply to records from child loggers
    for name in logging.root.manager.loggerDict:
        logger = logging.getLogger(name)
        for f in logger.filters[:]:
            if isinstance(f, SecretRedactionFilter):
                logger.removeFilter(f)
        logger.addFilter(redact_filter)

    logging.info("Logging redaction filters active.")
