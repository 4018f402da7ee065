"""Logging setup and PII scrubbing for log output.

Statement text is never logged; this module still filters the
identifiers most likely to slip into messages (card numbers, emails,
CUIT/CUIL and DNI numbers).
"""

import json
import logging
import re
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# PII patterns to filter from logs
PII_PATTERNS = [
    # Credit card numbers (13-19 digits, with or without spaces/dashes)
    (re.compile(r"\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}\b"), "[CARD]"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
    # CUIT / CUIL (20-12345678-9)
    (re.compile(r"\b\d{2}-?\d{8}-?\d\b"), "[CUIT]"),
    # DNI (12.345.678)
    (re.compile(r"\b\d{1,2}\.\d{3}\.\d{3}\b"), "[DNI]"),
]

# Extra fields copied from LogRecord into the JSON payload
_EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_code",
    "error_type",
    "client_ip",
    "strategy",
    "text_chars",
    "lines_count",
    "rejected_count",
    "bank",
    "card_network",
    "upload_filename",
    "size_bytes",
)


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure the root logger with a single stdout handler.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        json_format: Emit JSON lines instead of plain text
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if json_format:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Re-running setup (tests, reloads) must not stack handlers
    for existing in list(root_logger.handlers):
        if getattr(existing, "_card_statements", False):
            root_logger.removeHandler(existing)
    handler._card_statements = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
