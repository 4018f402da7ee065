"""Custom exception classes for statement parsing.

This module defines the typed failures of the parsing pipeline. Each
exception maps to a specific error code defined in errors.py, so the
HTTP layer can render a distinct remediation message per failure kind.
"""

from typing import Any


class StatementProcessingError(Exception):
    """Base exception for all statement parsing errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "EXTRACT_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return
    """

    default_error_code: str = "UNKNOWN"
    default_http_status: int = 500

    def __init__(
        self,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py (default: the class default)
            details: Additional error context (not shown to users)
            http_status: HTTP status code (default: the class default)
        """
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        self.http_status = http_status or self.default_http_status
        super().__init__(self.error_code)


class ExtractionFailed(StatementProcessingError):
    """Raised when scanning the PDF bytes throws.

    No partial text is returned. Usually a password-protected or
    otherwise unreadable file.
    """

    default_error_code = "EXTRACT_001"
    default_http_status = 400


class InsufficientText(StatementProcessingError):
    """Raised when extraction succeeds but yields too little text.

    Typically a scanned (image-only) statement.
    """

    default_error_code = "EXTRACT_002"
    default_http_status = 400


class NoLineItemsFound(StatementProcessingError):
    """Raised when the text was read but no consumption lines were parsed.

    The statement layout is not supported; the user should fall back to
    manual entry.
    """

    default_error_code = "PARSE_001"
    default_http_status = 400


class InvalidUploadError(StatementProcessingError):
    """Raised when the uploaded file is rejected before parsing.

    - Missing or empty file (API_003)
    - Filename without a .pdf extension (API_001)
    - File above the size cap (API_002)
    """

    default_error_code = "API_003"
    default_http_status = 400
