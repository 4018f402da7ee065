"""Statement parsing service.

This module owns the caller side of the parsing pipeline:
1. Validate the upload (present, .pdf filename, size cap)
2. Run the parser factory (extract, detect, parse)
3. Time the run and shape the response

Nothing is persisted; the result is a list of candidates for a human
to review.
"""

import logging
import time

from card_statements.config import settings
from card_statements.core.exceptions import InvalidUploadError, StatementProcessingError
from card_statements.parsers.factory import ParserFactory, get_parser_factory
from card_statements.schemas.statement import StatementParseResult

logger = logging.getLogger(__name__)


class StatementService:
    """Service for parsing uploaded credit card statements."""

    def __init__(
        self,
        parser_factory: ParserFactory | None = None,
        max_size_bytes: int | None = None,
    ):
        """Initialize the service.

        Args:
            parser_factory: Factory to use (default: global factory)
            max_size_bytes: Upload size cap (default: PDF_MAX_SIZE_MB)
        """
        self.parser_factory = parser_factory or get_parser_factory()
        self.max_size_bytes = (
            settings.pdf_max_size_mb * 1024 * 1024 if max_size_bytes is None else max_size_bytes
        )

    def process_upload(self, pdf_bytes: bytes | None, filename: str | None) -> StatementParseResult:
        """Parse an uploaded statement.

        Args:
            pdf_bytes: Uploaded file content
            filename: Uploaded file name

        Returns:
            StatementParseResult with the detected lines and metadata

        Raises:
            InvalidUploadError: If the upload is missing, not a PDF or too large
            ExtractionFailed: If the PDF bytes cannot be scanned
            InsufficientText: If the PDF holds too little text (scanned image)
            NoLineItemsFound: If no consumption line was recognized
        """
        start_time = time.time()
        self.validate_upload(pdf_bytes, filename)

        try:
            statement = self.parser_factory.parse(pdf_bytes)
        except StatementProcessingError as e:
            logger.warning(
                "Statement parsing failed",
                extra={
                    "error_code": e.error_code,
                    "upload_filename": filename,
                    "size_bytes": len(pdf_bytes),
                },
            )
            raise

        processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "Statement parsed",
            extra={
                "lines_count": len(statement.lines),
                "bank": statement.bank.value,
                "duration_ms": processing_time_ms,
            },
        )
        return StatementParseResult.from_parsed(statement, processing_time_ms)

    def validate_upload(self, pdf_bytes: bytes | None, filename: str | None) -> None:
        """Reject uploads the parser should never see.

        Raises:
            InvalidUploadError: API_003 (no file), API_001 (not .pdf),
                API_002 (too large)
        """
        # Empty bytes go on to the parser and fail as InsufficientText
        if not filename or pdf_bytes is None:
            raise InvalidUploadError("API_003", {"upload_filename": filename})

        if not filename.lower().endswith(".pdf"):
            raise InvalidUploadError("API_001", {"upload_filename": filename})

        if len(pdf_bytes) > self.max_size_bytes:
            raise InvalidUploadError(
                "API_002",
                {"size_bytes": len(pdf_bytes), "max_size_bytes": self.max_size_bytes},
            )
