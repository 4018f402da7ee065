"""Statement endpoints: parse an uploaded credit card statement."""

from fastapi import APIRouter, File, UploadFile, status
from starlette.concurrency import run_in_threadpool

from card_statements.config import settings
from card_statements.core.exceptions import InvalidUploadError
from card_statements.schemas.statement import ProcessingErrorDetail, StatementParseResult
from card_statements.services.statement import StatementService

router = APIRouter(prefix="/statements", tags=["statements"])

READ_CHUNK_BYTES = 64 * 1024


async def _read_capped(file: UploadFile, max_bytes: int) -> bytes:
    """Read an upload in memory, failing as soon as it exceeds the cap."""
    buf = bytearray()
    while True:
        chunk = await file.read(READ_CHUNK_BYTES)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise InvalidUploadError("API_002", {"max_size_bytes": max_bytes})
    return bytes(buf)


@router.post(
    "/parse",
    response_model=StatementParseResult,
    status_code=status.HTTP_200_OK,
    summary="Parse credit card statement",
    description="""
    Extract candidate expense lines from an Argentine credit card statement PDF.

    Nothing is stored: the response is meant for manual review before the
    expenses are loaded.

    ## File Requirements
    - Multipart form field `file`, filename ending in `.pdf`
    - Maximum size: configurable via `PDF_MAX_SIZE_MB` (default: 10MB)
    - Digital statements only (scanned images carry no text)

    ## Error Codes
    - EXTRACT_001: PDF could not be read (possibly password protected)
    - EXTRACT_002: No text in the PDF (scanned image)
    - PARSE_001: No consumptions detected (unsupported layout, load manually)
    - API_001: Not a PDF
    - API_002: File too large
    - API_003: No file received
    """,
    responses={
        200: {"description": "Statement parsed"},
        400: {"description": "Unreadable file or unsupported layout", "model": ProcessingErrorDetail},
        500: {"description": "Unexpected error", "model": ProcessingErrorDetail},
    },
)
async def parse_statement(file: UploadFile | None = File(None)) -> StatementParseResult:
    """Parse an uploaded statement PDF into expense candidates.

    Failures are raised as StatementProcessingError subclasses and rendered
    by the global handler.
    """
    if file is None:
        raise InvalidUploadError("API_003")

    max_bytes = settings.pdf_max_size_mb * 1024 * 1024
    pdf_bytes = await _read_capped(file, max_bytes)

    service = StatementService(max_size_bytes=max_bytes)
    # Regex scanning is CPU bound; keep it off the event loop
    return await run_in_threadpool(service.process_upload, pdf_bytes, file.filename)
