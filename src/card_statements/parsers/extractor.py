"""PDF text extraction.

The default "raw" strategy recovers text straight from the PDF byte
layout without an object-model parser: literal strings in parentheses,
printable runs inside stream/endstream blocks and, when both yield too
little, kerned show-text arrays rejoined without separators.

The "pypdf" strategy decodes content streams properly (compression
filters, font encodings) and is used when higher recall is needed.
"""

import io
import logging
import re

from pypdf import PdfReader

from card_statements.core.exceptions import ExtractionFailed

logger = logging.getLogger(__name__)

# Literal strings of text-showing operators: (Hello) Tj
PAREN_TEXT_PATTERN = re.compile(r"\(([^)]+)\)")
ALNUM_PATTERN = re.compile(r"[a-zA-Z0-9]")
# Content/object streams, compressed or not
STREAM_PATTERN = re.compile(r"stream\r?\n(.*?)endstream", re.DOTALL)
NON_PRINTABLE_PATTERN = re.compile(r"[^\x20-\x7E\n\r]")
WHITESPACE_PATTERN = re.compile(r"\s+")
# Show-text arrays: [(Hel) -20 (lo)] TJ
BRACKET_PATTERN = re.compile(r"\[([^\]]+)\]")

MIN_STREAM_TEXT_CHARS = 20
BRACKET_FALLBACK_CHARS = 50

STRATEGIES = ("raw", "pypdf", "auto")


def _compact_length(text: str) -> int:
    return len(WHITESPACE_PATTERN.sub("", text))


def extract_parenthesis_text(content: str) -> str:
    """Join every parenthesised literal that holds at least one alphanumeric."""
    fragments = [
        fragment
        for fragment in PAREN_TEXT_PATTERN.findall(content)
        if len(fragment) > 1 and ALNUM_PATTERN.search(fragment)
    ]
    return " ".join(fragments)


def extract_stream_texts(content: str) -> list[str]:
    """Return the printable rendering of every stream block long enough to be text."""
    texts: list[str] = []
    for block in STREAM_PATTERN.findall(content):
        readable = NON_PRINTABLE_PATTERN.sub(" ", block)
        readable = WHITESPACE_PATTERN.sub(" ", readable).strip()
        if len(readable) > MIN_STREAM_TEXT_CHARS:
            texts.append(readable)
    return texts


def extract_bracket_text(content: str) -> str:
    """Rejoin kerned show-text arrays.

    Fragments inside one array are concatenated with no separator since
    kerning splits words mid-way. Unrelated words can end up merged; the
    trade-off is accepted because this pass only runs when everything
    else came back nearly empty.
    """
    groups = []
    for inner in BRACKET_PATTERN.findall(content):
        joined = "".join(PAREN_TEXT_PATTERN.findall(inner))
        if joined:
            groups.append(joined)
    return "\n".join(groups)


def extract_raw_text(pdf_bytes: bytes) -> str:
    """Best-effort plain text from raw PDF bytes.

    Args:
        pdf_bytes: PDF file content

    Returns:
        Newline-joined extraction results (possibly empty)

    Raises:
        ExtractionFailed: If scanning the buffer throws
    """
    try:
        # One code point per byte; content streams are binary
        content = bytes(pdf_bytes).decode("latin-1")

        text = "\n".join([extract_parenthesis_text(content), *extract_stream_texts(content)])

        if _compact_length(text) < BRACKET_FALLBACK_CHARS:
            text = "\n".join([text, extract_bracket_text(content)])

        return text
    except Exception as e:
        raise ExtractionFailed(details={"strategy": "raw", "error_type": type(e).__name__}) from e


class PDFExtractor:
    """Turns PDF bytes into plain text for the statement parser.

    Example:
        >>> extractor = PDFExtractor()
        >>> text = extractor.extract(pdf_bytes)
    """

    def __init__(self, strategy: str = "raw", min_text_chars: int = 30):
        """Initialize the PDF extractor.

        Args:
            strategy: "raw" - byte scanning only (no PDF parser)
                      "pypdf" - decode with pypdf
                      "auto" - pypdf, falling back to byte scanning when it
                               fails or yields too little text
            min_text_chars: Non-whitespace characters below which "auto"
                            considers the pypdf result empty
        """
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown extraction strategy: {strategy}")
        self.strategy = strategy
        self.min_text_chars = min_text_chars

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract text from a PDF.

        Args:
            pdf_bytes: PDF file content as bytes

        Returns:
            Extracted text

        Raises:
            ExtractionFailed: If the selected strategy cannot read the file
        """
        if self.strategy == "raw":
            return extract_raw_text(pdf_bytes)

        if self.strategy == "pypdf":
            return self._extract_with_pypdf(pdf_bytes)

        try:
            text = self._extract_with_pypdf(pdf_bytes)
        except ExtractionFailed as e:
            logger.info(
                "pypdf extraction failed, falling back to byte scanning",
                extra={"error_type": e.details.get("error_type")},
            )
            return extract_raw_text(pdf_bytes)

        if _compact_length(text) < self.min_text_chars:
            logger.info(
                "pypdf returned too little text, falling back to byte scanning",
                extra={"text_chars": _compact_length(text)},
            )
            return extract_raw_text(pdf_bytes)
        return text

    def _extract_with_pypdf(self, pdf_bytes: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(bytes(pdf_bytes)))
            if reader.is_encrypted and not reader.decrypt(""):
                raise ExtractionFailed(details={"strategy": "pypdf", "reason": "encrypted"})
            pages = [(page.extract_text() or "") for page in reader.pages]
        except ExtractionFailed:
            raise
        except Exception as e:
            raise ExtractionFailed(
                details={"strategy": "pypdf", "error_type": type(e).__name__}
            ) from e

        return "\n".join(page for page in pages if page.strip())
