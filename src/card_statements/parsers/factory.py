"""Parser factory for routing statements to appropriate parsers.

This module orchestrates the parsing workflow:
1. Extract text from the PDF bytes using PDFExtractor
2. Reject near-empty text (scanned statements)
3. Detect the issuing bank using BankDetector
4. Select a parser (GenericParser or a registered bank refinement)
5. Parse, and reject results without any consumption line
"""

import logging
import re
from datetime import date

from card_statements.config import settings
from card_statements.core.exceptions import InsufficientText, NoLineItemsFound
from card_statements.parsers.detector import BankDetector
from card_statements.parsers.extractor import PDFExtractor
from card_statements.parsers.generic import GenericParser
from card_statements.schemas.internal import Bank, ParsedStatement

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s")


class ParserFactory:
    """Factory for parsing credit card statements.

    The factory handles the complete parsing workflow and turns the two
    "nothing usable" outcomes into typed failures:
    - InsufficientText when extraction yields under `min_text_chars`
      non-whitespace characters
    - NoLineItemsFound when parsing yields zero lines

    Example:
        >>> factory = ParserFactory()
        >>> statement = factory.parse(pdf_bytes)
        >>> print(f"Bank: {statement.bank}, lines: {len(statement.lines)}")
    """

    def __init__(
        self,
        extractor: PDFExtractor | None = None,
        detector: BankDetector | None = None,
        min_text_chars: int | None = None,
    ):
        """Initialize the parser factory.

        Args:
            extractor: PDF extractor instance (default: strategy from settings)
            detector: Bank detector instance (default: new BankDetector)
            min_text_chars: Minimum extracted characters (default: from settings)
        """
        self.extractor = extractor or PDFExtractor(
            strategy=settings.extraction_strategy,
            min_text_chars=settings.min_extracted_chars,
        )
        self.detector = detector or BankDetector()
        self.min_text_chars = (
            settings.min_extracted_chars if min_text_chars is None else min_text_chars
        )

        # Registry of bank-specific parser refinements
        self._refinements: dict[Bank, type[GenericParser]] = {}

    def parse(self, pdf_bytes: bytes, today: date | None = None) -> ParsedStatement:
        """Parse a credit card statement from PDF bytes.

        Args:
            pdf_bytes: PDF file content as bytes
            today: Reference date for the period fallback

        Returns:
            ParsedStatement with at least one line

        Raises:
            ExtractionFailed: If the PDF bytes cannot be scanned
            InsufficientText: If too little text was extracted
            NoLineItemsFound: If no consumption line was recognized
        """
        text = self.extractor.extract(pdf_bytes)
        return self.parse_text(text, today=today)

    def parse_text(self, text: str, today: date | None = None) -> ParsedStatement:
        """Run detection and parsing on already-extracted text.

        Raises:
            InsufficientText: If too little text was extracted
            NoLineItemsFound: If no consumption line was recognized
        """
        text_chars = len(WHITESPACE_PATTERN.sub("", text))
        logger.info("Extracted statement text", extra={"text_chars": text_chars})
        if text_chars < self.min_text_chars:
            raise InsufficientText(details={"text_chars": text_chars})

        bank = self.detector.detect(text)
        parser_class = self._get_parser_class(bank)
        parser = parser_class()
        parser.bank = bank
        logger.info(
            "Selected parser",
            extra={"bank": bank.value, "parser": parser_class.__name__},
        )

        statement = parser.parse(text, today=today)
        if not statement.lines:
            raise NoLineItemsFound(
                details={"bank": statement.bank.value, "text_chars": text_chars}
            )

        logger.info(
            "Parsed statement",
            extra={
                "bank": statement.bank.value,
                "card_network": statement.card_network.value,
                "lines_count": len(statement.lines),
            },
        )
        return statement

    def register_refinement(self, bank: Bank, parser_class: type[GenericParser]) -> None:
        """Register a bank-specific parser refinement.

        Example:
            >>> factory.register_refinement(Bank.GALICIA, GaliciaParser)

        Args:
            bank: Bank the refinement applies to
            parser_class: Parser class (must inherit from GenericParser)
        """
        if not issubclass(parser_class, GenericParser):
            raise ValueError(
                f"Parser class must inherit from GenericParser, got {parser_class}"
            )

        self._refinements[bank] = parser_class

    def unregister_refinement(self, bank: Bank) -> None:
        """Remove a bank-specific parser refinement (the bank falls back to GenericParser)."""
        self._refinements.pop(bank, None)

    def get_registered_banks(self) -> list[Bank]:
        """Banks with a registered refinement."""
        return list(self._refinements.keys())

    def _get_parser_class(self, bank: Bank) -> type[GenericParser]:
        return self._refinements.get(bank, GenericParser)


# Singleton factory instance for global use
_factory_instance: ParserFactory | None = None


def get_parser_factory() -> ParserFactory:
    """Get or create the global ParserFactory instance."""
    global _factory_instance
    if _factory_instance is None:
        _factory_instance = ParserFactory()
    return _factory_instance


def parse_statement(pdf_bytes: bytes) -> ParsedStatement:
    """Convenience function to parse a statement using the global factory."""
    return get_parser_factory().parse(pdf_bytes)
