"""Credit card statement parsing.

This module turns a statement PDF into candidate expense lines:
- PDFExtractor recovers plain text from the PDF bytes
- CardNetworkDetector / BankDetector / PeriodDetector infer metadata
- GenericParser parses consumption lines
- ParserFactory composes the pipeline and raises the typed failures
"""

from card_statements.parsers.detector import BankDetector, CardNetworkDetector, PeriodDetector
from card_statements.parsers.extractor import PDFExtractor
from card_statements.parsers.factory import ParserFactory, parse_statement
from card_statements.parsers.generic import GenericParser

__all__ = [
    "PDFExtractor",
    "BankDetector",
    "CardNetworkDetector",
    "PeriodDetector",
    "GenericParser",
    "ParserFactory",
    "parse_statement",
]
