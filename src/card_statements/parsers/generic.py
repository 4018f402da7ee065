"""Generic credit card statement parser.

This module provides the GenericParser class which turns extracted
statement text into candidate expense lines, using the conventions of
Argentine statements: DD/MM dates, "1.234,56" amounts and installment
notations such as "CUOTA 01/06" or "1 de 6". Bank-specific refinements
can subclass it and override the keyword tables or single steps.
"""

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation

from card_statements.parsers.detector import BankDetector, CardNetworkDetector, PeriodDetector
from card_statements.schemas.internal import (
    MIN_DESCRIPTION_LENGTH,
    MIN_LINE_AMOUNT,
    Bank,
    ParsedExpenseLine,
    ParsedStatement,
)

logger = logging.getLogger(__name__)


class GenericParser:
    """Line-by-line parser for Argentine credit card statements.

    Every non-empty line goes through the same filters; any line that
    fails one is silently dropped:
        1. header/footer keywords and very short lines
        2. a trailing amount must be present
        3. the amount must be >= 1
        4. description = text before the amount, minus a leading date
        5. installment token is pulled out of the description
        6. description cleanup
        7. too-short descriptions and statement-level fees are dropped

    Subclasses can override:
        - HEADER_KEYWORDS / FEE_KEYWORDS: the rejection tables
        - _parse_amount(): different number formats
        - _extract_installment(): different installment notations

    Example:
        >>> parser = GenericParser()
        >>> statement = parser.parse(text)
        >>> print(statement.bank, statement.total)
    """

    # Column headers and summary rows (matched at the start of a line)
    HEADER_KEYWORDS: tuple[str, ...] = (
        "fecha",
        "concepto",
        "detalle",
        "total",
        "saldo",
        "pago",
        "minimo",
        "vencimiento",
        r"n[uú]mero",
        "resumen",
        "cierre",
        "apertura",
    )

    # Statement-level charges, not merchant consumptions (matched at the
    # start of the cleaned description)
    FEE_KEYWORDS: tuple[str, ...] = (
        "impuesto",
        "iva",
        "interes",
        "seguro de vida",
        "cargo por",
    )

    MIN_LINE_LENGTH = 10

    # "." thousands separator, "," decimal separator, optional "$"
    AMOUNT_PATTERN = re.compile(r"\$?\s*(-?\d{1,3}(?:\.\d{3})*(?:,\d{2})?)\s*$", re.ASCII)
    LEADING_DATE_PATTERN = re.compile(r"^\d{1,2}[/\-.]\d{1,2}(?:[/\-.]\d{2,4})?\s*", re.ASCII)
    # ASCII word boundaries: "CAFÉ01/06" still yields the installment
    INSTALLMENT_PATTERN = re.compile(
        r"\b(?:cuota\s*)?(\d{1,2})\s*[/de]+\s*(\d{1,2})\b", re.IGNORECASE | re.ASCII
    )
    EXTRA_SPACES_PATTERN = re.compile(r"\s{2,}")
    TRAILING_FILLER_PATTERN = re.compile(r"[-_]+$")

    def __init__(self):
        """Initialize the parser and its metadata detectors."""
        self.bank: Bank | None = None
        self.card_network_detector = CardNetworkDetector()
        self.bank_detector = BankDetector()
        self.period_detector = PeriodDetector()
        self._header_pattern = self._keyword_prefix_pattern(self.HEADER_KEYWORDS)
        self._fee_pattern = self._keyword_prefix_pattern(self.FEE_KEYWORDS)

    @staticmethod
    def _keyword_prefix_pattern(keywords: tuple[str, ...]) -> re.Pattern:
        return re.compile(r"^(?:" + "|".join(keywords) + r")", re.IGNORECASE)

    def parse(self, text: str, today: date | None = None) -> ParsedStatement:
        """Parse a statement from its extracted text.

        Args:
            text: Full extracted text
            today: Reference date for the period fallback

        Returns:
            ParsedStatement with metadata and the detected lines (possibly none)
        """
        lines = self._extract_lines(text)

        return ParsedStatement(
            lines=tuple(lines),
            card_network=self.card_network_detector.detect(text),
            bank=self.bank or self.bank_detector.detect(text),
            period=self.period_detector.detect(text, today=today),
        )

    def _extract_lines(self, text: str) -> list[ParsedExpenseLine]:
        candidates = [line.strip() for line in text.split("\n")]
        candidates = [line for line in candidates if line]

        parsed: list[ParsedExpenseLine] = []
        for line in candidates:
            expense = self.parse_line(line)
            if expense is not None:
                parsed.append(expense)

        logger.debug(
            "Parsed expense lines",
            extra={
                "lines_count": len(parsed),
                "rejected_count": len(candidates) - len(parsed),
            },
        )
        return parsed

    def parse_line(self, line: str) -> ParsedExpenseLine | None:
        """Parse a single statement line.

        Args:
            line: One trimmed, non-empty line of text

        Returns:
            ParsedExpenseLine, or None if the line is not a consumption
        """
        if len(line) < self.MIN_LINE_LENGTH or self._header_pattern.match(line):
            return None

        match = self.AMOUNT_PATTERN.search(line)
        if not match:
            return None

        amount = self._parse_amount(match.group(1))
        if amount is None or amount < MIN_LINE_AMOUNT:
            return None

        description = line[: match.start()].strip()
        description = self.LEADING_DATE_PATTERN.sub("", description, count=1)
        description, installment = self._extract_installment(description)
        description = self._clean_description(description)

        if len(description) < MIN_DESCRIPTION_LENGTH:
            return None
        if self._fee_pattern.match(description):
            return None

        return ParsedExpenseLine(
            description=description,
            amount=amount,
            installment=installment,
        )

    def _parse_amount(self, text: str) -> Decimal | None:
        """Parse an Argentine-formatted amount ("-1.234,56") to its magnitude.

        Override this method in subclasses for other number formats.

        Returns:
            Absolute amount, or None if it is not a finite number
        """
        normalized = text.replace(".", "").replace(",", ".")
        try:
            amount = abs(Decimal(normalized))
        except InvalidOperation:
            return None
        if not amount.is_finite():
            return None
        return amount

    def _extract_installment(self, description: str) -> tuple[str, str]:
        """Pull the installment notation out of a description.

        Returns:
            (description without the token, "current/total"); "1/1" when
            the line carries no installment notation
        """
        match = self.INSTALLMENT_PATTERN.search(description)
        if not match:
            return description, "1/1"

        installment = f"{int(match.group(1))}/{int(match.group(2))}"
        description = (description[: match.start()] + description[match.end() :]).strip()
        return description, installment

    def _clean_description(self, description: str) -> str:
        description = self.EXTRA_SPACES_PATTERN.sub(" ", description)
        description = self.TRAILING_FILLER_PATTERN.sub("", description)
        return description.strip()
