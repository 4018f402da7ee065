"""Statement metadata detection from extracted text.

This module identifies the card network, the issuing bank and the
billing period of an Argentine credit card statement. Each detector is
independent and driven by an ordered pattern table: the first entry
that matches wins, so more specific keywords must be listed first.
"""

import re
from datetime import date
from enum import Enum

from card_statements.schemas.internal import Bank, CardNetwork

SPANISH_MONTHS = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


class KeywordDetector:
    """Maps text to the first enum member whose patterns match.

    Subclasses declare `PATTERNS` (ordered, case-insensitive regexes per
    member) and `DEFAULT` (returned when nothing matches).
    """

    PATTERNS: dict[Enum, list[str]] = {}
    DEFAULT: Enum

    def __init__(self):
        """Compile the pattern table."""
        self._compiled_patterns: dict[Enum, list[re.Pattern]] = {}
        for key, patterns in self.PATTERNS.items():
            self._compiled_patterns[key] = [
                re.compile(pattern, re.IGNORECASE) for pattern in patterns
            ]

    def detect(self, text: str) -> Enum:
        """Return the first matching member, or DEFAULT.

        Args:
            text: Full extracted statement text
        """
        if not text:
            return self.DEFAULT

        for key, patterns in self._compiled_patterns.items():
            if any(pattern.search(text) for pattern in patterns):
                return key

        return self.DEFAULT

    def get_supported(self) -> list[Enum]:
        """Members that can be detected, in match order."""
        return list(self._compiled_patterns.keys())

    def add_pattern(self, key: Enum, pattern: str) -> None:
        """Add a detection pattern at runtime.

        New members are appended to the end of the match order.

        Args:
            key: Member to detect
            pattern: Regex pattern to match (case-insensitive)
        """
        if key not in self._compiled_patterns:
            self._compiled_patterns[key] = []

        self._compiled_patterns[key].append(re.compile(pattern, re.IGNORECASE))


class CardNetworkDetector(KeywordDetector):
    """Detects the card network (Visa, Mastercard, American Express)."""

    PATTERNS = {
        CardNetwork.MASTERCARD: [r"mastercard"],
        CardNetwork.VISA: [r"visa"],
        CardNetwork.AMERICAN_EXPRESS: [r"american express", r"amex"],
    }
    DEFAULT = CardNetwork.OTHER


class BankDetector(KeywordDetector):
    """Detects the issuing bank.

    Keywords are plain substrings of the bank name, accented and
    unaccented, so "nacion" also hits words such as "internacional".
    """

    PATTERNS = {
        Bank.NACION: [r"nacion", r"nación"],
        Bank.GALICIA: [r"galicia"],
        Bank.MACRO: [r"macro"],
        Bank.PROVINCIA: [r"provincia"],
        Bank.SANTANDER: [r"santander"],
        Bank.BBVA: [r"bbva", r"francés", r"frances"],
        Bank.HSBC: [r"hsbc"],
        Bank.ICBC: [r"icbc"],
        Bank.PATAGONIA: [r"patagonia"],
        Bank.CIUDAD: [r"ciudad"],
        Bank.SUPERVIELLE: [r"supervielle"],
    }
    DEFAULT = Bank.OTHER


class PeriodDetector:
    """Detects the billing period label.

    Tried in order: closing date ("Cierre: 15/01/2025"), explicit period
    label ("Periodo: Enero 2025"), a bare Spanish "Month Year" token and,
    as a last resort, the current month so the field is never empty.
    """

    CLOSING_DATE_PATTERN = re.compile(
        r"cierre[:\s]*(\d{1,2}[/\-.]\d{1,2}[/\-.]\d{4})", re.IGNORECASE
    )
    PERIOD_LABEL_PATTERN = re.compile(
        r"per[ií]odo[:\s]*([A-Za-z0-9_\s]+\d{4})", re.IGNORECASE
    )
    MONTH_YEAR_PATTERN = re.compile(
        r"(" + "|".join(SPANISH_MONTHS) + r")\s+(\d{4})", re.IGNORECASE
    )

    def detect(self, text: str, today: date | None = None) -> str:
        """Return the period label for a statement.

        Args:
            text: Full extracted statement text
            today: Reference date for the fallback (default: date.today())
        """
        match = self.CLOSING_DATE_PATTERN.search(text)
        if match:
            return match.group(1)

        match = self.PERIOD_LABEL_PATTERN.search(text)
        if match:
            return match.group(1).strip()

        match = self.MONTH_YEAR_PATTERN.search(text)
        if match:
            return f"{match.group(1)} {match.group(2)}"

        return self.format_month(today or date.today())

    @staticmethod
    def format_month(value: date) -> str:
        """Render a date as the es-AR long month/year form ("enero de 2025")."""
        return f"{SPANISH_MONTHS[value.month - 1]} de {value.year}"
