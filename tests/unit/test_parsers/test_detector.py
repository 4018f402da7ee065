"""Tests for statement metadata detectors."""

from datetime import date

import pytest

from card_statements.parsers.detector import (
    BankDetector,
    CardNetworkDetector,
    PeriodDetector,
)
from card_statements.schemas.internal import Bank, CardNetwork


class TestCardNetworkDetector:
    """Test suite for CardNetworkDetector."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Resumen MASTERCARD Black", CardNetwork.MASTERCARD),
            ("Tarjeta Visa Signature", CardNetwork.VISA),
            ("American Express Gold", CardNetwork.AMERICAN_EXPRESS),
            ("AMEX Platinum", CardNetwork.AMERICAN_EXPRESS),
            ("Tarjeta Naranja", CardNetwork.OTHER),
        ],
    )
    def test_detect(self, text, expected):
        assert CardNetworkDetector().detect(text) == expected

    def test_first_match_wins(self):
        """Mastercard is checked before Visa."""
        text = "Pagos con Visa y Mastercard"
        assert CardNetworkDetector().detect(text) == CardNetwork.MASTERCARD

    def test_empty_text(self):
        assert CardNetworkDetector().detect("") == CardNetwork.OTHER


class TestBankDetector:
    """Test suite for BankDetector."""

    def test_initialization(self):
        detector = BankDetector()
        assert len(detector._compiled_patterns) == 11
        assert detector.get_supported()[0] == Bank.NACION
        assert detector.get_supported()[-1] == Bank.SUPERVIELLE

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Banco de la Nación Argentina", Bank.NACION),
            ("BANCO DE LA NACION ARGENTINA", Bank.NACION),
            ("banco galicia", Bank.GALICIA),
            ("Banco Macro S.A.", Bank.MACRO),
            ("Banco Provincia de Buenos Aires", Bank.PROVINCIA),
            ("Santander Argentina", Bank.SANTANDER),
            ("BBVA Argentina", Bank.BBVA),
            ("Banco Francés", Bank.BBVA),
            ("HSBC Bank Argentina", Bank.HSBC),
            ("ICBC Argentina", Bank.ICBC),
            ("Banco Patagonia", Bank.PATAGONIA),
            ("Banco Ciudad de Buenos Aires", Bank.CIUDAD),
            ("Banco Supervielle", Bank.SUPERVIELLE),
            ("Brubank", Bank.OTHER),
        ],
    )
    def test_detect(self, text, expected):
        assert BankDetector().detect(text) == expected

    def test_galicia_and_visa_any_case(self):
        text = "resumen de cuenta\nBANCO GALICIA\n... tarjeta vIsA ..."
        assert BankDetector().detect(text) == Bank.GALICIA
        assert CardNetworkDetector().detect(text) == CardNetwork.VISA

    def test_keyword_order(self):
        """Earlier keywords win even when they appear later in the text."""
        text = "Banco Galicia - operaciones internacionales"
        assert BankDetector().detect(text) == Bank.NACION

    def test_add_pattern(self):
        detector = BankDetector()
        assert detector.detect("Grupo SV") == Bank.OTHER

        detector.add_pattern(Bank.SUPERVIELLE, r"grupo\s+sv")
        assert detector.detect("Grupo SV") == Bank.SUPERVIELLE


class TestPeriodDetector:
    """Test suite for PeriodDetector."""

    def test_closing_date(self):
        text = "Cierre: 15/01/2025\nPeriodo: Enero 2025"
        assert PeriodDetector().detect(text) == "15/01/2025"

    def test_closing_date_separators(self):
        assert PeriodDetector().detect("CIERRE 5-1-2025") == "5-1-2025"
        assert PeriodDetector().detect("cierre:15.01.2025") == "15.01.2025"

    def test_period_label(self):
        assert PeriodDetector().detect("Período: Diciembre 2024") == "Diciembre 2024"
        assert PeriodDetector().detect("PERIODO Marzo 2025") == "Marzo 2025"

    def test_month_year(self):
        text = "Resumen de cuenta correspondiente a FEBRERO 2025"
        assert PeriodDetector().detect(text) == "FEBRERO 2025"

    def test_fallback_to_current_month(self):
        detector = PeriodDetector()
        assert detector.detect("sin fechas", today=date(2026, 10, 19)) == "octubre de 2026"

    def test_fallback_uses_today(self):
        assert PeriodDetector().detect("") == PeriodDetector.format_month(date.today())

    def test_format_month(self):
        assert PeriodDetector.format_month(date(2025, 1, 31)) == "enero de 2025"
        assert PeriodDetector.format_month(date(2025, 12, 1)) == "diciembre de 2025"
