"""Unit tests for StatementService."""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from card_statements.core.exceptions import (
    ExtractionFailed,
    InsufficientText,
    InvalidUploadError,
    NoLineItemsFound,
)
from card_statements.parsers.factory import ParserFactory
from card_statements.schemas.internal import Bank, CardNetwork, ParsedExpenseLine, ParsedStatement
from card_statements.schemas.statement import StatementParseResult
from card_statements.services.statement import StatementService


@pytest.fixture
def sample_parsed_statement():
    """Create a sample parsed statement."""
    return ParsedStatement(
        lines=(
            ParsedExpenseLine(
                description="SUPERMERCADO XYZ", amount=Decimal("1234.56"), installment="1/6"
            ),
            ParsedExpenseLine(description="FARMACIA ABC", amount=Decimal("567.00")),
        ),
        card_network=CardNetwork.VISA,
        bank=Bank.GALICIA,
        period="15/01/2025",
    )


@pytest.fixture
def mock_factory(sample_parsed_statement):
    factory = Mock(spec=ParserFactory)
    factory.parse.return_value = sample_parsed_statement
    return factory


class TestProcessUpload:
    """Happy path and failure propagation."""

    def test_success(self, mock_factory):
        service = StatementService(parser_factory=mock_factory)

        result = service.process_upload(b"%PDF-1.4 ...", "resumen.pdf")

        assert isinstance(result, StatementParseResult)
        assert result.bank == "Banco Galicia"
        assert result.card_network == "Visa"
        assert result.period == "15/01/2025"
        assert result.lines_count == 2
        assert result.lines[0].description == "SUPERMERCADO XYZ"
        assert result.lines[0].amount == 1234.56
        assert result.lines[0].installment == "1/6"
        assert result.total == pytest.approx(1801.56)
        assert result.processing_time_ms >= 0
        mock_factory.parse.assert_called_once_with(b"%PDF-1.4 ...")

    def test_uppercase_extension(self, mock_factory):
        service = StatementService(parser_factory=mock_factory)
        result = service.process_upload(b"%PDF", "RESUMEN_ENERO.PDF")
        assert result.lines_count == 2

    @pytest.mark.parametrize(
        "error", [ExtractionFailed(), InsufficientText(), NoLineItemsFound()]
    )
    def test_parse_failures_propagate(self, mock_factory, error):
        mock_factory.parse.side_effect = error
        service = StatementService(parser_factory=mock_factory)

        with pytest.raises(type(error)):
            service.process_upload(b"%PDF", "resumen.pdf")

    def test_end_to_end(self, sample_statement_pdf):
        service = StatementService(parser_factory=ParserFactory())

        result = service.process_upload(sample_statement_pdf, "resumen.pdf")

        assert [line.description for line in result.lines] == [
            "SUPERMERCADO XYZ",
            "FARMACIA ABC",
            "MERCADOLIBRE",
        ]
        assert result.total == pytest.approx(11801.56)


class TestValidateUpload:
    """Caller-side checks before parsing."""

    @pytest.mark.parametrize(
        "pdf_bytes,filename",
        [(None, "resumen.pdf"), (b"%PDF", None), (b"%PDF", "")],
    )
    def test_missing_file(self, mock_factory, pdf_bytes, filename):
        service = StatementService(parser_factory=mock_factory)

        with pytest.raises(InvalidUploadError) as exc_info:
            service.process_upload(pdf_bytes, filename)

        assert exc_info.value.error_code == "API_003"
        mock_factory.parse.assert_not_called()

    def test_empty_pdf_is_insufficient_text(self):
        service = StatementService(parser_factory=ParserFactory())

        with pytest.raises(InsufficientText):
            service.process_upload(b"", "resumen.pdf")

    @pytest.mark.parametrize("filename", ["resumen.txt", "resumen.pdf.exe", "resumen"])
    def test_not_a_pdf(self, mock_factory, filename):
        service = StatementService(parser_factory=mock_factory)

        with pytest.raises(InvalidUploadError) as exc_info:
            service.process_upload(b"%PDF", filename)

        assert exc_info.value.error_code == "API_001"

    def test_too_large(self, mock_factory):
        service = StatementService(parser_factory=mock_factory, max_size_bytes=10)

        with pytest.raises(InvalidUploadError) as exc_info:
            service.process_upload(b"x" * 11, "resumen.pdf")

        assert exc_info.value.error_code == "API_002"
        assert exc_info.value.details["size_bytes"] == 11

    def test_default_size_cap(self, mock_factory):
        service = StatementService(parser_factory=mock_factory)
        assert service.max_size_bytes == 10 * 1024 * 1024
