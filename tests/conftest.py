import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

sys.path.append(str(Path(__file__).parents[1] / "src"))

from card_statements.main import app


def build_pdf(streams: list[str | bytes], preamble: str | bytes = b"") -> bytes:
    """Assemble a minimal PDF-shaped byte buffer.

    Each entry of `streams` becomes one uncompressed object stream; the
    preamble is written verbatim after the header (useful for literal
    strings and show-text arrays outside streams).
    """
    if isinstance(preamble, str):
        preamble = preamble.encode("latin-1")

    out = bytearray(b"%PDF-1.4\n")
    out.extend(preamble)
    for number, content in enumerate(streams, start=1):
        if isinstance(content, str):
            content = content.encode("latin-1")
        out.extend(f"{number} 0 obj\n<< /Length {len(content)} >>\n".encode("latin-1"))
        out.extend(b"stream\n" + content + b"\nendstream\nendobj\n")
    out.extend(b"trailer\n<< /Root 1 0 R >>\n%%EOF\n")
    return bytes(out)


@pytest.fixture
def pdf_builder():
    """Expose build_pdf to tests."""
    return build_pdf


SAMPLE_STATEMENT_LINES = [
    "Banco Galicia - Resumen de tarjeta Visa",
    "Cierre: 15/01/2025 Vencimiento: 28/01/2025",
    "Fecha Concepto Cuota Monto",
    "15/01 SUPERMERCADO XYZ CUOTA 01/06 $ 1.234,56",
    "15/01 FARMACIA ABC 567,00",
    "20/01 IMPUESTO DE SELLOS 150,00",
    "22/01 MERCADOLIBRE 2 de 3 10.000,00",
    "Total a pagar 11.801,56",
]


@pytest.fixture
def sample_statement_text() -> str:
    """Extracted text of a small Galicia Visa statement."""
    return "\n".join(SAMPLE_STATEMENT_LINES)


@pytest.fixture
def sample_statement_pdf() -> bytes:
    """The sample statement, one uncompressed stream per line."""
    return build_pdf(SAMPLE_STATEMENT_LINES)


@pytest.fixture
def headers_only_pdf() -> bytes:
    """A statement whose every line is a header or summary row."""
    return build_pdf(
        [
            "Resumen de cuenta Banco Santander Mastercard",
            "Fecha Concepto Cuota Monto",
            "Saldo anterior al cierre 25.000,00",
            "Pago minimo requerido 2.500,00",
            "Total consumos del mes 12.345,67",
        ]
    )


@pytest.fixture
async def client():
    """Provide an HTTP client bound to the app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
