"""Pydantic schemas for the statement parsing API responses."""

from pydantic import BaseModel, Field

from card_statements.schemas.internal import ParsedStatement


class ExpenseLineResponse(BaseModel):
    """One candidate expense, ready for manual review."""

    description: str = Field(description="Merchant / concept text")
    amount: float = Field(description="Amount in pesos")
    installment: str = Field(description="Installment as 'current/total'")
    date: str | None = Field(None, description="Per-line date (not populated yet)")


class StatementParseResult(BaseModel):
    """Result of a successful statement parse."""

    lines: list[ExpenseLineResponse] = Field(description="Detected consumption lines")
    card_network: str = Field(description="Card network (Visa, Mastercard, ...)")
    bank: str = Field(description="Issuing bank")
    period: str = Field(description="Billing period label")
    total: float = Field(description="Sum of all line amounts")
    lines_count: int = Field(description="Number of detected lines")
    processing_time_ms: int = Field(description="Processing time in milliseconds")

    @classmethod
    def from_parsed(
        cls, statement: ParsedStatement, processing_time_ms: int
    ) -> "StatementParseResult":
        """Build the response from an internal ParsedStatement."""
        return cls(
            lines=[
                ExpenseLineResponse(
                    description=line.description,
                    amount=float(line.amount),
                    installment=line.installment,
                    date=line.date,
                )
                for line in statement.lines
            ],
            card_network=statement.card_network.value,
            bank=statement.bank.value,
            period=statement.period,
            total=float(statement.total),
            lines_count=len(statement.lines),
            processing_time_ms=processing_time_ms,
        )


# Error response schemas


class ProcessingErrorDetail(BaseModel):
    """Error body returned for every failed request."""

    error_code: str = Field(description="Error code from catalog")
    message: str = Field(description="Technical error message (for logging)")
    user_message: str = Field(description="User-facing error message")
    suggestion: str = Field(description="Actionable guidance")
    retry_allowed: bool = Field(description="Whether the operation can be retried")
