"""Internal data schemas for parsed statement data.

These models represent the parsing pipeline output: candidate expense
lines plus the document-level metadata inferred once per statement.
They are built once per request and never mutated afterwards.
"""

import re
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

INSTALLMENT_FORMAT = re.compile(r"^\d+/\d+$")
MIN_LINE_AMOUNT = Decimal("1")
MIN_DESCRIPTION_LENGTH = 3


class CardNetwork(str, Enum):
    """Card network printed on the statement."""

    MASTERCARD = "Mastercard"
    VISA = "Visa"
    AMERICAN_EXPRESS = "American Express"
    OTHER = "Otra"


class Bank(str, Enum):
    """Argentine issuing banks recognized by keyword."""

    NACION = "Banco Nacion"
    GALICIA = "Banco Galicia"
    MACRO = "Banco Macro"
    PROVINCIA = "Banco Provincia"
    SANTANDER = "Santander"
    BBVA = "BBVA"
    HSBC = "HSBC"
    ICBC = "ICBC"
    PATAGONIA = "Banco Patagonia"
    CIUDAD = "Banco Ciudad"
    SUPERVIELLE = "Banco Supervielle"
    OTHER = "Otro"


class ParsedExpenseLine(BaseModel):
    """A single consumption detected on a statement.

    Amounts are non-negative magnitudes; credits and refunds lose their sign.
    """

    model_config = ConfigDict(frozen=True)

    description: str = Field(..., description="Merchant / concept text")
    amount: Decimal = Field(..., description="Amount in pesos (always >= 1)")
    installment: str = Field(default="1/1", description="'current/total' installment")
    date: str | None = Field(None, description="Per-line date (not populated yet)")

    @field_validator("description")
    @classmethod
    def description_long_enough(cls, v: str) -> str:
        """Ensure the cleaned description has at least 3 characters."""
        v = v.strip()
        if len(v) < MIN_DESCRIPTION_LENGTH:
            raise ValueError("Description must have at least 3 characters")
        return v

    @field_validator("amount")
    @classmethod
    def amount_is_real_consumption(cls, v: Decimal) -> Decimal:
        """Reject non-finite amounts and values below the noise threshold."""
        if not v.is_finite() or v < MIN_LINE_AMOUNT:
            raise ValueError("Amount must be a finite number >= 1")
        return v

    @field_validator("installment")
    @classmethod
    def installment_format(cls, v: str) -> str:
        """Ensure installment looks like 'current/total'."""
        if not INSTALLMENT_FORMAT.match(v):
            raise ValueError("Installment must look like 'current/total'")
        return v


class ParsedStatement(BaseModel):
    """Complete parse result for one credit card statement.

    `total` is always derived from the lines so it can never drift from them.
    """

    model_config = ConfigDict(frozen=True)

    lines: tuple[ParsedExpenseLine, ...] = Field(
        default_factory=tuple, description="Detected consumption lines"
    )
    card_network: CardNetwork = Field(CardNetwork.OTHER, description="Detected card network")
    bank: Bank = Field(Bank.OTHER, description="Detected issuing bank")
    period: str = Field(..., description="Billing period label")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> Decimal:
        """Sum of all line amounts."""
        return sum((line.amount for line in self.lines), Decimal("0"))
