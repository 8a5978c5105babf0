"""Dividend declarations and their per-holder distributions.

A declaration sets aside part of a period's profit as the dividend pool.
Distributions split the pool across holders pro rata to the shares they held
when the dividend was calculated.

Lifecycle:
    draft ──(confirm)──> confirmed
"""

from typing import Optional, Literal
from datetime import date
from decimal import Decimal
from pydantic import Field, model_validator

from .base import (
    VersionedRecord,
    RecordId,
    MoneyAmount,
    RatePercent,
    Currency,
)
from .capital import new_record_id


DeclarationStatus = Literal["draft", "confirmed"]


# =============================================================================
# Dividend Declaration
# =============================================================================

class DividendDeclaration(VersionedRecord):
    """A board decision to pay out part of a period's profit.

    Examples:
        30% of a 10,000,000 RWF profit:
            profit_amount=10_000_000, dividend_percentage=30
            -> dividend_pool=3_000_000
    """

    id: RecordId = Field(default_factory=new_record_id)

    company_id: RecordId

    profit_amount: MoneyAmount = Field(
        gt=0,
        description="Distributable profit the percentage applies to"
    )

    dividend_percentage: RatePercent = Field(
        gt=0,
        description="Share of profit paid out, in percent"
    )

    dividend_pool: MoneyAmount = Field(
        description="profit_amount x dividend_percentage / 100, rounded to cents"
    )

    currency: Currency = "RWF"

    declaration_date: date

    approved_by: Optional[str] = Field(default=None, min_length=2)

    status: DeclarationStatus = "draft"

    @model_validator(mode='after')
    def validate_pool(self):
        if self.dividend_pool > self.profit_amount:
            raise ValueError(
                f"dividend_pool ({self.dividend_pool}) cannot exceed "
                f"profit_amount ({self.profit_amount})"
            )
        return self


# =============================================================================
# Dividend Distribution
# =============================================================================

class DividendDistribution(VersionedRecord):
    """One holder's share of a declared dividend.

    gross_amount is a whole currency unit; tax and net are in cents.
    """

    id: RecordId = Field(default_factory=new_record_id)

    declaration_id: RecordId
    position_id: RecordId
    person_id: RecordId

    shares_held_at_time: int = Field(
        gt=0,
        description="Shares held when the distribution was calculated"
    )

    gross_amount: MoneyAmount
    tax_rate: RatePercent = Decimal("0")
    tax_amount: MoneyAmount = Decimal("0")
    net_amount: MoneyAmount

    currency: Currency = "RWF"

    is_paid: bool = False
    paid_on: Optional[date] = None

    @model_validator(mode='after')
    def validate_net(self):
        if self.net_amount != self.gross_amount - self.tax_amount:
            raise ValueError("net_amount must equal gross_amount - tax_amount")
        return self
