"""Shareholder positions.

A ShareholderPosition is one person's holding in a company. Its
share_percentage is derived: it only changes through a transfer or an
issuance, never by direct edit.
"""

from typing import Optional, Literal
from datetime import date
from decimal import Decimal
from pydantic import Field

from .base import (
    DomainModel,
    VersionedRecord,
    RecordId,
    ShareCount,
    SharePercentage,
    MoneyAmount,
    Currency,
)
from .capital import new_record_id


class ShareholderPosition(VersionedRecord):
    """A person's shares in a company.

    Examples:
        Founder:
            person_id="p-alice", shares_held=1000, share_percentage=10

        Buyer created by a transfer of 100 of Alice's shares:
            person_id="p-bob", shares_held=100, share_percentage=1
    """

    id: RecordId = Field(default_factory=new_record_id)

    company_id: RecordId
    person_id: RecordId

    shares_held: ShareCount = Field(
        description="Number of shares held"
    )

    share_percentage: SharePercentage = Field(
        default=Decimal("0"),
        description="Ownership in percent, recomputed by transfers and issuances"
    )

    acquisition_date: Optional[date] = None

    acquisition_price_per_share: Optional[MoneyAmount] = None

    currency: Currency = "RWF"

    status: Literal["active", "inactive"] = "active"

    notes: Optional[str] = None

    def total_acquisition_cost(self) -> Optional[Decimal]:
        """Price paid for the current holding, if a price was recorded."""
        if self.acquisition_price_per_share is None:
            return None
        return self.acquisition_price_per_share * self.shares_held


PercentageBasis = Literal["source_proportional", "issued_shares"]


class ShareTransferResult(DomainModel):
    """Both sides of a transfer, returned together."""

    from_position: ShareholderPosition
    to_position: ShareholderPosition
    shares_transferred: int = Field(gt=0)
    transfer_date: date
