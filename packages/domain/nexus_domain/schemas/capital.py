"""Locked capital and early withdrawal records.

A CapitalLock is an investor's principal committed for a fixed term in
exchange for an annual ROI rate. Locks are append-only financial records:
operations return updated copies and the caller persists them, nothing is
ever hard-deleted.

Lifecycle:
    locked ──(maturity)──────────────> unlocked
    locked ──(request)───────────────> early_withdrawal_requested
    early_withdrawal_requested ─(approve)─> unlocked
    early_withdrawal_requested ─(reject)──> locked
"""

from typing import Optional, Literal
from datetime import date
from decimal import Decimal
from uuid import uuid4
from pydantic import Field, model_validator

from .base import (
    DomainModel,
    VersionedRecord,
    RecordId,
    MoneyAmount,
    RatePercent,
    Currency,
    LockStatus,
    WithdrawalStatus,
)
from ..dates import add_months


# Statuses in which accrued interest still moves.
ACCRUING_STATUSES = ("locked", "early_withdrawal_requested")


def new_record_id() -> str:
    return str(uuid4())


# =============================================================================
# Investor
# =============================================================================

class Investor(DomainModel):
    """The party committing capital, as seen by a lock."""

    company_id: RecordId = Field(
        description="Company the capital is locked into"
    )

    investor_id: RecordId = Field(
        description="Person record of the investor"
    )

    investor_name: str = Field(
        min_length=2,
        max_length=255,
        description="Display name of the investor"
    )


# =============================================================================
# Capital Lock
# =============================================================================

class CapitalLock(VersionedRecord):
    """An investor's locked principal.

    Invariants (checked on construction):
        - unlock_date is lock_date shifted by lock_period_months
        - total_roi_rate == base_roi_rate + bonus_rate

    Examples:
        Annual RWF lock:
            principal=1_000_000, currency="RWF"
            lock_period_months=12, lock_date=2024-01-01 -> unlock_date=2025-01-01
            base_roi_rate=8.00, bonus_rate=2.00 -> total_roi_rate=10.00
    """

    id: RecordId = Field(
        default_factory=new_record_id,
        description="Unique identifier for this lock"
    )

    company_id: RecordId
    investor_id: RecordId
    investor_name: str = Field(min_length=2, max_length=255)

    principal: MoneyAmount = Field(
        gt=0,
        description="Amount locked"
    )

    currency: Currency = Field(
        default="RWF",
        description="Currency of the principal"
    )

    lock_period_months: int = Field(
        gt=0,
        description="Lock term in calendar months"
    )

    lock_date: date
    unlock_date: date

    base_roi_rate: RatePercent
    bonus_rate: RatePercent = Decimal("0")
    total_roi_rate: RatePercent

    accrued_interest: MoneyAmount = Field(
        default=Decimal("0"),
        description="Interest accrued so far; frozen once the lock is released"
    )

    status: LockStatus = "locked"

    early_withdrawal_penalty_rate: RatePercent = Field(
        default=Decimal("5.00"),
        description="Penalty rate on principal for exiting before unlock_date"
    )

    penalty_amount: MoneyAmount = Decimal("0")

    notes: Optional[str] = None

    @model_validator(mode='after')
    def validate_schedule(self):
        """unlock_date and total_roi_rate are derived, never set freely."""
        expected_unlock = add_months(self.lock_date, self.lock_period_months)
        if self.unlock_date != expected_unlock:
            raise ValueError(
                f"unlock_date must be lock_date + {self.lock_period_months} months "
                f"({expected_unlock}), got: {self.unlock_date}"
            )
        if self.total_roi_rate != self.base_roi_rate + self.bonus_rate:
            raise ValueError(
                f"total_roi_rate must equal base_roi_rate + bonus_rate "
                f"({self.base_roi_rate + self.bonus_rate}), got: {self.total_roi_rate}"
            )
        return self

    @property
    def is_accruing(self) -> bool:
        return self.status in ACCRUING_STATUSES

    def is_mature(self, as_of: date) -> bool:
        return as_of >= self.unlock_date


# =============================================================================
# Early Withdrawal Request
# =============================================================================

class EarlyWithdrawalRequest(VersionedRecord):
    """A lock owner's request to exit before maturity.

    Created pending with the penalty fixed at request time, resolved exactly
    once by an approver, never changed afterwards.
    """

    id: RecordId = Field(default_factory=new_record_id)

    locked_capital_id: RecordId = Field(
        description="The CapitalLock this request exits"
    )

    company_id: Optional[RecordId] = None

    request_date: date
    reason: str = Field(min_length=1)

    penalty_amount: MoneyAmount = Field(
        description="principal x penalty rate, computed when requested"
    )

    status: WithdrawalStatus = "pending"

    reviewed_by: Optional[str] = None
    reviewed_on: Optional[date] = None
    review_notes: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.status != "pending"


# =============================================================================
# ROI Projection
# =============================================================================

Compounding = Literal["simple", "monthly", "quarterly"]


class RoiProjection(DomainModel):
    """Projected position of an investment at the end of a month."""

    month: int = Field(ge=1)
    invested: MoneyAmount
    returns: Decimal
    total: Decimal
    percentage: Decimal = Field(description="returns / invested in percent")
