"""Base classes and type system for Office Nexus domain records.

This module provides the foundational types, validators, and base classes
used throughout the capital, shareholder and ledger schemas.
"""

from decimal import Decimal
from typing import Annotated, Literal, TypeVar
from pydantic import BaseModel, Field, ConfigDict

# =============================================================================
# Base Model
# =============================================================================

class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for all Pydantic models in the domain layer:
    - Validation on assignment for runtime safety
    - Support for Decimal and date types
    - Enum value serialization
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )


RecordT = TypeVar("RecordT", bound=DomainModel)


def evolve(record: RecordT, **changes) -> RecordT:
    """Return a validated copy of ``record`` with ``changes`` applied.

    Unlike ``model_copy(update=...)`` the copy is re-validated, so model
    invariants hold on every record an operation hands back.
    """
    data = record.model_dump()
    data.update(changes)
    return type(record).model_validate(data)


class VersionedRecord(DomainModel):
    """A record stored behind the persistence boundary.

    ``revision`` is checked by the repository on save (optimistic
    concurrency). Operations copy it through unchanged.
    """

    revision: int = Field(
        default=0,
        ge=0,
        description="Stored revision this copy was loaded at"
    )


# =============================================================================
# Type Aliases - Numeric
# =============================================================================

MoneyAmount = Annotated[
    Decimal,
    Field(ge=0, description="Currency amount (non-negative)")
]

RatePercent = Annotated[
    Decimal,
    Field(ge=0, le=100, description="Annualized rate in percent (8.00 = 8%)")
]

SharePercentage = Annotated[
    Decimal,
    Field(ge=0, le=100, description="Ownership in percent (0 to 100)")
]

ShareCount = Annotated[
    int,
    Field(ge=0, description="Number of shares (non-negative)")
]


# =============================================================================
# Type Aliases - Enumerations
# =============================================================================

Currency = Literal["RWF", "USD", "EUR"]

LockStatus = Literal[
    "locked",
    "unlocked",
    "early_withdrawal_requested",
    "penalty_applied",
]

WithdrawalStatus = Literal["pending", "approved", "rejected"]

SourceType = Literal["invoice", "purchase", "payroll", "asset", "payment", "manual"]

SUPPORTED_CURRENCIES = ("RWF", "USD", "EUR")


# =============================================================================
# ID Conventions
# =============================================================================

RecordId = Annotated[
    str,
    Field(
        min_length=1,
        description="Opaque record identifier (UUID or user-defined)"
    )
]

AccountCode = Annotated[
    str,
    Field(
        pattern=r'^[0-9]+$',
        description="Numeric chart-of-accounts code (e.g., '1001')"
    )
]

# =============================================================================
# Account Code Conventions
# =============================================================================
#
#   1xxx - Assets        (1001 Cash at Bank, 1101 Accounts Receivable)
#   2xxx - Liabilities   (2001 Accounts Payable, 2101 VAT Payable)
#   3xxx - Equity        (3001 Share Capital)
#   4xxx - Revenue       (4001 Sales Revenue)
#   5xxx - Expenses      (5001 Salaries & Wages)
#
# =============================================================================
