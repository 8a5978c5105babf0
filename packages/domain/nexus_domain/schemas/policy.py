"""Capital policy configuration.

The CapitalPolicyCFG holds the business constants the capital calculations
read: the lock-period bonus table, the default ROI and penalty rates, and the
day-count used for accrual. Operations take an optional ``policy`` argument
and fall back to DEFAULT_POLICY.
"""

from typing import Dict
from decimal import Decimal
from pydantic import Field, field_validator

from .base import DomainModel, RatePercent


# =============================================================================
# Bonus Table
# =============================================================================

# Lock period (months) -> bonus ROI (percent) added on top of the base rate.
DEFAULT_BONUS_TABLE: Dict[int, Decimal] = {
    3: Decimal("0.5"),
    6: Decimal("1.0"),
    12: Decimal("2.0"),
    18: Decimal("2.5"),
    24: Decimal("3.0"),
    36: Decimal("4.0"),
}


# =============================================================================
# Capital Policy
# =============================================================================

class CapitalPolicyCFG(DomainModel):
    """Business constants for capital locking.

    Examples:
        # Company-wide defaults
        DEFAULT_POLICY

        # Harsher early-exit terms
        CapitalPolicyCFG(early_withdrawal_penalty_rate=Decimal("10"))

        # Only annual locks offered
        CapitalPolicyCFG(bonus_table={12: Decimal("2.0")})
    """

    bonus_table: Dict[int, RatePercent] = Field(
        default_factory=lambda: dict(DEFAULT_BONUS_TABLE),
        description="Supported lock periods (months) and their bonus ROI rate"
    )

    default_base_roi_rate: RatePercent = Field(
        default=Decimal("8.00"),
        description="Base annual ROI rate applied when the caller gives none"
    )

    early_withdrawal_penalty_rate: RatePercent = Field(
        default=Decimal("5.00"),
        description="Penalty charged on principal for exiting before maturity"
    )

    days_per_month: int = Field(
        default=30,
        gt=0,
        description="Fixed month length used by the accrual day-count"
    )

    upcoming_unlock_window_days: int = Field(
        default=30,
        ge=0,
        description="Horizon for the 'upcoming unlocks' statistic"
    )

    @field_validator('bonus_table')
    @classmethod
    def validate_bonus_table(cls, v: Dict[int, Decimal]) -> Dict[int, Decimal]:
        """Lock periods must be positive month counts."""
        if not v:
            raise ValueError("bonus_table must offer at least one lock period")
        for months in v:
            if months <= 0:
                raise ValueError(f"Lock period must be positive, got: {months}")
        return v

    @property
    def supported_periods(self) -> list:
        return sorted(self.bonus_table)


DEFAULT_POLICY = CapitalPolicyCFG()
