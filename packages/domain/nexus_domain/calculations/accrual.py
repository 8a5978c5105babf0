"""Interest accrual on locked capital.

Accrual is simple (non-compounding) interest with a fixed 30-day month:

    months_elapsed = days_elapsed / 30
    interest       = principal x (annual_rate / 12) x months_elapsed

The 30-day month is the documented day-count of the capital product, not a
calendar-accurate convention. Switching to an exact day-count would change
every computed balance, so it is kept as-is and exposed through
CapitalPolicyCFG.days_per_month.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from ..dates import days_between
from ..schemas import (
    CapitalLock,
    CapitalPolicyCFG,
    Compounding,
    RoiProjection,
    DEFAULT_POLICY,
    evolve,
)
from .money import Number, to_decimal, round_money, HUNDRED

MONTHS_PER_YEAR = Decimal("12")
ZERO = Decimal("0")


def compute_accrued_interest(
    principal: Number,
    annual_rate_percent: Number,
    lock_date: date,
    as_of_date: date,
    days_per_month: int = 30,
) -> Decimal:
    """Time-prorated simple interest on ``principal``.

    Args:
        principal: Amount locked
        annual_rate_percent: Annual ROI in percent (10 = 10%)
        lock_date: Start of accrual
        as_of_date: Date to accrue up to
        days_per_month: Month length for the day-count (default 30)

    Returns:
        Interest rounded to cents. Zero when as_of_date is before lock_date.

    Example:
        1,000,000 at 10% for 180 days:
            1_000_000 x (0.10 / 12) x (180 / 30) = 50,000.00
    """
    days = days_between(lock_date, as_of_date)
    if days <= 0:
        return round_money(ZERO)

    # Multiply before dividing so exact cases stay exact.
    numerator = to_decimal(principal) * to_decimal(annual_rate_percent) * days
    denominator = HUNDRED * MONTHS_PER_YEAR * days_per_month
    return round_money(numerator / denominator)


def accrue_interest(
    lock: CapitalLock,
    as_of: date,
    policy: Optional[CapitalPolicyCFG] = None,
) -> CapitalLock:
    """Bring a lock's accrued interest up to ``as_of``.

    Accrual stops at unlock_date and never moves backwards. Locks that are
    no longer accruing (unlocked, penalty_applied) come back unchanged.
    """
    if not lock.is_accruing:
        return lock

    policy = policy or DEFAULT_POLICY
    effective_date = min(as_of, lock.unlock_date)
    interest = compute_accrued_interest(
        lock.principal,
        lock.total_roi_rate,
        lock.lock_date,
        effective_date,
        days_per_month=policy.days_per_month,
    )
    if interest <= lock.accrued_interest:
        return lock
    return evolve(lock, accrued_interest=interest)


def project_returns(
    principal: Number,
    annual_rate_percent: Number,
    months: int,
    compounding: Compounding = "simple",
) -> List[RoiProjection]:
    """Month-by-month projection of an investment.

    Args:
        principal: Amount invested
        annual_rate_percent: Expected annual ROI in percent
        months: Horizon in months (one row per month)
        compounding: "simple", "monthly" or "quarterly". Quarterly
            compounding only credits completed quarters.

    Returns:
        List of RoiProjection rows. Returns and totals are rounded to whole
        units, percentage to two decimals.
    """
    if months < 0:
        raise ValueError(f"months must be non-negative, got: {months}")

    invested = to_decimal(principal)
    annual_rate = to_decimal(annual_rate_percent) / HUNDRED
    monthly_rate = annual_rate / MONTHS_PER_YEAR
    quarterly_rate = annual_rate / 4

    rows = []
    for month in range(1, months + 1):
        if compounding == "monthly":
            total = invested * (1 + monthly_rate) ** month
            returns = total - invested
        elif compounding == "quarterly":
            total = invested * (1 + quarterly_rate) ** (month // 3)
            returns = total - invested
        else:
            returns = invested * annual_rate * month / MONTHS_PER_YEAR
            total = invested + returns

        percentage = returns / invested * HUNDRED if invested else ZERO

        rows.append(RoiProjection(
            month=month,
            invested=invested,
            returns=returns.quantize(Decimal("1"), rounding=ROUND_HALF_UP),
            total=total.quantize(Decimal("1"), rounding=ROUND_HALF_UP),
            percentage=percentage.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
        ))

    return rows
