"""Capital lock lifecycle.

Creates locks and moves them from locked to unlocked at maturity. Early exit
transitions live in withdrawal.py. Every function returns new records and
leaves its inputs untouched; persisting the result is the caller's job.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from ..dates import add_months
from ..errors import ValidationError
from ..schemas import (
    CapitalLock,
    CapitalPolicyCFG,
    Currency,
    Investor,
    DEFAULT_POLICY,
    SUPPORTED_CURRENCIES,
    evolve,
)
from .accrual import compute_accrued_interest
from .money import Number, to_decimal

logger = logging.getLogger(__name__)


def bonus_rate_for_period(
    lock_period_months: int,
    policy: Optional[CapitalPolicyCFG] = None,
) -> Decimal:
    """Bonus ROI for a lock period.

    Raises:
        ValidationError: If the period is not offered by the policy
    """
    policy = policy or DEFAULT_POLICY
    if lock_period_months not in policy.bonus_table:
        raise ValidationError(
            f"Unsupported lock period: {lock_period_months} months. "
            f"Supported periods: {policy.supported_periods}"
        )
    return to_decimal(policy.bonus_table[lock_period_months])


def unlock_date_for(lock_date: date, lock_period_months: int) -> date:
    return add_months(lock_date, lock_period_months)


def lock_capital(
    investor: Investor,
    principal: Number,
    currency: Currency,
    lock_period_months: int,
    base_rate: Optional[Number] = None,
    lock_date: Optional[date] = None,
    notes: Optional[str] = None,
    policy: Optional[CapitalPolicyCFG] = None,
) -> CapitalLock:
    """Create a new capital lock.

    Args:
        investor: Company and person committing the capital
        principal: Amount to lock (must be positive)
        currency: One of RWF, USD, EUR
        lock_period_months: Term; must be a period in the bonus table
        base_rate: Base annual ROI in percent (policy default when None)
        lock_date: Start date (today when None)
        notes: Free-text notes
        policy: Capital policy (DEFAULT_POLICY when None)

    Returns:
        CapitalLock with status "locked", zero accrued interest,
        total_roi_rate = base + bonus and unlock_date = lock_date + term.

    Raises:
        ValidationError: If principal <= 0, the currency is unsupported or
            the lock period is not offered

    Example:
        lock_capital(investor, 1_000_000, "RWF", 12, base_rate=8)
        -> bonus 2.0, total 10.0, unlocks one year after lock_date
    """
    policy = policy or DEFAULT_POLICY

    amount = to_decimal(principal)
    if amount <= 0:
        raise ValidationError(f"Principal must be positive, got: {amount}")
    if currency not in SUPPORTED_CURRENCIES:
        raise ValidationError(
            f"Unsupported currency: {currency}. Supported: {list(SUPPORTED_CURRENCIES)}"
        )

    bonus = bonus_rate_for_period(lock_period_months, policy)
    base = to_decimal(base_rate) if base_rate is not None else policy.default_base_roi_rate
    if base < 0:
        raise ValidationError(f"Base ROI rate must be non-negative, got: {base}")

    start = lock_date or date.today()

    lock = CapitalLock(
        company_id=investor.company_id,
        investor_id=investor.investor_id,
        investor_name=investor.investor_name,
        principal=amount,
        currency=currency,
        lock_period_months=lock_period_months,
        lock_date=start,
        unlock_date=unlock_date_for(start, lock_period_months),
        base_roi_rate=base,
        bonus_rate=bonus,
        total_roi_rate=base + bonus,
        early_withdrawal_penalty_rate=policy.early_withdrawal_penalty_rate,
        status="locked",
        notes=notes,
    )
    logger.info(
        "Locked %s %s for %s months (lock %s, total ROI %s%%)",
        lock.principal, lock.currency, lock.lock_period_months, lock.id, lock.total_roi_rate,
    )
    return lock


def check_maturity(
    lock: CapitalLock,
    now: date,
    policy: Optional[CapitalPolicyCFG] = None,
) -> CapitalLock:
    """Unlock a lock whose term has ended.

    A locked lock with now >= unlock_date becomes "unlocked" and its accrued
    interest is frozen at the value it reaches on unlock_date. Every other
    case returns the lock unchanged, so calling this repeatedly is safe.
    """
    if lock.status != "locked" or not lock.is_mature(now):
        return lock

    policy = policy or DEFAULT_POLICY
    matured_interest = compute_accrued_interest(
        lock.principal,
        lock.total_roi_rate,
        lock.lock_date,
        lock.unlock_date,
        days_per_month=policy.days_per_month,
    )
    logger.info("Capital lock %s matured on %s", lock.id, lock.unlock_date)
    return evolve(
        lock,
        status="unlocked",
        accrued_interest=max(matured_interest, lock.accrued_interest),
    )


def run_maturity_sweep(
    locks: Iterable[CapitalLock],
    now: date,
    policy: Optional[CapitalPolicyCFG] = None,
) -> Tuple[List[CapitalLock], List[str]]:
    """Apply check_maturity to a batch of locks.

    This is the body of the periodic job; scheduling it is up to the host.

    Returns:
        (locks, matured_ids): every lock (updated where it matured) in input
        order, and the ids of the locks that changed status.
    """
    updated: List[CapitalLock] = []
    matured: List[str] = []
    for lock in locks:
        checked = check_maturity(lock, now, policy)
        if checked.status != lock.status:
            matured.append(checked.id)
        updated.append(checked)

    logger.info("Maturity sweep on %s: %d of %d locks unlocked", now, len(matured), len(updated))
    return updated, matured
