"""Early withdrawal workflow.

A lock owner may ask to leave before maturity. The request fixes the penalty
at request time and parks the lock in "early_withdrawal_requested"; an
approver then resolves it exactly once:

    approve -> lock "unlocked" (funds released), request "approved"
    reject  -> lock "locked" (accrual resumes), request "rejected"
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from ..errors import InvalidStateError, ValidationError
from ..schemas import (
    CapitalLock,
    CapitalPolicyCFG,
    EarlyWithdrawalRequest,
    DEFAULT_POLICY,
    evolve,
)
from .accrual import compute_accrued_interest
from .money import Number, percent_of, round_money

logger = logging.getLogger(__name__)


def calculate_penalty(principal: Number, penalty_rate_percent: Number) -> Decimal:
    """Penalty for leaving early: principal x rate, rounded to cents."""
    return round_money(percent_of(principal, penalty_rate_percent))


def request_withdrawal(
    lock: CapitalLock,
    reason: str,
    requested_on: Optional[date] = None,
) -> Tuple[EarlyWithdrawalRequest, CapitalLock]:
    """Open an early withdrawal request on a locked lock.

    Args:
        lock: The lock to exit; must be "locked"
        reason: Why the owner wants out
        requested_on: Request date (today when None)

    Returns:
        (request, lock): a pending request carrying the penalty, and the lock
        moved to "early_withdrawal_requested" with the same penalty_amount.

    Raises:
        InvalidStateError: If the lock is not "locked" (only one outstanding
            request per lock)
        ValidationError: If no reason is given
    """
    if lock.status != "locked":
        raise InvalidStateError(
            f"Capital lock {lock.id} is not locked (status: {lock.status})"
        )
    if not reason or not reason.strip():
        raise ValidationError("A reason is required for early withdrawal")

    penalty = calculate_penalty(lock.principal, lock.early_withdrawal_penalty_rate)

    request = EarlyWithdrawalRequest(
        locked_capital_id=lock.id,
        company_id=lock.company_id,
        request_date=requested_on or date.today(),
        reason=reason.strip(),
        penalty_amount=penalty,
        status="pending",
    )
    updated_lock = evolve(
        lock,
        status="early_withdrawal_requested",
        penalty_amount=penalty,
    )
    logger.info(
        "Early withdrawal requested on lock %s (request %s, penalty %s %s)",
        lock.id, request.id, penalty, lock.currency,
    )
    return request, updated_lock


def resolve_withdrawal(
    request: EarlyWithdrawalRequest,
    lock: CapitalLock,
    approve: bool,
    resolved_on: Optional[date] = None,
    reviewed_by: Optional[str] = None,
    review_notes: Optional[str] = None,
    policy: Optional[CapitalPolicyCFG] = None,
) -> Tuple[EarlyWithdrawalRequest, CapitalLock]:
    """Approve or reject a pending withdrawal request.

    On approval the lock's accrued interest is frozen at its value on the
    resolution date (never past unlock_date). On rejection the penalty is
    cleared and the lock goes back to accruing.

    Raises:
        InvalidStateError: If the request is already resolved, the request
            belongs to another lock, or the lock is not awaiting a decision
    """
    if request.status != "pending":
        raise InvalidStateError(
            f"Withdrawal request {request.id} already processed (status: {request.status})"
        )
    if request.locked_capital_id != lock.id:
        raise InvalidStateError(
            f"Withdrawal request {request.id} belongs to lock "
            f"{request.locked_capital_id}, not {lock.id}"
        )
    if lock.status != "early_withdrawal_requested":
        raise InvalidStateError(
            f"Capital lock {lock.id} has no withdrawal awaiting a decision "
            f"(status: {lock.status})"
        )

    policy = policy or DEFAULT_POLICY
    decided_on = resolved_on or date.today()

    if approve:
        interest = compute_accrued_interest(
            lock.principal,
            lock.total_roi_rate,
            lock.lock_date,
            min(decided_on, lock.unlock_date),
            days_per_month=policy.days_per_month,
        )
        updated_lock = evolve(
            lock,
            status="unlocked",
            accrued_interest=max(interest, lock.accrued_interest),
        )
        status = "approved"
    else:
        updated_lock = evolve(
            lock,
            status="locked",
            penalty_amount=Decimal("0"),
        )
        status = "rejected"

    resolved = evolve(
        request,
        status=status,
        reviewed_by=reviewed_by,
        reviewed_on=decided_on,
        review_notes=review_notes,
    )
    logger.info("Withdrawal request %s %s for lock %s", request.id, status, lock.id)
    return resolved, updated_lock
