"""Dividend declaration and distribution.

    pool      = profit x percentage / 100            (cents)
    per share = pool / shares held by all holders
    gross     = shares held x per share              (whole currency units)
    tax       = gross x tax rate / 100               (cents)
    net       = gross - tax

Holders with no shares take no part. Rounding each gross amount to a whole
unit means the distributions can sum to a little more or less than the pool.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from ..errors import InvalidStateError, ValidationError
from ..schemas import (
    DividendDeclaration,
    DividendDistribution,
    ShareholderPosition,
    evolve,
)
from .money import Number, percent_of, round_money, to_decimal

logger = logging.getLogger(__name__)

WHOLE_UNIT = Decimal("1")


def dividend_pool(profit_amount: Number, dividend_percentage: Number) -> Decimal:
    """Amount set aside for holders, rounded to cents."""
    return round_money(percent_of(profit_amount, dividend_percentage))


def dividend_per_share(pool: Number, total_shares: int) -> Decimal:
    """Pool split evenly per share; 0 when no shares are held."""
    if total_shares <= 0:
        return Decimal("0")
    return to_decimal(pool) / total_shares


def declare_dividend(
    company_id: str,
    profit_amount: Number,
    dividend_percentage: Number,
    declaration_date: Optional[date] = None,
    approved_by: Optional[str] = None,
    currency: str = "RWF",
) -> DividendDeclaration:
    """Create a draft dividend declaration.

    Raises:
        ValidationError: If profit is not positive or the percentage is
            outside (0, 100]
    """
    profit = to_decimal(profit_amount)
    percentage = to_decimal(dividend_percentage)
    if profit <= 0:
        raise ValidationError(f"Profit amount must be positive, got {profit}")
    if not 0 < percentage <= 100:
        raise ValidationError(
            f"Dividend percentage must be between 0 and 100, got {percentage}"
        )

    declaration = DividendDeclaration(
        company_id=company_id,
        profit_amount=profit,
        dividend_percentage=percentage,
        dividend_pool=dividend_pool(profit, percentage),
        declaration_date=declaration_date or date.today(),
        approved_by=approved_by,
        currency=currency,
    )
    logger.info(
        "Declared dividend %s for company %s: %s%% of %s = %s %s",
        declaration.id, company_id, percentage, profit,
        declaration.dividend_pool, currency,
    )
    return declaration


def confirm_dividend(declaration: DividendDeclaration) -> DividendDeclaration:
    """Move a draft declaration to "confirmed".

    Raises:
        InvalidStateError: If the declaration is already confirmed
    """
    if declaration.status != "draft":
        raise InvalidStateError(
            f"Dividend {declaration.id} is not a draft (status: {declaration.status})"
        )
    return evolve(declaration, status="confirmed")


def calculate_distributions(
    declaration: DividendDeclaration,
    positions: Iterable[ShareholderPosition],
    tax_rate: Number = 0,
) -> List[DividendDistribution]:
    """Split a declaration's pool across the holders in ``positions``.

    Args:
        declaration: The dividend being paid
        positions: Shareholder positions as of the calculation; holders with
            zero shares are skipped
        tax_rate: Withholding tax in percent, applied to every gross amount

    Returns:
        One unpaid DividendDistribution per holder with shares, in input order.

    Raises:
        ValidationError: If no position holds shares, a position belongs to
            another company, or the tax rate is outside [0, 100]

    Example:
        pool 3,000,000 over holders of 1000 / 500 / 1500 shares
        -> per share 1000 -> 1,000,000 / 500,000 / 1,500,000
    """
    rate = to_decimal(tax_rate)
    if not 0 <= rate <= 100:
        raise ValidationError(f"Tax rate must be between 0 and 100, got {rate}")

    holders = [p for p in positions if p.shares_held > 0]
    if not holders:
        raise ValidationError(
            f"Dividend {declaration.id} has no shareholders holding shares"
        )
    foreign = [p.id for p in holders if p.company_id != declaration.company_id]
    if foreign:
        raise ValidationError(
            f"Positions {foreign} do not belong to company {declaration.company_id}"
        )

    total_shares = sum(p.shares_held for p in holders)
    per_share = dividend_per_share(declaration.dividend_pool, total_shares)

    distributions = []
    for position in holders:
        gross = (position.shares_held * per_share).quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)
        tax = round_money(percent_of(gross, rate))
        distributions.append(DividendDistribution(
            declaration_id=declaration.id,
            position_id=position.id,
            person_id=position.person_id,
            shares_held_at_time=position.shares_held,
            gross_amount=gross,
            tax_rate=rate,
            tax_amount=tax,
            net_amount=gross - tax,
            currency=declaration.currency,
        ))

    logger.info(
        "Dividend %s: %d holders, %s shares, %s %s per share",
        declaration.id, len(distributions), total_shares, per_share, declaration.currency,
    )
    return distributions
