"""Share transfers between shareholders.

Two percentage bases are supported:

    source_proportional (default, compatible with existing registers):
        new buyer:      n / from.shares x from.pct
        existing buyer: (to.shares + n) / (from.shares + to.shares) x 100
        seller:         (from.shares - n) / from.shares x from.pct

    issued_shares (consistent base):
        every party:    shares / issued_shares x 100

The default keeps the figures already stored in company registers. Note that
its two buyer branches use different denominators, so the existing-buyer
percentage is relative to the two parties only. Use "issued_shares" when the
company's issued share count is known.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from ..errors import ValidationError
from ..schemas import (
    PercentageBasis,
    ShareholderPosition,
    ShareTransferResult,
    evolve,
)
from .money import Number, HUNDRED, to_decimal

logger = logging.getLogger(__name__)


def transfer_shares(
    from_position: ShareholderPosition,
    to_position: Optional[ShareholderPosition],
    shares_to_transfer: int,
    to_person_id: Optional[str] = None,
    transfer_date: Optional[date] = None,
    price_per_share: Optional[Number] = None,
    percentage_basis: PercentageBasis = "source_proportional",
    issued_shares: Optional[int] = None,
    notes: Optional[str] = None,
) -> ShareTransferResult:
    """Move shares from one holder to another and recompute both percentages.

    Args:
        from_position: Seller's position
        to_position: Buyer's existing position, or None for a new holder
        shares_to_transfer: Number of shares moved (positive)
        to_person_id: Person id for a new holder (required when to_position is None)
        transfer_date: Date of transfer (today when None)
        price_per_share: Recorded on a new holder's position
        percentage_basis: "source_proportional" or "issued_shares"
        issued_shares: Company's issued share count ("issued_shares" basis only)
        notes: Stored on the seller's position

    Returns:
        ShareTransferResult with both updated positions. Inputs are untouched.

    Raises:
        ValidationError: If shares_to_transfer <= 0, exceeds the seller's
            holding, the parties are inconsistent, or the issued share base
            is missing or too small

    Example:
        Seller 1000 shares / 10%, 100 shares to a new holder:
            buyer  -> 100 shares, 1%
            seller -> 900 shares, 9%
    """
    if shares_to_transfer <= 0:
        raise ValidationError(f"Shares to transfer must be positive, got: {shares_to_transfer}")
    if shares_to_transfer > from_position.shares_held:
        raise ValidationError(
            f"Insufficient shares to transfer: holder has {from_position.shares_held}, "
            f"trying to transfer {shares_to_transfer}"
        )

    if to_position is None:
        if not to_person_id:
            raise ValidationError("to_person_id is required when transferring to a new holder")
        if to_person_id == from_position.person_id:
            raise ValidationError("Cannot transfer shares to the same holder")
    else:
        if to_position.id == from_position.id:
            raise ValidationError("Cannot transfer shares to the same holder")
        if to_position.company_id != from_position.company_id:
            raise ValidationError(
                f"Cannot transfer between companies "
                f"({from_position.company_id} -> {to_position.company_id})"
            )

    if percentage_basis == "issued_shares":
        combined = from_position.shares_held + (to_position.shares_held if to_position else 0)
        if not issued_shares or issued_shares < combined:
            raise ValidationError(
                f"issued_shares must cover both holdings ({combined}), got: {issued_shares}"
            )

    when = transfer_date or date.today()
    n = shares_to_transfer
    seller_shares = from_position.shares_held
    seller_pct = from_position.share_percentage
    remaining = seller_shares - n

    if percentage_basis == "issued_shares":
        base = Decimal(issued_shares)
        seller_new_pct = Decimal(remaining) / base * HUNDRED
    else:
        seller_new_pct = Decimal(remaining) / Decimal(seller_shares) * seller_pct

    if to_position is None:
        if percentage_basis == "issued_shares":
            buyer_pct = Decimal(n) / base * HUNDRED
        else:
            buyer_pct = Decimal(n) / Decimal(seller_shares) * seller_pct
        buyer = ShareholderPosition(
            company_id=from_position.company_id,
            person_id=to_person_id,
            shares_held=n,
            share_percentage=buyer_pct,
            acquisition_date=when,
            acquisition_price_per_share=(
                to_decimal(price_per_share) if price_per_share is not None else None
            ),
            currency=from_position.currency,
            status="active",
        )
    else:
        buyer_shares = to_position.shares_held + n
        if percentage_basis == "issued_shares":
            buyer_pct = Decimal(buyer_shares) / base * HUNDRED
        else:
            buyer_pct = (
                Decimal(buyer_shares)
                / Decimal(seller_shares + to_position.shares_held)
                * HUNDRED
            )
        buyer = evolve(
            to_position,
            shares_held=buyer_shares,
            share_percentage=buyer_pct,
        )

    seller = evolve(
        from_position,
        shares_held=remaining,
        share_percentage=seller_new_pct,
        notes=notes if notes is not None else from_position.notes,
    )

    logger.info(
        "Transferred %d shares from %s to %s (%s basis)",
        n, from_position.person_id, buyer.person_id, percentage_basis,
    )
    return ShareTransferResult(
        from_position=seller,
        to_position=buyer,
        shares_transferred=n,
        transfer_date=when,
    )


def share_percentage(shares_held: int, issued_shares: int) -> Decimal:
    """Holding as a percent of the issued share base (0 when none issued)."""
    if issued_shares <= 0:
        return Decimal("0")
    return Decimal(shares_held) / Decimal(issued_shares) * HUNDRED


def recalculate_share_percentages(
    positions: Iterable[ShareholderPosition],
    issued_shares: int,
) -> List[ShareholderPosition]:
    """Recompute every position against the issued share base.

    Used after an issuance, when the base itself has changed.

    Raises:
        ValidationError: If the positions hold more shares than were issued
    """
    positions = list(positions)
    held = sum(p.shares_held for p in positions)
    if issued_shares < 0 or (issued_shares > 0 and held > issued_shares):
        raise ValidationError(
            f"Positions hold {held} shares but only {issued_shares} are issued"
        )
    return [
        evolve(p, share_percentage=share_percentage(p.shares_held, issued_shares))
        for p in positions
    ]
