"""Share register and dividend schedule blocks."""

from decimal import Decimal
from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..schemas import DividendDistribution, ShareholderPosition

REGISTER_COLUMNS = [
    "position_id",
    "person_id",
    "shares_held",
    "share_percentage",
    "status",
    "acquisition_date",
]


class ShareRegisterBlock(Block):
    """Converts shareholder positions to the share register DataFrame.

    Inputs (from context):
        - shareholder_positions: List[ShareholderPosition]

    Outputs (to context):
        - share_register: DataFrame sorted by shares_held descending, with
          columns position_id, person_id, shares_held, share_percentage,
          status, acquisition_date
    """

    def __init__(self, positions_key: str = "shareholder_positions"):
        self.positions_key = positions_key

    def inputs(self) -> List[str]:
        return [self.positions_key]

    def outputs(self) -> List[str]:
        return ["share_register"]

    def execute(self, context: BlockContext) -> None:
        positions: List[ShareholderPosition] = context.get(self.positions_key)

        if not positions:
            context.set("share_register", pd.DataFrame(columns=REGISTER_COLUMNS))
            return

        df = pd.DataFrame([
            {
                "position_id": p.id,
                "person_id": p.person_id,
                "shares_held": p.shares_held,
                "share_percentage": float(p.share_percentage),
                "status": p.status,
                "acquisition_date": p.acquisition_date,
            }
            for p in positions
        ])
        df = df.sort_values("shares_held", ascending=False, kind="stable").reset_index(drop=True)
        context.set("share_register", df)


DIVIDEND_COLUMNS = [
    "position_id",
    "person_id",
    "shares_held_at_time",
    "gross_amount",
    "tax_amount",
    "net_amount",
    "is_paid",
]


class DividendScheduleBlock(Block):
    """Converts dividend distributions to a payout schedule DataFrame.

    Inputs (from context):
        - dividend_distributions: List[DividendDistribution]

    Outputs (to context):
        - dividend_schedule: DataFrame in distribution order
        - dividend_totals: Dict with gross, tax and net sums
    """

    def inputs(self) -> List[str]:
        return ["dividend_distributions"]

    def outputs(self) -> List[str]:
        return ["dividend_schedule", "dividend_totals"]

    def execute(self, context: BlockContext) -> None:
        distributions: List[DividendDistribution] = context.get("dividend_distributions") or []

        df = pd.DataFrame(
            [
                {
                    "position_id": d.position_id,
                    "person_id": d.person_id,
                    "shares_held_at_time": d.shares_held_at_time,
                    "gross_amount": float(d.gross_amount),
                    "tax_amount": float(d.tax_amount),
                    "net_amount": float(d.net_amount),
                    "is_paid": d.is_paid,
                }
                for d in distributions
            ],
            columns=DIVIDEND_COLUMNS,
        )
        context.set("dividend_schedule", df)
        context.set("dividend_totals", {
            "gross": sum((d.gross_amount for d in distributions), Decimal("0")),
            "tax": sum((d.tax_amount for d in distributions), Decimal("0")),
            "net": sum((d.net_amount for d in distributions), Decimal("0")),
        })
