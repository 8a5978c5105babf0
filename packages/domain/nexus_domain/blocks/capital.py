"""Capital schedule computation block.

Converts a snapshot of capital locks into DataFrames for the dashboard and
the Excel report.

Output DataFrames:
- capital_schedule: One row per lock with interest accrued as of the report date
- capital_statistics: Single row of headline figures
- capital_by_currency: Principal and accrued interest per currency
"""

from typing import List, Optional
from datetime import date
import pandas as pd

from .base import Block, BlockContext
from ..calculations import accrue_interest
from ..dates import days_between
from ..schemas import CapitalLock, CapitalPolicyCFG, DEFAULT_POLICY

LOCK_STATUSES = ["locked", "unlocked", "early_withdrawal_requested", "penalty_applied"]

SCHEDULE_COLUMNS = [
    "lock_id",
    "investor_name",
    "currency",
    "principal",
    "lock_period_months",
    "lock_date",
    "unlock_date",
    "total_roi_rate",
    "status",
    "accrued_interest",
    "penalty_amount",
    "days_to_unlock",
]


class CapitalScheduleBlock(Block):
    """Accrues and summarizes capital locks as of a date.

    Inputs (from context):
        - capital_locks: List[CapitalLock]
        - as_of_date: date the schedule is computed for

    Outputs (to context):
        - capital_schedule: DataFrame with columns:
            * lock_id, investor_name, currency, principal
            * lock_period_months, lock_date, unlock_date, total_roi_rate
            * status: Lock status
            * accrued_interest: Interest accrued up to as_of_date (capped at unlock_date)
            * penalty_amount: Early withdrawal penalty (0 unless requested)
            * days_to_unlock: Days until unlock_date (0 once reached)

        - capital_statistics: DataFrame with single row:
            * total_locks, total_investors, average_roi_rate
            * total_principal, total_accrued_interest: Summed across currencies
            * pending_withdrawals: Locks awaiting a withdrawal decision
            * upcoming_unlocks: Locked positions maturing within the policy window
            * one count column per status (status_locked, status_unlocked, ...)

        - capital_by_currency: DataFrame with columns:
            * currency, locks, total_principal, total_accrued_interest

    Example:
        context = BlockContext()
        context.set("capital_locks", locks)
        context.set("as_of_date", date(2024, 7, 1))

        CapitalScheduleBlock().execute(context)
        schedule_df = context.get("capital_schedule")
    """

    def __init__(
        self,
        locks_key: str = "capital_locks",
        as_of_key: str = "as_of_date",
        policy: Optional[CapitalPolicyCFG] = None,
    ):
        self.locks_key = locks_key
        self.as_of_key = as_of_key
        self.policy = policy or DEFAULT_POLICY

    def inputs(self) -> List[str]:
        return [self.locks_key, self.as_of_key]

    def outputs(self) -> List[str]:
        return [
            "capital_schedule",
            "capital_statistics",
            "capital_by_currency",
        ]

    def execute(self, context: BlockContext) -> None:
        locks: List[CapitalLock] = context.get(self.locks_key)
        as_of: date = context.get(self.as_of_key)

        schedule_df = self._compute_schedule(locks, as_of)
        context.set("capital_schedule", schedule_df)

        context.set("capital_statistics", self._compute_statistics(locks, schedule_df, as_of))
        context.set("capital_by_currency", self._compute_by_currency(schedule_df))

    def _compute_schedule(self, locks: List[CapitalLock], as_of: date) -> pd.DataFrame:
        rows = []
        for lock in locks:
            accrued = accrue_interest(lock, as_of, self.policy)
            rows.append({
                "lock_id": lock.id,
                "investor_name": lock.investor_name,
                "currency": lock.currency,
                "principal": float(lock.principal),
                "lock_period_months": lock.lock_period_months,
                "lock_date": lock.lock_date,
                "unlock_date": lock.unlock_date,
                "total_roi_rate": float(lock.total_roi_rate),
                "status": lock.status,
                "accrued_interest": float(accrued.accrued_interest),
                "penalty_amount": float(lock.penalty_amount),
                "days_to_unlock": max(0, days_between(as_of, lock.unlock_date)),
            })

        if not rows:
            return pd.DataFrame(columns=SCHEDULE_COLUMNS)

        # Soonest unlock first
        return pd.DataFrame(rows).sort_values(
            ["unlock_date", "lock_id"], kind="stable"
        ).reset_index(drop=True)

    def _compute_statistics(
        self, locks: List[CapitalLock], schedule_df: pd.DataFrame, as_of: date
    ) -> pd.DataFrame:
        window = self.policy.upcoming_unlock_window_days
        upcoming = sum(
            1 for lock in locks
            if lock.status == "locked" and 0 <= days_between(as_of, lock.unlock_date) <= window
        )

        stats = {
            "total_locks": len(locks),
            "total_investors": len({lock.investor_id for lock in locks}),
            "total_principal": (
                float(schedule_df["principal"].sum()) if not schedule_df.empty else 0.0
            ),
            "total_accrued_interest": (
                float(schedule_df["accrued_interest"].sum()) if not schedule_df.empty else 0.0
            ),
            "average_roi_rate": (
                float(schedule_df["total_roi_rate"].mean()) if not schedule_df.empty else 0.0
            ),
            "pending_withdrawals": sum(
                1 for lock in locks if lock.status == "early_withdrawal_requested"
            ),
            "upcoming_unlocks": upcoming,
        }
        for status in LOCK_STATUSES:
            stats[f"status_{status}"] = sum(1 for lock in locks if lock.status == status)

        return pd.DataFrame([stats])

    def _compute_by_currency(self, schedule_df: pd.DataFrame) -> pd.DataFrame:
        if schedule_df.empty:
            return pd.DataFrame(columns=[
                "currency",
                "locks",
                "total_principal",
                "total_accrued_interest",
            ])

        by_currency = schedule_df.groupby("currency").agg(
            locks=("lock_id", "count"),
            total_principal=("principal", "sum"),
            total_accrued_interest=("accrued_interest", "sum"),
        ).reset_index()

        return by_currency.sort_values("total_principal", ascending=False).reset_index(drop=True)
