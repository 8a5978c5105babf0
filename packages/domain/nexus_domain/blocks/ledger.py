"""Trial balance computation block.

Output DataFrames:
- trial_balance: One row per account in order of first posting
- financial_summary: Single row of headline figures and the balance check
"""

from typing import List, Optional
import pandas as pd

from .base import Block, BlockContext
from ..calculations import build_trial_balance, financial_summary, is_balanced
from ..schemas import LedgerEntry

TRIAL_BALANCE_COLUMNS = [
    "account_code",
    "account_name",
    "total_debit",
    "total_credit",
    "balance",
]


class TrialBalanceBlock(Block):
    """Folds ledger entries into a trial balance.

    Inputs (from context):
        - ledger_entries: List[LedgerEntry]
        - as_of_date (optional, when as_of_key is given): ledger cutoff

    Outputs (to context):
        - trial_balance: DataFrame with columns account_code, account_name,
          total_debit, total_credit, balance
        - financial_summary: DataFrame with single row:
            * revenue, expenses, profit, assets, liabilities, equity
            * total_debit, total_credit
            * is_balanced: Debits equal credits within 0.01
    """

    def __init__(
        self,
        entries_key: str = "ledger_entries",
        as_of_key: Optional[str] = None,
    ):
        self.entries_key = entries_key
        self.as_of_key = as_of_key

    def inputs(self) -> List[str]:
        keys = [self.entries_key]
        if self.as_of_key:
            keys.append(self.as_of_key)
        return keys

    def outputs(self) -> List[str]:
        return ["trial_balance", "financial_summary"]

    def execute(self, context: BlockContext) -> None:
        entries: List[LedgerEntry] = context.get(self.entries_key)
        as_of = context.get(self.as_of_key) if self.as_of_key else None

        rows = build_trial_balance(entries, as_of=as_of)

        if rows:
            trial_balance_df = pd.DataFrame([
                {
                    "account_code": row.account_code,
                    "account_name": row.account_name,
                    "total_debit": float(row.total_debit),
                    "total_credit": float(row.total_credit),
                    "balance": float(row.balance),
                }
                for row in rows
            ])
        else:
            trial_balance_df = pd.DataFrame(columns=TRIAL_BALANCE_COLUMNS)
        context.set("trial_balance", trial_balance_df)

        summary = {key: float(value) for key, value in financial_summary(rows).items()}
        summary["total_debit"] = float(sum(row.total_debit for row in rows))
        summary["total_credit"] = float(sum(row.total_credit for row in rows))
        summary["is_balanced"] = is_balanced(rows)
        context.set("financial_summary", pd.DataFrame([summary]))
