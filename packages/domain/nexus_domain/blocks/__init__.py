"""Computation blocks for bookkeeping reports.

This package contains the computation layer that transforms domain records
into DataFrames suitable for Excel rendering or dashboard display.

Architecture:
    Schemas (records) → Calculations (pure functions) → Blocks → DataFrames

Available blocks:
- CapitalScheduleBlock: Capital locks → accrual schedule and statistics
- TrialBalanceBlock: Ledger entries → trial balance and financial summary
- ShareRegisterBlock: Shareholder positions → share register
- DividendScheduleBlock: Dividend distributions → payout schedule

Usage:
    from nexus_domain.blocks import BlockExecutor, BlockContext, TrialBalanceBlock

    context = BlockContext()
    context.set("ledger_entries", entries)
    BlockExecutor([TrialBalanceBlock()]).execute(context)

    trial_balance_df = context.get("trial_balance")
"""

from .base import Block, BlockExecutor, BlockContext, CircularDependencyError
from .capital import CapitalScheduleBlock
from .ledger import TrialBalanceBlock
from .shareholders import ShareRegisterBlock, DividendScheduleBlock

__all__ = [
    "Block",
    "BlockExecutor",
    "BlockContext",
    "CircularDependencyError",
    "CapitalScheduleBlock",
    "TrialBalanceBlock",
    "ShareRegisterBlock",
    "DividendScheduleBlock",
]
