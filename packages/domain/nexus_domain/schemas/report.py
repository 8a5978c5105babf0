"""Report configuration - top-level entry point for Excel generation.

The ReportCFG ties together the record snapshots a bookkeeping report is
rendered from:
- Capital locks (schedule and statistics)
- Ledger entries (trial balance and financial summary)
- Shareholder positions (share register)

This is what gets passed to the Excel renderer to generate the workbook.
"""

from typing import List
from datetime import date
from pydantic import Field, model_validator

from .base import DomainModel
from .capital import CapitalLock
from .ledger import LedgerEntry
from .shareholders import ShareholderPosition
from .policy import CapitalPolicyCFG, DEFAULT_POLICY


class ReportCFG(DomainModel):
    """Root configuration for the bookkeeping workbook.

    Example:
        ReportCFG(
            company_name="Kigali Traders Ltd",
            as_of_date=date(2024, 6, 30),
            capital_locks=[lock],
            ledger_entries=entries,
        )
    """

    company_name: str = Field(min_length=1)

    as_of_date: date = Field(
        description="Reporting date: accrual and ledger cutoff"
    )

    capital_locks: List[CapitalLock] = Field(default_factory=list)
    ledger_entries: List[LedgerEntry] = Field(default_factory=list)
    shareholder_positions: List[ShareholderPosition] = Field(default_factory=list)

    policy: CapitalPolicyCFG = Field(default_factory=lambda: DEFAULT_POLICY)

    include_trial_balance: bool = True
    include_capital_locks: bool = True
    include_share_register: bool = True

    @model_validator(mode='after')
    def validate_sections(self):
        """At least one sheet must be rendered."""
        if not (self.include_trial_balance or self.include_capital_locks
                or self.include_share_register):
            raise ValueError("ReportCFG must include at least one section")
        return self
