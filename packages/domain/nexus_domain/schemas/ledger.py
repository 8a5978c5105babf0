"""General ledger records.

LedgerEntry rows are the read-only input to the trial balance. A
JournalTransaction is a balanced group of lines that posts into entries.
"""

from typing import Dict, List, Optional
from datetime import date
from decimal import Decimal
from pydantic import Field, model_validator

from .base import DomainModel, AccountCode, MoneyAmount, SourceType


# Chart of accounts used by the bookkeeping screens.
CHART_OF_ACCOUNTS: Dict[str, str] = {
    # Assets
    "1001": "Cash at Bank",
    "1002": "Petty Cash",
    "1003": "Mobile Money Account",
    "1101": "Accounts Receivable",
    "1201": "Inventory",
    "1301": "Fixed Assets",
    "1302": "Accumulated Depreciation",
    # Liabilities
    "2001": "Accounts Payable",
    "2004": "Loans Payable",
    "2101": "VAT Payable",
    "2102": "PAYE Payable",
    "2103": "RSSB Payable",
    "2201": "Dividend Payable",
    "2202": "Accrued Expenses",
    # Equity
    "3001": "Share Capital",
    "3002": "Retained Earnings",
    # Revenue
    "4001": "Sales Revenue",
    "4002": "Service Revenue",
    "4003": "Other Income",
    # Expenses
    "5001": "Salaries & Wages",
    "5002": "Rent Expense",
    "5003": "Utilities",
    "5004": "Marketing",
    "5005": "Office Supplies",
    "5006": "Professional Fees",
    "5007": "Depreciation",
    "5008": "Other Expenses",
}

UNKNOWN_ACCOUNT = "Unknown Account"


# =============================================================================
# Ledger Entry
# =============================================================================

class LedgerEntry(DomainModel):
    """One posting to one account.

    Usually exactly one of debit/credit is non-zero, but both may be present.
    """

    account_code: AccountCode
    account_name: str

    debit: MoneyAmount = Decimal("0")
    credit: MoneyAmount = Decimal("0")

    entry_date: Optional[date] = Field(
        default=None,
        description="Posting date (undated entries are never cut off)"
    )

    reference: Optional[str] = None
    description: Optional[str] = None
    source_id: Optional[str] = None
    source_type: Optional[SourceType] = None


# =============================================================================
# Trial Balance Row
# =============================================================================

class TrialBalanceRow(DomainModel):
    """Per-account totals. Derived, never stored.

    balance is positive for a net debit, negative for a net credit.
    """

    account_code: AccountCode
    account_name: str
    total_debit: Decimal
    total_credit: Decimal
    balance: Decimal

    @model_validator(mode='after')
    def validate_balance(self):
        if self.balance != self.total_debit - self.total_credit:
            raise ValueError("balance must equal total_debit - total_credit")
        return self


# =============================================================================
# Journal Transaction
# =============================================================================

class JournalLine(DomainModel):
    """A line of a journal transaction before posting."""

    account_code: AccountCode
    account_name: Optional[str] = None
    debit: MoneyAmount = Decimal("0")
    credit: MoneyAmount = Decimal("0")


class JournalTransaction(DomainModel):
    """A business event posted as a group of ledger lines.

    Example:
        Sales invoice of 118,000 including 18,000 VAT:
            1101 Accounts Receivable  debit  118,000
            4001 Sales Revenue        credit 100,000
            2101 VAT Payable          credit  18,000
    """

    transaction_date: date
    reference: str
    description: str
    source_id: str
    source_type: SourceType = "manual"
    lines: List[JournalLine] = Field(min_length=2)

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0"))
