"""Trial balance and general ledger helpers.

Double-entry postings are folded into one row per account. A ledger built
only from balanced journals always produces a balanced trial balance.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from ..errors import ValidationError
from ..schemas import (
    CHART_OF_ACCOUNTS,
    JournalTransaction,
    LedgerEntry,
    TrialBalanceRow,
)
from ..schemas.ledger import UNKNOWN_ACCOUNT

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = Decimal("0.01")
ZERO = Decimal("0")


def _in_period(entry: LedgerEntry, as_of: Optional[date]) -> bool:
    if as_of is None or entry.entry_date is None:
        return True
    return entry.entry_date <= as_of


def build_trial_balance(
    entries: Iterable[LedgerEntry],
    as_of: Optional[date] = None,
) -> List[TrialBalanceRow]:
    """Fold ledger entries into per-account totals.

    Args:
        entries: Ledger entries in posting order
        as_of: Ignore entries dated after this date (undated entries count)

    Returns:
        One TrialBalanceRow per account, in order of first appearance. The
        account name is taken from the first entry seen for the account.

    Example:
        [(1001 Cash, debit 100), (4001 Sales, credit 100)]
        -> [1001: 100 / 0 / 100, 4001: 0 / 100 / -100]
    """
    totals: Dict[str, dict] = {}
    for entry in entries:
        if not _in_period(entry, as_of):
            continue
        account = totals.setdefault(entry.account_code, {
            "account_name": entry.account_name,
            "debit": ZERO,
            "credit": ZERO,
        })
        account["debit"] += entry.debit
        account["credit"] += entry.credit

    return [
        TrialBalanceRow(
            account_code=code,
            account_name=data["account_name"],
            total_debit=data["debit"],
            total_credit=data["credit"],
            balance=data["debit"] - data["credit"],
        )
        for code, data in totals.items()
    ]


def is_balanced(
    rows: Iterable[TrialBalanceRow],
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> bool:
    """True when total debits and total credits differ by less than ``tolerance``."""
    rows = list(rows)
    total_debit = sum((row.total_debit for row in rows), ZERO)
    total_credit = sum((row.total_credit for row in rows), ZERO)
    balanced = abs(total_debit - total_credit) < tolerance
    if not balanced:
        logger.warning(
            "Trial balance out of balance: debits %s, credits %s", total_debit, total_credit
        )
    return balanced


def post_transaction(transaction: JournalTransaction) -> List[LedgerEntry]:
    """Expand a balanced journal into ledger entries.

    Missing account names are filled in from the chart of accounts.

    The bound is the one is_balanced uses: a journal off by exactly 0.01 is
    refused, so every accepted journal keeps the ledger within tolerance.
    This is deliberately stricter than the bookkeeping screens' old check,
    which only refused differences above 0.01.

    Raises:
        ValidationError: If debits and credits differ by 0.01 or more
    """
    debit = transaction.total_debit
    credit = transaction.total_credit
    if abs(debit - credit) >= BALANCE_TOLERANCE:
        raise ValidationError(
            f"Transaction {transaction.reference} does not balance: "
            f"debits {debit} must equal credits {credit}"
        )

    entries = [
        LedgerEntry(
            account_code=line.account_code,
            account_name=(
                line.account_name
                or CHART_OF_ACCOUNTS.get(line.account_code, UNKNOWN_ACCOUNT)
            ),
            debit=line.debit,
            credit=line.credit,
            entry_date=transaction.transaction_date,
            reference=transaction.reference,
            description=transaction.description,
            source_id=transaction.source_id,
            source_type=transaction.source_type,
        )
        for line in transaction.lines
    ]
    logger.debug(
        "Posted %d entries for %s %s",
        len(entries), transaction.source_type, transaction.source_id,
    )
    return entries


def account_balance(
    entries: Iterable[LedgerEntry],
    account_code: str,
    as_of: Optional[date] = None,
) -> Decimal:
    """Net debit balance of one account."""
    return sum(
        (e.debit - e.credit for e in entries
         if e.account_code == account_code and _in_period(e, as_of)),
        ZERO,
    )


def financial_summary(rows: Iterable[TrialBalanceRow]) -> Dict[str, Decimal]:
    """Headline figures grouped by the first digit of the account code.

    Returns:
        Dict with revenue (4xxx credits), expenses (5xxx debits), profit,
        assets (1xxx balances), liabilities (|2xxx balances|) and
        equity (assets - liabilities).
    """
    rows = list(rows)

    def _sum(prefix: str, field) -> Decimal:
        return sum((field(r) for r in rows if r.account_code.startswith(prefix)), ZERO)

    revenue = _sum("4", lambda r: r.total_credit)
    expenses = _sum("5", lambda r: r.total_debit)
    assets = _sum("1", lambda r: r.balance)
    liabilities = _sum("2", lambda r: abs(r.balance))

    return {
        "revenue": revenue,
        "expenses": expenses,
        "profit": revenue - expenses,
        "assets": assets,
        "liabilities": liabilities,
        "equity": assets - liabilities,
    }
