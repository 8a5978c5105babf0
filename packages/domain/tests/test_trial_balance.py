"""Tests for the trial balance and journal posting."""

import pytest
from decimal import Decimal
from datetime import date

from nexus_domain import ValidationError
from nexus_domain.calculations import (
    account_balance,
    build_trial_balance,
    financial_summary,
    is_balanced,
    post_transaction,
)
from nexus_domain.schemas import JournalLine, JournalTransaction, LedgerEntry


def entry(code, name, debit=0, credit=0, on=None):
    return LedgerEntry(
        account_code=code,
        account_name=name,
        debit=Decimal(str(debit)),
        credit=Decimal(str(credit)),
        entry_date=on,
    )


@pytest.fixture
def invoice():
    """Sales invoice of 118,000 including 18,000 VAT."""
    return JournalTransaction(
        transaction_date=date(2024, 3, 15),
        reference="INV-001",
        description="Consulting services",
        source_id="inv-1",
        source_type="invoice",
        lines=[
            JournalLine(account_code="1101", debit=Decimal("118000")),
            JournalLine(account_code="4001", credit=Decimal("100000")),
            JournalLine(account_code="2101", credit=Decimal("18000")),
        ],
    )


# =============================================================================
# build_trial_balance
# =============================================================================

class TestBuildTrialBalance:

    def test_two_accounts(self):
        rows = build_trial_balance([
            entry("1001", "Cash at Bank", debit=100),
            entry("4001", "Sales Revenue", credit=100),
        ])
        assert [(r.account_code, r.total_debit, r.total_credit, r.balance) for r in rows] == [
            ("1001", Decimal("100"), Decimal("0"), Decimal("100")),
            ("4001", Decimal("0"), Decimal("100"), Decimal("-100")),
        ]
        assert is_balanced(rows)

    def test_entries_for_same_account_are_summed(self):
        rows = build_trial_balance([
            entry("1001", "Cash at Bank", debit=100),
            entry("1001", "Cash", credit=30),
            entry("1001", "Cash", debit=5),
        ])
        assert len(rows) == 1
        assert rows[0].account_name == "Cash at Bank"
        assert rows[0].total_debit == Decimal("105")
        assert rows[0].total_credit == Decimal("30")
        assert rows[0].balance == Decimal("75")

    def test_first_appearance_order(self):
        rows = build_trial_balance([
            entry("5001", "Salaries & Wages", debit=10),
            entry("1001", "Cash at Bank", credit=10),
            entry("5001", "Salaries & Wages", debit=1),
        ])
        assert [r.account_code for r in rows] == ["5001", "1001"]

    def test_empty_ledger(self):
        rows = build_trial_balance([])
        assert rows == []
        assert is_balanced(rows)

    def test_as_of_cutoff(self):
        entries = [
            entry("1001", "Cash at Bank", debit=100, on=date(2024, 1, 10)),
            entry("1001", "Cash at Bank", debit=50, on=date(2024, 2, 10)),
            entry("1001", "Cash at Bank", debit=7),
        ]
        rows = build_trial_balance(entries, as_of=date(2024, 1, 31))
        assert rows[0].total_debit == Decimal("107")

    def test_unbalanced_ledger(self, caplog):
        rows = build_trial_balance([
            entry("1001", "Cash at Bank", debit=100),
            entry("4001", "Sales Revenue", credit=90),
        ])
        assert not is_balanced(rows)
        assert "out of balance" in caplog.text

    def test_tolerance_is_strict(self):
        rows = build_trial_balance([
            entry("1001", "Cash at Bank", debit="100.01"),
            entry("4001", "Sales Revenue", credit="100.00"),
        ])
        assert not is_balanced(rows)
        assert is_balanced(rows, tolerance=Decimal("0.02"))

    def test_sub_cent_difference_is_balanced(self):
        rows = build_trial_balance([
            entry("1001", "Cash at Bank", debit="100.005"),
            entry("4001", "Sales Revenue", credit="100.00"),
        ])
        assert is_balanced(rows)


# =============================================================================
# post_transaction
# =============================================================================

class TestPostTransaction:

    def test_expands_lines(self, invoice):
        entries = post_transaction(invoice)
        assert [e.account_code for e in entries] == ["1101", "4001", "2101"]
        assert all(e.entry_date == date(2024, 3, 15) for e in entries)
        assert all(e.reference == "INV-001" for e in entries)
        assert all(e.source_type == "invoice" for e in entries)

    def test_names_from_chart_of_accounts(self, invoice):
        entries = post_transaction(invoice)
        assert [e.account_name for e in entries] == [
            "Accounts Receivable",
            "Sales Revenue",
            "VAT Payable",
        ]

    def test_unknown_code_and_explicit_name(self):
        tx = JournalTransaction(
            transaction_date=date(2024, 3, 15),
            reference="J-1",
            description="Manual",
            source_id="m-1",
            lines=[
                JournalLine(account_code="9999", debit=Decimal("10")),
                JournalLine(account_code="1001", account_name="Main Account", credit=Decimal("10")),
            ],
        )
        names = [e.account_name for e in post_transaction(tx)]
        assert names == ["Unknown Account", "Main Account"]

    def test_unbalanced_journal_rejected(self):
        tx = JournalTransaction(
            transaction_date=date(2024, 3, 15),
            reference="J-2",
            description="Broken",
            source_id="m-2",
            lines=[
                JournalLine(account_code="1001", debit=Decimal("10")),
                JournalLine(account_code="4001", credit=Decimal("9.99")),
            ],
        )
        with pytest.raises(ValidationError, match="does not balance"):
            post_transaction(tx)

    @pytest.mark.parametrize("credit, accepted", [
        ("100.00", False),
        ("100.001", True),
        ("100.01", True),
    ])
    def test_one_cent_difference_is_refused(self, credit, accepted):
        """Posting uses the same strict tolerance as is_balanced."""
        tx = JournalTransaction(
            transaction_date=date(2024, 3, 15),
            reference="J-3",
            description="Rounding",
            source_id="m-3",
            lines=[
                JournalLine(account_code="1001", debit=Decimal("100.01")),
                JournalLine(account_code="4001", credit=Decimal(credit)),
            ],
        )
        if accepted:
            assert is_balanced(build_trial_balance(post_transaction(tx)))
        else:
            with pytest.raises(ValidationError, match="does not balance"):
                post_transaction(tx)

    def test_posted_journals_balance(self, invoice):
        rows = build_trial_balance(post_transaction(invoice))
        assert is_balanced(rows)


# =============================================================================
# Balances and summary
# =============================================================================

def test_account_balance(invoice):
    entries = post_transaction(invoice)
    assert account_balance(entries, "1101") == Decimal("118000")
    assert account_balance(entries, "4001") == Decimal("-100000")
    assert account_balance(entries, "1001") == Decimal("0")
    assert account_balance(entries, "1101", as_of=date(2024, 3, 1)) == Decimal("0")


def test_financial_summary(invoice):
    salary = JournalTransaction(
        transaction_date=date(2024, 3, 31),
        reference="PAY-03",
        description="March payroll",
        source_id="pay-3",
        source_type="payroll",
        lines=[
            JournalLine(account_code="5001", debit=Decimal("40000")),
            JournalLine(account_code="1001", credit=Decimal("40000")),
        ],
    )
    rows = build_trial_balance(post_transaction(invoice) + post_transaction(salary))
    summary = financial_summary(rows)

    assert summary["revenue"] == Decimal("100000")
    assert summary["expenses"] == Decimal("40000")
    assert summary["profit"] == Decimal("60000")
    # 1101: +118,000, 1001: -40,000
    assert summary["assets"] == Decimal("78000")
    assert summary["liabilities"] == Decimal("18000")
    assert summary["equity"] == Decimal("60000")
