"""Tests for dividend declaration and distribution."""

import pytest
from decimal import Decimal
from datetime import date

import pydantic

from nexus_domain import InvalidStateError, ValidationError
from nexus_domain.calculations import (
    calculate_distributions,
    confirm_dividend,
    declare_dividend,
    dividend_per_share,
    dividend_pool,
)
from nexus_domain.schemas import DividendDistribution, ShareholderPosition


def holder(person_id, shares, company_id="co-kigali"):
    return ShareholderPosition(
        company_id=company_id,
        person_id=person_id,
        shares_held=shares,
        share_percentage=0,
    )


@pytest.fixture
def declaration():
    """30% of a 10,000,000 RWF profit."""
    return declare_dividend(
        "co-kigali",
        10_000_000,
        30,
        declaration_date=date(2024, 12, 31),
        approved_by="Board",
    )


@pytest.fixture
def holders():
    return [holder("p-alice", 1000), holder("p-bob", 500), holder("p-chantal", 1500)]


# =============================================================================
# Declaration
# =============================================================================

class TestDeclareDividend:

    def test_pool_is_share_of_profit(self, declaration):
        assert declaration.dividend_pool == Decimal("3000000.00")
        assert declaration.status == "draft"
        assert declaration.declaration_date == date(2024, 12, 31)

    def test_pool_rounded_to_cents(self):
        assert dividend_pool("1000.005", 100) == Decimal("1000.01")
        assert dividend_pool(333, "12.5") == Decimal("41.63")

    @pytest.mark.parametrize("profit, percentage, match", [
        (0, 30, "Profit amount must be positive"),
        (-5, 30, "Profit amount must be positive"),
        (1000, 0, "between 0 and 100"),
        (1000, "100.5", "between 0 and 100"),
        ("lots", 30, "Not a number"),
    ])
    def test_invalid_inputs_rejected(self, profit, percentage, match):
        with pytest.raises(ValidationError, match=match):
            declare_dividend("co-kigali", profit, percentage)

    def test_full_payout_allowed(self):
        declaration = declare_dividend("co-kigali", 1000, 100)
        assert declaration.dividend_pool == declaration.profit_amount

    def test_confirm(self, declaration):
        confirmed = confirm_dividend(declaration)
        assert confirmed.status == "confirmed"
        assert confirmed.id == declaration.id
        assert declaration.status == "draft"

    def test_confirm_twice_rejected(self, declaration):
        with pytest.raises(InvalidStateError, match="not a draft"):
            confirm_dividend(confirm_dividend(declaration))


# =============================================================================
# Distributions
# =============================================================================

class TestCalculateDistributions:

    def test_pro_rata_split(self, declaration, holders):
        distributions = calculate_distributions(declaration, holders)
        assert [d.gross_amount for d in distributions] == [
            Decimal("1000000"),
            Decimal("500000"),
            Decimal("1500000"),
        ]
        assert [d.person_id for d in distributions] == ["p-alice", "p-bob", "p-chantal"]
        assert all(d.declaration_id == declaration.id for d in distributions)
        assert all(not d.is_paid and d.paid_on is None for d in distributions)

    def test_gross_rounded_to_whole_units(self):
        """1000 over three single-share holders is 333.33 each, paid as 333."""
        declaration = declare_dividend("co-kigali", 1000, 100)
        distributions = calculate_distributions(
            declaration,
            [holder("p-a", 1), holder("p-b", 1), holder("p-c", 1)],
        )
        assert [d.gross_amount for d in distributions] == [Decimal("333")] * 3
        assert sum(d.gross_amount for d in distributions) < declaration.dividend_pool

    def test_half_unit_rounds_up(self):
        declaration = declare_dividend("co-kigali", 5, 100)
        distributions = calculate_distributions(
            declaration, [holder("p-a", 1), holder("p-b", 1)]
        )
        assert [d.gross_amount for d in distributions] == [Decimal("3"), Decimal("3")]

    def test_zero_share_holders_skipped(self, declaration, holders):
        distributions = calculate_distributions(declaration, holders + [holder("p-dan", 0)])
        assert len(distributions) == 3
        assert "p-dan" not in [d.person_id for d in distributions]

    @pytest.mark.parametrize("positions", [
        [],
        [holder("p-alice", 0), holder("p-bob", 0)],
    ])
    def test_no_holders_rejected(self, declaration, positions):
        with pytest.raises(ValidationError, match="no shareholders holding shares"):
            calculate_distributions(declaration, positions)

    def test_other_company_rejected(self, declaration, holders):
        with pytest.raises(ValidationError, match="do not belong to company co-kigali"):
            calculate_distributions(declaration, holders + [holder("p-eve", 10, "co-musanze")])

    def test_tax_split(self, declaration, holders):
        alice = calculate_distributions(declaration, holders, tax_rate=15)[0]
        assert alice.gross_amount == Decimal("1000000")
        assert alice.tax_amount == Decimal("150000.00")
        assert alice.net_amount == Decimal("850000.00")
        assert alice.tax_rate == Decimal("15")

    def test_tax_on_rounded_gross(self):
        declaration = declare_dividend("co-kigali", 1000, 100)
        first = calculate_distributions(
            declaration,
            [holder("p-a", 1), holder("p-b", 1), holder("p-c", 1)],
            tax_rate=15,
        )[0]
        assert first.tax_amount == Decimal("49.95")
        assert first.net_amount == Decimal("283.05")

    def test_no_tax_by_default(self, declaration, holders):
        for d in calculate_distributions(declaration, holders):
            assert d.tax_amount == Decimal("0")
            assert d.net_amount == d.gross_amount

    @pytest.mark.parametrize("rate", [-1, 101])
    def test_tax_rate_bounds(self, declaration, holders, rate):
        with pytest.raises(ValidationError, match="Tax rate must be between 0 and 100"):
            calculate_distributions(declaration, holders, tax_rate=rate)


def test_dividend_per_share_without_shares():
    assert dividend_per_share(Decimal("1000"), 0) == Decimal("0")
    assert dividend_per_share(Decimal("1000"), 4) == Decimal("250")


def test_distribution_net_must_match():
    with pytest.raises(pydantic.ValidationError, match="net_amount must equal"):
        DividendDistribution(
            declaration_id="div-1",
            position_id="pos-1",
            person_id="p-alice",
            shares_held_at_time=10,
            gross_amount=Decimal("100"),
            tax_amount=Decimal("15"),
            net_amount=Decimal("90"),
        )
