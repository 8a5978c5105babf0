"""Shared fixtures for domain tests."""

import pytest
from datetime import date

from nexus_domain.calculations import lock_capital
from nexus_domain.schemas import Investor, ShareholderPosition


@pytest.fixture
def investor():
    return Investor(company_id="co-kigali", investor_id="p-aline", investor_name="Aline Uwase")


@pytest.fixture
def annual_lock(investor):
    """RWF 1,000,000 locked for 12 months at 8% base (+2% bonus) on 2024-01-01."""
    return lock_capital(
        investor,
        1_000_000,
        "RWF",
        12,
        base_rate=8,
        lock_date=date(2024, 1, 1),
    )


@pytest.fixture
def small_lock(investor):
    """RWF 500,000 locked for 6 months on 2024-01-01."""
    return lock_capital(investor, 500_000, "RWF", 6, base_rate=8, lock_date=date(2024, 1, 1))


@pytest.fixture
def founder():
    return ShareholderPosition(
        company_id="co-kigali",
        person_id="p-alice",
        shares_held=1000,
        share_percentage=10,
    )
