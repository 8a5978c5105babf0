"""Tests for the early withdrawal workflow.

Covers:
- Penalty calculation
- Requesting a withdrawal (state checks, penalty recorded on both records)
- Approving and rejecting, including double resolution
"""

import pytest
from decimal import Decimal
from datetime import date

from nexus_domain import InvalidStateError, ValidationError
from nexus_domain.calculations import (
    accrue_interest,
    calculate_penalty,
    check_maturity,
    request_withdrawal,
    resolve_withdrawal,
)


def test_calculate_penalty():
    assert calculate_penalty(Decimal("500000"), Decimal("5")) == Decimal("25000.00")


def test_calculate_penalty_rounds_to_cents():
    assert calculate_penalty(Decimal("333.33"), Decimal("5")) == Decimal("16.67")


class TestRequestWithdrawal:

    def test_request_records_penalty(self, small_lock):
        request, lock = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))

        assert request.status == "pending"
        assert request.penalty_amount == Decimal("25000")
        assert request.locked_capital_id == small_lock.id
        assert request.company_id == small_lock.company_id
        assert request.request_date == date(2024, 3, 1)

        assert lock.status == "early_withdrawal_requested"
        assert lock.penalty_amount == Decimal("25000")
        assert small_lock.status == "locked"

    def test_reason_is_trimmed(self, small_lock):
        request, _ = request_withdrawal(small_lock, "  School fees  ", date(2024, 3, 1))
        assert request.reason == "School fees"

    @pytest.mark.parametrize("reason", ["", "   "])
    def test_reason_required(self, small_lock, reason):
        with pytest.raises(ValidationError, match="reason is required"):
            request_withdrawal(small_lock, reason, date(2024, 3, 1))

    def test_second_request_rejected(self, small_lock):
        _, lock = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))
        with pytest.raises(InvalidStateError, match="is not locked"):
            request_withdrawal(lock, "Again", date(2024, 3, 2))

    def test_unlocked_lock_rejected(self, small_lock):
        matured = check_maturity(small_lock, date(2024, 8, 1))
        with pytest.raises(InvalidStateError):
            request_withdrawal(matured, "Too late", date(2024, 8, 2))

    def test_accrual_continues_while_pending(self, small_lock):
        _, lock = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))
        assert accrue_interest(lock, date(2024, 4, 1)).accrued_interest > 0


class TestResolveWithdrawal:

    def test_approve_releases_lock(self, small_lock):
        request, lock = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))
        resolved, released = resolve_withdrawal(
            request, lock, approve=True, resolved_on=date(2024, 3, 31), reviewed_by="cfo"
        )

        assert resolved.status == "approved"
        assert resolved.reviewed_on == date(2024, 3, 31)
        assert resolved.reviewed_by == "cfo"
        assert released.status == "unlocked"
        assert released.penalty_amount == Decimal("25000")
        # 500,000 x 9% x 90 / 360
        assert released.accrued_interest == Decimal("11250.00")

    def test_approved_lock_stops_accruing(self, small_lock):
        request, lock = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))
        _, released = resolve_withdrawal(request, lock, True, resolved_on=date(2024, 3, 31))
        assert accrue_interest(released, date(2024, 6, 1)) == released

    def test_reject_restores_lock(self, small_lock):
        request, lock = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))
        resolved, restored = resolve_withdrawal(
            request, lock, approve=False, resolved_on=date(2024, 3, 5), review_notes="Declined"
        )

        assert resolved.status == "rejected"
        assert resolved.review_notes == "Declined"
        assert restored.status == "locked"
        assert restored.penalty_amount == Decimal("0")

    def test_rejected_lock_can_request_again(self, small_lock):
        request, lock = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))
        _, restored = resolve_withdrawal(request, lock, False, resolved_on=date(2024, 3, 5))
        second, _ = request_withdrawal(restored, "Medical", date(2024, 4, 1))
        assert second.status == "pending"

    def test_double_resolution_rejected(self, small_lock):
        request, lock = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))
        resolved, released = resolve_withdrawal(request, lock, True, resolved_on=date(2024, 3, 5))
        with pytest.raises(InvalidStateError, match="already processed"):
            resolve_withdrawal(resolved, released, False, resolved_on=date(2024, 3, 6))

    def test_request_for_other_lock_rejected(self, small_lock, annual_lock):
        request, _ = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))
        _, other = request_withdrawal(annual_lock, "Other", date(2024, 3, 1))
        with pytest.raises(InvalidStateError, match="belongs to lock"):
            resolve_withdrawal(request, other, True, resolved_on=date(2024, 3, 5))

    def test_lock_not_awaiting_decision_rejected(self, small_lock):
        request, _ = request_withdrawal(small_lock, "School fees", date(2024, 3, 1))
        with pytest.raises(InvalidStateError, match="no withdrawal awaiting"):
            resolve_withdrawal(request, small_lock, True, resolved_on=date(2024, 3, 5))
