"""Tests for the in-memory repository and optimistic concurrency."""

import pytest
from datetime import date

from nexus_domain import RecordNotFoundError, StaleRecordError
from nexus_domain.calculations import request_withdrawal, transfer_shares
from nexus_domain.repository import InMemoryRepository
from nexus_domain.schemas import CapitalLock, ShareholderPosition


@pytest.fixture
def locks():
    return InMemoryRepository(CapitalLock)


class TestSaveAndLoad:

    def test_new_record_saved_at_revision_one(self, locks, annual_lock):
        stored = locks.save(annual_lock)
        assert stored.revision == 1
        assert annual_lock.id in locks
        assert len(locks) == 1

    def test_get_returns_copy(self, locks, annual_lock):
        locks.save(annual_lock)
        loaded = locks.get(annual_lock.id)
        loaded.notes = "edited"
        assert locks.get(annual_lock.id).notes is None

    def test_get_missing(self, locks):
        with pytest.raises(RecordNotFoundError, match="CapitalLock missing not found"):
            locks.get("missing")

    def test_missing_is_key_error(self, locks):
        with pytest.raises(KeyError):
            locks.get("missing")

    def test_wrong_type_rejected(self, locks, founder):
        with pytest.raises(TypeError, match="Expected CapitalLock"):
            locks.save(founder)

    def test_list_with_predicate(self, locks, annual_lock, small_lock):
        locks.save(annual_lock)
        locks.save(small_lock)
        assert [r.id for r in locks.list()] == [annual_lock.id, small_lock.id]
        short = locks.list(lambda r: r.lock_period_months < 12)
        assert [r.id for r in short] == [small_lock.id]


class TestOptimisticConcurrency:

    def test_load_modify_save(self, locks, annual_lock):
        locks.save(annual_lock)
        loaded = locks.get(annual_lock.id)
        _, requested = request_withdrawal(loaded, "School fees", date(2024, 3, 1))

        stored = locks.save(requested)
        assert stored.revision == 2
        assert locks.get(annual_lock.id).status == "early_withdrawal_requested"

    def test_stale_write_rejected(self, locks, annual_lock, caplog):
        locks.save(annual_lock)
        first = locks.get(annual_lock.id)
        second = locks.get(annual_lock.id)

        _, requested = request_withdrawal(first, "School fees", date(2024, 3, 1))
        locks.save(requested)

        with pytest.raises(StaleRecordError) as excinfo:
            locks.save(second)
        assert excinfo.value.expected == 1
        assert excinfo.value.actual == 2
        assert "stale write" in caplog.text

    def test_saving_new_record_twice_rejected(self, locks, annual_lock):
        locks.save(annual_lock)
        with pytest.raises(StaleRecordError):
            locks.save(annual_lock)

    def test_transfer_saves_both_sides(self, founder):
        positions = InMemoryRepository(ShareholderPosition)
        seller = positions.save(founder)

        result = transfer_shares(seller, None, 100, to_person_id="p-carol")
        positions.save(result.from_position)
        positions.save(result.to_position)

        assert len(positions) == 2
        assert positions.get(founder.id).shares_held == 900
        assert positions.get(founder.id).revision == 2
