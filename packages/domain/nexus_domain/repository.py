"""Persistence boundary for domain records.

Calculations never touch storage. Callers load records through a
Repository, run a calculation, and save what comes back. Saves are guarded
by optimistic concurrency: a record may only be written back at the
revision it was loaded at.

Example:
    locks = InMemoryRepository(CapitalLock)
    locks.save(lock_capital(investor, 500_000, "RWF", 12))

    lock = locks.get(lock_id)
    request, lock = request_withdrawal(lock, "School fees")
    locks.save(lock)        # revision 1 -> 2
    locks.save(lock)        # StaleRecordError: stored copy is now at 2
"""

import logging
from typing import Callable, Dict, Generic, List, Optional, Protocol, Type, TypeVar

from .errors import RecordNotFoundError, StaleRecordError
from .schemas import VersionedRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=VersionedRecord)


class Repository(Protocol[RecordT]):
    """Load/save interface the host's storage layer implements."""

    def get(self, record_id: str) -> RecordT:
        ...

    def save(self, record: RecordT) -> RecordT:
        ...

    def list(self, predicate: Optional[Callable[[RecordT], bool]] = None) -> List[RecordT]:
        ...


class InMemoryRepository(Generic[RecordT]):
    """Dict-backed repository keyed by record id.

    Stored records are copies, so mutating a record after saving (or after
    loading) never changes what the repository holds.
    """

    def __init__(self, record_type: Type[RecordT]):
        self.record_type = record_type
        self._records: Dict[str, RecordT] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._records

    def get(self, record_id: str) -> RecordT:
        """Load a record by id.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        if record_id not in self._records:
            raise RecordNotFoundError(
                f"{self.record_type.__name__} {record_id} not found"
            )
        return self._records[record_id].model_copy(deep=True)

    def save(self, record: RecordT) -> RecordT:
        """Store a record and bump its revision.

        New records must come in at revision 0. Existing records must carry
        the revision currently stored.

        Returns:
            The stored copy, at its new revision

        Raises:
            StaleRecordError: If the record's revision does not match storage
        """
        if not isinstance(record, self.record_type):
            raise TypeError(
                f"Expected {self.record_type.__name__}, got {type(record).__name__}"
            )

        current = self._records.get(record.id)
        stored_revision = current.revision if current is not None else 0
        if record.revision != stored_revision:
            logger.warning(
                "Rejected stale write to %s %s (revision %d, stored %d)",
                self.record_type.__name__, record.id, record.revision, stored_revision,
            )
            raise StaleRecordError(record.id, record.revision, stored_revision)

        stored = record.model_copy(update={"revision": stored_revision + 1}, deep=True)
        self._records[record.id] = stored
        return stored.model_copy(deep=True)

    def list(self, predicate: Optional[Callable[[RecordT], bool]] = None) -> List[RecordT]:
        """All records (optionally filtered), in insertion order."""
        return [
            r.model_copy(deep=True)
            for r in self._records.values()
            if predicate is None or predicate(r)
        ]
