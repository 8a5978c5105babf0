"""Exceptions raised by the Office Nexus domain layer.

Shape errors (missing fields, wrong types) surface as pydantic's own
``ValidationError`` when a record is constructed. The classes here cover the
business rules checked by the calculations and the persistence boundary.
"""


class NexusError(Exception):
    """Base class for all domain errors."""
    pass


class ValidationError(NexusError, ValueError):
    """Input is well-formed but out of the accepted range.

    Examples: a non-positive principal, an unsupported lock period, or a
    transfer of more shares than the source holds.
    """
    pass


class InvalidStateError(NexusError):
    """Operation attempted from a state that forbids it.

    Examples: requesting early withdrawal on a lock that is not locked, or
    resolving a withdrawal request that was already resolved.
    """
    pass


class StaleRecordError(NexusError):
    """A save carried a revision older than the stored one."""

    def __init__(self, record_id: str, expected: int, actual: int):
        self.record_id = record_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Record {record_id} was saved at revision {expected} "
            f"but is stored at revision {actual}"
        )


class RecordNotFoundError(NexusError, KeyError):
    """Repository has no record with the requested id."""
    pass
