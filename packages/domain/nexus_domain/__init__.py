"""Office Nexus Domain Engine - capital, shareholder and ledger calculations.

This package provides the computation core behind the Office Nexus
bookkeeping dashboard:
- Locked capital: ROI accrual, maturity, early withdrawal penalties
- Shareholder positions, share transfers and dividends
- General ledger postings and the trial balance

The domain layer is designed to be:
- Framework-agnostic (no web or ORM dependencies)
- Pure (calculations take records and return new records)
- Testable (Pydantic validation at every record boundary)
"""

from .schemas import *  # noqa: F403, F401
from .errors import (  # noqa: F401
    NexusError,
    ValidationError,
    InvalidStateError,
    StaleRecordError,
    RecordNotFoundError,
)

__version__ = "0.1.0"
