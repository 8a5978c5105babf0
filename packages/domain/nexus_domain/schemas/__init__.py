"""Office Nexus domain schemas.

This package contains all Pydantic models for the domain layer:
- Base types and conventions
- Capital policy configuration
- Locked capital and early withdrawal requests
- Shareholder positions
- Ledger entries, journals and trial balance rows
- Dividend declarations and distributions
- Report configuration

Usage:
    from nexus_domain.schemas import (
        CapitalLock, EarlyWithdrawalRequest, ShareholderPosition,
        LedgerEntry, TrialBalanceRow, ReportCFG
    )
"""

# Base types
from .base import (
    DomainModel,
    VersionedRecord,
    evolve,
    MoneyAmount,
    RatePercent,
    SharePercentage,
    ShareCount,
    Currency,
    LockStatus,
    WithdrawalStatus,
    SourceType,
    RecordId,
    AccountCode,
    SUPPORTED_CURRENCIES,
)

# Policy
from .policy import (
    CapitalPolicyCFG,
    DEFAULT_POLICY,
    DEFAULT_BONUS_TABLE,
)

# Capital
from .capital import (
    Investor,
    CapitalLock,
    EarlyWithdrawalRequest,
    RoiProjection,
    Compounding,
    ACCRUING_STATUSES,
)

# Shareholders
from .shareholders import (
    ShareholderPosition,
    ShareTransferResult,
    PercentageBasis,
)

# Ledger
from .ledger import (
    LedgerEntry,
    TrialBalanceRow,
    JournalLine,
    JournalTransaction,
    CHART_OF_ACCOUNTS,
)

# Dividends
from .dividends import (
    DividendDeclaration,
    DividendDistribution,
    DeclarationStatus,
)

# Report
from .report import ReportCFG

__all__ = [
    # Base types
    "DomainModel",
    "VersionedRecord",
    "evolve",
    "MoneyAmount",
    "RatePercent",
    "SharePercentage",
    "ShareCount",
    "Currency",
    "LockStatus",
    "WithdrawalStatus",
    "SourceType",
    "RecordId",
    "AccountCode",
    "SUPPORTED_CURRENCIES",
    # Policy
    "CapitalPolicyCFG",
    "DEFAULT_POLICY",
    "DEFAULT_BONUS_TABLE",
    # Capital
    "Investor",
    "CapitalLock",
    "EarlyWithdrawalRequest",
    "RoiProjection",
    "Compounding",
    "ACCRUING_STATUSES",
    # Shareholders
    "ShareholderPosition",
    "ShareTransferResult",
    "PercentageBasis",
    # Ledger
    "LedgerEntry",
    "TrialBalanceRow",
    "JournalLine",
    "JournalTransaction",
    "CHART_OF_ACCOUNTS",
    # Dividends
    "DividendDeclaration",
    "DividendDistribution",
    "DeclarationStatus",
    # Report
    "ReportCFG",
]
