"""Pure calculations over domain records.

Every function takes record snapshots and returns new records; none of them
touch storage. Persist the results through nexus_domain.repository.
"""

from .money import (
    to_decimal,
    round_money,
    percent_of,
    format_currency,
    format_percentage,
)
from .accrual import (
    compute_accrued_interest,
    accrue_interest,
    project_returns,
)
from .lifecycle import (
    bonus_rate_for_period,
    unlock_date_for,
    lock_capital,
    check_maturity,
    run_maturity_sweep,
)
from .withdrawal import (
    calculate_penalty,
    request_withdrawal,
    resolve_withdrawal,
)
from .share_transfer import (
    transfer_shares,
    share_percentage,
    recalculate_share_percentages,
)
from .dividends import (
    dividend_pool,
    dividend_per_share,
    declare_dividend,
    confirm_dividend,
    calculate_distributions,
)
from .trial_balance import (
    BALANCE_TOLERANCE,
    build_trial_balance,
    is_balanced,
    post_transaction,
    account_balance,
    financial_summary,
)

__all__ = [
    "to_decimal",
    "round_money",
    "percent_of",
    "format_currency",
    "format_percentage",
    "compute_accrued_interest",
    "accrue_interest",
    "project_returns",
    "bonus_rate_for_period",
    "unlock_date_for",
    "lock_capital",
    "check_maturity",
    "run_maturity_sweep",
    "calculate_penalty",
    "request_withdrawal",
    "resolve_withdrawal",
    "transfer_shares",
    "share_percentage",
    "recalculate_share_percentages",
    "dividend_pool",
    "dividend_per_share",
    "declare_dividend",
    "confirm_dividend",
    "calculate_distributions",
    "BALANCE_TOLERANCE",
    "build_trial_balance",
    "is_balanced",
    "post_transaction",
    "account_balance",
    "financial_summary",
]
