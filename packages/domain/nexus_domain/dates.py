"""Calendar helpers shared by schemas and calculations."""

from datetime import date
from dateutil.relativedelta import relativedelta


def add_months(start: date, months: int) -> date:
    """Shift ``start`` by whole calendar months.

    Days past the end of the target month clamp to its last day, so
    2024-01-31 plus one month is 2024-02-29.
    """
    return start + relativedelta(months=months)


def days_between(start: date, end: date) -> int:
    """Signed number of days from ``start`` to ``end``."""
    return (end - start).days
