"""Money and rate helpers.

All amounts are Decimal. Floats are converted through their string form so
that 0.1 stays 0.1.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from ..errors import ValidationError

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
HUNDRED = Decimal("100")

CURRENCY_SYMBOLS = {
    "RWF": "RWF",
    "USD": "$",
    "EUR": "€",
}


def to_decimal(value: Number) -> Decimal:
    """Coerce a number to Decimal.

    Raises:
        ValidationError: If ``value`` does not parse as a finite number
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
        except (InvalidOperation, TypeError) as exc:
            raise ValidationError(f"Not a number: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Not a finite number: {value!r}")
    return result


def round_money(amount: Number) -> Decimal:
    """Round to cents, half away from zero."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(amount: Number, rate_percent: Number) -> Decimal:
    """``rate_percent`` percent of ``amount`` (5 -> 5%)."""
    return to_decimal(amount) * to_decimal(rate_percent) / HUNDRED


def format_currency(amount: Number, currency: str = "RWF") -> str:
    """Display an amount with its currency.

    Shows up to two fraction digits and drops trailing zeros:
        format_currency(1000000)            -> "RWF 1,000,000"
        format_currency(Decimal("12.5"), "USD") -> "$12.5"
    """
    value = round_money(amount)
    sign = "-" if value < 0 else ""
    text = f"{abs(value):,.2f}".rstrip("0").rstrip(".")
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    if symbol == currency:
        return f"{sign}{currency} {text}"
    return f"{sign}{symbol}{text}"


def format_percentage(value: Number) -> str:
    """Two decimals and a percent sign: 8 -> "8.00%"."""
    return f"{to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)}%"
