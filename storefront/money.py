"""
Money Utilities - Safe Decimal operations for prices.

Catalog prices arrive as JSON floats; they are converted through their
string form so that 109.95 stays 109.95 when summed.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOL = "$"

Number = Union[str, int, float, Decimal]


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number) -> Decimal:
    """Round a monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def to_float(value: Number) -> float:
    """Convert to float for JSON serialization."""
    return float(round_money(value))


def format_money(value: Number) -> str:
    """
    Format a dollar amount.

    Whole amounts are shown without decimals ("$30"), others with two
    ("$109.95"), the way the total bar shows them.
    """
    amount = round_money(value)

    if amount == amount.to_integral_value():
        formatted = f"{int(amount):,}"
    else:
        formatted = f"{amount:,.2f}"

    return f"{CURRENCY_SYMBOL}{formatted}"
