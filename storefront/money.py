"""
Money Utilities - Safe Decimal operations for monetary values.

Prices travel as decimal strings ("15.00") and are only ever parsed to
Decimal, never float, so cart totals do not drift across many lines.
"""
import os
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Money = Union[str, int, float, Decimal, None]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

STORE_CURRENCY = os.environ.get("STORE_CURRENCY", "SAR").upper()

CURRENCY_SYMBOLS = {
    "SAR": "SAR",
    "KWD": "KWD",
    "AED": "AED",
    "USD": "$",
    "EUR": "€",
}


def to_decimal(value: Money) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None,
        unparseable or not finite
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            if isinstance(value, float):
                # Go through repr to avoid binary float expansion
                result = Decimal(str(value))
            elif isinstance(value, str):
                result = Decimal(value.strip())
            else:
                result = Decimal(value)
        except (InvalidOperation, ValueError, TypeError):
            return Decimal("0")

    if not result.is_finite():
        return Decimal("0")
    return result


def round_money(value: Money) -> Decimal:
    """Round monetary value to cents, half up."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def to_price_string(value: Money) -> str:
    """Normalize a price to the "15.00" string form used on the wire."""
    return str(round_money(value))


def format_money(value: Money, currency: str = STORE_CURRENCY, symbol: str | None = None) -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (SAR, KWD, USD, ...)
        symbol: Override for the symbol (e.g. a localized "ريال")

    Returns:
        Formatted string with currency symbol
    """
    if symbol is None:
        symbol = CURRENCY_SYMBOLS.get(currency, currency)

    formatted = f"{round_money(value):,.2f}"

    if currency in ("USD", "EUR"):
        return f"{symbol}{formatted}"
    return f"{formatted} {symbol}"


def to_float(value: Money) -> float:
    """
    Convert Decimal to float for JSON responses.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def multiply(value: Money, factor: Money) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)
