"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal, None]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "USD": "$",
    "EUR": "€",
}

# Currencies written with "." for thousands and "," for decimals
COMMA_DECIMAL_CURRENCIES = {"BRL", "EUR"}


def to_decimal(value: Number) -> Decimal:
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
            # Go through str so 179.9 stays 179.9 and not 179.900000000000005684...
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at serialization boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def round_money(value: Number) -> Decimal:
    """Round monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def format_money(value: Number, currency: str = "BRL") -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (BRL, USD, EUR)

    Returns:
        Formatted string, e.g. "R$ 1.234,56" or "$1,234.56"
    """
    currency = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    formatted = f"{round_money(value):,.2f}"

    if currency in COMMA_DECIMAL_CURRENCIES:
        formatted = formatted.replace(",", "_").replace(".", ",").replace("_", ".")
        return f"{symbol} {formatted}"

    return f"{symbol}{formatted}"
