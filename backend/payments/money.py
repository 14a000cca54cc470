"""
Monetary precision helpers.

Every ledger computation runs on integers in minor units (cents). Decimals are
quantized BEFORE converting to minor units, and every rounding step uses
ROUND_HALF_UP at the currency's precision.

Key Principles:
1. NEVER use float for money
2. Always quantize Decimals BEFORE converting to minor units
3. Round half up (10.125 -> 10.13) for every monetary computation
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Optional, Union

# Set high precision for intermediate calculations
getcontext().prec = 28

# Currency minor unit exponents (how many decimal places)
CURRENCY_EXPONENT = {
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
    "CAD": 2,
    "AUD": 2,
    "JPY": 0,
    "KRW": 0,
    "KWD": 3,
    "BHD": 3,
}

Numeric = Union[Decimal, str, int, float]

# Largest value a DecimalField(max_digits=10, decimal_places=2) column holds
MAX_AMOUNT = Decimal("99999999.99")


def currency_exponent(currency: str) -> int:
    """
    Get the number of decimal places for a currency.

    Examples:
        >>> currency_exponent("USD")
        2
        >>> currency_exponent("JPY")
        0
    """
    return CURRENCY_EXPONENT.get((currency or "USD").upper(), 2)


def quantize_decimal(currency: str) -> Decimal:
    """Smallest unit of a currency as a Decimal (0.01 for USD)."""
    return Decimal(10) ** -currency_exponent(currency)


def quantize(currency: str, amount: Numeric) -> Decimal:
    """
    Round to currency decimals using ROUND_HALF_UP.

    Examples:
        >>> quantize("USD", "10.125")
        Decimal('10.13')
        >>> quantize("USD", "10.124")
        Decimal('10.12')
    """
    if isinstance(amount, float):
        # Convert float to string first to avoid binary representation noise
        amount = str(amount)

    amount_decimal = Decimal(amount)
    return amount_decimal.quantize(quantize_decimal(currency), rounding=ROUND_HALF_UP)


def to_minor(currency: str, amount: Numeric) -> int:
    """
    Convert to minor units (e.g., cents) after quantization.

    Examples:
        >>> to_minor("USD", "10.125")
        1013
        >>> to_minor("JPY", "1234.5")
        1235
    """
    quantized = quantize(currency, amount)
    exponent = currency_exponent(currency)
    return int((quantized * (10 ** exponent)).to_integral_value())


def from_minor(currency: str, minor: int) -> Decimal:
    """
    Convert from minor units to a Decimal at currency precision.

    Examples:
        >>> from_minor("USD", 1013)
        Decimal('10.13')
    """
    exponent = currency_exponent(currency)
    return (Decimal(minor) / (10 ** exponent)).quantize(quantize_decimal(currency))


def multiply_minor(minor: int, factor: Numeric) -> int:
    """
    Multiply an amount in minor units by a Decimal factor and round half up
    back to a whole minor unit.

    Examples:
        >>> multiply_minor(10000, "0.08")
        800
        >>> multiply_minor(125, "0.5")
        63
    """
    if isinstance(factor, float):
        factor = str(factor)
    product = Decimal(minor) * Decimal(factor)
    return int(product.to_integral_value(rounding=ROUND_HALF_UP))


def percentage_of_minor(minor: int, percentage: Numeric) -> int:
    """
    Percentage (e.g. 15 for 15%) of an amount in minor units.

    Examples:
        >>> percentage_of_minor(10000, "15")
        1500
    """
    return multiply_minor(minor, Decimal(str(percentage)) / Decimal("100"))


def parse_amount(value, currency: str = "USD") -> Optional[Decimal]:
    """
    Parse an untrusted monetary value (webhook JSON, form input) into a
    quantized Decimal.

    Returns None for missing, empty, non-numeric or non-finite values, and for
    amounts too large for a money column (10 digits, 2 of them decimal).

    Examples:
        >>> parse_amount("4.5")
        Decimal('4.50')
        >>> parse_amount(None) is None
        True
        >>> parse_amount("NaN") is None
        True
        >>> parse_amount("1e30") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = Decimal(str(value))
        if not amount.is_finite():
            return None
        amount = quantize(currency, amount)
    except (InvalidOperation, ValueError):
        return None
    if abs(amount) > MAX_AMOUNT:
        return None
    return amount
