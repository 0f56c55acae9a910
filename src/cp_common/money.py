"""Decimal money utilities for COP amounts.

All prices, fees and balances are Decimal. No float.
Commission ceilings round up to the whole peso so the platform never
under-collects.
"""

from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

ZERO = Decimal(0)
_WHOLE = Decimal(1)
_CENTS = Decimal("0.01")


def to_decimal(value: Decimal | int | str) -> Decimal:
    """Coerce int/str/Decimal into Decimal. Floats are rejected."""
    if isinstance(value, float):
        raise TypeError("float is not allowed for money values")
    return value if isinstance(value, Decimal) else Decimal(value)


def percent_of(amount: Decimal, percentage: Decimal) -> Decimal:
    """amount x percentage / 100, exact (no rounding)."""
    return amount * percentage / 100


def ceil_whole(amount: Decimal) -> Decimal:
    """Ceiling to the whole currency unit: 4500.01 -> 4501, 4500 -> 4500."""
    return amount.to_integral_value(rounding=ROUND_CEILING)


def quantize_cents(amount: Decimal) -> Decimal:
    """Normalize to two decimal places for storage in NUMERIC(14, 2)."""
    return amount.quantize(_CENTS)


def floor_cents(amount: Decimal) -> Decimal:
    """Round down to the cent: 416.625 -> 416.62."""
    return amount.quantize(_CENTS, rounding=ROUND_FLOOR)


def money_to_display(amount: Decimal) -> str:
    """Display string: 6000 -> '$6,000', -1500.5 -> '-$1,500.50'."""
    sign = "-" if amount < 0 else ""
    value = abs(amount)
    if value == value.to_integral_value():
        return f"{sign}${int(value):,}"
    return f"{sign}${quantize_cents(value):,}"
