"""
Currency helpers for the table ledger.

All amounts are stored as ``Decimal`` values quantized to the cent, so pot
arithmetic is exact and comparisons need no floating point tolerance.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Largest amount a single bet, ante or pot may hold
MAX_AMOUNT = Decimal("999999999999.99")

AmountLike = Union[Decimal, int, float, str]


def round2(value: AmountLike) -> Decimal:
    """
    Round a value to the minor currency unit.

    Args:
        value: Amount to round

    Returns:
        The amount as a Decimal with exactly two decimal places

    Raises:
        ValueError: If the value is not a finite number or is larger than
            ``MAX_AMOUNT`` in magnitude
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a currency amount: {value!r}")

    if isinstance(value, float):
        # str() gives the shortest repr, so 0.1 becomes "0.1" and not the binary expansion
        value = str(value)

    try:
        amount = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Not a currency amount: {value!r}") from exc

    if not amount.is_finite():
        raise ValueError(f"Not a finite currency amount: {value!r}")
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"Amount out of range: {value!r}")

    return amount


def is_zero(value: Decimal) -> bool:
    """Return True if the amount is zero once rounded to the cent."""
    return round2(value) == ZERO


def exceeds(amount: Decimal, limit: Decimal) -> bool:
    """Return True if ``amount`` is strictly larger than ``limit`` at cent precision."""
    return round2(amount) - round2(limit) > ZERO


def format_amount(value: Decimal, symbol: str = "€") -> str:
    """Format an amount for display, e.g. ``€0.60``."""
    return f"{symbol}{round2(value):.2f}"
