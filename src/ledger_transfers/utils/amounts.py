"""Exact conversion between display amounts (ether) and base units (wei).

All arithmetic is Decimal/int; binary floats are never accepted as input.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

BASE_UNIT_DECIMALS = 18
DISPLAY_QUANTUM = Decimal("0.0001")
MAX_BASE_UNITS = 2**256 - 1

# Enough digits for any uint256 value scaled by 10**18.
_PRECISION = 100


def parse_amount(amount: str | int | Decimal) -> Decimal:
    """Parse a user-supplied amount into a finite, non-negative Decimal.

    Raises:
        ValueError: If the value is a float, not numeric, not finite, or negative.
    """
    if isinstance(amount, bool) or isinstance(amount, float):
        raise ValueError("amount must be a decimal string, int or Decimal")
    if isinstance(amount, str):
        amount = amount.strip()
        if not amount:
            raise ValueError("amount is empty")
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"amount is not a decimal: {amount!r}") from e
    if not value.is_finite():
        raise ValueError("amount must be finite")
    if value < 0:
        raise ValueError("amount must be non-negative")
    return value


def to_base_units(amount: Decimal, decimals: int = BASE_UNIT_DECIMALS) -> int:
    """Scale a Decimal amount to integer base units without rounding.

    Raises:
        ValueError: If the amount has more fractional digits than the unit supports,
            or does not fit in a uint256.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        if amount > Decimal(MAX_BASE_UNITS).scaleb(-decimals):
            raise ValueError("amount exceeds the uint256 range")
        scaled = amount.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"amount has more than {decimals} decimal places")
        return int(scaled)


def from_base_units(raw: int, decimals: int = BASE_UNIT_DECIMALS) -> Decimal:
    """Convert integer base units back to an exact Decimal amount."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(raw).scaleb(-decimals)


def format_amount(amount: Decimal) -> str:
    """Format to exactly 4 decimal places, rounding half up at the 5th."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return str(amount.quantize(DISPLAY_QUANTUM, rounding=ROUND_HALF_UP))
