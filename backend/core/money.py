"""Fixed-point money helpers. Amounts are Decimals with two fractional digits."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

MoneyLike = Union[Decimal, str, int, float]


def to_money(value: MoneyLike) -> Decimal:
    """Convert value to a Decimal quantized to cents.

    Floats go through ``str`` so ``0.1`` becomes ``0.10`` rather than its
    binary expansion. Raises ValueError for anything that is not a number.
    """
    if isinstance(value, Decimal):
        dec = value
    else:
        try:
            dec = Decimal(str(value).strip())
        except (InvalidOperation, AttributeError) as e:
            raise ValueError(f"Invalid amount: {value!r}") from e
    if not dec.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return dec.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: MoneyLike) -> str:
    """Render an amount as a decimal string, e.g. ``"100.00"``."""
    return f"{to_money(value):.2f}"
