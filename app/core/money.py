from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

D = Decimal

ZERO = D("0")
CENT = D("0.01")
_RATE_PLACES = D("0.1")


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round_cents(value: float | Decimal) -> Decimal:
    """Round a monetary amount to cents, ties away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def rate_percent(rate: Decimal) -> Decimal:
    return (rate * 100).quantize(_RATE_PLACES, rounding=ROUND_HALF_UP)


__all__ = ["D", "ZERO", "CENT", "to_decimal", "round_cents", "rate_percent"]
