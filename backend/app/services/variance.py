"""Period-over-period percentage change."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .sectors import ZERO, to_decimal

INFINITE_IMPROVEMENT = Decimal("100")
_CENT = Decimal("0.01")


@dataclass(frozen=True)
class VarianceResult:
    current: Decimal
    previous: Decimal
    percentage: Decimal


def compute_variance(
    current: Decimal | float | int,
    previous: Decimal | float | int,
    allow_negative: bool = False,
) -> Decimal:
    """Return the percentage change from ``previous`` to ``current``.

    Sectors whose totals can be negative divide by ``|previous|`` so that an
    improvement from -100 to -50 reads as +50%. Growth from zero is reported
    as 100 and no movement from zero as 0.
    """

    current_value = to_decimal(current)
    previous_value = to_decimal(previous)

    if previous_value != ZERO:
        divisor = abs(previous_value) if allow_negative else previous_value
        percentage = (current_value - previous_value) / divisor * Decimal("100")
    elif current_value > ZERO:
        percentage = INFINITE_IMPROVEMENT
    else:
        percentage = ZERO

    return percentage.quantize(_CENT, rounding=ROUND_HALF_UP)


def build_variance(
    current: Decimal | float | int,
    previous: Decimal | float | int,
    allow_negative: bool = False,
) -> VarianceResult:
    return VarianceResult(
        current=to_decimal(current),
        previous=to_decimal(previous),
        percentage=compute_variance(current, previous, allow_negative),
    )
