from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from app.core.money import ZERO, to_decimal

D = Decimal


@dataclass(frozen=True)
class ContributionBracket:
    limit: D
    rate: D


def contribution_ceiling(table: Sequence[ContributionBracket]) -> D:
    return table[-1].limit


def compute_contribution(
    gross_salary: float | D,
    liable: bool,
    table: Sequence[ContributionBracket],
) -> D:
    """Progressive INSS-style contribution, bracket slice by bracket slice.

    The salary is capped at the table ceiling and every bracket only charges
    the slice between the previous limit and its own. The sum is returned
    unrounded.
    """
    if not liable:
        return ZERO
    capped = min(to_decimal(gross_salary), contribution_ceiling(table))
    total = ZERO
    previous = ZERO
    for bracket in table:
        span = min(capped, bracket.limit) - previous
        if span > 0:
            total += span * bracket.rate
        if capped <= bracket.limit:
            break
        previous = bracket.limit
    return total


__all__ = ["ContributionBracket", "contribution_ceiling", "compute_contribution"]
