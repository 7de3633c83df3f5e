from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Sequence

from app.core.contribution import ContributionBracket, contribution_ceiling
from app.core.errors import InvalidBracketTable
from app.core.income_tax import (
    DEPENDENT_DEDUCTION,
    INCOME_TAX_TABLE,
    SIMPLIFIED_DEDUCTION,
    IncomeTaxBracket,
    ReductionRule,
)
from app.core.money import CENT, rate_percent

D = Decimal


def _check_ascending(name: str, limits: Sequence[D | None]) -> None:
    if not limits:
        raise InvalidBracketTable(f"{name}: table is empty")
    previous: D | None = None
    for index, limit in enumerate(limits):
        if limit is None:
            if index != len(limits) - 1:
                raise InvalidBracketTable(f"{name}: only the last tier may be unbounded")
            continue
        if previous is not None and limit <= previous:
            raise InvalidBracketTable(
                f"{name}: limits must be strictly increasing ({limit} after {previous})"
            )
        previous = limit


@dataclass(frozen=True)
class Regime:
    name: str
    label: str
    contribution_table: tuple[ContributionBracket, ...]
    income_tax_table: tuple[IncomeTaxBracket, ...] = INCOME_TAX_TABLE
    reduction: ReductionRule | None = None
    dependent_deduction: D = DEPENDENT_DEDUCTION
    simplified_deduction: D = SIMPLIFIED_DEDUCTION

    def __post_init__(self) -> None:
        contribution_limits = [b.limit for b in self.contribution_table]
        _check_ascending(f"{self.name} contribution table", contribution_limits)
        if None in contribution_limits:
            raise InvalidBracketTable(f"{self.name} contribution table needs a finite ceiling")
        _check_ascending(
            f"{self.name} income tax table", [b.limit for b in self.income_tax_table]
        )

    @property
    def applies_reduction(self) -> bool:
        return self.reduction is not None

    @property
    def ceiling(self) -> D:
        return contribution_ceiling(self.contribution_table)


def describe_regime(regime: Regime) -> dict[str, Any]:
    contribution_tiers = []
    lower = D("0")
    for bracket in regime.contribution_table:
        contribution_tiers.append(
            {"lower": lower, "upper": bracket.limit, "rate_percent": rate_percent(bracket.rate)}
        )
        lower = bracket.limit + CENT
    income_tax_tiers = []
    lower = D("0")
    for bracket in regime.income_tax_table:
        income_tax_tiers.append(
            {
                "lower": lower,
                "upper": bracket.limit,
                "rate_percent": rate_percent(bracket.rate),
                "deduction": bracket.deduction,
            }
        )
        if bracket.limit is not None:
            lower = bracket.limit + CENT
    reduction = None
    if regime.reduction is not None:
        rule = regime.reduction
        reduction = {
            "exemption_limit": rule.exemption_limit,
            "phase_out_limit": rule.phase_out_limit,
            "intercept": rule.intercept,
            "slope": rule.slope,
            "legal_reference": rule.legal_reference,
        }
    return {
        "name": regime.name,
        "label": regime.label,
        "contribution": {"ceiling": regime.ceiling, "tiers": contribution_tiers},
        "income_tax": {
            "tiers": income_tax_tiers,
            "dependent_deduction": regime.dependent_deduction,
            "simplified_deduction": regime.simplified_deduction,
        },
        "reduction": reduction,
    }
