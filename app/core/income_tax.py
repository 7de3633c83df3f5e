from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Literal, Sequence

from app.core.money import ZERO, rate_percent, round_cents, to_decimal

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from app.core.regimes.base import Regime

D = Decimal

DeductionMethod = Literal["dependents", "simplified"]

DEPENDENT_DEDUCTION = D("189.59")
SIMPLIFIED_DEDUCTION = D("607.20")


@dataclass(frozen=True)
class IncomeTaxBracket:
    limit: D | None
    rate: D
    deduction: D


# Monthly IRRF table, shared by both regimes.
INCOME_TAX_TABLE = (
    IncomeTaxBracket(D("2428.80"), D("0"),     D("0")),
    IncomeTaxBracket(D("2826.65"), D("0.075"), D("182.16")),
    IncomeTaxBracket(D("3751.05"), D("0.15"),  D("394.16")),
    IncomeTaxBracket(D("4664.68"), D("0.225"), D("675.49")),
    IncomeTaxBracket(None,         D("0.275"), D("908.73")),
)


@dataclass(frozen=True)
class ReductionRule:
    exemption_limit: D
    phase_out_limit: D
    intercept: D
    slope: D
    legal_reference: str = ""


@dataclass(frozen=True)
class IncomeTaxResult:
    value: D
    rate: D
    reduction: D
    base: D
    deduction_method: DeductionMethod
    theoretical: D


def select_taxable_base(
    gross_salary: float | D,
    contribution: float | D,
    dependents: int,
    dependent_deduction: D = DEPENDENT_DEDUCTION,
    simplified_deduction: D = SIMPLIFIED_DEDUCTION,
) -> tuple[D, DeductionMethod]:
    gross = to_decimal(gross_salary)
    dependents_base = gross - to_decimal(contribution) - dependents * dependent_deduction
    simplified_base = gross - simplified_deduction
    if dependents_base <= simplified_base:
        return dependents_base, "dependents"
    return simplified_base, "simplified"


def theoretical_tax(base: D, table: Sequence[IncomeTaxBracket]) -> tuple[D, D]:
    """Closed-form tax for the single tier containing ``base``.

    Returns ``(tax, rate)``; the per-tier deduction already accounts for
    the lower tiers.
    """
    for bracket in table:
        if bracket.limit is None or base <= bracket.limit:
            return max(ZERO, base * bracket.rate - bracket.deduction), bracket.rate
    # Tables ending in a bounded tier leave the excess untaxed.
    return ZERO, ZERO


def reduction_amount(gross_salary: float | D, theoretical: D, rule: ReductionRule | None) -> D:
    if rule is None:
        return ZERO
    gross = to_decimal(gross_salary)
    if gross <= rule.exemption_limit:
        return theoretical
    if gross <= rule.phase_out_limit:
        return rule.intercept - rule.slope * gross
    return ZERO


def compute_income_tax(
    gross_salary: float | D,
    contribution: float | D,
    dependents: int,
    regime: "Regime",
) -> IncomeTaxResult:
    base, method = select_taxable_base(
        gross_salary,
        contribution,
        dependents,
        regime.dependent_deduction,
        regime.simplified_deduction,
    )
    theoretical, rate = theoretical_tax(base, regime.income_tax_table)
    reduction = max(ZERO, reduction_amount(gross_salary, theoretical, regime.reduction))
    final = max(ZERO, theoretical - reduction)
    return IncomeTaxResult(
        value=round_cents(final),
        rate=rate_percent(rate),
        reduction=round_cents(reduction),
        base=base,
        deduction_method=method,
        theoretical=theoretical,
    )


__all__ = [
    "DEPENDENT_DEDUCTION",
    "SIMPLIFIED_DEDUCTION",
    "INCOME_TAX_TABLE",
    "IncomeTaxBracket",
    "IncomeTaxResult",
    "ReductionRule",
    "compute_income_tax",
    "reduction_amount",
    "select_taxable_base",
    "theoretical_tax",
]
