from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from app.config import get_settings
from app.core.contribution import compute_contribution
from app.core.errors import InvalidInput
from app.core.income_tax import compute_income_tax
from app.core.models import CalculationInput, ComparisonResult, RegimeResult
from app.core.regimes import CURRENT, PROJECTED, Regime

logger = logging.getLogger("salary_app.engine")


def build_input(**raw: Any) -> CalculationInput:
    """Validate raw numbers into a :class:`CalculationInput`.

    Raises :class:`InvalidInput` with one issue per offending field; nothing
    is computed for a rejected request.
    """
    try:
        in_ = CalculationInput.model_validate(raw)
    except ValidationError as exc:
        issues = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ())) or "input",
                "message": error.get("msg", "invalid value"),
            }
            for error in exc.errors()
        ]
        raise InvalidInput(issues) from exc
    max_dependents = get_settings().max_dependents
    if in_.dependents > max_dependents:
        raise InvalidInput(
            [{"field": "dependents", "message": f"at most {max_dependents} dependents are supported"}]
        )
    return in_


def compute_regime(in_: CalculationInput, regime: Regime) -> RegimeResult:
    contribution = compute_contribution(
        in_.gross_salary, in_.is_contribution_liable, regime.contribution_table
    )
    tax = compute_income_tax(in_.gross_salary, contribution, in_.dependents, regime)
    total = contribution + tax.value + in_.other_deductions
    logger.debug(
        "regime=%s gross=%s contribution=%s base=%s method=%s tax=%s reduction=%s",
        regime.name,
        in_.gross_salary,
        contribution,
        tax.base,
        tax.deduction_method,
        tax.value,
        tax.reduction,
    )
    return RegimeResult(
        regime=regime.name,
        label=regime.label,
        contribution=contribution,
        tax=tax.value,
        tax_rate_percent=tax.rate,
        reduction_applied=tax.reduction,
        total_deductions=total,
        net=in_.gross_salary - contribution - tax.value - in_.other_deductions,
    )


def compare_regimes(
    in_: CalculationInput,
    current: Regime = CURRENT,
    projected: Regime = PROJECTED,
) -> ComparisonResult:
    current_result = compute_regime(in_, current)
    projected_result = compute_regime(in_, projected)
    return ComparisonResult(
        gross=in_.gross_salary,
        other=in_.other_deductions,
        dependents=in_.dependents,
        current=current_result,
        projected=projected_result,
        net_difference=projected_result.net - current_result.net,
    )


__all__ = ["build_input", "compute_regime", "compare_regimes"]
