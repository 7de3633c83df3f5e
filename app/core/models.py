from decimal import Decimal, InvalidOperation

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from app.core.money import round_cents


def _quantize_decimal(value: Decimal | None) -> Decimal | None:
    if value is None:
        return None
    try:
        return round_cents(value)
    except InvalidOperation as exc:
        raise ValueError("amount is too large to represent in cents") from exc


class CalculationInput(BaseModel):
    gross_salary: Decimal = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Gross monthly salary",
        validation_alias=AliasChoices("gross_salary", "grossSalary", "gross"),
    )
    is_contribution_liable: bool = Field(
        True,
        description="CLT employee (True) or self-employed, exempt from INSS (False)",
        validation_alias=AliasChoices("is_contribution_liable", "isContributionLiable", "liable"),
    )
    dependents: int = Field(0, ge=0, description="Number of declared dependents")
    other_deductions: Decimal = Field(
        Decimal("0.00"),
        ge=0,
        allow_inf_nan=False,
        description="Other payroll deductions",
        validation_alias=AliasChoices("other_deductions", "otherDeductions", "other"),
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    _quantize_amounts = field_validator(
        "gross_salary",
        "other_deductions",
        mode="after",
    )(_quantize_decimal)


class RegimeResult(BaseModel):
    regime: str
    label: str
    contribution: Decimal
    tax: Decimal
    tax_rate_percent: Decimal
    reduction_applied: Decimal
    total_deductions: Decimal
    net: Decimal

    model_config = ConfigDict(frozen=True)


class ComparisonResult(BaseModel):
    gross: Decimal
    other: Decimal
    dependents: int
    current: RegimeResult
    projected: RegimeResult
    net_difference: Decimal

    model_config = ConfigDict(frozen=True)
