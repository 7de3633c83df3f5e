from __future__ import annotations

from decimal import Decimal

from app.core.contribution import ContributionBracket
from app.core.income_tax import ReductionRule
from app.core.regimes.base import Regime

D = Decimal

INSS_TABLE_2026 = (
    ContributionBracket(D("1621.00"), D("0.075")),
    ContributionBracket(D("2902.84"), D("0.09")),
    ContributionBracket(D("4354.27"), D("0.12")),
    ContributionBracket(D("8475.55"), D("0.14")),
)

# Monthly IRRF reduction: full exemption up to 5,000.00, linear phase-out to 7,350.00.
REDUCTION_2026 = ReductionRule(
    exemption_limit=D("5000.00"),
    phase_out_limit=D("7350.00"),
    intercept=D("978.62"),
    slope=D("0.133145"),
    legal_reference="Lei 15.270/2025",
)

PROJECTED = Regime(
    name="projected",
    label="2026",
    contribution_table=INSS_TABLE_2026,
    reduction=REDUCTION_2026,
)
