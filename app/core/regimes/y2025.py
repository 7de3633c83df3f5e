from __future__ import annotations

from decimal import Decimal

from app.core.contribution import ContributionBracket
from app.core.regimes.base import Regime

D = Decimal

INSS_TABLE_2025 = (
    ContributionBracket(D("1518.00"), D("0.075")),
    ContributionBracket(D("2793.88"), D("0.09")),
    ContributionBracket(D("4190.83"), D("0.12")),
    ContributionBracket(D("8157.41"), D("0.14")),
)

CURRENT = Regime(
    name="current",
    label="2025",
    contribution_table=INSS_TABLE_2025,
)
