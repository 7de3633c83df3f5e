from decimal import Decimal

import hypothesis.strategies as st
from hypothesis import given

from app.core.compare import compare_regimes
from app.core.contribution import compute_contribution
from app.core.regimes import CURRENT, PROJECTED
from tests.fixtures.inputs import make_input

cents = st.integers(min_value=0, max_value=5_000_000).map(lambda c: Decimal(c) / 100)


@given(cents, cents)
def test_contribution_monotonic(a: Decimal, b: Decimal):
    low, high = sorted((a, b))
    for regime in (CURRENT, PROJECTED):
        table = regime.contribution_table
        assert compute_contribution(low, True, table) <= compute_contribution(high, True, table)


@given(cents)
def test_contribution_flat_above_ceiling(gross: Decimal):
    for regime in (CURRENT, PROJECTED):
        table = regime.contribution_table
        at_ceiling = compute_contribution(regime.ceiling, True, table)
        if gross >= regime.ceiling:
            assert compute_contribution(gross, True, table) == at_ceiling
        else:
            assert compute_contribution(gross, True, table) <= at_ceiling


@given(cents, st.integers(min_value=0, max_value=10), st.integers(min_value=0, max_value=100_000), st.booleans())
def test_net_reconciles_and_is_repeatable(gross: Decimal, dependents: int, other_cents: int, liable: bool):
    in_ = make_input(gross, dependents=dependents, other=Decimal(other_cents) / 100, liable=liable)
    result = compare_regimes(in_)
    for block in (result.current, result.projected):
        assert block.tax >= 0
        assert block.reduction_applied >= 0
        assert block.net == in_.gross_salary - block.contribution - block.tax - in_.other_deductions
    assert compare_regimes(in_) == result
