"""Property-based tests for engine invariants.

These tests use hypothesis to throw arbitrary, including garbage, inputs at
the engine and check that it stays total, finite and deterministic.
"""

from __future__ import annotations

from dataclasses import fields, replace
from decimal import Decimal

from hypothesis import given, settings, strategies as st

from rate_calculator.calculators.engine import MarginEngine
from rate_calculator.calculators.form import parse_form
from rate_calculator.calculators.gauge import MarginGauge
from rate_calculator.calculators.presenter import present
from rate_calculator.calculators.types import (
    AutoSickHours,
    ManualSickHours,
    NursePackage,
    OrientationType,
    QuoteBreakdown,
    QuoteInput,
)

ENGINE = MarginEngine()

sane_amounts = st.decimals(
    min_value=Decimal("0"), max_value=Decimal("10000"), places=2, allow_nan=False
)

anything = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=True, allow_infinity=True),
    st.decimals(allow_nan=True, allow_infinity=True),
    st.text(max_size=12),
)

orientation = st.one_of(st.sampled_from(list(OrientationType)), st.none(), st.text(max_size=8))

sick = st.one_of(st.just(AutoSickHours()), anything.map(ManualSickHours))

NUMERIC_INPUTS = [
    f.name
    for f in fields(QuoteInput)
    if f.name not in ("client", "orientation_type", "sick_hours")
]

FORM_KEYS = [
    "client",
    "bill_regular",
    "pay_regular",
    "hrs_regular",
    "hrs_ot",
    "contract_len",
    "schedule_days",
    "orient_type",
    "auto_sick_calc",
    "sick_hours",
]


@st.composite
def garbage_quotes(draw) -> QuoteInput:
    values = {name: draw(anything) for name in NUMERIC_INPUTS}
    return QuoteInput(
        client=draw(st.one_of(st.sampled_from(["SimpliFI", "AMN"]), st.text(max_size=8))),
        orientation_type=draw(orientation),
        sick_hours=draw(sick),
        **values,
    )


@st.composite
def sane_quotes(draw) -> QuoteInput:
    return QuoteInput(
        client=draw(st.sampled_from(["SimpliFI", "AMN", "HWL", "Unknown"])),
        bill_regular=draw(sane_amounts),
        bill_ot=draw(sane_amounts),
        pay_regular=draw(sane_amounts),
        hours_regular=draw(st.decimals(min_value=0, max_value=84, places=1)),
        hours_ot=draw(st.decimals(min_value=0, max_value=20, places=1)),
        contract_weeks=draw(st.integers(min_value=0, max_value=52).map(Decimal)),
        schedule_days=draw(st.integers(min_value=0, max_value=7).map(Decimal)),
        house_daily=draw(sane_amounts),
        meals_daily=draw(sane_amounts),
        orientation_type=draw(st.sampled_from(list(OrientationType))),
        orientation_hours=draw(st.decimals(min_value=0, max_value=40, places=1)),
        bonus_start=draw(sane_amounts),
        bonus_complete=draw(sane_amounts),
        bcg_reimbursement=draw(sane_amounts),
    )


def numeric_outputs(breakdown: QuoteBreakdown) -> list[Decimal]:
    values: list[Decimal] = []
    for f in fields(breakdown):
        value = getattr(breakdown, f.name)
        if isinstance(value, NursePackage):
            values.extend([value.taxable, value.non_taxable, value.total])
        elif isinstance(value, Decimal):
            values.append(value)
    return values


class TestTotality:
    """compute never raises and never reports a non-finite figure."""

    @given(quote=garbage_quotes())
    @settings(max_examples=300)
    def test_garbage_inputs(self, quote):
        breakdown = ENGINE.compute(quote)

        assert all(v.is_finite() for v in numeric_outputs(breakdown))
        assert all(value.startswith(("$", "-$")) for value in present(breakdown).values())

    @given(form=st.dictionaries(st.sampled_from(FORM_KEYS), anything))
    def test_garbage_forms(self, form):
        breakdown = ENGINE.compute(parse_form(form))

        assert all(v.is_finite() for v in numeric_outputs(breakdown))

    @given(quote=garbage_quotes())
    def test_idempotent(self, quote):
        assert ENGINE.compute(quote) == ENGINE.compute(quote)


class TestDerivedInvariants:
    """Relationships that hold for every realistic quote."""

    @given(quote=sane_quotes())
    def test_ot_pay_is_time_and_a_half(self, quote):
        assert ENGINE.compute(quote).ot_pay_rate == quote.pay_regular * Decimal("1.5")

    @given(quote=sane_quotes())
    def test_stipend_flat_at_or_below_40_hours(self, quote):
        breakdown = ENGINE.compute(quote)

        if quote.hours_regular <= 40:
            assert breakdown.weekly_stipend_nt == breakdown.weekly_nt

    @given(quote=sane_quotes())
    def test_no_spread_without_contract_hours(self, quote):
        breakdown = ENGINE.compute(replace(quote, contract_weeks=Decimal("0")))

        assert breakdown.start_bonus_hourly == 0
        assert breakdown.complete_bonus_hourly == 0
        assert breakdown.bcg_hourly == 0
        assert breakdown.sick_hourly == 0
        assert breakdown.orientation_hourly == 0

    @given(quote=sane_quotes())
    def test_zero_hours_zero_hourly_stipends(self, quote):
        breakdown = ENGINE.compute(replace(quote, hours_regular=Decimal("0")))

        assert breakdown.stipend_hourly == 0
        assert breakdown.housing_hourly == 0
        assert breakdown.meals_hourly == 0
        assert breakdown.weekly_on_w2_taxable == 0

    @given(quote=sane_quotes())
    def test_aggregate_margins_scale(self, quote):
        breakdown = ENGINE.compute(quote)

        assert breakdown.monthly_margin == breakdown.weekly_margin * 4
        assert breakdown.contract_margin == breakdown.weekly_margin * quote.contract_weeks

    @given(margin=st.decimals(min_value=-1000, max_value=1000, allow_nan=False))
    def test_gauge_progress_in_range(self, margin):
        assert 0.0 <= MarginGauge().progress(margin) <= 1.0
