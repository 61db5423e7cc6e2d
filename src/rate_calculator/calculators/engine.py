"""Margin calculation engine - main orchestrator."""

from __future__ import annotations

import decimal
import logging
from decimal import Decimal
from typing import Any

from rate_calculator.calculators.fee_table import ClientFeeTable
from rate_calculator.calculators.types import (
    ZERO,
    ManualSickHours,
    NursePackage,
    OrientationType,
    QuoteBreakdown,
    QuoteInput,
)
from rate_calculator.config import CalculatorConfig

logger = logging.getLogger(__name__)

_MAX_ADJUSTED_EXPONENT = 15

_INPUT_FIELDS = (
    "bill_regular",
    "bill_ot",
    "pay_regular",
    "hours_regular",
    "hours_ot",
    "contract_weeks",
    "schedule_days",
    "house_daily",
    "meals_daily",
    "orientation_hours",
    "orientation_pay",
    "bonus_start",
    "bonus_complete",
    "bcg_reimbursement",
)


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Coerce a number to a finite Decimal, falling back to default.

    Magnitudes of 10**16 and above are treated as unparsable, magnitudes
    below 10**-15 as zero.
    """
    if isinstance(value, bool) or value is None:
        return default
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (ArithmeticError, ValueError):
        return default
    if not result.is_finite():
        return default
    if result:
        if result.adjusted() > _MAX_ADJUSTED_EXPONENT:
            return default
        if result.adjusted() < -_MAX_ADJUSTED_EXPONENT:
            return ZERO
    return result


class MarginEngine:
    """Computes pay package, client billing and gross margin for a quote.

    Calculation pipeline (one pass, dependency order):
    1) Client fee and after-fee bill rates
    2) Stipend totals and their hourly spread (NH, housing, meals)
    3) Contract hour totals and sick hours
    4) One-time payments spread over contract regular hours
    5) Orientation rate and amortization (non-billable only)
    6) Overtime rates, including the daily 8-hour rule above 40 hrs/week
    7) Weekly taxable pay, stipend and gross
    8) Client billing
    9) Hourly, OT and aggregate margins

    The engine holds no state between calls. Any input that is missing,
    not a number or not finite is treated as 0, and any non-finite result
    is reported as 0, so compute() never raises.
    """

    def __init__(
        self,
        fee_table: ClientFeeTable | None = None,
        config: CalculatorConfig | None = None,
    ):
        self.fee_table = fee_table if fee_table is not None else ClientFeeTable()
        self.config = config if config is not None else CalculatorConfig()

    def compute(self, quote: QuoteInput) -> QuoteBreakdown:
        """Compute the full breakdown for a quote."""
        with decimal.localcontext() as ctx:
            # Overflow on absurd inputs yields Infinity/NaN, normalized below
            ctx.traps[decimal.Overflow] = False
            ctx.traps[decimal.InvalidOperation] = False
            ctx.traps[decimal.DivisionByZero] = False
            breakdown = self._build(self._compute(quote))

        logger.debug(
            "Computed quote client=%s fee=%s margin=%s weekly_margin=%s",
            breakdown.client,
            breakdown.fee,
            breakdown.margin,
            breakdown.weekly_margin,
        )
        return breakdown

    def _compute(self, quote: QuoteInput) -> dict[str, Any]:
        cfg = self.config
        n = {name: to_decimal(getattr(quote, name, None)) for name in _INPUT_FIELDS}
        n["schedule_days"] = to_decimal(
            getattr(quote, "schedule_days", None), cfg.default_schedule_days
        )

        bill_r = n["bill_regular"]
        bill_ot = n["bill_ot"]
        pay_r = n["pay_regular"]
        hrs_r = n["hours_regular"]
        hrs_ot = n["hours_ot"]
        weeks = n["contract_weeks"]
        schedule_days = n["schedule_days"]
        is_non_billable = quote.orientation_type != OrientationType.BILLABLE

        # 1) Fee
        fee = self.fee_table.fee_for(quote.client)
        hr_after_fee = bill_r * (1 - fee)
        ot_hr_after_fee = bill_ot * (1 - fee)

        # 2) Stipends
        daily_nt = n["house_daily"] + n["meals_daily"]
        weekly_nt = daily_nt * 7
        stipend_hourly = self._spread_weekly(weekly_nt, hrs_r)
        housing_hourly = self._spread_weekly(n["house_daily"] * 7, hrs_r)
        meals_hourly = self._spread_weekly(n["meals_daily"] * 7, hrs_r)

        # 3) Contract hours
        contract_regular_hours = hrs_r * weeks
        contract_ot_hours = hrs_ot * weeks
        total_contract_hours = contract_regular_hours + contract_ot_hours

        accrued_sick_hours = total_contract_hours / cfg.sick_accrual_hours
        if isinstance(quote.sick_hours, ManualSickHours):
            # A blank manual entry falls back to the accrued figure
            sick_hours = to_decimal(quote.sick_hours.value, accrued_sick_hours)
        else:
            sick_hours = accrued_sick_hours

        # 4) One-time payments per regular hour
        start_bonus_hourly = self._per_regular_hour(n["bonus_start"], contract_regular_hours)
        complete_bonus_hourly = self._per_regular_hour(
            n["bonus_complete"], contract_regular_hours
        )
        bcg_hourly = self._per_regular_hour(n["bcg_reimbursement"], contract_regular_hours)
        sick_hourly = self._per_regular_hour(sick_hours * pay_r, contract_regular_hours)

        # 5) Orientation
        if is_non_billable:
            orientation_rate = cfg.non_billable_orientation_rate
        else:
            orientation_rate = pay_r + housing_hourly + meals_hourly
        total_orientation_pay = n["orientation_hours"] * orientation_rate
        orientation_hourly = (
            self._per_regular_hour(total_orientation_pay, contract_regular_hours)
            if is_non_billable
            else ZERO
        )

        # 6) Overtime
        above_full_time = hrs_r > cfg.full_time_hours
        ot_pay_rate = pay_r * cfg.overtime_multiplier
        daily_regular_hours = hrs_r / max(Decimal(1), schedule_days)
        ot_excess_hours = max(ZERO, daily_regular_hours - cfg.daily_overtime_threshold)
        ot_rate_above_40 = ot_pay_rate + stipend_hourly if above_full_time else ZERO

        # 7) Weekly pay
        if above_full_time:
            daily_ot_hours = ot_excess_hours * schedule_days
            weekly_on_w2_taxable = (hrs_r - daily_ot_hours) * pay_r + (
                daily_ot_hours * ot_rate_above_40
            )
            weekly_stipend_nt = hrs_r * weekly_nt / cfg.full_time_hours
        else:
            weekly_on_w2_taxable = hrs_r * pay_r
            weekly_stipend_nt = weekly_nt
        total_weekly_taxable_with_ot = weekly_on_w2_taxable + hrs_ot * ot_pay_rate
        # Package view: additional OT hours are not part of weekly gross
        weekly_gross = weekly_on_w2_taxable + weekly_stipend_nt

        # 8) Client billing
        weekly_billing = hrs_r * hr_after_fee + hrs_ot * ot_hr_after_fee

        # 9) Margins: W-2 and amortized one-time costs carry burden,
        # stipend and BCG reimbursement do not
        burden = cfg.burden
        margin = (
            hr_after_fee
            - pay_r * burden
            - (stipend_hourly + bcg_hourly)
            - (start_bonus_hourly + complete_bonus_hourly + sick_hourly) * burden
            - (orientation_hourly * burden if is_non_billable else ZERO)
        )
        ot_margin = ot_hr_after_fee - ot_pay_rate * burden
        weekly_margin = margin * hrs_r + ot_margin * hrs_ot

        months = cfg.weeks_per_month
        taxable_daily = pay_r * daily_regular_hours

        return {
            "client": quote.client,
            "fee": fee,
            "hr_after_fee": hr_after_fee,
            "ot_hr_after_fee": ot_hr_after_fee,
            "daily_nt": daily_nt,
            "weekly_nt": weekly_nt,
            "stipend_hourly": stipend_hourly,
            "housing_hourly": housing_hourly,
            "meals_hourly": meals_hourly,
            "contract_regular_hours": contract_regular_hours,
            "contract_ot_hours": contract_ot_hours,
            "total_contract_hours": total_contract_hours,
            "sick_hours": sick_hours,
            "start_bonus_hourly": start_bonus_hourly,
            "complete_bonus_hourly": complete_bonus_hourly,
            "bcg_hourly": bcg_hourly,
            "sick_hourly": sick_hourly,
            "orientation_rate": orientation_rate,
            "total_orientation_pay": total_orientation_pay,
            "orientation_hourly": orientation_hourly,
            "ot_pay_rate": ot_pay_rate,
            "daily_regular_hours": daily_regular_hours,
            "ot_excess_hours": ot_excess_hours,
            "ot_rate_above_40": ot_rate_above_40,
            "weekly_on_w2_taxable": weekly_on_w2_taxable,
            "total_weekly_taxable_with_ot": total_weekly_taxable_with_ot,
            "weekly_stipend_nt": weekly_stipend_nt,
            "weekly_gross": weekly_gross,
            "weekly_billing": weekly_billing,
            "monthly_billing": weekly_billing * months,
            "contract_billing": weekly_billing * weeks,
            "margin": margin,
            "ot_margin": ot_margin,
            "weekly_margin": weekly_margin,
            "monthly_margin": weekly_margin * months,
            "contract_margin": weekly_margin * weeks,
            "package_hourly": (pay_r, stipend_hourly),
            "package_daily": (taxable_daily, daily_nt),
            "package_weekly": (total_weekly_taxable_with_ot, weekly_stipend_nt),
            "package_monthly": (
                total_weekly_taxable_with_ot * months,
                weekly_stipend_nt * months,
            ),
        }

    def _spread_weekly(self, weekly_amount: Decimal, hours_regular: Decimal) -> Decimal:
        """Spread a weekly amount over worked hours, capped at full time."""
        if hours_regular > self.config.full_time_hours:
            return weekly_amount / self.config.full_time_hours
        if hours_regular > 0:
            return weekly_amount / hours_regular
        return ZERO

    @staticmethod
    def _per_regular_hour(amount: Decimal, contract_regular_hours: Decimal) -> Decimal:
        if contract_regular_hours > 0:
            return amount / contract_regular_hours
        return ZERO

    @staticmethod
    def _build(values: dict[str, Any]) -> QuoteBreakdown:
        """Normalize non-finite figures to 0 and assemble the breakdown."""
        fields: dict[str, Any] = {}
        for name, value in values.items():
            if isinstance(value, tuple):
                taxable, non_taxable = (_finite(v) for v in value)
                fields[name] = NursePackage(
                    taxable=taxable,
                    non_taxable=non_taxable,
                    total=_finite(taxable + non_taxable),
                )
            elif isinstance(value, Decimal):
                fields[name] = _finite(value)
            else:
                fields[name] = value
        return QuoteBreakdown(**fields)


def _finite(value: Decimal) -> Decimal:
    return value if value.is_finite() else ZERO
