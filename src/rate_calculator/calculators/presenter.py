"""Display values keyed by calculator output element IDs."""

from __future__ import annotations

from decimal import Decimal

from rate_calculator.calculators.formatting import format_percent, format_usd
from rate_calculator.calculators.types import QuoteBreakdown


def present(breakdown: QuoteBreakdown) -> dict[str, str]:
    """Format a breakdown as currency strings for every output element."""
    b = breakdown
    figures: dict[str, Decimal] = {
        "afterfee_regular": b.hr_after_fee,
        "afterfee_ot": b.ot_hr_after_fee,
        # Nurse package
        "np_tax_hourly": b.package_hourly.taxable,
        "np_tax_daily": b.package_daily.taxable,
        "np_tax_weekly": b.package_weekly.taxable,
        "np_tax_monthly": b.package_monthly.taxable,
        "np_nt_hourly": b.package_hourly.non_taxable,
        "np_nt_daily": b.package_daily.non_taxable,
        "np_nt_weekly": b.package_weekly.non_taxable,
        "np_nt_monthly": b.package_monthly.non_taxable,
        "np_total_hourly": b.package_hourly.total,
        "np_total_daily": b.package_daily.total,
        "np_total_weekly": b.package_weekly.total,
        "np_total_monthly": b.package_monthly.total,
        # Gross margin and billing
        "gm_hourly": b.margin,
        "gm_ot_hourly": b.ot_margin,
        "gm_weekly": b.weekly_margin,
        "gm_monthly": b.monthly_margin,
        "gm_contract": b.contract_margin,
        "bill_weekly": b.weekly_billing,
        "bill_monthly": b.monthly_billing,
        "bill_contract": b.contract_billing,
        # Package offered; weekly breakdown leaves out additional OT hours
        "pkg_total_hourly": b.package_hourly.total,
        "pkg_w2": b.package_hourly.taxable,
        "pkg_w2_ot": b.ot_pay_rate,
        "pkg_stipend_hourly": b.stipend_hourly,
        "pkg_ot_special": b.ot_rate_above_40,
        "pkg_weekly_gross": b.weekly_gross,
        "pkg_weekly_w2": b.weekly_on_w2_taxable,
        "pkg_weekly_stipend": b.weekly_stipend_nt,
        # Orientation
        "orient_total": b.total_orientation_pay,
        "orient_hourly": b.orientation_hourly,
        # Additional pay, per regular hour
        "hourly_start": b.start_bonus_hourly,
        "hourly_complete": b.complete_bonus_hourly,
        "hourly_bcg": b.bcg_hourly,
        "hourly_sick": b.sick_hourly,
    }
    return {element_id: format_usd(value) for element_id, value in figures.items()}


def title_for(client: str) -> str:
    return f"{client} Rate Calculator"


def fee_caption(fee: Decimal) -> str:
    return f"Fee: {format_percent(fee)}"
