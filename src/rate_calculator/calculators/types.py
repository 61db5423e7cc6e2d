"""Type definitions for the margin calculation pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

ZERO = Decimal("0")


class OrientationType(str, Enum):
    """Whether orientation time is billed to the client."""

    BILLABLE = "Billable"
    NON_BILLABLE = "Non Billable"


@dataclass(frozen=True)
class AutoSickHours:
    """Sick hours derived from contract hours worked."""


@dataclass(frozen=True)
class ManualSickHours:
    """Sick hours entered by the user; None means the field was left blank."""

    value: Optional[Decimal] = None


SickHours = Union[AutoSickHours, ManualSickHours]


@dataclass(frozen=True)
class QuoteInput:
    """Negotiable inputs for one contract quote.

    Amounts are in dollars, hours are per week unless noted. Candidate OT
    pay is not an input: it is always derived from pay_regular.
    """

    client: str = "SimpliFI"

    # Client bill rates ($/hr)
    bill_regular: Decimal = ZERO
    bill_ot: Decimal = ZERO

    # Candidate W-2 base rate ($/hr)
    pay_regular: Decimal = ZERO

    # Hours
    hours_regular: Decimal = ZERO
    hours_ot: Decimal = ZERO
    contract_weeks: Decimal = ZERO
    schedule_days: Decimal = Decimal("5")

    # Daily non-taxable allowances
    house_daily: Decimal = ZERO
    meals_daily: Decimal = ZERO

    # Orientation
    orientation_type: OrientationType = OrientationType.NON_BILLABLE
    orientation_hours: Decimal = ZERO
    orientation_pay: Decimal = ZERO

    # One-time payments, amortized over contract regular hours
    bonus_start: Decimal = ZERO
    bonus_complete: Decimal = ZERO
    bcg_reimbursement: Decimal = ZERO

    sick_hours: SickHours = field(default_factory=AutoSickHours)

    @property
    def auto_sick_calc(self) -> bool:
        return isinstance(self.sick_hours, AutoSickHours)


@dataclass(frozen=True)
class NursePackage:
    """Pay offered to the candidate at one granularity."""

    taxable: Decimal
    non_taxable: Decimal
    total: Decimal


@dataclass(frozen=True)
class QuoteBreakdown:
    """Every derived figure for one quote. Values are unrounded."""

    client: str
    fee: Decimal

    # Rates after the client fee
    hr_after_fee: Decimal
    ot_hr_after_fee: Decimal

    # Stipends
    daily_nt: Decimal
    weekly_nt: Decimal
    stipend_hourly: Decimal  # NH
    housing_hourly: Decimal  # HA_hourly
    meals_hourly: Decimal  # MI_hourly

    # Contract hours
    contract_regular_hours: Decimal
    contract_ot_hours: Decimal
    total_contract_hours: Decimal
    sick_hours: Decimal

    # One-time payments spread over contract regular hours
    start_bonus_hourly: Decimal
    complete_bonus_hourly: Decimal
    bcg_hourly: Decimal
    sick_hourly: Decimal

    # Orientation
    orientation_rate: Decimal
    total_orientation_pay: Decimal
    orientation_hourly: Decimal

    # Overtime
    ot_pay_rate: Decimal
    daily_regular_hours: Decimal
    ot_excess_hours: Decimal
    ot_rate_above_40: Decimal

    # Weekly pay
    weekly_on_w2_taxable: Decimal
    total_weekly_taxable_with_ot: Decimal
    weekly_stipend_nt: Decimal
    weekly_gross: Decimal

    # Client billing
    weekly_billing: Decimal
    monthly_billing: Decimal
    contract_billing: Decimal

    # Gross margin
    margin: Decimal
    ot_margin: Decimal
    weekly_margin: Decimal
    monthly_margin: Decimal
    contract_margin: Decimal

    # Nurse package
    package_hourly: NursePackage
    package_daily: NursePackage
    package_weekly: NursePackage
    package_monthly: NursePackage

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-safe dict with decimals as strings."""
        return _stringify(asdict(self))


def _stringify(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _stringify(v) for k, v in value.items()}
    if isinstance(value, Decimal):
        return str(value)
    return value
