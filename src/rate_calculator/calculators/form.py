"""Form field parsing and write-backs.

A calculator form is a flat mapping of element IDs to raw values, as a
browser submits them. Parsing never fails: anything that is not a number
becomes the field's default.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from rate_calculator.calculators.engine import to_decimal
from rate_calculator.calculators.formatting import format_field
from rate_calculator.calculators.types import (
    ZERO,
    AutoSickHours,
    ManualSickHours,
    OrientationType,
    QuoteBreakdown,
    QuoteInput,
)
from rate_calculator.config import CalculatorConfig

# Leading numeric prefix, the way a browser's parseFloat reads "12.5/hr"
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_TRUE_STRINGS = {"true", "on", "1", "yes", "checked"}

_BLANK = Decimal("NaN")

# Element ID -> QuoteInput field
NUMERIC_FIELDS = {
    "bill_regular": "bill_regular",
    "bill_ot": "bill_ot",
    "pay_regular": "pay_regular",
    "hrs_regular": "hours_regular",
    "hrs_ot": "hours_ot",
    "contract_len": "contract_weeks",
    "house_daily": "house_daily",
    "meals_daily": "meals_daily",
    "orient_hours": "orientation_hours",
    "orient_pay": "orientation_pay",
    "bonus_start": "bonus_start",
    "bonus_complete": "bonus_complete",
    "bcg_reimb": "bcg_reimbursement",
}


def parse_number(raw: Any, default: Decimal = ZERO) -> Decimal:
    """Parse a raw form value into a finite Decimal."""
    if isinstance(raw, bool) or raw is None:
        return default
    if isinstance(raw, (int, float, Decimal)):
        return to_decimal(raw, default)
    match = _NUMBER_PREFIX.match(str(raw))
    if match is None:
        return default
    return to_decimal(match.group(1), default)


def parse_optional_number(raw: Any) -> Decimal | None:
    """Like parse_number, but None when nothing numeric was entered."""
    value = parse_number(raw, _BLANK)
    return None if value.is_nan() else value


def parse_flag(raw: Any, default: bool = True) -> bool:
    """Parse a checkbox value; a missing checkbox keeps the default."""
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    return str(raw).strip().lower() in _TRUE_STRINGS


def parse_orientation_type(raw: Any) -> OrientationType:
    """Billable only when explicitly selected."""
    if isinstance(raw, OrientationType):
        return raw
    text = re.sub(r"[\s_-]+", "", str(raw or "")).lower()
    if text == "billable":
        return OrientationType.BILLABLE
    return OrientationType.NON_BILLABLE


def parse_form(
    form: Mapping[str, Any],
    default_client: str = "SimpliFI",
    config: CalculatorConfig | None = None,
) -> QuoteInput:
    """Build a QuoteInput from raw form values.

    ``pay_ot`` is ignored: candidate OT pay is always derived. ``sick_hours``
    is read only when ``auto_sick_calc`` is off; left blank, the engine uses
    the accrued hours.
    """
    cfg = config or CalculatorConfig()
    numbers = {
        field: parse_number(form.get(element_id))
        for element_id, field in NUMERIC_FIELDS.items()
    }

    if parse_flag(form.get("auto_sick_calc")):
        sick_hours: AutoSickHours | ManualSickHours = AutoSickHours()
    else:
        sick_hours = ManualSickHours(parse_optional_number(form.get("sick_hours")))

    raw_client = form.get("client")
    client = raw_client.strip() if isinstance(raw_client, str) else ""

    return QuoteInput(
        client=client or default_client,
        orientation_type=parse_orientation_type(form.get("orient_type")),
        schedule_days=parse_number(form.get("schedule_days"), cfg.default_schedule_days),
        sick_hours=sick_hours,
        **numbers,
    )


def derived_form_fields(quote: QuoteInput, breakdown: QuoteBreakdown) -> dict[str, str]:
    """Values the calculator writes back into editable-looking inputs.

    ``pay_ot`` is overwritten on every calculation, replacing anything the
    user typed there. ``sick_hours`` is written only in auto mode.
    """
    fields = {"pay_ot": format_field(breakdown.ot_pay_rate)}
    if quote.auto_sick_calc:
        fields["sick_hours"] = format_field(breakdown.sick_hours)
    return fields


def default_form(
    default_client: str = "SimpliFI",
    config: CalculatorConfig | None = None,
) -> dict[str, Any]:
    """Form values after a reset."""
    cfg = config or CalculatorConfig()
    form: dict[str, Any] = {element_id: "" for element_id in NUMERIC_FIELDS}
    form.update(
        {
            "client": default_client,
            "orient_type": OrientationType.NON_BILLABLE.value,
            "orient_pay": _plain(cfg.non_billable_orientation_rate),
            "schedule_days": _plain(cfg.default_schedule_days),
            "pay_ot": "",
            "sick_hours": "",
            "auto_sick_calc": True,
        }
    )
    return form


def _plain(value: Decimal) -> str:
    return format(value.normalize(), "f")
