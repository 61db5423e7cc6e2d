"""Pydantic schemas for API request/response models."""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from rate_calculator.calculators.form import (
    parse_flag,
    parse_number,
    parse_optional_number,
    parse_orientation_type,
)
from rate_calculator.calculators.types import (
    AutoSickHours,
    ManualSickHours,
    OrientationType,
    QuoteInput,
)
from rate_calculator.services.quote_service import QuoteResult

# Numbers may arrive as JSON numbers or strings; anything unparsable is 0
LenientDecimal = Annotated[Decimal, BeforeValidator(lambda v: parse_number(v))]


# ============================================================================
# Quote schemas
# ============================================================================


class QuoteRequest(BaseModel):
    """Schema for a quote calculation request."""

    model_config = ConfigDict(extra="ignore")

    client: str | None = None
    bill_regular: LenientDecimal = Decimal("0")
    bill_ot: LenientDecimal = Decimal("0")
    pay_regular: LenientDecimal = Decimal("0")
    hours_regular: LenientDecimal = Decimal("0")
    hours_ot: LenientDecimal = Decimal("0")
    contract_weeks: LenientDecimal = Decimal("0")
    schedule_days: Annotated[
        Decimal, BeforeValidator(lambda v: parse_number(v, Decimal("5")))
    ] = Decimal("5")
    house_daily: LenientDecimal = Decimal("0")
    meals_daily: LenientDecimal = Decimal("0")
    orientation_type: Annotated[
        OrientationType, BeforeValidator(parse_orientation_type)
    ] = OrientationType.NON_BILLABLE
    orientation_hours: LenientDecimal = Decimal("0")
    orientation_pay: LenientDecimal = Decimal("0")
    bonus_start: LenientDecimal = Decimal("0")
    bonus_complete: LenientDecimal = Decimal("0")
    bcg_reimbursement: LenientDecimal = Decimal("0")
    auto_sick_calc: Annotated[bool, BeforeValidator(lambda v: parse_flag(v))] = True
    sick_hours: Annotated[
        Decimal | None, BeforeValidator(lambda v: parse_optional_number(v))
    ] = Field(
        default=None,
        description="Used only when auto_sick_calc is false; blank means accrued hours",
    )

    def to_quote(self, default_client: str) -> QuoteInput:
        """Convert to the engine's input record."""
        data = self.model_dump(exclude={"client", "auto_sick_calc", "sick_hours"})
        return QuoteInput(
            client=self.client or default_client,
            sick_hours=(
                AutoSickHours() if self.auto_sick_calc else ManualSickHours(self.sick_hours)
            ),
            **data,
        )


class GaugeResponse(BaseModel):
    """Margin gauge state."""

    value_text: str
    message: str
    progress: float = Field(ge=0, le=1)
    color: str
    state: str


class QuoteResponse(BaseModel):
    """Schema for a calculated quote."""

    title: str
    fee_text: str
    breakdown: dict[str, Any]
    display: dict[str, str]
    gauge: GaugeResponse
    form_fields: dict[str, str]

    @classmethod
    def from_result(cls, result: QuoteResult) -> "QuoteResponse":
        return cls(
            title=result.title,
            fee_text=result.fee_text,
            breakdown=result.breakdown.to_dict(),
            display=result.display,
            gauge=GaugeResponse(**result.gauge.to_dict()),
            form_fields=result.form_fields,
        )


# ============================================================================
# Client schemas
# ============================================================================


class ClientFee(BaseModel):
    """One client and its fee fraction."""

    client: str
    fee: Decimal


class ClientListResponse(BaseModel):
    """Schema for listing clients."""

    items: list[ClientFee]
    default_client: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    code: str | None = None
