"""Quote service - recalculates a quote for the presentation layer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from rate_calculator.calculators.engine import MarginEngine, to_decimal
from rate_calculator.calculators.fee_table import ClientFeeTable
from rate_calculator.calculators.form import (
    default_form,
    derived_form_fields,
    parse_form,
)
from rate_calculator.calculators.gauge import GaugeReading, MarginGauge
from rate_calculator.calculators.presenter import fee_caption, present, title_for
from rate_calculator.calculators.types import QuoteBreakdown, QuoteInput
from rate_calculator.config import CalculatorConfig, Settings


@dataclass(frozen=True)
class QuoteResult:
    """Everything a calculator view renders after one recalculation."""

    quote: QuoteInput
    breakdown: QuoteBreakdown
    display: dict[str, str]
    gauge: GaugeReading
    form_fields: dict[str, str]
    title: str
    fee_text: str


class QuoteService:
    """Runs the engine in full on every change and formats the result.

    Operations:
    - calculate: Compute a structured quote
    - calculate_form: Parse raw form values, then calculate
    - reset_form: Form values after a reset
    - clients: The configured fee table
    """

    def __init__(
        self,
        fee_table: ClientFeeTable | None = None,
        config: CalculatorConfig | None = None,
        default_client: str = "SimpliFI",
    ):
        self.config = config or CalculatorConfig()
        self.fee_table = fee_table if fee_table is not None else ClientFeeTable()
        self.engine = MarginEngine(self.fee_table, self.config)
        self.gauge = MarginGauge(self.config.target_margin)
        self.default_client = default_client

    @classmethod
    def from_settings(cls, settings: Settings) -> QuoteService:
        """Build a service from application settings."""
        if settings.client_fees_file:
            fee_table = ClientFeeTable.from_json_file(settings.client_fees_file)
        else:
            fee_table = ClientFeeTable()
        return cls(
            fee_table=fee_table,
            config=settings.calculator_config(),
            default_client=settings.default_client,
        )

    def calculate(self, quote: QuoteInput) -> QuoteResult:
        breakdown = self.engine.compute(quote)
        return QuoteResult(
            quote=quote,
            breakdown=breakdown,
            display=present(breakdown),
            gauge=self.gauge.evaluate(breakdown.margin, to_decimal(quote.bill_regular)),
            form_fields=derived_form_fields(quote, breakdown),
            title=title_for(breakdown.client),
            fee_text=fee_caption(breakdown.fee),
        )

    def calculate_form(self, form: Mapping[str, Any]) -> QuoteResult:
        return self.calculate(parse_form(form, self.default_client, self.config))

    def reset_form(self) -> dict[str, Any]:
        return default_form(self.default_client, self.config)

    def clients(self) -> ClientFeeTable:
        return self.fee_table
