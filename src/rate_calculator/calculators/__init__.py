"""Margin calculation engine."""

from rate_calculator.calculators.engine import MarginEngine
from rate_calculator.calculators.fee_table import ClientFeeTable, FeeTableError
from rate_calculator.calculators.gauge import GaugeReading, MarginGauge
from rate_calculator.calculators.types import (
    AutoSickHours,
    ManualSickHours,
    OrientationType,
    QuoteBreakdown,
    QuoteInput,
)

__all__ = [
    "MarginEngine",
    "ClientFeeTable",
    "FeeTableError",
    "GaugeReading",
    "MarginGauge",
    "AutoSickHours",
    "ManualSickHours",
    "OrientationType",
    "QuoteBreakdown",
    "QuoteInput",
]
