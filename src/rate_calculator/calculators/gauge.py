"""Margin gauge classification."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from rate_calculator.calculators.formatting import format_usd


class GaugeState(str, Enum):
    """Advisory state of the hourly margin."""

    NO_INPUT = "no_input"
    NEGATIVE = "negative"
    BELOW_TARGET = "below_target"
    HEALTHY = "healthy"


class GaugeColor(str, Enum):
    GREEN = "green"
    AMBER = "amber"
    RED = "red"


@dataclass(frozen=True)
class GaugeReading:
    """What the margin gauge shows for one margin."""

    value_text: str
    message: str
    progress: float  # 0..1 of full scale
    color: GaugeColor
    state: GaugeState

    def to_dict(self) -> dict[str, Any]:
        return {
            "value_text": self.value_text,
            "message": self.message,
            "progress": self.progress,
            "color": self.color.value,
            "state": self.state.value,
        }


class MarginGauge:
    """Classifies an hourly margin against a target.

    Full scale is twice the target, so the target sits at the midpoint.
    A margin exactly on target counts as healthy.
    """

    def __init__(self, target: Decimal = Decimal("20")):
        self.target = target

    def evaluate(self, margin: Decimal, bill_regular: Decimal = Decimal("0")) -> GaugeReading:
        state = self._state(margin, bill_regular)
        return GaugeReading(
            value_text=format_usd(margin),
            message=self._message(state),
            progress=self.progress(margin),
            color=self.color(margin),
            state=state,
        )

    def progress(self, margin: Decimal) -> float:
        if self.target <= 0:
            return 0.0
        fraction = margin / (self.target * 2)
        return float(min(Decimal(1), max(Decimal(0), fraction)))

    def color(self, margin: Decimal) -> GaugeColor:
        if margin >= self.target:
            return GaugeColor.GREEN
        if margin > 0:
            return GaugeColor.AMBER
        return GaugeColor.RED

    def _state(self, margin: Decimal, bill_regular: Decimal) -> GaugeState:
        if margin == 0 and bill_regular == 0:
            return GaugeState.NO_INPUT
        if margin < 0:
            return GaugeState.NEGATIVE
        if margin < self.target:
            return GaugeState.BELOW_TARGET
        return GaugeState.HEALTHY

    def _message(self, state: GaugeState) -> str:
        if state is GaugeState.NO_INPUT:
            return "Enter numbers to analyze margin."
        if state is GaugeState.NEGATIVE:
            return "Margin is negative. Review pay rates and bill rates."
        if state is GaugeState.BELOW_TARGET:
            return f"Margin is below target of {format_usd(self.target)}."
        return "Margin looks healthy."
