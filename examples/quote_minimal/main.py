#!/usr/bin/env python
"""Quote Minimal Example - Library-first demonstration.

Shows how to use the calculator as a library:
1. Create explicit configuration (fee table and engine constants)
2. Compute a quote with the engine
3. Classify the margin with the gauge
4. Simulate a user editing one field and recalculate in full

Usage:
    python main.py
    python main.py --client AMN --bill-regular 62
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from decimal import Decimal

from rate_calculator.calculators import (
    ClientFeeTable,
    MarginEngine,
    MarginGauge,
    OrientationType,
    QuoteInput,
)
from rate_calculator.calculators.formatting import format_usd
from rate_calculator.config import CalculatorConfig


def main() -> None:
    parser = argparse.ArgumentParser(description="Minimal quote example")
    parser.add_argument("--client", default="SimpliFI")
    parser.add_argument("--bill-regular", type=Decimal, default=Decimal("50"))
    args = parser.parse_args()

    fees = ClientFeeTable().with_client("Direct Hire Clinic", "0")
    config = CalculatorConfig(target_margin=Decimal("15"))
    engine = MarginEngine(fees, config)
    gauge = MarginGauge(config.target_margin)

    quote = QuoteInput(
        client=args.client,
        bill_regular=args.bill_regular,
        pay_regular=Decimal("30"),
        hours_regular=Decimal("36"),
        contract_weeks=Decimal("13"),
        house_daily=Decimal("20"),
        meals_daily=Decimal("15"),
        orientation_type=OrientationType.NON_BILLABLE,
        orientation_hours=Decimal("8"),
    )

    for label, q in [
        ("Initial", quote),
        ("Pay raised to $32", replace(quote, pay_regular=Decimal("32"))),
        ("Direct client", replace(quote, client="Direct Hire Clinic")),
    ]:
        result = engine.compute(q)
        reading = gauge.evaluate(result.margin, q.bill_regular)
        print(f"{label}:")
        print(f"  Hourly margin:   {format_usd(result.margin)} ({reading.color.value})")
        print(f"  Contract margin: {format_usd(result.contract_margin)}")
        print(f"  Weekly package:  {format_usd(result.package_weekly.total)}")
        print(f"  {reading.message}")


if __name__ == "__main__":
    main()
