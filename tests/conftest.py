"""Pytest fixtures for rate calculator tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from rate_calculator.calculators.engine import MarginEngine
from rate_calculator.calculators.fee_table import ClientFeeTable
from rate_calculator.calculators.types import OrientationType, QuoteInput
from rate_calculator.config import CalculatorConfig
from rate_calculator.services.quote_service import QuoteService


@pytest.fixture
def config() -> CalculatorConfig:
    """Default engine constants."""
    return CalculatorConfig()


@pytest.fixture
def fee_table() -> ClientFeeTable:
    """Built-in client fee table."""
    return ClientFeeTable()


@pytest.fixture
def engine(fee_table: ClientFeeTable, config: CalculatorConfig) -> MarginEngine:
    """Engine over the built-in fee table."""
    return MarginEngine(fee_table, config)


@pytest.fixture
def service(fee_table: ClientFeeTable, config: CalculatorConfig) -> QuoteService:
    """Quote service over the built-in fee table."""
    return QuoteService(fee_table=fee_table, config=config)


@pytest.fixture
def standard_quote() -> QuoteInput:
    """13-week, 36 hr/week SimpliFI contract with non-billable orientation."""
    return QuoteInput(
        client="SimpliFI",
        bill_regular=Decimal("50"),
        pay_regular=Decimal("30"),
        hours_regular=Decimal("36"),
        hours_ot=Decimal("0"),
        contract_weeks=Decimal("13"),
        house_daily=Decimal("20"),
        meals_daily=Decimal("15"),
        schedule_days=Decimal("5"),
        orientation_type=OrientationType.NON_BILLABLE,
        orientation_hours=Decimal("8"),
    )


@pytest.fixture
def long_week_quote() -> QuoteInput:
    """45 hr/week over 5 days: one hour of daily overtime per day."""
    return QuoteInput(
        client="SimpliFI",
        bill_regular=Decimal("60"),
        bill_ot=Decimal("90"),
        pay_regular=Decimal("30"),
        hours_regular=Decimal("45"),
        contract_weeks=Decimal("13"),
        house_daily=Decimal("20"),
        meals_daily=Decimal("15"),
        schedule_days=Decimal("5"),
    )
