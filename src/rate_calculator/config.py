"""Configuration management for the rate calculator."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class CalculatorConfig:
    """
    Engine constants.

    Passed explicitly to the engine so tests and deployments can supply
    their own values without touching the formulas.

    Attributes:
        burden: Multiplier applied to every W-2 sourced cost (employer
            taxes and insurance). Default 1.23.
        weeks_per_month: Divisor used for monthly figures. Default 4.
        default_schedule_days: Work days per week when none is given.
        non_billable_orientation_rate: Hourly rate paid for orientation
            that is not billed to the client. Default 16.5.
        overtime_multiplier: Candidate OT pay as a multiple of base pay.
        full_time_hours: Weekly hours above which stipends are spread
            over this fixed figure instead of actual hours.
        daily_overtime_threshold: Hours per day before daily OT applies.
        sick_accrual_hours: Hours worked per hour of sick pay accrued.
        target_margin: Hourly margin considered healthy by the gauge.
    """

    burden: Decimal = Decimal("1.23")
    weeks_per_month: Decimal = Decimal("4")
    default_schedule_days: Decimal = Decimal("5")
    non_billable_orientation_rate: Decimal = Decimal("16.5")
    overtime_multiplier: Decimal = Decimal("1.5")
    full_time_hours: Decimal = Decimal("40")
    daily_overtime_threshold: Decimal = Decimal("8")
    sick_accrual_hours: Decimal = Decimal("30")
    target_margin: Decimal = Decimal("20")

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.burden <= 0:
            raise ValueError("burden must be positive")
        if self.weeks_per_month <= 0:
            raise ValueError("weeks_per_month must be positive")
        if self.full_time_hours <= 0:
            raise ValueError("full_time_hours must be positive")
        if self.sick_accrual_hours <= 0:
            raise ValueError("sick_accrual_hours must be positive")
        if self.non_billable_orientation_rate < 0:
            raise ValueError("non_billable_orientation_rate cannot be negative")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    calculator_version: str
    host: str
    port: int
    debug: bool
    log_level: str
    default_client: str
    target_margin: Decimal
    client_fees_file: str | None

    @property
    def HOST(self) -> str:
        """Alias for host."""
        return self.host

    @property
    def PORT(self) -> int:
        """Alias for port."""
        return self.port

    @property
    def DEBUG(self) -> bool:
        """Alias for debug."""
        return self.debug

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            calculator_version=os.getenv("CALCULATOR_VERSION", "1.0.0"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            default_client=os.getenv("DEFAULT_CLIENT", "SimpliFI"),
            target_margin=Decimal(os.getenv("TARGET_MARGIN", "20")),
            client_fees_file=os.getenv("CLIENT_FEES_FILE") or None,
        )

    def calculator_config(self) -> CalculatorConfig:
        """Engine constants with the configured gauge target."""
        return CalculatorConfig(target_margin=self.target_margin)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler for the server and CLI entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
