"""Tests for QuoteService orchestration."""

import json
from decimal import Decimal

from rate_calculator.calculators.fee_table import ClientFeeTable
from rate_calculator.calculators.gauge import GaugeState
from rate_calculator.config import Settings
from rate_calculator.services.quote_service import QuoteService


def make_settings(**overrides) -> Settings:
    values = dict(
        calculator_version="1.0.0",
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="INFO",
        default_client="SimpliFI",
        target_margin=Decimal("20"),
        client_fees_file=None,
    )
    values.update(overrides)
    return Settings(**values)


class TestCalculate:
    def test_result_parts(self, service, standard_quote):
        result = service.calculate(standard_quote)

        assert result.title == "SimpliFI Rate Calculator"
        assert result.fee_text == "Fee: 6.00%"
        assert result.display["gm_hourly"] == "$1.72"
        assert result.gauge.state is GaugeState.BELOW_TARGET
        assert result.form_fields == {"pay_ot": "45.00", "sick_hours": "15.60"}

    def test_empty_form_shows_no_input(self, service):
        result = service.calculate_form({})

        assert result.gauge.state is GaugeState.NO_INPUT
        assert result.form_fields == {"pay_ot": "", "sick_hours": ""}

    def test_form_and_structured_agree(self, service, standard_quote):
        form = {
            "client": "SimpliFI",
            "bill_regular": "50",
            "pay_regular": "30",
            "hrs_regular": "36",
            "contract_len": "13",
            "house_daily": "20",
            "meals_daily": "15",
            "orient_type": "Non Billable",
            "orient_hours": "8",
            "schedule_days": "5",
        }

        from_form = service.calculate_form(form)
        structured = service.calculate(standard_quote)

        assert from_form.breakdown == structured.breakdown

    def test_reset_form(self, service):
        assert service.reset_form()["client"] == "SimpliFI"


class TestFromSettings:
    def test_built_in_table(self):
        service = QuoteService.from_settings(make_settings())

        assert len(service.clients()) == 12
        assert service.gauge.target == Decimal("20")

    def test_fee_file_and_target(self, tmp_path):
        path = tmp_path / "fees.json"
        path.write_text(json.dumps({"Clinic": 0.1}))

        service = QuoteService.from_settings(
            make_settings(
                client_fees_file=str(path),
                default_client="Clinic",
                target_margin=Decimal("10"),
            )
        )
        result = service.calculate_form({"bill_regular": "100", "hrs_regular": "40"})

        assert result.title == "Clinic Rate Calculator"
        assert result.breakdown.hr_after_fee == Decimal("90.0")
        assert result.gauge.state is GaugeState.HEALTHY

    def test_injected_table(self):
        service = QuoteService(fee_table=ClientFeeTable({"Only": "0.02"}), default_client="Only")

        assert list(service.clients()) == ["Only"]
