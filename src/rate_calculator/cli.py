"""Rate Calculator Command Line Interface.

Provides:
- Quote calculation from the command line
- Client fee listing

Usage:
    python -m rate_calculator.cli calculate --client AMN --bill-regular 50 --pay-regular 30 \
        --hrs-regular 36 --contract-len 13 --house-daily 20 --meals-daily 15
    python -m rate_calculator.cli calculate ... --json
    python -m rate_calculator.cli clients
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable

from rate_calculator.calculators.fee_table import ClientFeeTable, FeeTableError
from rate_calculator.calculators.form import NUMERIC_FIELDS
from rate_calculator.calculators.formatting import format_percent
from rate_calculator.config import configure_logging, get_settings
from rate_calculator.services.quote_service import QuoteResult, QuoteService

# Display sections in print order: (heading, [(label, element_id)])
_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Rate after fee",
        [("Regular", "afterfee_regular"), ("Overtime", "afterfee_ot")],
    ),
    (
        "Gross margin",
        [
            ("Hourly", "gm_hourly"),
            ("OT hourly", "gm_ot_hourly"),
            ("Weekly", "gm_weekly"),
            ("Monthly", "gm_monthly"),
            ("Contract", "gm_contract"),
        ],
    ),
    (
        "Client billing",
        [
            ("Weekly", "bill_weekly"),
            ("Monthly", "bill_monthly"),
            ("Contract", "bill_contract"),
        ],
    ),
    (
        "Nurse package (taxable / non-taxable / total)",
        [
            ("Hourly", "hourly"),
            ("Daily", "daily"),
            ("Weekly", "weekly"),
            ("Monthly", "monthly"),
        ],
    ),
    (
        "Package offered",
        [
            ("W-2 hourly", "pkg_w2"),
            ("W-2 OT hourly", "pkg_w2_ot"),
            ("Stipend hourly", "pkg_stipend_hourly"),
            ("OT rate above 40", "pkg_ot_special"),
            ("Weekly gross", "pkg_weekly_gross"),
            ("Weekly W-2", "pkg_weekly_w2"),
            ("Weekly stipend", "pkg_weekly_stipend"),
        ],
    ),
    (
        "Orientation and additional pay",
        [
            ("Orientation total", "orient_total"),
            ("Orientation hourly", "orient_hourly"),
            ("Start bonus hourly", "hourly_start"),
            ("Completion bonus hourly", "hourly_complete"),
            ("BCG hourly", "hourly_bcg"),
            ("Sick pay hourly", "hourly_sick"),
        ],
    ),
]


class CalculatorCli:
    """Rate Calculator Command Line Interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m rate_calculator.cli",
            description="Staffing contract pay package and margin calculator",
        )
        parser.add_argument(
            "--fees-file",
            type=str,
            help="JSON object of client -> fee (default: $CLIENT_FEES_FILE or built-in)",
        )
        parser.add_argument(
            "--log-level",
            type=str,
            default=None,
            help="Logging level (default: $LOG_LEVEL)",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # calculate command
        calculate = subparsers.add_parser(
            "calculate",
            help="Calculate margin, billing and pay package",
        )
        calculate.add_argument("--client", type=str, help="Client name")
        for element_id in NUMERIC_FIELDS:
            calculate.add_argument(
                "--" + element_id.replace("_", "-"),
                dest=element_id,
                type=str,
                default=None,
                help=f"Form field {element_id}",
            )
        calculate.add_argument(
            "--schedule-days",
            dest="schedule_days",
            type=str,
            help="Work days per week (default: 5)",
        )
        calculate.add_argument(
            "--orient-type",
            dest="orient_type",
            type=str,
            choices=["Billable", "Non Billable"],
            default="Non Billable",
            help="Orientation type",
        )
        calculate.add_argument(
            "--sick-hours",
            dest="sick_hours",
            type=str,
            help="Sick pay hours; disables automatic sick hours",
        )
        calculate.add_argument(
            "--json",
            action="store_true",
            help="Print the full unrounded breakdown as JSON",
        )

        # clients command
        subparsers.add_parser(
            "clients",
            help="List clients and their fees",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        settings = get_settings()
        configure_logging(parsed.log_level or settings.log_level)

        try:
            service = self._build_service(parsed.fees_file)
        except FeeTableError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

        handlers: dict[str, Callable[..., int]] = {
            "calculate": self._cmd_calculate,
            "clients": self._cmd_clients,
        }

        handler = handlers.get(parsed.command)
        if handler:
            return handler(service, parsed)

        print(f"Unknown command: {parsed.command}", file=sys.stderr)
        return 1

    @staticmethod
    def _build_service(fees_file: str | None) -> QuoteService:
        settings = get_settings()
        service = QuoteService.from_settings(settings)
        if fees_file:
            return QuoteService(
                fee_table=ClientFeeTable.from_json_file(fees_file),
                config=service.config,
                default_client=service.default_client,
            )
        return service

    def _cmd_calculate(self, service: QuoteService, args: argparse.Namespace) -> int:
        """Calculate and print a quote."""
        form: dict[str, Any] = {
            element_id: getattr(args, element_id) for element_id in NUMERIC_FIELDS
        }
        form["client"] = args.client
        form["orient_type"] = args.orient_type
        form["schedule_days"] = args.schedule_days
        if args.sick_hours is not None:
            form["auto_sick_calc"] = False
            form["sick_hours"] = args.sick_hours

        result = service.calculate_form(form)

        if args.json:
            output = {
                "title": result.title,
                "fee_text": result.fee_text,
                "breakdown": result.breakdown.to_dict(),
                "gauge": result.gauge.to_dict(),
                "form_fields": result.form_fields,
            }
            print(json.dumps(output, indent=2))
            return 0

        self._print_result(result)
        return 0

    def _cmd_clients(self, service: QuoteService, args: argparse.Namespace) -> int:
        """List clients and fees."""
        for client, fee in service.clients().items():
            marker = " (default)" if client == service.default_client else ""
            print(f"  {client:<24} {format_percent(fee):>8}{marker}")
        return 0

    @staticmethod
    def _print_result(result: QuoteResult) -> None:
        display = result.display
        print(result.title)
        print(result.fee_text)

        for heading, rows in _SECTIONS:
            print(f"\n{heading}")
            for label, key in rows:
                if key in ("hourly", "daily", "weekly", "monthly"):
                    values = " / ".join(
                        display[f"np_{kind}_{key}"] for kind in ("tax", "nt", "total")
                    )
                else:
                    values = display[key]
                print(f"  {label:<24} {values}")

        gauge = result.gauge
        print(f"\nMargin {gauge.value_text} [{gauge.color.value}] {gauge.message}")

        pay_ot = result.form_fields.get("pay_ot") or "-"
        print(f"Candidate OT pay: {pay_ot}")
        if "sick_hours" in result.form_fields:
            print(f"Sick pay hours: {result.form_fields['sick_hours'] or '-'}")


def main() -> None:
    """CLI entry point."""
    cli = CalculatorCli()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
