"""Tests for the client fee table."""

import json
from decimal import Decimal

import pytest

from rate_calculator.calculators.fee_table import (
    DEFAULT_CLIENT_FEES,
    ClientFeeTable,
    FeeTableError,
)


class TestDefaultTable:
    """The built-in client list."""

    def test_twelve_clients(self, fee_table):
        assert len(fee_table) == 12
        assert fee_table["SimpliFI"] == Decimal("0.06")
        assert fee_table["Careerstaff"] == Decimal("0.035")
        assert fee_table["Medefis"] == Decimal("0.043")

    def test_every_fee_in_range(self, fee_table):
        for client, fee in fee_table.items():
            assert 0 <= fee < 1, client

    def test_default_table_not_shared(self):
        table = ClientFeeTable().with_client("New", "0.01")

        assert "New" not in DEFAULT_CLIENT_FEES
        assert "New" in table


class TestLookup:
    """Fee resolution."""

    def test_known_client(self, fee_table):
        assert fee_table.fee_for("AMN") == Decimal("0.05")

    def test_unknown_client_is_zero(self, fee_table, caplog):
        assert fee_table.fee_for("Unknown Hospital") == Decimal("0")
        assert "Unknown client" in caplog.text

    def test_with_client_replaces_fee(self, fee_table):
        updated = fee_table.with_client("AMN", Decimal("0.07"))

        assert updated.fee_for("AMN") == Decimal("0.07")
        assert fee_table.fee_for("AMN") == Decimal("0.05")


class TestValidation:
    """Tables with fees outside [0, 1) are rejected."""

    @pytest.mark.parametrize("fee", ["1", "1.5", "-0.01", "NaN", "abc"])
    def test_rejects_bad_fee(self, fee):
        with pytest.raises(FeeTableError) as exc_info:
            ClientFeeTable({"Bad": fee})

        assert exc_info.value.client == "Bad"

    def test_zero_fee_allowed(self):
        assert ClientFeeTable({"Direct": 0}).fee_for("Direct") == 0

    def test_float_fee_kept_exact(self):
        assert ClientFeeTable({"Float": 0.035}).fee_for("Float") == Decimal("0.035")


class TestJsonFile:
    """Loading fees from configuration files."""

    def test_load(self, tmp_path):
        path = tmp_path / "fees.json"
        path.write_text(json.dumps({"Clinic A": 0.05, "Clinic B": 0.035}))

        table = ClientFeeTable.from_json_file(path)

        assert table.fee_for("Clinic B") == Decimal("0.035")
        assert len(table) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FeeTableError):
            ClientFeeTable.from_json_file(tmp_path / "missing.json")

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "fees.json"
        path.write_text("[0.05]")

        with pytest.raises(FeeTableError):
            ClientFeeTable.from_json_file(path)

    def test_invalid_fee_in_file(self, tmp_path):
        path = tmp_path / "fees.json"
        path.write_text('{"Clinic": 2}')

        with pytest.raises(FeeTableError):
            ClientFeeTable.from_json_file(path)
