"""Client fee lookup."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from decimal import Decimal, InvalidOperation
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_FEES: dict[str, Decimal] = {
    "SimpliFI": Decimal("0.06"),
    "Careerstaff": Decimal("0.035"),
    "Medical Solutions": Decimal("0.042"),
    "AMN": Decimal("0.05"),
    "HWL": Decimal("0.045"),
    "Eisenhower Health": Decimal("0.038"),
    "Focus One": Decimal("0.04"),
    "Priority Group": Decimal("0.039"),
    "Intermountain Health": Decimal("0.041"),
    "AYA": Decimal("0.048"),
    "NYCHH": Decimal("0.055"),
    "Medefis": Decimal("0.043"),
}


class FeeTableError(ValueError):
    """Raised when a fee table cannot be built."""

    def __init__(self, client: str | None, message: str):
        self.client = client
        super().__init__(message)


class ClientFeeTable(Mapping[str, Decimal]):
    """Maps client names to the fraction of the bill rate they retain.

    Fees are applied as ``bill * (1 - fee)``. Every fee must lie in [0, 1);
    a table violating this is rejected at construction so the engine never
    sees it. Lookups of unknown clients resolve to a zero fee.
    """

    def __init__(self, fees: Mapping[str, Decimal | float | str] | None = None):
        source = DEFAULT_CLIENT_FEES if fees is None else fees
        self._fees: dict[str, Decimal] = {}
        for client, raw in source.items():
            self._fees[client] = self._validate(client, raw)

    @staticmethod
    def _validate(client: str, raw: Decimal | float | str) -> Decimal:
        try:
            fee = Decimal(str(raw))
        except InvalidOperation:
            raise FeeTableError(client, f"Fee for client {client!r} is not a number: {raw!r}")
        if not fee.is_finite() or fee < 0 or fee >= 1:
            raise FeeTableError(
                client, f"Fee for client {client!r} must be in [0, 1), got {fee}"
            )
        return fee

    def __getitem__(self, client: str) -> Decimal:
        return self._fees[client]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fees)

    def __len__(self) -> int:
        return len(self._fees)

    def fee_for(self, client: str) -> Decimal:
        """Resolve the fee for a client, 0 when the client is unknown."""
        fee = self._fees.get(client)
        if fee is None:
            logger.warning("Unknown client %r, applying zero fee", client)
            return Decimal("0")
        return fee

    def with_client(self, client: str, fee: Decimal | float | str) -> ClientFeeTable:
        """Return a new table with one client added or replaced."""
        fees: dict[str, Decimal | float | str] = dict(self._fees)
        fees[client] = fee
        return ClientFeeTable(fees)

    @classmethod
    def from_json_file(cls, path: str | Path) -> ClientFeeTable:
        """Load a table from a JSON object of client -> fee.

        Fees are parsed as decimals so ``0.035`` stays exact.
        """
        try:
            with open(path, encoding="utf-8") as fh:
                data = json.load(fh, parse_float=Decimal)
        except (OSError, json.JSONDecodeError) as e:
            raise FeeTableError(None, f"Cannot read client fees from {path}: {e}") from e

        if not isinstance(data, dict):
            raise FeeTableError(None, f"Client fees in {path} must be a JSON object")

        logger.info("Loaded %d client fees from %s", len(data), path)
        return cls(data)
