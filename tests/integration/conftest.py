"""Integration test fixtures for the HTTP API."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rate_calculator.api.app import create_app
from rate_calculator.api.dependencies import get_quote_service
from rate_calculator.calculators.fee_table import ClientFeeTable
from rate_calculator.services.quote_service import QuoteService


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client over the built-in fee table."""
    app = create_app()
    app.dependency_overrides[get_quote_service] = lambda: QuoteService(
        fee_table=ClientFeeTable(), default_client="SimpliFI"
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
