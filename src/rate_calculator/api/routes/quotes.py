"""Quote API endpoints."""

from typing import Any

from fastapi import APIRouter, status

from rate_calculator.api.dependencies import QuoteServiceDep
from rate_calculator.api.schemas import (
    ClientFee,
    ClientListResponse,
    ErrorResponse,
    QuoteRequest,
    QuoteResponse,
)

router = APIRouter(tags=["quotes"])


@router.get(
    "/clients",
    response_model=ClientListResponse,
)
async def list_clients(service: QuoteServiceDep) -> ClientListResponse:
    """List clients and the fee each retains."""
    table = service.clients()
    return ClientListResponse(
        items=[ClientFee(client=client, fee=fee) for client, fee in table.items()],
        default_client=service.default_client,
    )


@router.post(
    "/quotes/calculate",
    response_model=QuoteResponse,
    status_code=status.HTTP_200_OK,
    responses={422: {"model": ErrorResponse}},
)
async def calculate_quote(
    service: QuoteServiceDep,
    payload: QuoteRequest,
) -> QuoteResponse:
    """Calculate margin, billing and pay package for a quote."""
    result = service.calculate(payload.to_quote(service.default_client))
    return QuoteResponse.from_result(result)


@router.post(
    "/quotes/form",
    response_model=QuoteResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_form(
    service: QuoteServiceDep,
    form: dict[str, Any],
) -> QuoteResponse:
    """Recalculate from raw calculator form values keyed by element ID.

    Sent on every field change; the response carries display strings and
    the values to write back into the pay_ot and sick_hours inputs.
    """
    return QuoteResponse.from_result(service.calculate_form(form))


@router.get("/quotes/defaults")
async def form_defaults(service: QuoteServiceDep) -> dict[str, Any]:
    """Form values after a reset."""
    return service.reset_form()
