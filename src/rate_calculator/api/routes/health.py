"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel

from rate_calculator.api.dependencies import QuoteServiceDep
from rate_calculator.config import get_settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    clients: int


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check(service: QuoteServiceDep) -> HealthResponse:
    """Check API health and the loaded fee table."""
    client_count = len(service.clients())
    return HealthResponse(
        status="healthy" if client_count > 0 else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=get_settings().calculator_version,
        clients=client_count,
    )


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_check() -> dict[str, str]:
    """Readiness check for container orchestration."""
    return {"status": "ready"}


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check() -> dict[str, str]:
    """Liveness check for container orchestration."""
    return {"status": "alive"}
