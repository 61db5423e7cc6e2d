"""API routes."""

from rate_calculator.api.routes.quotes import router as quotes_router
from rate_calculator.api.routes.health import router as health_router

__all__ = ["quotes_router", "health_router"]
