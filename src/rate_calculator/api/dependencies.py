"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from rate_calculator.config import get_settings
from rate_calculator.services.quote_service import QuoteService


@lru_cache(maxsize=1)
def get_quote_service() -> QuoteService:
    """Get the quote service built from settings."""
    return QuoteService.from_settings(get_settings())


# Type aliases for cleaner dependency injection
QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]
