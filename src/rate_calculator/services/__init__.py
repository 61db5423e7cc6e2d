"""Rate calculator services."""

from rate_calculator.services.quote_service import QuoteResult, QuoteService

__all__ = [
    "QuoteResult",
    "QuoteService",
]
