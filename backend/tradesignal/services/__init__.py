"""
TradeSignal Services

Each service has:
- A defined input (BarSeries)
- A defined output (schema object)
- Pure, deterministic computation underneath
"""

from tradesignal.services.base import (
    BaseService,
    ServiceError,
    ValidationError,
    InsufficientDataError,
)

__all__ = [
    "BaseService",
    "ServiceError",
    "ValidationError",
    "InsufficientDataError",
]
