"""
Base Service Interface

Every engine service takes a BarSeries and returns one schema object.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from tradesignal.schemas.market import BarSeries

OutputT = TypeVar("OutputT")


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Input rejected before any computation."""
    pass


class InsufficientDataError(ValidationError):
    """Series too short for the computation to be defined at all."""
    pass


class BaseService(ABC, Generic[OutputT]):
    """
    Base class for engine services.

    Services are stateless wrappers around the pure calculation modules:
    - validate the series shape
    - run the computation
    - report health
    """

    min_bars: int = 1

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging."""
        pass

    @abstractmethod
    async def execute(self, input_data: BarSeries) -> OutputT:
        """
        Run the service on one bar series.

        Raises:
            ValidationError: If the series cannot be processed
        """
        pass

    async def health_check(self) -> bool:
        """Pure computation services are always healthy."""
        return True

    async def validate_input(self, input_data: BarSeries) -> BarSeries:
        """
        Reject series shorter than ``min_bars``.
        Ordering and OHLC consistency are enforced by the BarSeries schema.
        """
        if len(input_data.bars) < self.min_bars:
            raise InsufficientDataError(
                self.name,
                f"At least {self.min_bars} bar(s) required",
                {"symbol": input_data.symbol, "bar_count": len(input_data.bars)},
            )
        return input_data
