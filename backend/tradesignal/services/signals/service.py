"""
Signal Service Implementation

Async wrapper around the synthesizer for the API layer.
"""

import logging
from typing import Optional

from tradesignal.schemas.market import BarSeries
from tradesignal.schemas.signals import PatternMatch, TradingSignal
from tradesignal.services.base import BaseService
from tradesignal.services.patterns.candlesticks import detect_patterns
from tradesignal.services.signals.synthesizer import generate_trading_signal

logger = logging.getLogger(__name__)


class SignalService(BaseService[TradingSignal]):
    """
    Signal Synthesizer Service.

    Stateless; identical series always produce identical signals.
    """

    @property
    def name(self) -> str:
        return "SignalService"

    async def execute(self, input_data: BarSeries) -> TradingSignal:
        """Generate the trading signal for the latest bar of the series."""
        series = await self.validate_input(input_data)
        signal = generate_trading_signal(series.bars)
        logger.info(
            f"{series.symbol or 'series'}: {signal.signal.value} "
            f"({signal.confidence}% confidence, {len(series.bars)} bars)"
        )
        return signal

    async def patterns(self, input_data: BarSeries) -> list[PatternMatch]:
        """Candlestick patterns on the trailing bars."""
        series = await self.validate_input(input_data)
        return detect_patterns(series.bars)


# Singleton instance
_service_instance: Optional[SignalService] = None


def get_signal_service() -> SignalService:
    """Get or create signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SignalService()
    return _service_instance
