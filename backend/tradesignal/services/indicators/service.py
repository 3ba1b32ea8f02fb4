"""
Indicator Engine Service Implementation

Builds the indicator snapshot and chart overlays from OHLCV bars.
Pure Python/NumPy calculations.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from tradesignal.schemas.market import BarSeries, OHLCV
from tradesignal.schemas.signals import IndicatorSnapshot, OverlayPoint
from tradesignal.services.base import BaseService
from tradesignal.services.indicators.calculations import (
    sma,
    ema,
    sma_series,
    ema_series,
    rsi,
    macd,
    bollinger_bands,
    bollinger_series,
    stochastic,
    williams_r,
    cci,
    mfi,
    atr,
    vwap,
    obv,
    adx,
)

logger = logging.getLogger(__name__)


def calculate_all_indicators(bars: Sequence[OHLCV]) -> IndicatorSnapshot:
    """Evaluate every indicator as of the last bar."""
    closes = [b.close for b in bars]

    return IndicatorSnapshot(
        rsi=rsi(closes, 14),
        macd=macd(closes),
        sma20=sma(closes, 20),
        sma50=sma(closes, 50),
        sma200=sma(closes, 200),
        ema9=ema(closes, 9),
        ema12=ema(closes, 12),
        ema26=ema(closes, 26),
        bollinger_bands=bollinger_bands(closes, 20, 2.0),
        atr=atr(bars, 14),
        vwap=vwap(bars),
        stochastic=stochastic(bars, 14),
        obv=obv(bars),
        adx=adx(bars, 14),
        cci=cci(bars, 20),
        williams_r=williams_r(bars, 14),
        mfi=mfi(bars, 14),
    )


def _nullable(value: float) -> Optional[float]:
    return None if np.isnan(value) else float(value)


def calculate_overlay(bars: Sequence[OHLCV]) -> list[OverlayPoint]:
    """
    Per-bar chart series.

    Each point holds SMA20, EMA12 and the 20/2 Bollinger Bands evaluated on
    the bars up to and including that point.
    """
    closes = np.array([b.close for b in bars], dtype=float)
    sma_20 = sma_series(closes, 20)
    ema_12 = ema_series(closes, 12)
    upper, middle, lower = bollinger_series(closes, 20, 2.0)

    return [
        OverlayPoint(
            timestamp=bar.timestamp,
            close=bar.close,
            sma20=_nullable(sma_20[i]),
            ema12=_nullable(ema_12[i]),
            bb_upper=_nullable(upper[i]),
            bb_middle=_nullable(middle[i]),
            bb_lower=_nullable(lower[i]),
        )
        for i, bar in enumerate(bars)
    ]


class IndicatorService(BaseService[IndicatorSnapshot]):
    """
    Indicator Engine Service.

    Calculates technical indicators for market analysis.
    All calculations are deterministic and reproducible.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: BarSeries) -> IndicatorSnapshot:
        """Calculate the indicator snapshot for one series."""
        series = await self.validate_input(input_data)
        snapshot = calculate_all_indicators(series.bars)
        logger.debug(
            f"Indicators for {series.symbol or 'series'}: "
            f"{len(series.bars)} bars, "
            f"{sum(v is not None for v in snapshot.model_dump().values())} fields available"
        )
        return snapshot

    async def overlay(self, input_data: BarSeries) -> list[OverlayPoint]:
        """Chart overlay series for one series."""
        series = await self.validate_input(input_data)
        return calculate_overlay(series.bars)


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
