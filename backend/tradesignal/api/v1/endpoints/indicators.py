"""
Indicator API Endpoints

Endpoints for technical indicator calculations on a posted bar series.
"""

import logging

from fastapi import APIRouter, HTTPException

from tradesignal.core.config import settings
from tradesignal.schemas.market import BarSeries
from tradesignal.schemas.signals import IndicatorSnapshot, OverlayPoint, PatternMatch
from tradesignal.services.base import ServiceError
from tradesignal.services.indicators import get_indicator_service
from tradesignal.services.signals import get_signal_service

logger = logging.getLogger(__name__)

router = APIRouter()


def check_series_size(series: BarSeries) -> None:
    """Reject oversized requests before any computation."""
    if len(series.bars) > settings.max_bars:
        raise HTTPException(
            status_code=422,
            detail=f"Too many bars: {len(series.bars)} (max {settings.max_bars})",
        )


@router.post("/snapshot", response_model=IndicatorSnapshot)
async def get_snapshot(series: BarSeries):
    """
    Indicator values as of the last bar.

    Returns:
        - Moving averages (SMA 20/50/200, EMA 9/12/26)
        - Momentum (RSI, MACD, Stochastic, Williams %R, CCI, MFI)
        - Volatility (ATR, Bollinger Bands)
        - Volume (VWAP, OBV) and ADX

    Fields without enough history are null.
    """
    check_series_size(series)
    try:
        return await get_indicator_service().execute(series)
    except ServiceError as e:
        logger.error(f"Snapshot failed for {series.symbol}: {e}")
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/overlay", response_model=list[OverlayPoint])
async def get_overlay(series: BarSeries):
    """
    Per-bar SMA20, EMA12 and Bollinger Bands for charting.
    """
    check_series_size(series)
    try:
        return await get_indicator_service().overlay(series)
    except ServiceError as e:
        logger.error(f"Overlay failed for {series.symbol}: {e}")
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/patterns", response_model=list[PatternMatch])
async def get_patterns(series: BarSeries):
    """
    Candlestick patterns on the trailing bars (needs at least 5 bars to match).
    """
    check_series_size(series)
    try:
        return await get_signal_service().patterns(series)
    except ServiceError as e:
        logger.error(f"Pattern detection failed for {series.symbol}: {e}")
        raise HTTPException(status_code=400, detail=e.message)
