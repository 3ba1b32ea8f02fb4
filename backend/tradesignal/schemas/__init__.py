"""
TradeSignal Schema Contracts

This module defines all JSON contracts between the engine and its callers.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from tradesignal.schemas.market import (
    OHLCV,
    BarSeries,
)
from tradesignal.schemas.signals import (
    SignalType,
    PatternDirection,
    PatternName,
    MACDValue,
    BollingerBandsValue,
    StochasticValue,
    IndicatorSnapshot,
    OverlayPoint,
    PatternMatch,
    TradingSignal,
    SignalResponse,
)

__all__ = [
    # Market
    "OHLCV",
    "BarSeries",
    # Signals
    "SignalType",
    "PatternDirection",
    "PatternName",
    "MACDValue",
    "BollingerBandsValue",
    "StochasticValue",
    "IndicatorSnapshot",
    "OverlayPoint",
    "PatternMatch",
    "TradingSignal",
    "SignalResponse",
]
