"""
Indicator Engine Service

CONTRACT:
    Input:  BarSeries (OHLCV bars, oldest first)
    Output: IndicatorSnapshot

RESPONSIBILITIES:
    - Moving averages (SMA, EMA)
    - Oscillators and bands (RSI, MACD, Bollinger, Stochastic, Williams %R, CCI, MFI)
    - Volatility and flow (ATR, VWAP, OBV, ADX)
    - Per-bar chart overlays

Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from tradesignal.services.indicators.calculations import (
    OHLCVData,
    sma,
    ema,
    sma_series,
    ema_series,
    rsi,
    rsi_series,
    macd,
    bollinger_bands,
    bollinger_series,
    stochastic,
    williams_r,
    cci,
    mfi,
    true_range,
    atr,
    vwap,
    obv,
    adx,
)
from tradesignal.services.indicators.service import (
    IndicatorService,
    calculate_all_indicators,
    calculate_overlay,
    get_indicator_service,
)

__all__ = [
    "OHLCVData",
    "sma",
    "ema",
    "sma_series",
    "ema_series",
    "rsi",
    "rsi_series",
    "macd",
    "bollinger_bands",
    "bollinger_series",
    "stochastic",
    "williams_r",
    "cci",
    "mfi",
    "true_range",
    "atr",
    "vwap",
    "obv",
    "adx",
    "IndicatorService",
    "calculate_all_indicators",
    "calculate_overlay",
    "get_indicator_service",
]
