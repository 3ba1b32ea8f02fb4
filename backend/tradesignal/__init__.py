"""
TradeSignal - technical analysis and signal generation engine.

Quick start::

    from tradesignal import generate_trading_signal
    signal = generate_trading_signal(bars)
"""

from tradesignal.schemas.market import OHLCV, BarSeries
from tradesignal.schemas.signals import IndicatorSnapshot, PatternMatch, TradingSignal
from tradesignal.services.indicators import calculate_all_indicators
from tradesignal.services.patterns import detect_patterns
from tradesignal.services.signals import generate_trading_signal

__version__ = "0.1.0"

__all__ = [
    "OHLCV",
    "BarSeries",
    "IndicatorSnapshot",
    "PatternMatch",
    "TradingSignal",
    "calculate_all_indicators",
    "detect_patterns",
    "generate_trading_signal",
]
