"""
Pattern Detector

Candlestick formations on the trailing bars of a series.
"""

from tradesignal.services.patterns.candlesticks import (
    MIN_BARS,
    PATTERN_STRENGTH,
    detect_patterns,
    is_doji,
    is_hammer,
    is_shooting_star,
    is_bullish_engulfing,
    is_bearish_engulfing,
    is_morning_star,
)

__all__ = [
    "MIN_BARS",
    "PATTERN_STRENGTH",
    "detect_patterns",
    "is_doji",
    "is_hammer",
    "is_shooting_star",
    "is_bullish_engulfing",
    "is_bearish_engulfing",
    "is_morning_star",
]
