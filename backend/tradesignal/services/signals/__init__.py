"""
Signal Synthesizer Service

CONTRACT:
    Input:  BarSeries
    Output: TradingSignal

RESPONSIBILITIES:
    - Score indicators and patterns into bullish/bearish points
    - Decide BUY / SELL / HOLD with a confidence
    - Derive ATR-based target, stop and risk/reward
    - Trend strength and volatility scores

Deterministic: no randomness, no I/O.
"""

from tradesignal.services.signals.scoring import trend_strength, volatility_score
from tradesignal.services.signals.synthesizer import (
    FALLBACK_REASON,
    Scorecard,
    generate_trading_signal,
    score_signals,
    percent_b,
    pattern_points,
    price_levels,
)
from tradesignal.services.signals.service import SignalService, get_signal_service

__all__ = [
    "trend_strength",
    "volatility_score",
    "FALLBACK_REASON",
    "Scorecard",
    "generate_trading_signal",
    "score_signals",
    "percent_b",
    "pattern_points",
    "price_levels",
    "SignalService",
    "get_signal_service",
]
