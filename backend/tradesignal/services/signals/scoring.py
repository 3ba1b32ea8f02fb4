"""
Trend and Volatility Scores

Both scores live on a 0-100 scale with 50 as the neutral value returned
when the series is too short to say anything.
"""

from typing import Sequence

from tradesignal.schemas.market import OHLCV
from tradesignal.services.indicators.calculations import sma, atr

NEUTRAL_SCORE = 50.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _side(a: float, b: float, points: float) -> float:
    """+points if a is above b, -points if below, 0 on a tie."""
    if a > b:
        return points
    if a < b:
        return -points
    return 0.0


def trend_strength(bars: Sequence[OHLCV]) -> float:
    """
    Score how strongly price is trending up (100) or down (0).

    Starts at 50 and adds:
    - +/-15 for price above/below SMA20
    - +/-10 for price above/below the long SMA (50, or the whole series when shorter)
    - +/-10 for SMA20 above/below the long SMA
    - change over the last 10 bars in percent, times 3, capped at +/-15
    """
    if len(bars) < 20:
        return NEUTRAL_SCORE

    closes = [b.close for b in bars]
    price = closes[-1]
    sma_20 = sma(closes, 20)
    sma_long = sma(closes, min(50, len(closes)))

    score = NEUTRAL_SCORE
    score += _side(price, sma_20, 15)
    score += _side(price, sma_long, 10)
    score += _side(sma_20, sma_long, 10)

    lookback = min(10, len(closes) - 1)
    base = closes[-1 - lookback]
    recent_change = (price - base) / base * 100
    score += clamp(recent_change * 3, -15, 15)

    return clamp(score, 0, 100)


def volatility_score(bars: Sequence[OHLCV]) -> float:
    """
    ATR as a percent of price, scaled so that a 2% ATR scores 50.
    """
    if len(bars) < 14:
        return NEUTRAL_SCORE

    current_atr = atr(bars, 14)
    if current_atr is None:
        return NEUTRAL_SCORE

    price = bars[-1].close
    return clamp(current_atr / price * 100 * 25, 0, 100)
