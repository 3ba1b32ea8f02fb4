"""
Candlestick Pattern Detection

Detects single and multi-bar candlestick formations on the trailing bars
of a series. Every rule is checked against the latest bar, so one bar can
match several patterns at once.
"""

import logging
from typing import Sequence

from tradesignal.schemas.market import OHLCV
from tradesignal.schemas.signals import PatternDirection, PatternMatch, PatternName

logger = logging.getLogger(__name__)

MIN_BARS = 5

PATTERN_STRENGTH = {
    PatternName.DOJI: 70,
    PatternName.HAMMER: 75,
    PatternName.SHOOTING_STAR: 75,
    PatternName.BULLISH_ENGULFING: 80,
    PatternName.BEARISH_ENGULFING: 80,
    PatternName.MORNING_STAR: 85,
}

PATTERN_DESCRIPTIONS = {
    PatternName.DOJI: "Indecision candle, open and close nearly equal",
    PatternName.HAMMER: "Long lower wick after selling pressure, potential bullish reversal",
    PatternName.SHOOTING_STAR: "Long upper wick rejected at the highs, potential bearish reversal",
    PatternName.BULLISH_ENGULFING: "Bullish body engulfs the prior bearish body",
    PatternName.BEARISH_ENGULFING: "Bearish body engulfs the prior bullish body",
    PatternName.MORNING_STAR: "Three-bar bullish reversal after a decline",
}


# =============================================================================
# CANDLE GEOMETRY
# =============================================================================


def body(bar: OHLCV) -> float:
    return abs(bar.close - bar.open)


def bar_range(bar: OHLCV) -> float:
    return bar.high - bar.low


def upper_wick(bar: OHLCV) -> float:
    return bar.high - max(bar.open, bar.close)


def lower_wick(bar: OHLCV) -> float:
    return min(bar.open, bar.close) - bar.low


def is_bullish(bar: OHLCV) -> bool:
    return bar.close > bar.open


def is_bearish(bar: OHLCV) -> bool:
    return bar.close < bar.open


# =============================================================================
# PATTERN RULES
# =============================================================================


def is_doji(bar: OHLCV) -> bool:
    """Body smaller than 10% of the bar's range."""
    return body(bar) < bar_range(bar) * 0.1


def is_hammer(bar: OHLCV) -> bool:
    return (
        lower_wick(bar) > 2 * body(bar)
        and upper_wick(bar) < 0.5 * body(bar)
        and is_bullish(bar)
    )


def is_shooting_star(bar: OHLCV) -> bool:
    return (
        upper_wick(bar) > 2 * body(bar)
        and lower_wick(bar) < 0.5 * body(bar)
        and is_bearish(bar)
    )


def is_bullish_engulfing(prev: OHLCV, curr: OHLCV) -> bool:
    """Current bullish body strictly contains the previous bearish body."""
    return (
        is_bearish(prev)
        and is_bullish(curr)
        and curr.open < prev.close
        and curr.close > prev.open
    )


def is_bearish_engulfing(prev: OHLCV, curr: OHLCV) -> bool:
    """Current bearish body strictly contains the previous bullish body."""
    return (
        is_bullish(prev)
        and is_bearish(curr)
        and curr.open > prev.close
        and curr.close < prev.open
    )


def is_morning_star(first: OHLCV, middle: OHLCV, third: OHLCV) -> bool:
    first_midpoint = (first.open + first.close) / 2
    return (
        is_bearish(first)
        and body(middle) < bar_range(first) * 0.3
        and is_bullish(third)
        and third.close > first_midpoint
    )


def _match(name: PatternName, direction: PatternDirection) -> PatternMatch:
    return PatternMatch(
        name=name,
        direction=direction,
        strength=PATTERN_STRENGTH[name],
        description=PATTERN_DESCRIPTIONS[name],
    )


def detect_patterns(bars: Sequence[OHLCV]) -> list[PatternMatch]:
    """
    Scan the last three bars for candlestick formations.

    Returns matches in evaluation order: Doji, Hammer, Shooting Star,
    Bullish Engulfing, Bearish Engulfing, Morning Star. Series shorter
    than MIN_BARS yield no matches. Only the last three bars are inspected;
    the two before them count toward MIN_BARS but never affect a match.
    """
    if len(bars) < MIN_BARS:
        return []

    first, prev, curr = bars[-3], bars[-2], bars[-1]
    matches = []

    if is_doji(curr):
        matches.append(_match(PatternName.DOJI, PatternDirection.NEUTRAL))
    if is_hammer(curr):
        matches.append(_match(PatternName.HAMMER, PatternDirection.BULLISH))
    if is_shooting_star(curr):
        matches.append(_match(PatternName.SHOOTING_STAR, PatternDirection.BEARISH))
    if is_bullish_engulfing(prev, curr):
        matches.append(_match(PatternName.BULLISH_ENGULFING, PatternDirection.BULLISH))
    if is_bearish_engulfing(prev, curr):
        matches.append(_match(PatternName.BEARISH_ENGULFING, PatternDirection.BEARISH))
    if is_morning_star(first, prev, curr):
        matches.append(_match(PatternName.MORNING_STAR, PatternDirection.BULLISH))

    if matches:
        logger.debug(f"Patterns on last bar: {[m.name.value for m in matches]}")
    return matches
