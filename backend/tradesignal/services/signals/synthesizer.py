"""
Signal Synthesizer

Combines the indicator snapshot and candlestick patterns into a single
BUY / SELL / HOLD call with confidence, target, stop and risk/reward.

Scoring rules (points are additive, several rules of one indicator can fire):

    RSI          <25 bull 15 | <35 bull 10 | >75 bear 15 | >65 bear 10
                 otherwise >50 bull 3, <=50 bear 3
    MACD         histogram >0 bull 8, +7 if value > signal
                 histogram <=0 bear 8, +7 if value < signal
    SMA20/SMA50  SMA20 > SMA50 bull 10, +10 if price > SMA20
                 otherwise bear 10, +10 if price < SMA20
    Bollinger %B <0.1 bull 12 | >0.9 bear 12 | <0.3 bull 6 | >0.7 bear 6
    Stochastic   K,D <20 bull 10 | K,D >80 bear 10
                 K>D and K<30 bull 5 | K<D and K>70 bear 5
    ADX          >25 adds 8 to the side leading so far
    CCI          <-100 bull 8 | >100 bear 8
    Williams %R  <-80 bull 5 | >-20 bear 5
    MFI          <20 bull 8 | >80 bear 8
    Patterns     round(strength / 100 * 15) to the pattern's side

Net score above 20 is a BUY, below -20 a SELL, anything else a HOLD.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from tradesignal.schemas.market import OHLCV
from tradesignal.schemas.signals import (
    IndicatorSnapshot,
    PatternDirection,
    PatternMatch,
    SignalType,
    TradingSignal,
)
from tradesignal.services.indicators.service import calculate_all_indicators
from tradesignal.services.patterns.candlesticks import detect_patterns
from tradesignal.services.signals.scoring import clamp, trend_strength, volatility_score

logger = logging.getLogger(__name__)

BUY_THRESHOLD = 20
SELL_THRESHOLD = -20
MIN_CONFIDENCE = 35
MAX_CONFIDENCE = 95
NEUTRAL_CONFIDENCE = 50
FALLBACK_ATR_PERCENT = 0.02
TARGET_TO_STOP_RATIO = 1.5
FALLBACK_REASON = "Mixed signals - waiting for clearer market direction"


@dataclass
class Scorecard:
    """Running bullish/bearish tally and the reasons behind it."""

    bullish: int = 0
    bearish: int = 0
    reasons: list[str] = field(default_factory=list)

    def bull(self, points: int, reason: Optional[str] = None) -> None:
        self.bullish += points
        if reason:
            self.reasons.append(reason)

    def bear(self, points: int, reason: Optional[str] = None) -> None:
        self.bearish += points
        if reason:
            self.reasons.append(reason)

    @property
    def net(self) -> int:
        return self.bullish - self.bearish

    @property
    def total(self) -> int:
        return self.bullish + self.bearish


# =============================================================================
# INDICATOR RULES
# =============================================================================


def _score_rsi(card: Scorecard, rsi: Optional[float]) -> None:
    if rsi is None:
        return
    if rsi < 25:
        card.bull(15, f"RSI extremely oversold at {rsi:.1f}")
    elif rsi < 35:
        card.bull(10, f"RSI oversold at {rsi:.1f}")
    elif rsi > 75:
        card.bear(15, f"RSI extremely overbought at {rsi:.1f}")
    elif rsi > 65:
        card.bear(10, f"RSI overbought at {rsi:.1f}")
    elif rsi > 50:
        card.bull(3)
    else:
        card.bear(3)


def _score_macd(card: Scorecard, snapshot: IndicatorSnapshot) -> None:
    macd = snapshot.macd
    if macd is None:
        return
    if macd.histogram > 0:
        card.bull(8)
        if macd.value > macd.signal:
            card.bull(7, "MACD bullish crossover confirmed")
    else:
        card.bear(8)
        if macd.value < macd.signal:
            card.bear(7, "MACD bearish crossover confirmed")


def _score_moving_averages(
    card: Scorecard, snapshot: IndicatorSnapshot, price: float
) -> None:
    if snapshot.sma20 is None or snapshot.sma50 is None:
        return
    if snapshot.sma20 > snapshot.sma50:
        card.bull(10)
        if price > snapshot.sma20:
            card.bull(10, "Golden cross with price above SMA20")
    else:
        card.bear(10)
        if price < snapshot.sma20:
            card.bear(10, "Death cross with price below SMA20")


def percent_b(price: float, upper: float, lower: float) -> float:
    """Position of price inside the band, 0.5 for a zero-width band."""
    if upper == lower:
        return 0.5
    return (price - lower) / (upper - lower)


def _score_bollinger(card: Scorecard, snapshot: IndicatorSnapshot, price: float) -> None:
    bands = snapshot.bollinger_bands
    if bands is None:
        return
    position = percent_b(price, bands.upper, bands.lower)
    if position < 0.1:
        card.bull(12, "Price at lower Bollinger Band (potential reversal)")
    elif position > 0.9:
        card.bear(12, "Price at upper Bollinger Band (potential reversal)")
    elif position < 0.3:
        card.bull(6)
    elif position > 0.7:
        card.bear(6)


def _score_stochastic(card: Scorecard, snapshot: IndicatorSnapshot) -> None:
    stoch = snapshot.stochastic
    if stoch is None:
        return
    if stoch.k < 20 and stoch.d < 20:
        card.bull(10, f"Stochastic oversold (K: {stoch.k:.1f}, D: {stoch.d:.1f})")
    elif stoch.k > 80 and stoch.d > 80:
        card.bear(10, f"Stochastic overbought (K: {stoch.k:.1f}, D: {stoch.d:.1f})")
    elif stoch.k > stoch.d and stoch.k < 30:
        card.bull(5)
    elif stoch.k < stoch.d and stoch.k > 70:
        card.bear(5)


def _score_adx(card: Scorecard, adx: Optional[float]) -> None:
    if adx is None or adx <= 25:
        return
    reason = f"Strong trend (ADX: {adx:.1f})"
    if card.bullish > card.bearish:
        card.bull(8, reason)
    elif card.bearish > card.bullish:
        card.bear(8, reason)
    else:
        card.reasons.append(reason)


def _score_cci(card: Scorecard, cci: Optional[float]) -> None:
    if cci is None:
        return
    if cci < -100:
        card.bull(8)
    elif cci > 100:
        card.bear(8)


def _score_williams_r(card: Scorecard, williams_r: Optional[float]) -> None:
    if williams_r is None:
        return
    if williams_r < -80:
        card.bull(5)
    elif williams_r > -20:
        card.bear(5)


def _score_mfi(card: Scorecard, mfi: Optional[float]) -> None:
    if mfi is None:
        return
    if mfi < 20:
        card.bull(8, f"MFI oversold at {mfi:.1f}")
    elif mfi > 80:
        card.bear(8, f"MFI overbought at {mfi:.1f}")


def pattern_points(strength: float) -> int:
    """Scale a 0-100 pattern strength to 0-15 points, rounding halves up."""
    return int(math.floor(strength / 100 * 15 + 0.5))


def _score_patterns(card: Scorecard, patterns: Sequence[PatternMatch]) -> None:
    for pattern in patterns:
        reason = f"{pattern.name.value}: {pattern.description}"
        if pattern.direction == PatternDirection.BULLISH:
            card.bull(pattern_points(pattern.strength), reason)
        elif pattern.direction == PatternDirection.BEARISH:
            card.bear(pattern_points(pattern.strength), reason)


def score_signals(
    snapshot: IndicatorSnapshot, patterns: Sequence[PatternMatch], price: float
) -> Scorecard:
    """Apply every rule in table order."""
    card = Scorecard()
    _score_rsi(card, snapshot.rsi)
    _score_macd(card, snapshot)
    _score_moving_averages(card, snapshot, price)
    _score_bollinger(card, snapshot, price)
    _score_stochastic(card, snapshot)
    _score_adx(card, snapshot.adx)
    _score_cci(card, snapshot.cci)
    _score_williams_r(card, snapshot.williams_r)
    _score_mfi(card, snapshot.mfi)
    _score_patterns(card, patterns)
    return card


# =============================================================================
# DECISION
# =============================================================================


def decide(net_score: int) -> SignalType:
    if net_score > BUY_THRESHOLD:
        return SignalType.BUY
    if net_score < SELL_THRESHOLD:
        return SignalType.SELL
    return SignalType.HOLD


def confidence_for(card: Scorecard) -> int:
    if card.total == 0:
        return NEUTRAL_CONFIDENCE
    return int(clamp(NEUTRAL_CONFIDENCE + abs(card.net), MIN_CONFIDENCE, MAX_CONFIDENCE))


def atr_multiplier(volatility: float) -> float:
    if volatility > 60:
        return 2.5
    if volatility > 40:
        return 2.0
    return 1.5


def price_levels(
    signal: SignalType, price: float, atr: Optional[float], volatility: float
) -> tuple[float, float, float]:
    """
    Target, stop and risk/reward for a call.

    Returns: (target_price, stop_loss, risk_reward)
    Risk/reward is 0 when the stop sits at the current price.
    """
    if atr is None:
        atr = price * FALLBACK_ATR_PERCENT
    stop_distance = atr * atr_multiplier(volatility)

    if signal == SignalType.BUY:
        target = price + stop_distance * TARGET_TO_STOP_RATIO
        stop = price - stop_distance
    elif signal == SignalType.SELL:
        target = price - stop_distance * TARGET_TO_STOP_RATIO
        stop = price + stop_distance
    else:
        target = stop = price

    risk = abs(price - stop)
    risk_reward = abs(target - price) / risk if risk > 0 else 0.0
    return target, stop, risk_reward


def generate_trading_signal(bars: Sequence[OHLCV]) -> TradingSignal:
    """
    Produce the trading signal for the latest bar.

    Indicators without enough history are skipped. Any non-empty series
    yields a signal; an empty one raises ValueError.
    """
    if len(bars) == 0:
        raise ValueError("Cannot generate a signal from an empty bar series")

    price = bars[-1].close
    snapshot = calculate_all_indicators(bars)
    patterns = detect_patterns(bars)
    trend = trend_strength(bars)
    volatility = volatility_score(bars)

    card = score_signals(snapshot, patterns, price)
    signal = decide(card.net)
    target, stop, risk_reward = price_levels(signal, price, snapshot.atr, volatility)
    reasons = card.reasons or [FALLBACK_REASON]

    logger.debug(
        f"Signal {signal.value}: bullish={card.bullish} bearish={card.bearish} "
        f"bars={len(bars)} patterns={len(patterns)}"
    )

    return TradingSignal(
        signal=signal,
        confidence=confidence_for(card),
        reasons=reasons,
        target_price=target,
        stop_loss=stop,
        risk_reward=risk_reward,
        indicators=snapshot,
        patterns=patterns,
        trend_strength=trend,
        volatility=volatility,
    )
