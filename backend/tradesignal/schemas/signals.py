"""
CONTRACT 2: Signal Engine Output

Input: BarSeries
Output: IndicatorSnapshot, PatternMatch list, TradingSignal

Every indicator field is optional. A missing value means the series was
too short for that indicator's lookback, never a fabricated number.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class PatternDirection(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class PatternName(str, Enum):
    DOJI = "Doji"
    HAMMER = "Hammer"
    SHOOTING_STAR = "Shooting Star"
    BULLISH_ENGULFING = "Bullish Engulfing"
    BEARISH_ENGULFING = "Bearish Engulfing"
    MORNING_STAR = "Morning Star"


# =============================================================================
# OUTPUT: Indicator Components
# =============================================================================


class MACDValue(BaseModel):
    """MACD indicator values."""

    value: float
    signal: float
    histogram: float

    class Config:
        frozen = True


class BollingerBandsValue(BaseModel):
    """Bollinger Bands values."""

    upper: float
    middle: float
    lower: float
    width: float = Field(..., ge=0, description="Band width as % of middle band")

    class Config:
        frozen = True


class StochasticValue(BaseModel):
    """Stochastic oscillator values."""

    k: float = Field(..., ge=0, le=100)
    d: float = Field(..., ge=0, le=100)

    class Config:
        frozen = True


class IndicatorSnapshot(BaseModel):
    """
    Indicator values as of the last bar in the series.
    Returned by: Indicator Service
    Consumed by: Signal Synthesizer, presentation layer
    """

    rsi: Optional[float] = Field(default=None, ge=0, le=100)
    macd: Optional[MACDValue] = None
    sma20: Optional[float] = None
    sma50: Optional[float] = None
    sma200: Optional[float] = None
    ema9: Optional[float] = None
    ema12: Optional[float] = None
    ema26: Optional[float] = None
    bollinger_bands: Optional[BollingerBandsValue] = None
    atr: Optional[float] = Field(default=None, ge=0)
    vwap: Optional[float] = None
    stochastic: Optional[StochasticValue] = None
    obv: Optional[float] = None
    adx: Optional[float] = Field(default=None, ge=0, le=100)
    cci: Optional[float] = None
    williams_r: Optional[float] = Field(default=None, ge=-100, le=0)
    mfi: Optional[float] = Field(default=None, ge=0, le=100)

    class Config:
        frozen = True


class OverlayPoint(BaseModel):
    """One chart point: indicators evaluated on the prefix ending at this bar."""

    timestamp: datetime
    close: float
    sma20: Optional[float] = None
    ema12: Optional[float] = None
    bb_upper: Optional[float] = None
    bb_middle: Optional[float] = None
    bb_lower: Optional[float] = None

    class Config:
        frozen = True


class PatternMatch(BaseModel):
    """Candlestick formation found in the trailing bars."""

    name: PatternName
    direction: PatternDirection
    strength: float = Field(..., ge=0, le=100)
    description: str

    class Config:
        frozen = True


# =============================================================================
# OUTPUT: TradingSignal (Complete Response)
# =============================================================================


class TradingSignal(BaseModel):
    """
    Composite recommendation for the latest bar.
    Returned by: Signal Synthesizer
    Consumed by: presentation layer (rendered verbatim)
    """

    signal: SignalType
    confidence: int = Field(..., ge=35, le=95)
    reasons: list[str] = Field(..., min_length=1)
    target_price: float
    stop_loss: float
    risk_reward: float = Field(..., ge=0, description="0 when price equals stop")
    indicators: IndicatorSnapshot
    patterns: list[PatternMatch] = Field(default_factory=list)
    trend_strength: float = Field(..., ge=0, le=100)
    volatility: float = Field(..., ge=0, le=100)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "signal": "BUY",
                "confidence": 78,
                "reasons": [
                    "RSI oversold at 31.4",
                    "MACD bullish crossover confirmed",
                ],
                "target_price": 192.61,
                "stop_loss": 184.24,
                "risk_reward": 1.5,
                "indicators": {"rsi": 31.4, "sma20": 186.2},
                "patterns": [],
                "trend_strength": 62.0,
                "volatility": 41.5,
            }
        }


class SignalResponse(BaseModel):
    """Signal endpoint payload."""

    symbol: Optional[str] = None
    bar_count: int = Field(..., ge=0)
    as_of: datetime
    signal: TradingSignal
