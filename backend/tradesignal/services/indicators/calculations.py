"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic.

Array functions (``*_series``) return one value per input point and pad
with NaN until the lookback is satisfied. Scalar functions evaluate the
indicator as of the last point and return None instead of NaN when the
history is too short.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from tradesignal.schemas.market import OHLCV
from tradesignal.schemas.signals import (
    MACDValue,
    BollingerBandsValue,
    StochasticValue,
)


@dataclass(frozen=True)
class OHLCVData:
    """OHLCV data arrays for calculations."""

    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    @classmethod
    def from_bars(cls, bars: Sequence[OHLCV]) -> "OHLCVData":
        return cls(
            opens=np.array([b.open for b in bars], dtype=float),
            highs=np.array([b.high for b in bars], dtype=float),
            lows=np.array([b.low for b in bars], dtype=float),
            closes=np.array([b.close for b in bars], dtype=float),
            volumes=np.array([b.volume for b in bars], dtype=float),
        )

    def __len__(self) -> int:
        return len(self.closes)


def _as_array(prices) -> np.ndarray:
    return np.asarray(prices, dtype=float)


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")


def get_last_valid(arr: np.ndarray) -> Optional[float]:
    """Get last non-NaN value from array."""
    if len(arr) == 0:
        return None
    valid = arr[~np.isnan(arr)]
    return float(valid[-1]) if len(valid) > 0 else None


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma_series(data: np.ndarray, period: int) -> np.ndarray:
    """Simple Moving Average."""
    _check_period(period)
    data = _as_array(data)
    result = np.full(len(data), np.nan)
    if len(data) < period:
        return result

    for i in range(period - 1, len(data)):
        result[i] = np.mean(data[i - period + 1 : i + 1])
    return result


def ema_series(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average.

    Seeded with the SMA of the first ``period`` points and walked forward
    over the whole array, so result[i] is the EMA of data[: i + 1].
    """
    _check_period(period)
    data = _as_array(data)
    result = np.full(len(data), np.nan)
    if len(data) < period:
        return result

    multiplier = 2 / (period + 1)

    # Start with SMA
    result[period - 1] = np.mean(data[:period])

    for i in range(period, len(data)):
        result[i] = (data[i] - result[i - 1]) * multiplier + result[i - 1]

    return result


def sma(prices: Sequence[float], period: int) -> Optional[float]:
    """Mean of the last ``period`` prices."""
    _check_period(period)
    closes = _as_array(prices)
    if len(closes) < period:
        return None
    return float(np.mean(closes[-period:]))


def ema(prices: Sequence[float], period: int) -> Optional[float]:
    """EMA as of the last price, seeded from the start of the array."""
    return get_last_valid(ema_series(prices, period))


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi_series(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """Relative Strength Index (Wilder smoothing)."""
    _check_period(period)
    closes = _as_array(closes)
    result = np.full(len(closes), np.nan)
    if len(closes) < period + 1:
        return result

    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average
    avg_gain = np.mean(gains[:period])
    avg_loss = np.mean(losses[:period])

    if avg_loss == 0:
        result[period] = 100
    else:
        rs = avg_gain / avg_loss
        result[period] = 100 - (100 / (1 + rs))

    # Subsequent RSI values using smoothed averages
    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period

        if avg_loss == 0:
            result[i + 1] = 100
        else:
            rs = avg_gain / avg_loss
            result[i + 1] = 100 - (100 / (1 + rs))

    return result


def rsi(prices: Sequence[float], period: int = 14) -> Optional[float]:
    """RSI as of the last price. Needs ``period + 1`` prices."""
    return get_last_valid(rsi_series(prices, period))


def macd(
    prices: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> Optional[MACDValue]:
    """
    MACD (Moving Average Convergence Divergence).

    The signal line is the EMA of the MACD history from index
    ``slow_period`` onward, each point being fast EMA minus slow EMA of the
    prefix ending there. Both EMA arrays are full-prefix walks, so reading
    them index by index equals re-evaluating every prefix from scratch.
    Falls back to signal == value while that history is shorter than
    ``signal_period``.
    """
    closes = _as_array(prices)
    if len(closes) < max(fast_period, slow_period):
        return None

    macd_line = ema_series(closes, fast_period) - ema_series(closes, slow_period)
    value = float(macd_line[-1])

    signal = ema(macd_line[slow_period:], signal_period)
    if signal is None:
        signal = value

    return MACDValue(value=value, signal=signal, histogram=value - signal)


def _percent_k(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, end: int, period: int
) -> float:
    highest_high = np.max(highs[end - period : end])
    lowest_low = np.min(lows[end - period : end])

    if highest_high == lowest_low:
        return 50.0
    return float((closes[end - 1] - lowest_low) / (highest_high - lowest_low) * 100)


def stochastic(
    bars: Sequence[OHLCV], period: int = 14, d_period: int = 3
) -> Optional[StochasticValue]:
    """
    Stochastic Oscillator.

    %D averages the last ``d_period`` %K values (fewer when only that many
    full windows exist).
    """
    _check_period(period)
    data = OHLCVData.from_bars(bars)
    n = len(data)
    if n < period:
        return None

    k_values = [
        _percent_k(data.highs, data.lows, data.closes, end, period)
        for end in range(max(period, n - d_period + 1), n + 1)
    ]

    return StochasticValue(k=k_values[-1], d=float(np.mean(k_values)))


def williams_r(bars: Sequence[OHLCV], period: int = 14) -> Optional[float]:
    """Williams %R on the trailing window, -50 when the window has no range."""
    _check_period(period)
    data = OHLCVData.from_bars(bars)
    if len(data) < period:
        return None

    highest_high = np.max(data.highs[-period:])
    lowest_low = np.min(data.lows[-period:])

    if highest_high == lowest_low:
        return -50.0
    return float((highest_high - data.closes[-1]) / (highest_high - lowest_low) * -100)


def cci(bars: Sequence[OHLCV], period: int = 20) -> Optional[float]:
    """Commodity Channel Index, 0 when the mean deviation is 0."""
    _check_period(period)
    data = OHLCVData.from_bars(bars)
    if len(data) < period:
        return None

    typical_price = (data.highs + data.lows + data.closes) / 3
    window = typical_price[-period:]
    tp_sma = np.mean(window)
    mean_dev = np.mean(np.abs(window - tp_sma))

    if mean_dev == 0:
        return 0.0
    return float((typical_price[-1] - tp_sma) / (0.015 * mean_dev))


def mfi(bars: Sequence[OHLCV], period: int = 14) -> Optional[float]:
    """Money Flow Index over the last ``period`` bar-to-bar moves."""
    _check_period(period)
    data = OHLCVData.from_bars(bars)
    n = len(data)
    if n < period + 1:
        return None

    typical_price = (data.highs + data.lows + data.closes) / 3
    raw_money_flow = typical_price * data.volumes

    pos_sum = 0.0
    neg_sum = 0.0
    for i in range(n - period, n):
        if typical_price[i] > typical_price[i - 1]:
            pos_sum += raw_money_flow[i]
        elif typical_price[i] < typical_price[i - 1]:
            neg_sum += raw_money_flow[i]

    if neg_sum == 0:
        return 100.0
    money_ratio = pos_sum / neg_sum
    return float(100 - (100 / (1 + money_ratio)))


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(data: OHLCVData) -> np.ndarray:
    """True range of every bar after the first."""
    if len(data) < 2:
        return np.array([], dtype=float)

    prev_close = data.closes[:-1]
    return np.maximum(
        data.highs[1:] - data.lows[1:],
        np.maximum(
            np.abs(data.highs[1:] - prev_close),
            np.abs(data.lows[1:] - prev_close),
        ),
    )


def atr(bars: Sequence[OHLCV], period: int = 14) -> Optional[float]:
    """Average True Range: simple mean of the last ``period`` true ranges."""
    _check_period(period)
    data = OHLCVData.from_bars(bars)
    if len(data) < period + 1:
        return None

    tr = true_range(data)
    return float(np.mean(tr[-period:]))


def bollinger_bands(
    prices: Sequence[float], period: int = 20, num_std: float = 2.0
) -> Optional[BollingerBandsValue]:
    """
    Bollinger Bands on the last ``period`` prices.

    Uses the population standard deviation. Width is the band spread as a
    percentage of the middle band.
    """
    _check_period(period)
    closes = _as_array(prices)
    if len(closes) < period:
        return None

    window = closes[-period:]
    middle = float(np.mean(window))
    std = float(np.std(window))

    upper = middle + num_std * std
    lower = middle - num_std * std

    return BollingerBandsValue(
        upper=upper,
        middle=middle,
        lower=lower,
        width=(upper - lower) / middle * 100,
    )


def bollinger_series(
    closes: np.ndarray, period: int = 20, num_std: float = 2.0
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Bollinger Bands for every point.

    Returns: (upper, middle, lower)
    """
    closes = _as_array(closes)
    middle = sma_series(closes, period)

    std = np.full(len(closes), np.nan)
    for i in range(period - 1, len(closes)):
        std[i] = np.std(closes[i - period + 1 : i + 1])

    upper = middle + (num_std * std)
    lower = middle - (num_std * std)

    return upper, middle, lower


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def vwap(bars: Sequence[OHLCV]) -> Optional[float]:
    """Volume Weighted Average Price over the whole supplied series."""
    data = OHLCVData.from_bars(bars)
    if len(data) == 0:
        return None

    typical_price = (data.highs + data.lows + data.closes) / 3
    cumulative_volume = np.sum(data.volumes)
    if cumulative_volume == 0:
        return None
    return float(np.sum(typical_price * data.volumes) / cumulative_volume)


def obv(bars: Sequence[OHLCV]) -> Optional[float]:
    """On-Balance Volume, starting from 0 at the first bar."""
    data = OHLCVData.from_bars(bars)
    if len(data) == 0:
        return None

    result = 0.0
    for i in range(1, len(data)):
        if data.closes[i] > data.closes[i - 1]:
            result += data.volumes[i]
        elif data.closes[i] < data.closes[i - 1]:
            result -= data.volumes[i]

    return float(result)


# =============================================================================
# TREND INDICATORS
# =============================================================================


def adx(bars: Sequence[OHLCV], period: int = 14) -> Optional[float]:
    """
    Directional movement index as of the last bar.

    +DM, -DM and TR are EMA-smoothed and the instantaneous DX is returned.
    There is no second smoothing pass over DX.
    """
    _check_period(period)
    data = OHLCVData.from_bars(bars)
    if len(data) < period + 1:
        return None

    up_move = data.highs[1:] - data.highs[:-1]
    down_move = data.lows[:-1] - data.lows[1:]

    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)
    tr = true_range(data)

    # Smooth the values
    smoothed_plus_dm = ema(plus_dm, period)
    smoothed_minus_dm = ema(minus_dm, period)
    smoothed_tr = ema(tr, period)

    if smoothed_tr == 0:
        plus_di = minus_di = 0.0
    else:
        plus_di = 100 * smoothed_plus_dm / smoothed_tr
        minus_di = 100 * smoothed_minus_dm / smoothed_tr

    di_sum = plus_di + minus_di
    if di_sum == 0:
        return 0.0
    return float(100 * abs(plus_di - minus_di) / di_sum)
