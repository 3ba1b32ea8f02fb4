"""Tests for RSI, MACD, Bollinger Bands, Stochastic, Williams %R, CCI and MFI."""

import math

import pytest

from conftest import bars_from_closes, flat_bars, make_bar, range_bars
from tradesignal.services.indicators.calculations import (
    bollinger_bands,
    cci,
    ema,
    macd,
    mfi,
    rsi,
    stochastic,
    williams_r,
)


class TestRSI:
    def test_strictly_rising_is_100(self):
        assert rsi([100.0 + i for i in range(30)]) == 100.0

    def test_strictly_falling_is_0(self):
        assert rsi([100.0 - i for i in range(30)]) == 0.0

    def test_wilder_smoothing(self):
        # first averages 0.5 / 0.5, then gain (0.5 + 1) / 2, loss (0.5 + 0) / 2
        assert rsi([1.0, 2.0, 1.0, 2.0], period=2) == pytest.approx(75.0)

    def test_needs_period_plus_one(self):
        assert rsi([100.0 + i for i in range(14)]) is None
        assert rsi([100.0 + i for i in range(15)]) is not None

    def test_bounded(self, wavy_bars):
        closes = [b.close for b in wavy_bars]
        for n in range(15, len(closes) + 1):
            value = rsi(closes[:n])
            assert 0 <= value <= 100

    def test_flat_has_no_losses(self):
        assert rsi([50.0] * 20) == 100.0


class TestMACD:
    def test_unavailable_before_slow_period(self):
        assert macd([100.0 + i for i in range(25)]) is None

    def test_short_history_signal_falls_back_to_value(self):
        result = macd([100.0 + i * 0.5 for i in range(30)])
        assert result.signal == result.value
        assert result.histogram == 0.0

    def test_matches_prefix_recomputation(self, wavy_bars):
        closes = [b.close for b in wavy_bars]
        history = []
        for i in range(26, len(closes)):
            prefix = closes[: i + 1]
            history.append(ema(prefix, 12) - ema(prefix, 26))

        expected_value = ema(closes, 12) - ema(closes, 26)
        expected_signal = ema(history, 9)
        result = macd(closes)

        assert result.value == pytest.approx(expected_value, abs=1e-12)
        assert result.signal == pytest.approx(expected_signal, abs=1e-12)
        assert result.histogram == pytest.approx(expected_value - expected_signal, abs=1e-12)

    def test_flat_series(self):
        result = macd([100.0] * 60)
        assert result.value == pytest.approx(0.0)
        assert result.signal == pytest.approx(0.0)
        assert result.histogram == pytest.approx(0.0)


class TestBollingerBands:
    def test_known_values(self):
        prices = [float(i) for i in range(1, 21)]
        bands = bollinger_bands(prices)
        std = math.sqrt(399 / 12)

        assert bands.middle == pytest.approx(10.5)
        assert bands.upper == pytest.approx(10.5 + 2 * std)
        assert bands.lower == pytest.approx(10.5 - 2 * std)
        assert bands.width == pytest.approx(4 * std / 10.5 * 100)

    def test_ordering(self, wavy_bars):
        closes = [b.close for b in wavy_bars]
        for n in range(20, len(closes) + 1):
            bands = bollinger_bands(closes[:n])
            assert bands.upper >= bands.middle >= bands.lower
            assert bands.width >= 0

    def test_flat_series_has_zero_width(self):
        bands = bollinger_bands([100.0] * 25)
        assert bands.upper == bands.middle == bands.lower == 100.0
        assert bands.width == 0.0

    def test_insufficient_history(self):
        assert bollinger_bands([100.0] * 19) is None


class TestStochastic:
    def test_single_window(self):
        bars = range_bars([100.0] * 13 + [105.0], high=110.0, low=90.0)
        result = stochastic(bars)
        assert result.k == pytest.approx(75.0)
        assert result.d == pytest.approx(75.0)

    def test_d_averages_last_three_k(self):
        bars = range_bars([100.0] * 13 + [95.0, 100.0, 105.0], high=110.0, low=90.0)
        result = stochastic(bars)
        assert result.k == pytest.approx(75.0)
        assert result.d == pytest.approx(50.0)

    def test_zero_range_is_50(self):
        result = stochastic(flat_bars(20))
        assert result.k == 50.0
        assert result.d == 50.0

    def test_bounded(self, wavy_bars):
        for n in range(14, len(wavy_bars) + 1):
            result = stochastic(wavy_bars[:n])
            assert 0 <= result.k <= 100
            assert 0 <= result.d <= 100

    def test_insufficient_history(self):
        assert stochastic(flat_bars(13)) is None


class TestWilliamsR:
    def test_known_value(self):
        bars = range_bars([100.0] * 13 + [105.0], high=110.0, low=90.0)
        assert williams_r(bars) == pytest.approx(-25.0)

    def test_zero_range(self):
        assert williams_r(flat_bars(14)) == -50.0

    def test_insufficient_history(self):
        assert williams_r(flat_bars(13)) is None


class TestCCI:
    def test_known_value(self):
        bars = [make_bar(i, c, c, c, c) for i, c in enumerate(float(x) for x in range(1, 21))]
        # mean 10.5, mean absolute deviation 5
        assert cci(bars) == pytest.approx(9.5 / (0.015 * 5))

    def test_zero_deviation(self):
        assert cci(flat_bars(20)) == 0.0

    def test_insufficient_history(self):
        assert cci(flat_bars(19)) is None


class TestMFI:
    def test_rising_has_no_negative_flow(self):
        bars = bars_from_closes([100.0 + i for i in range(20)])
        assert mfi(bars) == 100.0

    def test_falling_has_no_positive_flow(self):
        bars = bars_from_closes([120.0 - i for i in range(20)])
        assert mfi(bars) == pytest.approx(0.0)

    def test_flat_series(self):
        assert mfi(flat_bars(20)) == 100.0

    def test_known_ratio(self):
        # typical prices alternate 10 / 12 with equal volume:
        # 7 rises at 12 and 7 falls at 10 in the last 14 moves
        closes = [10.0, 12.0] * 8
        bars = [make_bar(i, c, c, c, c, volume=100.0) for i, c in enumerate(closes)]
        ratio = (7 * 12 * 100) / (7 * 10 * 100)
        assert mfi(bars) == pytest.approx(100 - 100 / (1 + ratio))

    def test_needs_period_plus_one(self):
        assert mfi(flat_bars(14)) is None
        assert mfi(flat_bars(15)) is not None
