"""Tests for trend strength and volatility scores."""

import pytest

from conftest import bars_from_closes, flat_bars, make_bar
from tradesignal.services.signals.scoring import clamp, trend_strength, volatility_score


class TestTrendStrength:
    def test_short_history_is_neutral(self, rising_bars):
        assert trend_strength(rising_bars[:19]) == 50.0

    def test_flat_is_neutral(self):
        assert trend_strength(flat_bars(30)) == 50.0

    def test_strong_uptrend_caps_at_100(self, rising_bars):
        assert trend_strength(rising_bars) == 100.0

    def test_strong_downtrend_floors_at_0(self, falling_bars):
        assert trend_strength(falling_bars) == 0.0

    def test_momentum_term(self):
        # flat history then a small final rise: only the momentum term and
        # the price-vs-average terms move the score
        closes = [100.0] * 29 + [100.5]
        score = trend_strength(bars_from_closes(closes))
        momentum = 0.5 * 3
        # price above both averages, SMA20 above SMA30
        assert score == pytest.approx(50 + 15 + 10 + 10 + momentum)

    def test_bounded(self, wavy_bars):
        for n in range(20, len(wavy_bars) + 1):
            assert 0 <= trend_strength(wavy_bars[:n]) <= 100


class TestVolatilityScore:
    def test_short_history_is_neutral(self):
        assert volatility_score(flat_bars(13)) == 50.0

    def test_atr_unavailable_is_neutral(self):
        # 14 bars pass the length check but ATR needs 15
        assert volatility_score(flat_bars(14)) == 50.0

    def test_two_percent_atr_scores_50(self):
        bars = [make_bar(i, 100.0, 101.0, 99.0, 100.0) for i in range(20)]
        assert volatility_score(bars) == pytest.approx(50.0)

    def test_flat_is_zero(self):
        assert volatility_score(flat_bars(30)) == 0.0

    def test_capped_at_100(self):
        bars = [make_bar(i, 100.0, 110.0, 90.0, 100.0) for i in range(20)]
        assert volatility_score(bars) == 100.0


def test_clamp():
    assert clamp(-5, 0, 100) == 0
    assert clamp(150, 0, 100) == 100
    assert clamp(42.5, 0, 100) == 42.5
