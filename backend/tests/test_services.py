"""Tests for the async service layer."""

import pytest

from tradesignal.schemas.market import BarSeries
from tradesignal.schemas.signals import IndicatorSnapshot, SignalType, TradingSignal
from tradesignal.services import InsufficientDataError, ServiceError, ValidationError
from tradesignal.services.indicators import IndicatorService, get_indicator_service
from tradesignal.services.signals import SignalService, get_signal_service


@pytest.fixture
def rising_series(rising_bars) -> BarSeries:
    return BarSeries(symbol="TEST", bars=rising_bars)


@pytest.fixture
def empty_series() -> BarSeries:
    return BarSeries(symbol="EMPTY", bars=[])


class TestIndicatorService:
    async def test_execute(self, rising_series):
        snapshot = await IndicatorService().execute(rising_series)
        assert isinstance(snapshot, IndicatorSnapshot)
        assert snapshot.rsi == 100.0
        assert snapshot.sma20 == pytest.approx(119.5)

    async def test_overlay(self, rising_series):
        points = await IndicatorService().overlay(rising_series)
        assert len(points) == 30
        assert all(p.sma20 is None for p in points[:19])
        assert points[19].sma20 == pytest.approx(109.5)
        assert points[11].ema12 == pytest.approx(105.5)
        assert points[-1].bb_middle == pytest.approx(points[-1].sma20)

    async def test_empty_series_rejected(self, empty_series):
        with pytest.raises(InsufficientDataError) as exc_info:
            await IndicatorService().execute(empty_series)
        error = exc_info.value
        assert isinstance(error, ValidationError)
        assert error.service_name == "IndicatorService"
        assert error.details == {"symbol": "EMPTY", "bar_count": 0}

    async def test_health_check(self):
        assert await IndicatorService().health_check() is True

    def test_singleton(self):
        assert get_indicator_service() is get_indicator_service()


class TestSignalService:
    async def test_execute(self, rising_series):
        signal = await SignalService().execute(rising_series)
        assert isinstance(signal, TradingSignal)
        assert signal.signal == SignalType.SELL

    async def test_matches_pure_function(self, wavy_bars):
        from tradesignal.services.signals import generate_trading_signal

        series = BarSeries(bars=wavy_bars)
        assert await SignalService().execute(series) == generate_trading_signal(wavy_bars)

    async def test_patterns(self, rising_series):
        assert await SignalService().patterns(rising_series) == []

    async def test_empty_series_rejected(self, empty_series):
        with pytest.raises(ServiceError):
            await SignalService().execute(empty_series)
        with pytest.raises(InsufficientDataError):
            await SignalService().patterns(empty_series)

    def test_singleton(self):
        assert get_signal_service() is get_signal_service()
