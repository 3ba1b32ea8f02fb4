"""Shared fixtures for tradesignal tests."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from tradesignal.schemas.market import OHLCV

BASE_TS = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


def make_bar(
    i: int,
    open: float,
    high: float,
    low: float,
    close: float,
    volume: float = 1000.0,
) -> OHLCV:
    return OHLCV(
        timestamp=BASE_TS + timedelta(minutes=5 * i),
        open=open,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )


def bars_from_closes(
    closes: list[float], spread: float = 0.5, volume: float = 1000.0
) -> list[OHLCV]:
    """Each bar opens at the previous close and extends ``spread`` past its body."""
    bars = []
    for i, close in enumerate(closes):
        open_ = closes[i - 1] if i > 0 else close
        bars.append(make_bar(
            i,
            open=open_,
            high=max(open_, close) + spread,
            low=min(open_, close) - spread,
            close=close,
            volume=volume,
        ))
    return bars


def flat_bars(n: int = 30, price: float = 100.0, volume: float = 1000.0) -> list[OHLCV]:
    return [make_bar(i, price, price, price, price, volume) for i in range(n)]


def range_bars(closes: list[float], high: float, low: float) -> list[OHLCV]:
    """Bars pinned to one high/low band, opening at their close."""
    return [make_bar(i, c, high, low, c) for i, c in enumerate(closes)]


@pytest.fixture
def rising_bars() -> list[OHLCV]:
    """30 bars, closes 100..129, constant volume."""
    return bars_from_closes([100.0 + i for i in range(30)])


@pytest.fixture
def falling_bars() -> list[OHLCV]:
    """30 bars, closes 129..100, constant volume."""
    return bars_from_closes([129.0 - i for i in range(30)])


@pytest.fixture
def wavy_bars() -> list[OHLCV]:
    """80 bars of a drifting sine wave with varying volume."""
    closes = [100 + 0.1 * i + 5 * math.sin(i / 4) for i in range(80)]
    bars = bars_from_closes(closes, spread=0.8)
    return [
        bar.model_copy(update={"volume": 1000.0 + 250 * (i % 7)})
        for i, bar in enumerate(bars)
    ]
