"""
CONTRACT 1: Bar Series

Input to the Signal Engine.

Bars are produced by an external market-data source and handed to the
engine read-only. The engine never mutates them.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


# =============================================================================
# BAR
# =============================================================================


class OHLCV(BaseModel):
    """Single candlestick data point."""

    timestamp: datetime
    open: float = Field(..., gt=0)
    high: float = Field(..., gt=0)
    low: float = Field(..., gt=0)
    close: float = Field(..., gt=0)
    volume: float = Field(..., ge=0)

    class Config:
        frozen = True


# =============================================================================
# INPUT: BarSeries
# =============================================================================


class BarSeries(BaseModel):
    """
    Ordered OHLCV history for one instrument.
    Sent by: Market data source / API client
    Received by: Indicator Engine, Signal Synthesizer

    Timestamps must be strictly increasing and every bar must satisfy
    low <= min(open, close) <= max(open, close) <= high.
    """

    symbol: Optional[str] = Field(default=None, description="Instrument symbol")
    bars: list[OHLCV] = Field(..., description="Bars in ascending time order")

    @field_validator("bars")
    @classmethod
    def bars_must_be_well_formed(cls, v):
        for i, bar in enumerate(v):
            if not (bar.low <= min(bar.open, bar.close) <= max(bar.open, bar.close) <= bar.high):
                raise ValueError(f"bar {i} violates low <= open/close <= high")
            if i > 0 and bar.timestamp <= v[i - 1].timestamp:
                raise ValueError(f"bar {i} timestamp is not after bar {i - 1}")
        return v

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "symbol": "AAPL",
                "bars": [
                    {
                        "timestamp": "2024-02-05T09:30:00Z",
                        "open": 187.10,
                        "high": 188.20,
                        "low": 186.90,
                        "close": 187.95,
                        "volume": 1250000,
                    },
                    {
                        "timestamp": "2024-02-05T09:35:00Z",
                        "open": 187.95,
                        "high": 188.40,
                        "low": 187.50,
                        "close": 187.60,
                        "volume": 980000,
                    },
                ],
            }
        }
