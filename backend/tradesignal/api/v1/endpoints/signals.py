"""
Signal API Endpoints

Composite BUY / SELL / HOLD recommendation for a posted bar series.
"""

import logging

from fastapi import APIRouter, HTTPException

from tradesignal.api.v1.endpoints.indicators import check_series_size
from tradesignal.schemas.market import BarSeries
from tradesignal.schemas.signals import SignalResponse
from tradesignal.services.base import ServiceError
from tradesignal.services.signals import get_signal_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=SignalResponse)
async def generate_signal(series: BarSeries):
    """
    Generate a trading signal for the latest bar.

    Example request:
    ```json
    {
        "symbol": "AAPL",
        "bars": [
            {"timestamp": "2024-02-05T09:30:00Z", "open": 187.1, "high": 188.2,
             "low": 186.9, "close": 187.95, "volume": 1250000}
        ]
    }
    ```

    The signal is advisory only. Nothing is executed or stored.
    """
    check_series_size(series)
    try:
        signal = await get_signal_service().execute(series)
    except ServiceError as e:
        logger.error(f"Signal generation failed for {series.symbol}: {e}")
        raise HTTPException(status_code=400, detail=e.message)

    return SignalResponse(
        symbol=series.symbol,
        bar_count=len(series.bars),
        as_of=series.bars[-1].timestamp,
        signal=signal,
    )
