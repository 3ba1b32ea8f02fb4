"""
API v1 Router

All API endpoints for the dashboard.
"""

from fastapi import APIRouter

from tradesignal.api.v1.endpoints import indicators, signals

router = APIRouter()

# Include all endpoint routers
router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
router.include_router(signals.router, prefix="/signals", tags=["Signals"])
