"""
TradeSignal Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradesignal.core.config import settings
from tradesignal.api.v1 import router as api_v1_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Max bars per request: {settings.max_bars}")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    TradeSignal Technical Analysis API

    ## Architecture
    - **Indicator Engine**: SMA/EMA, RSI, MACD, Bollinger, Stochastic, Williams %R, CCI, MFI, ATR, VWAP, OBV, ADX
    - **Pattern Detector**: Doji, Hammer, Shooting Star, Engulfing, Morning Star
    - **Signal Synthesizer**: weighted scoring into BUY / SELL / HOLD with ATR-based target and stop

    ## Core Principles
    - Pure functions of the posted bar series
    - No data fetching, no order placement, no persistence
    - Missing history yields null indicators, never made-up values
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "TradeSignal Engine API",
        "docs": "/docs",
        "health": "/health",
    }
