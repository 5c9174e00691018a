"""Historical candles endpoint."""

from __future__ import annotations

import logging
import re

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .errors import InvalidArgument
from .interface import DEFAULT_WINDOW_MINUTES, MarketDataSource

logger = logging.getLogger(__name__)

MAX_WINDOW_MINUTES = 5000

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_minutes(raw: str | None) -> int:
    """Best-effort window parsing.

    Anything that is not a plain integer in [1, MAX_WINDOW_MINUTES] silently
    becomes DEFAULT_WINDOW_MINUTES. Bad input is never a client error here.
    """
    if not raw or not _INTEGER.fullmatch(raw):
        return DEFAULT_WINDOW_MINUTES
    value = int(raw)
    if 1 <= value <= MAX_WINDOW_MINUTES:
        return value
    return DEFAULT_WINDOW_MINUTES


def require_symbol(symbol: str | None) -> str:
    if not symbol:
        raise InvalidArgument("symbol is required")
    return symbol


def create_candles_router(source: MarketDataSource) -> APIRouter:
    """Create the candles router with a reference to the market data source."""
    router = APIRouter(prefix="/api", tags=["candles"])

    @router.get("/candles")
    async def get_candles(symbol: str | None = None, minutes: str | None = None) -> JSONResponse:
        """1-minute OHLCV bars for the last `minutes` minutes (default 60).

        Responses:
            200 {"symbol", "status", "t", "o", "h", "l", "c", "v"}
            200 {"symbol", "status", "candles": []}   when there is no data
            400 {"error": "symbol is required"}
            500 {"error": "internal_error"}           upstream failed; details only in the log
        """
        try:
            symbol = require_symbol(symbol)
        except InvalidArgument as e:
            return JSONResponse(status_code=400, content={"error": str(e)})

        window = parse_minutes(minutes)
        try:
            bars = await source.get_bars(symbol, window)
        except Exception as e:
            logger.error("Candles for %s (%d min) failed: %s", symbol, window, e)
            return JSONResponse(status_code=500, content={"error": "internal_error"})

        return JSONResponse(status_code=200, content=bars.to_dict())

    return router
