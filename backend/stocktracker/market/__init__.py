"""Market data subsystem for StockTracker.

Public API:
    Quote               - Immutable price observation dataclass
    BarSeries           - Immutable OHLCV series dataclass
    MarketDataSource    - Abstract interface for data providers
    create_market_data_source - Factory that selects Finnhub or the simulator
    create_candles_router - FastAPI router factory for GET /api/candles
    create_stream_router  - FastAPI router factory for the /ws quote stream
"""

from .candles import create_candles_router
from .errors import ConnectionFailure, InvalidArgument, MarketDataError, UpstreamFailure
from .factory import create_market_data_source
from .interface import MarketDataSource
from .models import BarSeries, Quote
from .stream import QuoteStreamSession, SessionState, create_stream_router

__all__ = [
    "Quote",
    "BarSeries",
    "MarketDataSource",
    "MarketDataError",
    "InvalidArgument",
    "UpstreamFailure",
    "ConnectionFailure",
    "QuoteStreamSession",
    "SessionState",
    "create_market_data_source",
    "create_candles_router",
    "create_stream_router",
]
