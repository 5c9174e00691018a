"""Factory for creating market data sources."""

from __future__ import annotations

import logging

from ..config import Settings
from .interface import MarketDataSource

logger = logging.getLogger(__name__)


def create_market_data_source(settings: Settings) -> MarketDataSource:
    """Create the appropriate market data source for the given settings.

    - settings.api_key non-empty → FinnhubDataSource (real market data)
    - Otherwise → SimulatorDataSource (GBM simulation, no network)

    The caller owns the source and must await source.close() on shutdown.
    """
    if settings.has_api_key:
        from .finnhub_client import FinnhubDataSource

        logger.info("Market data source: Finnhub API (%s)", settings.base_url)
        return FinnhubDataSource(settings)
    else:
        from .simulator import SimulatorDataSource

        logger.warning(
            "Market data source: GBM Simulator, serving simulated prices (FINNHUB_API_KEY not set)"
        )
        return SimulatorDataSource()
