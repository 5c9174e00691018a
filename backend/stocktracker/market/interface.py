"""Abstract interface for market data sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import BarSeries, Quote

DEFAULT_WINDOW_MINUTES = 60


class MarketDataSource(ABC):
    """Contract for market data providers.

    Every call goes to the provider; nothing is cached. Implementations are
    shared by all concurrent requests and streaming sessions, so they must not
    keep per-call mutable state.

    Lifecycle:
        source = create_market_data_source(settings)
        quote = await source.get_quote("AAPL")
        bars = await source.get_bars("TSLA", 30)
        # ... app shutting down ...
        await source.close()
    """

    @abstractmethod
    async def get_quote(self, symbol: str) -> Quote:
        """Fetch the current price for a symbol.

        Raises UpstreamFailure on transport errors, non-2xx responses or a
        body that does not decode. No retries.
        """

    @abstractmethod
    async def get_bars(self, symbol: str, minutes: int | None = DEFAULT_WINDOW_MINUTES) -> BarSeries:
        """Fetch 1-minute bars covering the last `minutes` minutes.

        A missing or non-positive window falls back to DEFAULT_WINDOW_MINUTES.
        Same error policy as get_quote().
        """

    @abstractmethod
    async def close(self) -> None:
        """Release transport resources. Safe to call multiple times."""
