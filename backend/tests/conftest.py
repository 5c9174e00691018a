"""Pytest configuration and fixtures."""

import asyncio
from pathlib import Path

import pytest

from stocktracker.config import Settings
from stocktracker.market.interface import MarketDataSource
from stocktracker.market.models import BarSeries, Quote


class FakeMarketDataSource(MarketDataSource):
    """Scripted data source.

    quote_results is consumed front to back: floats become quotes, exceptions
    are raised. Once exhausted every call returns default_price.
    """

    def __init__(
        self, quote_results=None, bars_result=None, default_price: float = 100.0, quote_delay: float = 0.0
    ):
        self.quote_results = list(quote_results or [])
        self.bars_result = bars_result
        self.default_price = default_price
        self.quote_delay = quote_delay
        self.quote_calls: list[str] = []
        self.bars_calls: list[tuple[str, int]] = []
        self.close_calls = 0

    async def get_quote(self, symbol: str) -> Quote:
        self.quote_calls.append(symbol)
        if self.quote_delay:
            await asyncio.sleep(self.quote_delay)
        result = self.quote_results.pop(0) if self.quote_results else self.default_price
        if isinstance(result, BaseException):
            raise result
        return Quote(symbol=symbol, price=result)

    async def get_bars(self, symbol: str, minutes: int | None = 60) -> BarSeries:
        self.bars_calls.append((symbol, minutes))
        if isinstance(self.bars_result, BaseException):
            raise self.bars_result
        if self.bars_result is None:
            return BarSeries(symbol=symbol, status="no_data")
        return self.bars_result

    async def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def fake_source_cls():
    """The FakeMarketDataSource class, for tests that script their own outcomes."""
    return FakeMarketDataSource


@pytest.fixture
def fake_source() -> FakeMarketDataSource:
    return FakeMarketDataSource()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings with a fast stream cadence and no static directory."""
    return Settings(
        api_key="",
        poll_interval=0.05,
        write_timeout=1.0,
        static_dir=tmp_path / "no-static",
    )
