"""GBM-based offline market simulator."""

from __future__ import annotations

import logging
import math
import time

import numpy as np

from .interface import DEFAULT_WINDOW_MINUTES, MarketDataSource
from .models import STATUS_OK, BarSeries, Quote
from .seed_prices import (
    DEFAULT_PARAMS,
    SEED_PRICES,
    TICKER_PARAMS,
    UNKNOWN_PRICE_RANGE,
    VOLUME_RANGE,
)

logger = logging.getLogger(__name__)

# 252 trading days * 6.5 hours/day * 60 minutes/hour
TRADING_MINUTES_PER_YEAR = 252 * 6.5 * 60


class GBMSimulator:
    """Independent Geometric Brownian Motion walk per symbol.

    Math:
        S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    One step is one trading minute. Symbols are created lazily on first use,
    so any ticker a client asks for gets a walk.
    """

    DEFAULT_DT = 1.0 / TRADING_MINUTES_PER_YEAR

    def __init__(self, dt: float = DEFAULT_DT, seed: int | None = None) -> None:
        self._dt = dt
        self._rng = np.random.default_rng(seed)
        self._prices: dict[str, float] = {}

    @property
    def rng(self) -> np.random.Generator:
        """Shared generator, so one seed reproduces quotes and bars alike."""
        return self._rng

    def price(self, symbol: str) -> float:
        """Current price, seeding the symbol if it is new."""
        if symbol not in self._prices:
            low, high = UNKNOWN_PRICE_RANGE
            self._prices[symbol] = SEED_PRICES.get(symbol, float(self._rng.uniform(low, high)))
        return self._prices[symbol]

    def step(self, symbol: str) -> float:
        """Advance one symbol by one step. Returns the new price rounded to cents."""
        current = self.price(symbol)
        factor = self._log_returns(symbol, 1)[0]
        self._prices[symbol] = current * math.exp(factor)
        return round(self._prices[symbol], 2)

    def path(self, symbol: str, n: int) -> np.ndarray:
        """n+1 prices walking backwards from the current price.

        The last element equals the current price, so bars end where the
        live quote is. Does not move the symbol's state.
        """
        end = self.price(symbol)
        if n <= 0:
            return np.array([end])
        increments = self._log_returns(symbol, n)
        # Cumulative log-returns relative to the final price
        offsets = np.concatenate(([0.0], np.cumsum(increments)))
        return end * np.exp(offsets - offsets[-1])

    def _log_returns(self, symbol: str, n: int) -> np.ndarray:
        params = TICKER_PARAMS.get(symbol, DEFAULT_PARAMS)
        mu, sigma = params["mu"], params["sigma"]
        drift = (mu - 0.5 * sigma**2) * self._dt
        return drift + sigma * math.sqrt(self._dt) * self._rng.standard_normal(n)


class SimulatorDataSource(MarketDataSource):
    """MarketDataSource backed by the GBM simulator.

    Used when no provider credential is configured, so the gateway runs
    offline with the same contract. Never raises for valid input.
    """

    def __init__(self, simulator: GBMSimulator | None = None) -> None:
        self._sim = simulator or GBMSimulator()

    async def get_quote(self, symbol: str) -> Quote:
        return Quote(symbol=symbol, price=self._sim.step(symbol))

    async def get_bars(self, symbol: str, minutes: int | None = DEFAULT_WINDOW_MINUTES) -> BarSeries:
        if not minutes or minutes <= 0:
            minutes = DEFAULT_WINDOW_MINUTES

        now_minute = int(time.time()) // 60 * 60
        timestamps = now_minute - 60 * np.arange(minutes - 1, -1, -1)

        prices = self._sim.path(symbol, minutes)
        opens, closes = prices[:-1], prices[1:]
        # Wicks extend a small random amount beyond the body
        wick = np.abs(self._sim.rng.standard_normal((2, minutes))) * 0.001
        highs = np.maximum(opens, closes) * (1 + wick[0])
        lows = np.minimum(opens, closes) * (1 - wick[1])
        low_vol, high_vol = VOLUME_RANGE
        volumes = self._sim.rng.integers(low_vol, high_vol, size=minutes)

        logger.debug("Simulated %d bars for %s", minutes, symbol)
        return BarSeries(
            symbol=symbol,
            status=STATUS_OK,
            timestamps=tuple(int(t) for t in timestamps),
            open=tuple(round(float(x), 2) for x in opens),
            high=tuple(round(float(x), 2) for x in highs),
            low=tuple(round(float(x), 2) for x in lows),
            close=tuple(round(float(x), 2) for x in closes),
            volume=tuple(float(v) for v in volumes),
        )

    async def close(self) -> None:
        logger.info("Simulator stopped")
