"""Tests for GBMSimulator."""

import math

import pytest

from stocktracker.market.seed_prices import SEED_PRICES
from stocktracker.market.simulator import GBMSimulator


class TestGBMSimulator:
    """Unit tests for the GBM price simulator."""

    def test_initial_price_matches_seed(self):
        sim = GBMSimulator(seed=1)
        assert sim.price("AAPL") == SEED_PRICES["AAPL"]

    def test_unknown_symbol_gets_random_seed_price(self):
        sim = GBMSimulator(seed=1)
        assert 50.0 <= sim.price("ZZZZ") <= 300.0

    def test_unknown_symbol_price_is_stable(self):
        """The random seed price is drawn once per symbol."""
        sim = GBMSimulator(seed=1)
        assert sim.price("ZZZZ") == sim.price("ZZZZ")

    def test_prices_are_positive(self):
        """GBM prices can never go negative (exp() is always positive)."""
        sim = GBMSimulator(seed=7)
        for _ in range(5_000):
            assert sim.step("TSLA") > 0

    def test_prices_change_over_time(self):
        sim = GBMSimulator(seed=3)
        initial = sim.price("AAPL")
        for _ in range(500):
            sim.step("AAPL")
        assert sim.price("AAPL") != initial

    def test_step_rounds_to_cents(self):
        sim = GBMSimulator(seed=3)
        price = sim.step("AAPL")
        assert price == round(price, 2)

    def test_symbols_walk_independently(self):
        sim = GBMSimulator(seed=3)
        sim.step("AAPL")
        assert sim.price("MSFT") == SEED_PRICES["MSFT"]

    def test_path_ends_at_current_price(self):
        sim = GBMSimulator(seed=5)
        sim.step("AAPL")
        current = sim.price("AAPL")
        path = sim.path("AAPL", 30)

        assert len(path) == 31
        assert math.isclose(path[-1], current)
        assert (path > 0).all()

    def test_path_does_not_move_state(self):
        sim = GBMSimulator(seed=5)
        before = sim.price("AAPL")
        sim.path("AAPL", 100)
        assert sim.price("AAPL") == before

    def test_same_seed_is_reproducible(self):
        a, b = GBMSimulator(seed=11), GBMSimulator(seed=11)
        assert [a.step("AAPL") for _ in range(5)] == [b.step("AAPL") for _ in range(5)]

    def test_default_dt_is_one_trading_minute(self):
        assert GBMSimulator.DEFAULT_DT == pytest.approx(1 / (252 * 6.5 * 60))
