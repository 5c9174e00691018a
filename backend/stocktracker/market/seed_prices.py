"""Starting prices and walk parameters for the offline simulator."""

# Rough reference prices so simulated charts look plausible
SEED_PRICES: dict[str, float] = {
    "AAPL": 190.00,
    "MSFT": 420.00,
    "GOOGL": 175.00,
    "AMZN": 185.00,
    "TSLA": 250.00,
    "NVDA": 800.00,
    "META": 500.00,
}

# sigma: annualized volatility, mu: annualized drift
TICKER_PARAMS: dict[str, dict[str, float]] = {
    "TSLA": {"sigma": 0.50, "mu": 0.03},
    "NVDA": {"sigma": 0.40, "mu": 0.08},
}

DEFAULT_PARAMS: dict[str, float] = {"sigma": 0.25, "mu": 0.05}

# Seed range for symbols not listed above
UNKNOWN_PRICE_RANGE = (50.0, 300.0)

# Simulated per-minute share volume
VOLUME_RANGE = (1_000, 50_000)
