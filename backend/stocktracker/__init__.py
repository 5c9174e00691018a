"""StockTracker: candles and live-quote gateway in front of a market data provider."""

__version__ = "0.1.0"
