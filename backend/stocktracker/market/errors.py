"""Error taxonomy for the market data gateway."""

from __future__ import annotations


class MarketDataError(Exception):
    """Base class for gateway errors."""


class InvalidArgument(MarketDataError):
    """Bad or missing client input. The message is safe to echo back."""


class UpstreamFailure(MarketDataError):
    """Transport error, non-2xx status or undecodable body from the provider.

    Never echoed to clients; logged only.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConnectionFailure(MarketDataError):
    """Upgrade or write failure on a streaming session."""
