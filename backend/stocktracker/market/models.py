"""Data models for market data."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

STATUS_OK = "ok"
STATUS_NO_DATA = "no_data"


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True, slots=True)
class Quote:
    """Immutable price observation for one symbol.

    observed_at_ms is the gateway's wall-clock capture time, not the
    provider's timestamp.
    """

    symbol: str
    price: float
    observed_at_ms: int = field(default_factory=_now_millis)  # Unix milliseconds

    def to_message(self) -> dict:
        """Serialize for websocket transmission."""
        return {
            "symbol": self.symbol,
            "price": self.price,
            "time": self.observed_at_ms,
        }


@dataclass(frozen=True, slots=True)
class BarSeries:
    """OHLCV bars as parallel sequences, exactly as the provider ordered them."""

    symbol: str
    status: str
    timestamps: tuple[int, ...] = ()  # Unix seconds
    open: tuple[float, ...] = ()
    high: tuple[float, ...] = ()
    low: tuple[float, ...] = ()
    close: tuple[float, ...] = ()
    volume: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        n = len(self.timestamps)
        lengths = {len(self.open), len(self.high), len(self.low), len(self.close), len(self.volume)}
        if lengths != {n}:
            raise ValueError(
                f"bar sequences for {self.symbol} have mismatched lengths: "
                f"t={n} o={len(self.open)} h={len(self.high)} l={len(self.low)} "
                f"c={len(self.close)} v={len(self.volume)}"
            )

    def __len__(self) -> int:
        return len(self.timestamps)

    @property
    def is_empty(self) -> bool:
        """True for 'no_data' (or any non-ok status) and for an ok status with no bars."""
        return self.status != STATUS_OK or not self.timestamps

    def to_dict(self) -> dict:
        """Serialize for the candles endpoint. Empty results use a 'candles' list."""
        if self.is_empty:
            return {"symbol": self.symbol, "status": self.status, "candles": []}
        return {
            "symbol": self.symbol,
            "status": self.status,
            "t": list(self.timestamps),
            "o": list(self.open),
            "h": list(self.high),
            "l": list(self.low),
            "c": list(self.close),
            "v": list(self.volume),
        }
