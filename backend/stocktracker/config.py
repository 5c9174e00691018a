"""Process-wide settings for the StockTracker gateway."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path


def _positive_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _port(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if not 0 < value < 65536:
        raise ValueError(f"{name} must be a valid port, got {raw!r}")
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable configuration, built once at startup and passed by reference.

    The upstream credential and timeouts live here rather than in module
    globals so every collaborator receives them explicitly.
    """

    api_key: str = field(default="", repr=False)
    base_url: str = "https://finnhub.io/api/v1"
    request_timeout: float = 10.0  # Per upstream call, seconds
    poll_interval: float = 5.0  # Streaming cadence, seconds (upstream rate limits)
    write_timeout: float = 5.0  # Per websocket send, seconds
    default_symbol: str = "AAPL"
    static_dir: Path = Path("static")
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        - FINNHUB_API_KEY: upstream credential; blank means "use the simulator"
        - FINNHUB_BASE_URL: upstream REST root
        - STOCKTRACKER_*: timeouts, cadence, default symbol, server binding

        Raises ValueError naming the offending variable on bad numeric input.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            api_key=env.get("FINNHUB_API_KEY", "").strip(),
            base_url=env.get("FINNHUB_BASE_URL", "").strip().rstrip("/") or defaults.base_url,
            request_timeout=_positive_float(
                env, "STOCKTRACKER_REQUEST_TIMEOUT", defaults.request_timeout
            ),
            poll_interval=_positive_float(env, "STOCKTRACKER_POLL_INTERVAL", defaults.poll_interval),
            write_timeout=_positive_float(env, "STOCKTRACKER_WRITE_TIMEOUT", defaults.write_timeout),
            default_symbol=env.get("STOCKTRACKER_DEFAULT_SYMBOL", "").strip()
            or defaults.default_symbol,
            static_dir=Path(env.get("STOCKTRACKER_STATIC_DIR", "").strip() or defaults.static_dir),
            host=env.get("STOCKTRACKER_HOST", "").strip() or defaults.host,
            port=_port(env, "STOCKTRACKER_PORT", defaults.port),
            log_level=(env.get("STOCKTRACKER_LOG_LEVEL", "").strip() or defaults.log_level).upper(),
        )
