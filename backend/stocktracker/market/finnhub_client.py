"""Finnhub REST API client for real market data."""

from __future__ import annotations

import logging
import time

import httpx
from pydantic import BaseModel, ValidationError, ValidationInfo, field_validator

from ..config import Settings
from .errors import UpstreamFailure
from .interface import DEFAULT_WINDOW_MINUTES, MarketDataSource
from .models import BarSeries, Quote

logger = logging.getLogger(__name__)

BAR_RESOLUTION = "1"  # 1-minute bars


class _Envelope(BaseModel):
    """JSON null decodes as the field's zero value, like the provider's own SDKs."""

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class _QuoteEnvelope(_Envelope):
    """GET /quote body. Missing or null fields decode as zero."""

    c: float = 0.0  # current
    h: float = 0.0
    l: float = 0.0  # noqa: E741
    o: float = 0.0
    pc: float = 0.0  # previous close


class _CandleEnvelope(_Envelope):
    """GET /stock/candle body. `s` is "ok" or "no_data"."""

    c: list[float] = []
    h: list[float] = []
    l: list[float] = []  # noqa: E741
    o: list[float] = []
    t: list[int] = []
    v: list[float] = []
    s: str = ""


class FinnhubDataSource(MarketDataSource):
    """MarketDataSource backed by the Finnhub REST API.

    One httpx.AsyncClient with a fixed timeout is shared by every request and
    streaming session. It carries only static configuration (base URL,
    credential header, timeout), so concurrent calls never wait on each other.

    Rate limits:
      - Free tier: 60 req/min across all endpoints. The streaming cadence
        (5s per session by default) is what keeps us under it; there is no
        client-side limiter or retry.
    """

    def __init__(self, settings: Settings) -> None:
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.request_timeout,
            headers={"X-Finnhub-Token": settings.api_key},
        )

    async def get_quote(self, symbol: str) -> Quote:
        body = await self._get_json("quote", "/quote", {"symbol": symbol})
        try:
            envelope = _QuoteEnvelope.model_validate(body)
        except ValidationError as e:
            raise UpstreamFailure(f"quote decode for {symbol}: {e}") from e
        return Quote(symbol=symbol, price=envelope.c)

    async def get_bars(self, symbol: str, minutes: int | None = DEFAULT_WINDOW_MINUTES) -> BarSeries:
        if not minutes or minutes <= 0:
            minutes = DEFAULT_WINDOW_MINUTES
        to_ts = int(time.time())
        from_ts = to_ts - minutes * 60

        body = await self._get_json(
            "candle",
            "/stock/candle",
            {
                "symbol": symbol,
                "resolution": BAR_RESOLUTION,
                "from": from_ts,
                "to": to_ts,
            },
        )
        try:
            envelope = _CandleEnvelope.model_validate(body)
            return BarSeries(
                symbol=symbol,
                status=envelope.s,
                timestamps=tuple(envelope.t),
                open=tuple(envelope.o),
                high=tuple(envelope.h),
                low=tuple(envelope.l),
                close=tuple(envelope.c),
                volume=tuple(envelope.v),
            )
        except (ValidationError, ValueError) as e:
            raise UpstreamFailure(f"candle decode for {symbol}: {e}") from e

    async def close(self) -> None:
        if not self._client.is_closed:
            await self._client.aclose()
            logger.info("Finnhub client closed")

    # --- Internal ---

    async def _get_json(self, kind: str, path: str, params: dict) -> object:
        """One GET with the shared timeout. Any failure becomes UpstreamFailure."""
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise UpstreamFailure(f"{kind} request failed: {type(e).__name__}: {e}") from e

        if not response.is_success:
            raise UpstreamFailure(
                f"{kind} status {response.status_code} {response.reason_phrase}".rstrip(),
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamFailure(f"{kind} decode: {e}", status_code=response.status_code) from e
