"""WebSocket streaming endpoint for live quotes."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from enum import Enum

from fastapi import APIRouter, WebSocket
from fastapi.websockets import WebSocketDisconnect, WebSocketState

from ..config import Settings
from .errors import ConnectionFailure, MarketDataError
from .interface import MarketDataSource

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    CONNECTING = "connecting"
    ACTIVE = "active"
    CLOSED = "closed"


class QuoteStreamSession:
    """One client's quote stream, from upgrade to teardown.

    CONNECTING -> ACTIVE on a successful accept, then one fetch-and-send right
    away, then one per poll interval. Any fetch or send failure, a client
    disconnect or task cancellation moves the session to CLOSED, which is
    terminal. Ticks run strictly one after another: the wait for the next
    tick starts only once the previous send has completed.
    """

    def __init__(
        self,
        websocket: WebSocket,
        source: MarketDataSource,
        symbol: str,
        poll_interval: float = 5.0,
        write_timeout: float = 5.0,
    ) -> None:
        self._websocket = websocket
        self._source = source
        self._symbol = symbol
        self._interval = poll_interval
        self._write_timeout = write_timeout
        self._state = SessionState.CONNECTING
        self._disconnected = asyncio.Event()
        self._watcher: asyncio.Task | None = None
        self._next_at = 0.0  # Event-loop time of the next scheduled tick
        self._client = websocket.client.host if websocket.client else "unknown"
        self.messages_sent = 0

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def state(self) -> SessionState:
        return self._state

    async def run(self) -> None:
        """Drive the session until it closes. Never raises except on cancellation."""
        try:
            await self._open()
            # First tick goes out before any waiting and anchors the schedule
            self._next_at = asyncio.get_running_loop().time()
            await self._tick()
            while await self._wait_for_next_tick():
                await self._tick()
            logger.info("WS client disconnected: %s (%s)", self._client, self._symbol)
        except MarketDataError as e:
            logger.warning("WS session for %s (%s) ended: %s", self._client, self._symbol, e)
        except asyncio.CancelledError:
            logger.info("WS session cancelled for %s (%s)", self._client, self._symbol)
            raise
        except Exception:
            logger.exception("WS session for %s (%s) failed", self._client, self._symbol)
        finally:
            await self._close()

    # --- Internal ---

    async def _open(self) -> None:
        try:
            await self._websocket.accept()
        except (RuntimeError, OSError, WebSocketDisconnect) as e:
            raise ConnectionFailure(f"upgrade failed: {e!r}") from e
        self._state = SessionState.ACTIVE
        self._watcher = asyncio.create_task(
            self._watch_disconnect(), name=f"ws-watch-{self._symbol}"
        )
        logger.info("WS client connected: %s streaming %s", self._client, self._symbol)

    async def _tick(self) -> None:
        """One fetch-and-send cycle. UpstreamFailure propagates unchanged."""
        quote = await self._source.get_quote(self._symbol)
        await self._send(quote.to_message())

    async def _send(self, message: dict) -> None:
        try:
            await asyncio.wait_for(self._websocket.send_json(message), timeout=self._write_timeout)
        except asyncio.TimeoutError as e:
            raise ConnectionFailure(f"write deadline of {self._write_timeout}s exceeded") from e
        except (RuntimeError, OSError, WebSocketDisconnect) as e:
            raise ConnectionFailure(f"send failed: {e!r}") from e
        self.messages_sent += 1
        logger.debug("WS sent %s price=%s to %s", self._symbol, message["price"], self._client)

    async def _wait_for_next_tick(self) -> bool:
        """Block until the next scheduled wake time. Returns False early if the client went away.

        Wake times sit on a fixed grid of poll intervals from the first tick,
        so fetch and send latency does not stretch the cadence. Slots that a
        slow tick overran are skipped rather than fired back to back.
        """
        now = asyncio.get_running_loop().time()
        self._next_at += self._interval
        while self._next_at <= now:
            self._next_at += self._interval
        try:
            await asyncio.wait_for(self._disconnected.wait(), timeout=self._next_at - now)
        except asyncio.TimeoutError:
            return True
        return False

    async def _watch_disconnect(self) -> None:
        """Drain inbound frames (ignored) until the client disconnects.

        Only a real disconnect sets the flag; being cancelled by _close() must
        not, or the server side would skip its own close.
        """
        try:
            while True:
                message = await self._websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
        except (RuntimeError, WebSocketDisconnect) as e:
            logger.debug("WS receive ended for %s: %r", self._client, e)
        self._disconnected.set()

    async def _close(self) -> None:
        """Stop the watcher and close the socket. Runs at most once."""
        if self._state is SessionState.CLOSED:
            return
        self._state = SessionState.CLOSED

        if self._watcher is not None:
            self._watcher.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._watcher
            self._watcher = None

        # Nothing to close if we never upgraded or the client already left
        if (
            self._websocket.application_state == WebSocketState.CONNECTED
            and not self._disconnected.is_set()
        ):
            try:
                await self._websocket.close()
            except (RuntimeError, OSError) as e:
                logger.debug("WS close for %s failed: %r", self._client, e)


def create_stream_router(source: MarketDataSource, settings: Settings) -> APIRouter:
    """Create the quote streaming router bound to a data source.

    This factory pattern lets us inject the source and settings without globals.
    """
    router = APIRouter(tags=["streaming"])

    @router.websocket("/ws")
    async def stream_quotes(websocket: WebSocket, symbol: str | None = None) -> None:
        """Push {symbol, price, time} for one symbol, immediately and then every poll interval.

        The symbol is passed to the provider verbatim; absent or empty falls
        back to the configured default.
        """
        session = QuoteStreamSession(
            websocket,
            source,
            symbol or settings.default_symbol,
            poll_interval=settings.poll_interval,
            write_timeout=settings.write_timeout,
        )
        await session.run()

    return router
