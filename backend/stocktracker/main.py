"""FastAPI application and process entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import Settings
from .market import (
    MarketDataSource,
    create_candles_router,
    create_market_data_source,
    create_stream_router,
)

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, source: MarketDataSource | None = None) -> FastAPI:
    """Wire the candles and streaming routers to one shared data source.

    The source is closed when the app shuts down. Static files, if the
    configured directory exists, are mounted last so /api and /ws win.
    """
    settings = settings or Settings.from_env()
    source = source or create_market_data_source(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await source.close()

    app = FastAPI(title="StockTracker", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.source = source

    app.include_router(create_candles_router(source))
    app.include_router(create_stream_router(source, settings))

    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.info("Static directory %s not found, serving API only", settings.static_dir)

    return app


def main() -> None:
    import uvicorn

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    logger.info("Server running at http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
