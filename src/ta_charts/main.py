"""Entry point for the TA charts MCP server.

Wires all components together and serves the MCP tools either over SSE
(embedded in the FastAPI app run by uvicorn, the default) or over stdio.

The database handle and the Bitquery HTTP client are created once, injected
into the components that use them, and closed on shutdown. Under uvicorn,
SIGINT/SIGTERM run the FastAPI lifespan exit; in stdio mode the handlers
registered here cancel the server and the same cleanup runs.

Component wiring order (in _build_components):
1. ChartDatabase + MarketDataStore (catalog and candle store)
2. httpx.AsyncClient (Bitquery)
3. TokenResolver, CentralizedExchangeAdapter, OnChainAdapter
4. OHLCVService
5. EMAService, ChartService (+ ChartFileStore)
6. FastMCP server
"""

import asyncio
import signal
from contextlib import asynccontextmanager
from typing import Any

import httpx
import uvicorn
from fastapi import FastAPI

from ta_charts.charts.files import ChartFileStore
from ta_charts.charts.service import ChartService
from ta_charts.config import AppSettings
from ta_charts.data.database import ChartDatabase
from ta_charts.data.store import MarketDataStore
from ta_charts.indicators.service import EMAService
from ta_charts.logging import get_logger, setup_logging
from ta_charts.ohlcv.binance import CentralizedExchangeAdapter
from ta_charts.ohlcv.bitquery import OnChainAdapter
from ta_charts.ohlcv.resolver import TokenResolver
from ta_charts.ohlcv.service import OHLCVService
from ta_charts.server.mcp_server import create_mcp_server


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all components from settings.

    Note: Does NOT open the database -- that happens in the lifespan
    (SSE mode) or _run_stdio() (stdio mode).

    Args:
        settings: Application-wide settings.

    Returns:
        Dict mapping component names to instances.
    """
    logger = get_logger("ta_charts.main")

    database = ChartDatabase(settings.database.path)
    store = MarketDataStore(database)

    if not settings.bitquery.api_key.get_secret_value():
        logger.warning(
            "no_bitquery_api_key",
            note="On-chain tokens will fail; centralized-exchange tokens still work.",
        )
    http_client = httpx.AsyncClient(timeout=settings.bitquery.timeout_seconds)

    ohlcv_service = OHLCVService(
        resolver=TokenResolver(store),
        centralized=CentralizedExchangeAdapter(store),
        on_chain=OnChainAdapter(http_client, settings.bitquery),
    )

    chart_files = ChartFileStore(settings.chart.output_dir)
    ema_service = EMAService(ohlcv_service, settings.indicators)
    chart_service = ChartService(
        ohlcv_service,
        settings.chart,
        chart_files if settings.chart.save_files else None,
    )

    mcp_server = create_mcp_server(
        settings.server.name, ema_service, chart_service, chart_files
    )

    return {
        "database": database,
        "store": store,
        "http_client": http_client,
        "ohlcv_service": ohlcv_service,
        "ema_service": ema_service,
        "chart_service": chart_service,
        "chart_files": chart_files,
        "mcp_server": mcp_server,
    }


async def _close_components(components: dict[str, Any]) -> None:
    await components["http_client"].aclose()
    await components["database"].close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open shared resources on startup and close them on shutdown."""
    logger = get_logger("ta_charts.main")
    components = app.state.components

    app.state.chart_service = components["chart_service"]
    app.state.ema_service = components["ema_service"]

    await components["database"].connect()
    logger.info("ta_charts_server_started", transport="sse")

    try:
        yield
    finally:
        await _close_components(components)
        logger.info("ta_charts_server_stopped")


async def _run_stdio(components: dict[str, Any]) -> None:
    """Serve MCP over stdio until EOF or SIGINT/SIGTERM."""
    logger = get_logger("ta_charts.main")
    loop = asyncio.get_running_loop()

    await components["database"].connect()
    serve_task = asyncio.create_task(components["mcp_server"].run_stdio_async())

    def _shutdown_handler() -> None:
        logger.info("graceful_shutdown_signal")
        serve_task.cancel()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _shutdown_handler)

    logger.info("ta_charts_server_started", transport="stdio")
    try:
        await serve_task
    except asyncio.CancelledError:
        pass
    finally:
        await _close_components(components)
        logger.info("ta_charts_server_stopped")


async def run() -> None:
    """Run the TA charts MCP server with the configured transport."""
    settings = AppSettings()

    setup_logging(settings.log_level)
    logger = get_logger("ta_charts.main")

    components = _build_components(settings)

    if settings.server.transport == "stdio":
        await _run_stdio(components)
        return

    from ta_charts.server.app import create_app

    app = create_app(components["mcp_server"], lifespan=lifespan)
    app.state.components = components

    logger.info(
        "starting_http_server",
        host=settings.server.host,
        port=settings.server.port,
    )

    config = uvicorn.Config(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level="warning",  # Suppress uvicorn access logs
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
