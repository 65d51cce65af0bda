"""Binance spot market-data client via ccxt async.

Only public endpoints are used, so no API keys are needed.
"""

import ccxt.async_support as ccxt_async

from ta_charts.exchange.client import ExchangeClient
from ta_charts.logging import get_logger

logger = get_logger(__name__)


class BinanceClient(ExchangeClient):
    """Concrete Binance spot client using ccxt async."""

    def __init__(self) -> None:
        self._exchange = ccxt_async.binance(
            {
                "enableRateLimit": True,
                "options": {"defaultType": "spot"},
            }
        )
        self._markets: dict = {}

    @property
    def exchange(self) -> ccxt_async.binance:
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def connect(self) -> None:
        logger.info("connecting_to_binance")
        self._markets = await self._exchange.load_markets()
        logger.info("binance_connected", market_count=len(self._markets))

    async def close(self) -> None:
        """Clean up ccxt async resources. CRITICAL: must be called to avoid resource leaks."""
        await self._exchange.close()
        logger.info("binance_connection_closed")

    async def fetch_ohlcv(
        self,
        symbol: str,
        timeframe: str = "1h",
        since: int | None = None,
        limit: int = 1000,
    ) -> list[list]:
        return await self._exchange.fetch_ohlcv(
            symbol, timeframe=timeframe, since=since, limit=limit
        )

    def has_symbol(self, symbol: str) -> bool:
        return symbol in self._markets
