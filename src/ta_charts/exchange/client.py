"""Abstract exchange client interface.

Candle ingestion depends only on this interface, keeping
Binance-specific details isolated in the concrete implementation.
"""

from abc import ABC, abstractmethod


class ExchangeClient(ABC):
    """Abstract base class for exchange market-data clients."""

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection and load markets."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (CRITICAL for ccxt async)."""
        ...

    @abstractmethod
    async def fetch_ohlcv(
        self,
        symbol: str,
        timeframe: str = "1h",
        since: int | None = None,
        limit: int = 1000,
    ) -> list[list]:
        """Fetch OHLCV candle data, oldest first.

        Returns list of [timestamp_ms, open, high, low, close, volume].

        Pagination is NOT handled here -- callers are responsible for
        iterating with appropriate since parameters.
        """
        ...

    @abstractmethod
    def has_symbol(self, symbol: str) -> bool:
        """Return True if the unified symbol (e.g. ETH/USDT) is listed."""
        ...
