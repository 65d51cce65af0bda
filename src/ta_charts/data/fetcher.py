"""Paginated Binance candle ingestion with retry, resume, and progress logging.

Fills the candle store that the centralized-exchange adapter reads from.
For each centralized catalog pair and each configured interval, pages
FORWARD from the last stored candle (or from lookback_days ago on the first
run) until the exchange returns a short batch.

Retries live here only. The request path never retries.
"""

import asyncio
import time
from collections.abc import Callable

import ccxt.async_support

from ta_charts.config import SyncSettings
from ta_charts.data.store import MarketDataStore
from ta_charts.exchange.client import ExchangeClient
from ta_charts.logging import get_logger
from ta_charts.models import TradingPair

logger = get_logger(__name__)


class CandleSyncer:
    """Fetches Binance klines and persists them via the store.

    Usage:
        syncer = CandleSyncer(exchange, store, settings)
        await syncer.sync(await store.get_trading_pairs(dex_id="binance"))
    """

    def __init__(
        self,
        exchange: ExchangeClient,
        store: MarketDataStore,
        settings: SyncSettings,
    ) -> None:
        self._exchange = exchange
        self._store = store
        self._settings = settings

    # ──────────────────────────────────────────────
    # Public methods
    # ──────────────────────────────────────────────

    async def sync(self, pairs: list[TradingPair]) -> int:
        """Bring every centralized pair up to date for all configured intervals.

        Pairs on other venues and pairs the exchange does not list are
        skipped. Returns the total number of candles inserted.
        """
        start_time = time.monotonic()
        total = 0
        centralized = [p for p in pairs if p.is_centralized]

        for i, pair in enumerate(centralized, 1):
            market = f"{pair.base_token_symbol}/{pair.quote_token_symbol}"
            if not self._exchange.has_symbol(market):
                logger.warning("sync_symbol_not_listed", symbol=market)
                continue

            logger.info(
                "syncing_candles",
                symbol=market,
                progress=f"{i}/{len(centralized)}",
            )
            for interval in self._settings.intervals:
                total += await self.sync_symbol(pair, interval)

        logger.info(
            "candle_sync_complete",
            pairs=len(centralized),
            inserted=total,
            total_duration_seconds=round(time.monotonic() - start_time, 1),
        )
        return total

    async def sync_symbol(self, pair: TradingPair, interval: str) -> int:
        """Page forward through one symbol/interval. Returns candles inserted."""
        market = f"{pair.base_token_symbol}/{pair.quote_token_symbol}"
        store_symbol = f"{pair.base_token_symbol}{pair.quote_token_symbol}"
        limit = self._settings.batch_limit

        latest_ms = await self._store.get_latest_candle_ms(store_symbol, interval)
        if latest_ms is not None:
            cursor = latest_ms + 1
        else:
            now_ms = int(time.time() * 1000)
            cursor = now_ms - self._settings.lookback_days * 86_400 * 1000

        total_inserted = 0
        while True:
            batch = await self._fetch_with_retry(
                self._exchange.fetch_ohlcv,
                market,
                timeframe=interval,
                since=cursor,
                limit=limit,
            )
            if not batch:
                break

            total_inserted += await self._store.insert_candles(
                store_symbol, interval, batch
            )

            newest_ts = batch[-1][0]
            if newest_ts < cursor:
                break  # No progress guard
            cursor = newest_ts + 1

            if len(batch) < limit:
                break

            # Rate limit safety delay between paginated calls
            await asyncio.sleep(self._settings.fetch_batch_delay)

        logger.info(
            "candle_sync_progress",
            symbol=store_symbol,
            interval=interval,
            records_fetched=total_inserted,
        )
        return total_inserted

    # ──────────────────────────────────────────────
    # Retry wrapper
    # ──────────────────────────────────────────────

    async def _fetch_with_retry(self, fetch_fn: Callable, *args, **kwargs) -> list:
        """Execute a fetch function with exponential backoff retry.

        Rate limit errors get a longer delay multiplier.
        Re-raises on final failure.
        """
        max_retries = self._settings.max_retries
        base_delay = self._settings.retry_base_delay

        for attempt in range(max_retries):
            try:
                return await fetch_fn(*args, **kwargs)
            except Exception as e:
                if attempt == max_retries - 1:
                    logger.error(
                        "fetch_failed_permanently",
                        error=str(e),
                        attempts=max_retries,
                    )
                    raise

                delay = base_delay * (2**attempt)

                if isinstance(e, ccxt.async_support.RateLimitExceeded):
                    delay *= 3
                    logger.warning(
                        "rate_limit_exceeded",
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        delay=delay,
                    )
                else:
                    logger.warning(
                        "fetch_retry",
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        delay=delay,
                        error=str(e),
                    )

                await asyncio.sleep(delay)

        return []
