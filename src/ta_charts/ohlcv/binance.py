"""Centralized-exchange adapter reading pre-aggregated Binance candles.

Candles are mirrored into the candle store by the sync pipeline
(see ta_charts.data.fetcher) under the concatenated pair symbol, e.g.
ETHUSDT, and the Binance interval token, e.g. 1h.
"""

import time
from datetime import datetime

from ta_charts.data.store import MarketDataStore
from ta_charts.exceptions import NoDataError
from ta_charts.logging import get_logger
from ta_charts.models import Candle, IntervalUnit, TradingPair
from ta_charts.ohlcv.base import CandleSource
from ta_charts.ohlcv.timeframes import interval_token

logger = get_logger(__name__)


class CentralizedExchangeAdapter(CandleSource):
    """Serves candles for pairs listed on the centralized exchange."""

    def __init__(self, store: MarketDataStore) -> None:
        self._store = store

    async def fetch(
        self,
        pair: TradingPair,
        since: datetime,
        interval: int,
        unit: str | IntervalUnit,
    ) -> list[Candle]:
        """Query stored candles for the pair's symbol and interval.

        Raises NoDataError when nothing matches. An unknown symbol and a
        quiet market look the same here, so both are surfaced as failures.
        """
        start = time.monotonic()
        symbol = f"{pair.base_token_symbol}{pair.quote_token_symbol}"
        token = interval_token(interval, unit)

        try:
            records = await self._store.get_candles(
                symbol,
                token,
                since_ms=int(since.timestamp() * 1000),
            )
            if not records:
                raise NoDataError(
                    f"No data found for symbol {symbol} with interval {token}"
                )

            return [
                Candle(
                    time=r.timestamp_ms // 1000,
                    open=r.open,
                    high=r.high,
                    low=r.low,
                    close=r.close,
                    volume=r.volume,
                )
                for r in records
            ]
        except Exception as e:
            logger.error(
                "centralized_fetch_failed",
                symbol=symbol,
                interval=token,
                error=str(e),
                elapsed_seconds=round(time.monotonic() - start, 2),
            )
            raise
        finally:
            logger.info(
                "centralized_fetch_attempt_completed",
                symbol=pair.base_token_symbol,
            )
