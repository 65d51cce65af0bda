"""OHLCV acquisition pipeline: resolve the token, route, fetch.

All upstream failures propagate to the caller unchanged.
"""

from ta_charts.logging import get_logger, log_elapsed
from ta_charts.models import Candle, DataSource, IntervalUnit
from ta_charts.ohlcv.base import CandleSource
from ta_charts.ohlcv.resolver import TokenResolver
from ta_charts.ohlcv.router import route
from ta_charts.ohlcv.timeframes import parse_time_ago, unit_value

logger = get_logger(__name__)


class OHLCVService:
    """Produces a uniform candle series for a loosely named token.

    Usage:
        service = OHLCVService(resolver, centralized_adapter, on_chain_adapter)
        candles = await service.get_ohlcv("ETH", "2023-01-01T00:00:00Z", 1, "hours")
    """

    def __init__(
        self,
        resolver: TokenResolver,
        centralized: CandleSource,
        on_chain: CandleSource,
    ) -> None:
        self._resolver = resolver
        self._sources: dict[DataSource, CandleSource] = {
            DataSource.CENTRALIZED: centralized,
            DataSource.ON_CHAIN: on_chain,
        }

    async def get_ohlcv(
        self,
        token_name: str,
        time_ago: str,
        interval: int,
        interval_frequency: str | IntervalUnit,
    ) -> list[Candle]:
        """Fetch candles for the first catalog match of ``token_name``.

        Raises ValueError for a non-positive interval or a start time that is
        not ISO-8601, and ChartToolsError subclasses for lookup and upstream
        failures.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        logger.info("ohlcv_fetch_started", token_name=token_name)
        with log_elapsed(logger, "ohlcv_fetch", token_name=token_name):
            since = parse_time_ago(time_ago)
            pairs = await self._resolver.resolve(token_name)

            # First match wins; the request carries no disambiguation hint
            pair = pairs[0]
            source = route(pair)
            logger.info(
                "trading_pair_selected",
                agent_name=pair.agent_name,
                dex_id=pair.dex_id,
                chain=pair.base_chain,
                source=source.value,
            )

            return await self._sources[source].fetch(
                pair, since, interval, unit_value(interval_frequency)
            )
