"""Token name resolution against the trading-pair catalog."""

from ta_charts.data.store import MarketDataStore
from ta_charts.exceptions import TokenNotFoundError
from ta_charts.logging import get_logger
from ta_charts.models import TradingPair

logger = get_logger(__name__)


class TokenResolver:
    """Maps free-text token names to catalog trading pairs.

    Ambiguity is left to the caller: results come back in search-relevance
    order and callers use the first one.
    """

    def __init__(self, store: MarketDataStore) -> None:
        self._store = store

    async def resolve(self, partial_name: str) -> list[TradingPair]:
        """Return matching pairs, best match first.

        Raises TokenNotFoundError when nothing matches.
        """
        pairs = await self._store.search_trading_pairs(partial_name)
        if not pairs:
            raise TokenNotFoundError(f"No agents found with the name {partial_name}")

        logger.debug(
            "token_resolved",
            token_name=partial_name,
            matches=len(pairs),
            first=pairs[0].agent_name,
        )
        return pairs
