"""Data source selection for a resolved trading pair."""

from ta_charts.models import DataSource, TradingPair


def route(pair: TradingPair) -> DataSource:
    """Pick the upstream for a pair.

    Only the centralized exchange is recognized by dex_id (case-insensitive).
    Every other venue, and a missing dex_id, goes on-chain; whether the chain
    is actually supported is left to the on-chain adapter.
    """
    if pair.is_centralized:
        return DataSource.CENTRALIZED
    return DataSource.ON_CHAIN
