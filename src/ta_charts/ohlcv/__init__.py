"""OHLCV acquisition and normalization.

Resolves a token name to a catalog trading pair, routes it to the
centralized-exchange or on-chain adapter, and returns one uniform,
ascending candle series.
"""

from ta_charts.ohlcv.binance import CentralizedExchangeAdapter
from ta_charts.ohlcv.bitquery import OnChainAdapter, map_chain_name
from ta_charts.ohlcv.resolver import TokenResolver
from ta_charts.ohlcv.router import route
from ta_charts.ohlcv.service import OHLCVService
from ta_charts.ohlcv.timeframes import interval_token, parse_time_ago

__all__ = [
    "CentralizedExchangeAdapter",
    "OHLCVService",
    "OnChainAdapter",
    "TokenResolver",
    "interval_token",
    "map_chain_name",
    "parse_time_ago",
    "route",
]
