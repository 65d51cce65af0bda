"""Persistence layer.

Provides the SQLite database handle, the typed catalog/candle store, and the
Binance candle ingestion pipeline that fills the store.
"""

from ta_charts.data.database import ChartDatabase
from ta_charts.data.fetcher import CandleSyncer
from ta_charts.data.models import OHLCVRecord
from ta_charts.data.store import MarketDataStore

__all__ = [
    "CandleSyncer",
    "ChartDatabase",
    "MarketDataStore",
    "OHLCVRecord",
]
