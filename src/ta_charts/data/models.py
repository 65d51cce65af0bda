"""Data models for rows persisted in the candle store.

CRITICAL: All price and volume fields use Decimal. Stored in SQLite as TEXT.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class OHLCVRecord:
    """A single stored centralized-exchange candle.

    symbol is the concatenated pair symbol (e.g. ETHUSDT) and interval the
    exchange interval token (e.g. 1h). timestamp_ms is the candle open time.
    """

    symbol: str
    interval: str
    timestamp_ms: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
