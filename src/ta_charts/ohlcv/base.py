"""Abstract candle source interface implemented by both OHLCV adapters."""

from abc import ABC, abstractmethod
from datetime import datetime

from ta_charts.models import Candle, IntervalUnit, TradingPair


class CandleSource(ABC):
    """Fetches a normalized, ascending candle series for a trading pair."""

    @abstractmethod
    async def fetch(
        self,
        pair: TradingPair,
        since: datetime,
        interval: int,
        unit: str | IntervalUnit,
    ) -> list[Candle]:
        """Return candles at or after ``since``, oldest first.

        Raises a NoDataError subclass instead of returning an empty list.
        """
        ...
