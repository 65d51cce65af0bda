"""Shared data models for token price-history tools.

CRITICAL: All prices and volumes use Decimal. Never use float for prices or volumes.
Floats only appear at the charting boundary, where matplotlib needs them.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from ta_charts.exceptions import InvalidTradingPairError

#: dex_id value identifying the centralized-exchange venue.
CENTRALIZED_EXCHANGE_ID = "binance"

#: Fixed-point decimal places used when EMA candle volume is rendered as text.
_VOLUME_PLACES = 10


class IntervalUnit(str, Enum):
    """Unit of a candle interval."""

    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


class DataSource(str, Enum):
    """Upstream a trading pair's candles come from."""

    CENTRALIZED = "centralized"
    ON_CHAIN = "on_chain"


@dataclass(frozen=True)
class TradingPair:
    """Resolved token identity from the trading-pair catalog.

    A pair listed on the centralized exchange is identified by its symbols;
    any other pair is identified on-chain by its contract addresses.
    """

    agent_name: str
    base_token_symbol: str
    quote_token_symbol: str
    base_chain: str
    dex_id: str | None = None
    base_token_address: str | None = None
    quote_token_address: str | None = None

    def __post_init__(self) -> None:
        if self.is_centralized:
            if not self.base_token_symbol or not self.quote_token_symbol:
                raise InvalidTradingPairError(
                    f"{self.agent_name}: centralized pairs need base and quote symbols"
                )
        elif not self.base_token_address or not self.quote_token_address:
            raise InvalidTradingPairError(
                f"{self.agent_name}: on-chain pairs need base and quote addresses"
            )

    @property
    def is_centralized(self) -> bool:
        return (self.dex_id or "").lower() == CENTRALIZED_EXCHANGE_ID


@dataclass
class Candle:
    """One OHLCV sample for a fixed time bucket.

    time is the bucket start in unix seconds.
    """

    time: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly form: prices as floats, volume as decimal text."""
        return {
            "time": self.time,
            "open": float(self.open),
            "high": float(self.high),
            "low": float(self.low),
            "close": float(self.close),
            "volume": format(self.volume, "f"),
        }


@dataclass
class EMACandle(Candle):
    """Candle augmented with fast and slow EMA trend values."""

    trend_ema_fast: Decimal | None = None
    trend_ema_slow: Decimal | None = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["volume"] = format(self.volume, f".{_VOLUME_PLACES}f")
        data["trend_ema_fast"] = _optional_float(self.trend_ema_fast)
        data["trend_ema_slow"] = _optional_float(self.trend_ema_slow)
        return data

    @classmethod
    def from_candle(
        cls,
        candle: Candle,
        trend_ema_fast: Decimal | None,
        trend_ema_slow: Decimal | None,
    ) -> "EMACandle":
        return cls(
            time=candle.time,
            open=candle.open,
            high=candle.high,
            low=candle.low,
            close=candle.close,
            volume=candle.volume,
            trend_ema_fast=trend_ema_fast,
            trend_ema_slow=trend_ema_slow,
        )


def _optional_float(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None
