"""Exchange client layer -- Binance market data via ccxt, used for candle ingestion."""

from ta_charts.exchange.binance_client import BinanceClient
from ta_charts.exchange.client import ExchangeClient

__all__ = ["BinanceClient", "ExchangeClient"]
