"""Command-line entry point for catalog loading and Binance candle ingestion.

    ta-charts-sync --catalog pairs.json     # load catalog, then sync candles
    ta-charts-sync --catalog pairs.json --catalog-only
    ta-charts-sync                          # sync candles for catalog pairs

The catalog file is a JSON list of objects with TradingPair field names
(agent_name, base_token_symbol, quote_token_symbol, base_chain, dex_id,
base_token_address, quote_token_address). Unknown keys are ignored.
"""

import argparse
import asyncio
import json
from dataclasses import fields
from pathlib import Path

from ta_charts.config import AppSettings
from ta_charts.data.database import ChartDatabase
from ta_charts.data.fetcher import CandleSyncer
from ta_charts.data.store import MarketDataStore
from ta_charts.exchange.binance_client import BinanceClient
from ta_charts.logging import get_logger, setup_logging
from ta_charts.models import CENTRALIZED_EXCHANGE_ID, TradingPair

_PAIR_FIELDS = {f.name for f in fields(TradingPair)}


def load_catalog(path: str | Path) -> list[TradingPair]:
    """Read trading pairs from a JSON file.

    Raises ValueError if the file is not a JSON list, and
    InvalidTradingPairError for entries that fail validation.
    """
    entries = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(entries, list):
        raise ValueError(f"{path}: expected a JSON list of trading pairs")
    return [
        TradingPair(**{k: v for k, v in entry.items() if k in _PAIR_FIELDS})
        for entry in entries
    ]


async def run_sync(
    settings: AppSettings,
    catalog_path: str | None = None,
    catalog_only: bool = False,
) -> None:
    logger = get_logger("ta_charts.sync")

    async with ChartDatabase(settings.database.path) as database:
        store = MarketDataStore(database)

        if catalog_path:
            pairs = load_catalog(catalog_path)
            await store.upsert_trading_pairs(pairs)
            logger.info("catalog_loaded", path=catalog_path, pairs=len(pairs))

        if catalog_only:
            return

        exchange = BinanceClient()
        try:
            await exchange.connect()
            syncer = CandleSyncer(exchange, store, settings.sync)
            await syncer.sync(await store.get_trading_pairs(dex_id=CENTRALIZED_EXCHANGE_ID))
        finally:
            await exchange.close()


def main() -> None:
    """Synchronous entry point."""
    parser = argparse.ArgumentParser(
        prog="ta-charts-sync",
        description="Load the trading-pair catalog and mirror Binance candles.",
    )
    parser.add_argument("--catalog", help="JSON file of trading pairs to upsert")
    parser.add_argument(
        "--catalog-only",
        action="store_true",
        help="Only load the catalog; skip candle sync",
    )
    args = parser.parse_args()

    settings = AppSettings()
    setup_logging(settings.log_level)
    asyncio.run(run_sync(settings, args.catalog, args.catalog_only))


if __name__ == "__main__":
    main()
