"""Typed SQLite read/write abstraction for the catalog and candle store.

Provides MarketDataStore with typed methods for upserting and searching
trading pairs and for inserting and querying OHLCV candles. All SQL is
isolated behind this interface.

CRITICAL: All price/volume values stored as TEXT in SQLite, restored as Decimal on read.
"""

from decimal import Decimal

from ta_charts.data.database import ChartDatabase
from ta_charts.data.models import OHLCVRecord
from ta_charts.exceptions import InvalidTradingPairError
from ta_charts.logging import get_logger
from ta_charts.models import TradingPair

logger = get_logger(__name__)

_PAIR_COLUMNS = (
    "agent_name, base_token_symbol, quote_token_symbol, base_chain, "
    "dex_id, base_token_address, quote_token_address"
)


def phrase_query(text: str) -> str:
    """Quote free text as a single FTS5 phrase.

    Embedded double quotes are doubled, so user input can never inject
    FTS5 operators.
    """
    return '"' + text.replace('"', '""') + '"'


class MarketDataStore:
    """Async SQLite store for trading pairs and OHLCV candles.

    Wraps ChartDatabase with typed read/write methods. All SQL access
    goes through self._database.db (the aiosqlite Connection).

    Usage:
        async with ChartDatabase("data/ta_charts.db") as database:
            store = MarketDataStore(database)
            pairs = await store.search_trading_pairs("ETH")
    """

    def __init__(self, database: ChartDatabase) -> None:
        self._database = database

    # ──────────────────────────────────────────────
    # Write methods
    # ──────────────────────────────────────────────

    async def upsert_trading_pairs(self, pairs: list[TradingPair]) -> int:
        """Insert or update catalog entries keyed by (agent_name, base_chain).

        Returns the number of pairs written.
        """
        if not pairs:
            return 0

        data = [
            (
                p.agent_name,
                p.base_token_symbol,
                p.quote_token_symbol,
                p.base_chain,
                p.dex_id,
                p.base_token_address,
                p.quote_token_address,
            )
            for p in pairs
        ]

        await self._database.db.executemany(
            f"INSERT INTO trading_pairs ({_PAIR_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?) "
            "ON CONFLICT (agent_name, base_chain) DO UPDATE SET "
            "base_token_symbol = excluded.base_token_symbol, "
            "quote_token_symbol = excluded.quote_token_symbol, "
            "dex_id = excluded.dex_id, "
            "base_token_address = excluded.base_token_address, "
            "quote_token_address = excluded.quote_token_address",
            data,
        )
        await self._database.db.commit()

        logger.debug("upserted_trading_pairs", total=len(pairs))
        return len(pairs)

    async def insert_candles(
        self, symbol: str, interval: str, candles: list[list]
    ) -> int:
        """Insert candle records, ignoring duplicates via INSERT OR IGNORE.

        Accepts ccxt-format lists: [timestamp_ms, open, high, low, close, volume].
        Returns the number of actually inserted rows.
        """
        if not candles:
            return 0

        data = [
            (
                symbol,
                interval,
                int(candle[0]),
                str(candle[1]),
                str(candle[2]),
                str(candle[3]),
                str(candle[4]),
                str(candle[5]),
            )
            for candle in candles
        ]

        cursor = await self._database.db.executemany(
            "INSERT OR IGNORE INTO ohlcv_candles "
            "(symbol, interval, timestamp_ms, open, high, low, close, volume) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            data,
        )
        await self._database.db.commit()

        inserted = cursor.rowcount
        logger.debug(
            "inserted_candles",
            symbol=symbol,
            interval=interval,
            total=len(candles),
            inserted=inserted,
        )
        return inserted

    # ──────────────────────────────────────────────
    # Read methods
    # ──────────────────────────────────────────────

    async def search_trading_pairs(self, text: str) -> list[TradingPair]:
        """Phrase-search the catalog's agent_name and base_token_symbol fields.

        Matching is case-insensitive and token based. Results are ordered by
        search relevance (bm25), ties broken by insertion order. Blank text
        matches nothing.
        """
        if not text.strip():
            return []

        cursor = await self._database.db.execute(
            f"SELECT {_PAIR_COLUMNS} FROM trading_pairs AS p "
            "JOIN ("
            "  SELECT rowid, rank FROM trading_pairs_fts "
            "  WHERE trading_pairs_fts MATCH ?"
            ") AS hits ON p.id = hits.rowid "
            "ORDER BY hits.rank, p.id",
            (phrase_query(text.strip()),),
        )
        rows = await cursor.fetchall()
        return self._rows_to_pairs(rows)

    async def get_trading_pairs(self, dex_id: str | None = None) -> list[TradingPair]:
        """List catalog entries, optionally only those on one venue (case-insensitive)."""
        query = f"SELECT {_PAIR_COLUMNS} FROM trading_pairs"
        params: list = []
        if dex_id is not None:
            query += " WHERE lower(dex_id) = ?"
            params.append(dex_id.lower())
        query += " ORDER BY id"

        cursor = await self._database.db.execute(query, params)
        rows = await cursor.fetchall()
        return self._rows_to_pairs(rows)

    async def get_candles(
        self,
        symbol: str,
        interval: str,
        since_ms: int | None = None,
    ) -> list[OHLCVRecord]:
        """Query candles for an exact symbol and interval, from since_ms on.

        Returns list of OHLCVRecord ordered by timestamp_ms ASC.
        """
        conditions = ["symbol = ?", "interval = ?"]
        params: list = [symbol, interval]

        if since_ms is not None:
            conditions.append("timestamp_ms >= ?")
            params.append(since_ms)

        where = " AND ".join(conditions)
        cursor = await self._database.db.execute(
            f"SELECT symbol, interval, timestamp_ms, open, high, low, close, volume "
            f"FROM ohlcv_candles WHERE {where} ORDER BY timestamp_ms ASC",
            params,
        )
        rows = await cursor.fetchall()
        return [
            OHLCVRecord(
                symbol=row[0],
                interval=row[1],
                timestamp_ms=row[2],
                open=Decimal(row[3]),
                high=Decimal(row[4]),
                low=Decimal(row[5]),
                close=Decimal(row[6]),
                volume=Decimal(row[7]),
            )
            for row in rows
        ]

    async def get_latest_candle_ms(self, symbol: str, interval: str) -> int | None:
        """Return the newest stored candle open time, or None if there is none."""
        cursor = await self._database.db.execute(
            "SELECT MAX(timestamp_ms) FROM ohlcv_candles WHERE symbol = ? AND interval = ?",
            (symbol, interval),
        )
        row = await cursor.fetchone()
        return row[0] if row else None

    @staticmethod
    def _rows_to_pairs(rows) -> list[TradingPair]:  # type: ignore[no-untyped-def]
        pairs = []
        for row in rows:
            try:
                pairs.append(
                    TradingPair(
                        agent_name=row[0],
                        base_token_symbol=row[1],
                        quote_token_symbol=row[2],
                        base_chain=row[3],
                        dex_id=row[4],
                        base_token_address=row[5],
                        quote_token_address=row[6],
                    )
                )
            except InvalidTradingPairError as e:
                logger.warning("skipping_invalid_trading_pair", error=str(e))
        return pairs
