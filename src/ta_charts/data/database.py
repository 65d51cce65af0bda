"""Async SQLite database manager for the trading-pair catalog and candle store.

Uses aiosqlite for non-blocking database operations with WAL mode
for concurrent read/write performance. The catalog is searchable through
an FTS5 index kept in sync by triggers.
"""

import os
from typing import Self

import aiosqlite

from ta_charts.logging import get_logger

logger = get_logger(__name__)

SCHEMA_VERSION = 1

_CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS trading_pairs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    agent_name TEXT NOT NULL,
    base_token_symbol TEXT NOT NULL,
    quote_token_symbol TEXT NOT NULL,
    base_chain TEXT NOT NULL,
    dex_id TEXT,
    base_token_address TEXT,
    quote_token_address TEXT,
    UNIQUE (agent_name, base_chain)
);

CREATE VIRTUAL TABLE IF NOT EXISTS trading_pairs_fts USING fts5(
    agent_name,
    base_token_symbol,
    content='trading_pairs',
    content_rowid='id'
);

CREATE TABLE IF NOT EXISTS ohlcv_candles (
    symbol TEXT NOT NULL,
    interval TEXT NOT NULL,
    timestamp_ms INTEGER NOT NULL,
    open TEXT NOT NULL,
    high TEXT NOT NULL,
    low TEXT NOT NULL,
    close TEXT NOT NULL,
    volume TEXT NOT NULL,
    PRIMARY KEY (symbol, interval, timestamp_ms)
);
"""

_CREATE_TRIGGERS_SQL = """
CREATE TRIGGER IF NOT EXISTS trading_pairs_ai AFTER INSERT ON trading_pairs BEGIN
    INSERT INTO trading_pairs_fts (rowid, agent_name, base_token_symbol)
    VALUES (new.id, new.agent_name, new.base_token_symbol);
END;

CREATE TRIGGER IF NOT EXISTS trading_pairs_ad AFTER DELETE ON trading_pairs BEGIN
    INSERT INTO trading_pairs_fts (trading_pairs_fts, rowid, agent_name, base_token_symbol)
    VALUES ('delete', old.id, old.agent_name, old.base_token_symbol);
END;

CREATE TRIGGER IF NOT EXISTS trading_pairs_au AFTER UPDATE ON trading_pairs BEGIN
    INSERT INTO trading_pairs_fts (trading_pairs_fts, rowid, agent_name, base_token_symbol)
    VALUES ('delete', old.id, old.agent_name, old.base_token_symbol);
    INSERT INTO trading_pairs_fts (rowid, agent_name, base_token_symbol)
    VALUES (new.id, new.agent_name, new.base_token_symbol);
END;
"""


class ChartDatabase:
    """Async SQLite connection manager.

    One instance is opened at process start and injected into every
    component that needs it; it is closed on shutdown.

    Usage:
        # Context manager (recommended)
        async with ChartDatabase("/path/to/db") as database:
            store = MarketDataStore(database)

        # Manual lifecycle
        database = ChartDatabase("/path/to/db")
        await database.connect()
        try:
            ...
        finally:
            await database.close()
    """

    def __init__(self, db_path: str = "data/ta_charts.db") -> None:
        self._db_path = db_path
        self._connection: aiosqlite.Connection | None = None

    @property
    def db(self) -> aiosqlite.Connection:
        """Access the raw aiosqlite connection.

        Raises RuntimeError if not connected.
        """
        if self._connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    async def connect(self) -> None:
        """Open the connection, configure pragmas, and create the schema.

        Creates the parent directory if it does not exist.
        """
        if self._connection is not None:
            return

        db_dir = os.path.dirname(self._db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        self._connection = await aiosqlite.connect(self._db_path)

        await self._connection.execute("PRAGMA journal_mode=WAL")
        await self._connection.execute("PRAGMA synchronous=NORMAL")

        await self._create_schema()
        await self._ensure_schema_version()

        logger.info("chart_db_connected", db_path=self._db_path)

    async def close(self) -> None:
        """Close the database connection if open."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
            logger.info("chart_db_closed", db_path=self._db_path)

    async def _create_schema(self) -> None:
        assert self._connection is not None
        await self._connection.executescript(_CREATE_TABLES_SQL)
        await self._connection.executescript(_CREATE_TRIGGERS_SQL)
        await self._connection.commit()

    async def _ensure_schema_version(self) -> None:
        assert self._connection is not None
        cursor = await self._connection.execute(
            "SELECT version FROM schema_version LIMIT 1"
        )
        row = await cursor.fetchone()
        if row is None:
            await self._connection.execute(
                "INSERT INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )
            await self._connection.commit()
            logger.info("schema_version_set", version=SCHEMA_VERSION)

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore[no-untyped-def]
        await self.close()
