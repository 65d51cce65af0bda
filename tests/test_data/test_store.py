"""Tests for MarketDataStore against a real temp SQLite database.

Covers catalog upsert and full-text search, and candle insert/query ordering.
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from ta_charts.data.store import MarketDataStore, phrase_query
from ta_charts.models import TradingPair

HOUR_MS = 3_600_000
T0 = 1_672_531_200_000  # 2023-01-01T00:00:00Z


def _kline(ts: int, close: str = "100") -> list:
    return [ts, "99", "101", "98", close, "12.5"]


class TestPhraseQuery:
    """Tests for FTS5 phrase quoting."""

    def test_wraps_in_quotes(self) -> None:
        assert phrase_query("ETH") == '"ETH"'

    def test_doubles_embedded_quotes(self) -> None:
        assert phrase_query('E"TH') == '"E""TH"'


class TestCatalogSearch:
    """Tests for trading-pair upsert and search."""

    @pytest.mark.asyncio
    async def test_search_matches_symbol_case_insensitively(
        self,
        store: MarketDataStore,
        eth_binance: TradingPair,
        eth_uniswap: TradingPair,
        cake_pancake: TradingPair,
    ) -> None:
        await store.upsert_trading_pairs([eth_binance, eth_uniswap, cake_pancake])

        results = await store.search_trading_pairs("eth")

        assert {p.agent_name for p in results} == {"ETH", "ETH Uniswap"}

    @pytest.mark.asyncio
    async def test_search_orders_by_relevance(
        self,
        store: MarketDataStore,
        eth_binance: TradingPair,
        eth_uniswap: TradingPair,
    ) -> None:
        """The exact-name entry outranks the longer agent name."""
        await store.upsert_trading_pairs([eth_uniswap, eth_binance])

        results = await store.search_trading_pairs("ETH")

        assert results[0] == eth_binance

    @pytest.mark.asyncio
    async def test_search_matches_agent_name(
        self, store: MarketDataStore, cake_pancake: TradingPair
    ) -> None:
        await store.upsert_trading_pairs([cake_pancake])

        assert await store.search_trading_pairs("pancake") == [cake_pancake]
        assert await store.search_trading_pairs("CAKE") == [cake_pancake]

    @pytest.mark.asyncio
    async def test_search_round_trips_optional_fields(
        self, store: MarketDataStore, eth_uniswap: TradingPair
    ) -> None:
        await store.upsert_trading_pairs([eth_uniswap])

        [pair] = await store.search_trading_pairs("Uniswap")

        assert pair.dex_id is None
        assert pair.base_token_address == eth_uniswap.base_token_address

    @pytest.mark.asyncio
    async def test_blank_query_matches_nothing(
        self, store: MarketDataStore, eth_binance: TradingPair
    ) -> None:
        await store.upsert_trading_pairs([eth_binance])
        assert await store.search_trading_pairs("   ") == []

    @pytest.mark.asyncio
    async def test_query_with_quotes_does_not_raise(
        self, store: MarketDataStore, eth_binance: TradingPair
    ) -> None:
        await store.upsert_trading_pairs([eth_binance])
        assert await store.search_trading_pairs('ETH" OR "BTC') == []

    @pytest.mark.asyncio
    async def test_upsert_updates_existing_entry_and_index(
        self, store: MarketDataStore, eth_binance: TradingPair
    ) -> None:
        """Same (agent_name, base_chain) updates in place; search sees new values."""
        await store.upsert_trading_pairs([eth_binance])
        renamed = replace(eth_binance, base_token_symbol="WETH")
        await store.upsert_trading_pairs([renamed])

        assert await store.get_trading_pairs() == [renamed]
        [hit] = await store.search_trading_pairs("WETH")
        assert hit.base_token_symbol == "WETH"

    @pytest.mark.asyncio
    async def test_get_trading_pairs_filters_by_venue(
        self,
        store: MarketDataStore,
        eth_binance: TradingPair,
        eth_uniswap: TradingPair,
        cake_pancake: TradingPair,
    ) -> None:
        await store.upsert_trading_pairs([eth_binance, eth_uniswap, cake_pancake])

        assert await store.get_trading_pairs(dex_id="BINANCE") == [eth_binance]
        assert len(await store.get_trading_pairs()) == 3

    @pytest.mark.asyncio
    async def test_upsert_empty_list(self, store: MarketDataStore) -> None:
        assert await store.upsert_trading_pairs([]) == 0


class TestCandleStore:
    """Tests for candle insert and query."""

    @pytest.mark.asyncio
    async def test_candles_returned_ascending_regardless_of_insert_order(
        self, store: MarketDataStore
    ) -> None:
        await store.insert_candles(
            "ETHUSDT", "1h", [_kline(T0 + 2 * HOUR_MS), _kline(T0), _kline(T0 + HOUR_MS)]
        )

        records = await store.get_candles("ETHUSDT", "1h")

        assert [r.timestamp_ms for r in records] == [T0, T0 + HOUR_MS, T0 + 2 * HOUR_MS]

    @pytest.mark.asyncio
    async def test_duplicate_timestamps_ignored(self, store: MarketDataStore) -> None:
        first = await store.insert_candles("ETHUSDT", "1h", [_kline(T0, "100")])
        second = await store.insert_candles("ETHUSDT", "1h", [_kline(T0, "200")])

        records = await store.get_candles("ETHUSDT", "1h")

        assert first == 1
        assert second == 0
        assert len(records) == 1
        assert records[0].close == Decimal("100")

    @pytest.mark.asyncio
    async def test_since_filter_is_inclusive(self, store: MarketDataStore) -> None:
        await store.insert_candles(
            "ETHUSDT", "1h", [_kline(T0), _kline(T0 + HOUR_MS), _kline(T0 + 2 * HOUR_MS)]
        )

        records = await store.get_candles("ETHUSDT", "1h", since_ms=T0 + HOUR_MS)

        assert [r.timestamp_ms for r in records] == [T0 + HOUR_MS, T0 + 2 * HOUR_MS]

    @pytest.mark.asyncio
    async def test_symbol_and_interval_must_match_exactly(
        self, store: MarketDataStore
    ) -> None:
        await store.insert_candles("ETHUSDT", "1h", [_kline(T0)])
        await store.insert_candles("ETHUSDT", "1d", [_kline(T0)])

        assert len(await store.get_candles("ETHUSDT", "1h")) == 1
        assert await store.get_candles("ETHUSDT", "4h") == []
        assert await store.get_candles("ETHUSD", "1h") == []

    @pytest.mark.asyncio
    async def test_values_restored_as_decimal(self, store: MarketDataStore) -> None:
        await store.insert_candles("ETHUSDT", "1h", [[T0, 1.1, 2.2, 0.5, 1.9, "0.000001"]])

        [record] = await store.get_candles("ETHUSDT", "1h")

        assert record.open == Decimal("1.1")
        assert record.volume == Decimal("0.000001")

    @pytest.mark.asyncio
    async def test_latest_candle_ms(self, store: MarketDataStore) -> None:
        assert await store.get_latest_candle_ms("ETHUSDT", "1h") is None

        await store.insert_candles("ETHUSDT", "1h", [_kline(T0), _kline(T0 + HOUR_MS)])

        assert await store.get_latest_candle_ms("ETHUSDT", "1h") == T0 + HOUR_MS
