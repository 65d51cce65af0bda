"""Shared test fixtures for the TA charts server."""

from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio

from ta_charts.config import AppSettings, BitquerySettings, ChartSettings, DatabaseSettings
from ta_charts.data.database import ChartDatabase
from ta_charts.data.store import MarketDataStore
from ta_charts.models import Candle, TradingPair

ETH_BINANCE = TradingPair(
    agent_name="ETH",
    base_token_symbol="ETH",
    quote_token_symbol="USDT",
    base_chain="ethereum",
    dex_id="binance",
)

ETH_UNISWAP = TradingPair(
    agent_name="ETH Uniswap",
    base_token_symbol="ETH",
    quote_token_symbol="USDC",
    base_chain="ethereum",
    base_token_address="0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
    quote_token_address="0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
)

CAKE_PANCAKE = TradingPair(
    agent_name="Pancake Agent",
    base_token_symbol="CAKE",
    quote_token_symbol="WBNB",
    base_chain="Binance Smart Chain",
    dex_id="pancakeswap",
    base_token_address="0x0e09fabb73bd3ade0a17ecc321fd13a19e81ce82",
    quote_token_address="0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c",
)


def make_candles(closes: list[str], start: int = 1_672_531_200, step: int = 3600) -> list[Candle]:
    """Build an ascending candle series from closing prices (as strings)."""
    candles = []
    for i, close in enumerate(closes):
        price = Decimal(close)
        candles.append(
            Candle(
                time=start + i * step,
                open=price,
                high=price + Decimal("1"),
                low=price - Decimal("1"),
                close=price,
                volume=Decimal("10.5"),
            )
        )
    return candles


@pytest.fixture
def mock_settings(tmp_path) -> AppSettings:
    """Return AppSettings pointing at a temp database and chart directory."""
    return AppSettings(
        log_level="DEBUG",
        database=DatabaseSettings(path=str(tmp_path / "test.db")),
        bitquery=BitquerySettings(
            api_key="test-bitquery-key",  # type: ignore[arg-type]
            url="https://bitquery.test/graphql",
        ),
        chart=ChartSettings(output_dir=str(tmp_path / "charts")),
    )


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncIterator[ChartDatabase]:
    """Connected ChartDatabase backed by a temp file."""
    async with ChartDatabase(str(tmp_path / "test.db")) as db:
        yield db


@pytest_asyncio.fixture
async def store(database: ChartDatabase) -> MarketDataStore:
    """MarketDataStore over the temp database."""
    return MarketDataStore(database)


@pytest.fixture
def eth_binance() -> TradingPair:
    """Centralized-exchange ETH/USDT catalog entry."""
    return ETH_BINANCE


@pytest.fixture
def eth_uniswap() -> TradingPair:
    """On-chain ETH/USDC entry with no dex_id."""
    return ETH_UNISWAP


@pytest.fixture
def cake_pancake() -> TradingPair:
    """On-chain CAKE/WBNB entry on a named DEX."""
    return CAKE_PANCAKE


@pytest.fixture
def candle_factory():
    """Factory building ascending hourly candles from closing prices."""
    return make_candles
