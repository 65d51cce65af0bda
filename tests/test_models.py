"""Tests for shared data models: TradingPair validation and candle serialization."""

from decimal import Decimal

import pytest

from ta_charts.exceptions import InvalidTradingPairError
from ta_charts.models import Candle, EMACandle, TradingPair


class TestTradingPair:
    """Tests for TradingPair venue invariants."""

    def test_centralized_pair_needs_only_symbols(self) -> None:
        pair = TradingPair(
            agent_name="BTC",
            base_token_symbol="BTC",
            quote_token_symbol="USDT",
            base_chain="bitcoin",
            dex_id="Binance",
        )
        assert pair.is_centralized

    def test_centralized_pair_without_quote_symbol_rejected(self) -> None:
        with pytest.raises(InvalidTradingPairError):
            TradingPair(
                agent_name="BTC",
                base_token_symbol="BTC",
                quote_token_symbol="",
                base_chain="bitcoin",
                dex_id="binance",
            )

    def test_on_chain_pair_without_addresses_rejected(self) -> None:
        with pytest.raises(InvalidTradingPairError):
            TradingPair(
                agent_name="PEPE",
                base_token_symbol="PEPE",
                quote_token_symbol="WETH",
                base_chain="ethereum",
                dex_id="uniswap",
                base_token_address="0xabc",
            )

    def test_invalid_pair_is_a_value_error(self) -> None:
        """Catalog validation failures can be handled as ValueError."""
        assert issubclass(InvalidTradingPairError, ValueError)

    def test_pair_is_immutable(self, eth_binance: TradingPair) -> None:
        with pytest.raises(AttributeError):
            eth_binance.dex_id = "uniswap"  # type: ignore[misc]


class TestCandleSerialization:
    """Tests for the JSON-friendly forms of candles."""

    def test_candle_to_dict(self) -> None:
        candle = Candle(
            time=1_700_000_000,
            open=Decimal("1.5"),
            high=Decimal("2"),
            low=Decimal("1"),
            close=Decimal("1.75"),
            volume=Decimal("0.000000012"),
        )
        data = candle.to_dict()
        assert data["time"] == 1_700_000_000
        assert data["close"] == 1.75
        assert data["volume"] == "0.000000012"

    def test_ema_candle_volume_is_fixed_point_text(self) -> None:
        """Tiny volumes keep 10 decimal places instead of float rounding."""
        candle = Candle(
            time=1,
            open=Decimal("1"),
            high=Decimal("1"),
            low=Decimal("1"),
            close=Decimal("1"),
            volume=Decimal("0.000000012"),
        )
        row = EMACandle.from_candle(candle, Decimal("1.25"), None)
        data = row.to_dict()
        assert data["volume"] == "0.0000000120"
        assert data["trend_ema_fast"] == 1.25
        assert data["trend_ema_slow"] is None

    def test_ema_candle_huge_volume_renders(self) -> None:
        """Volumes beyond the default context precision still render."""
        candle = Candle(
            time=1,
            open=Decimal("1"),
            high=Decimal("1"),
            low=Decimal("1"),
            close=Decimal("1"),
            volume=Decimal("123456789012345678901.5"),
        )
        data = EMACandle.from_candle(candle, None, None).to_dict()
        assert data["volume"] == "123456789012345678901.5000000000"

    def test_from_candle_copies_ohlcv(self, candle_factory) -> None:
        candle = candle_factory(["100"])[0]
        row = EMACandle.from_candle(candle, Decimal("100"), Decimal("100"))
        assert row.time == candle.time
        assert row.high == candle.high
        assert row.volume == candle.volume
