"""Tests for ChartService."""

import base64
from unittest.mock import AsyncMock

import pytest

from ta_charts.charts.files import ChartFileStore
from ta_charts.charts.service import ChartService
from ta_charts.config import ChartSettings
from ta_charts.exceptions import NoDataError


class TestChartService:
    """Tests for chart generation from fetched candles."""

    @pytest.mark.asyncio
    async def test_candlestick_chart_is_base64_svg(self, candle_factory) -> None:
        ohlcv = AsyncMock()
        ohlcv.get_ohlcv = AsyncMock(return_value=candle_factory(["100", "101", "99"]))
        service = ChartService(ohlcv, ChartSettings())

        encoded = await service.candlestick_chart("ETH", "2023-01-01T00:00:00Z", 1, "hours")

        svg = base64.b64decode(encoded)
        assert b"<svg" in svg
        assert b"ETH Price Chart" in svg
        ohlcv.get_ohlcv.assert_awaited_once_with("ETH", "2023-01-01T00:00:00Z", 1, "hours")

    @pytest.mark.asyncio
    async def test_saves_when_file_store_given(self, tmp_path, candle_factory) -> None:
        ohlcv = AsyncMock()
        ohlcv.get_ohlcv = AsyncMock(return_value=candle_factory(["100", "101"]))
        files = ChartFileStore(tmp_path)
        service = ChartService(ohlcv, ChartSettings(), files)

        svg = await service.render_svg("ETH", "2023-01-01T00:00:00Z", 1, "hours")

        assert files.latest("ETH") == svg

    @pytest.mark.asyncio
    async def test_upstream_errors_propagate(self) -> None:
        ohlcv = AsyncMock()
        ohlcv.get_ohlcv = AsyncMock(side_effect=NoDataError("No data found"))
        service = ChartService(ohlcv, ChartSettings())

        with pytest.raises(NoDataError):
            await service.candlestick_chart("ETH", "2023-01-01T00:00:00Z", 1, "hours")
