"""Tests for candlestick SVG rendering."""

import base64
from decimal import Decimal

import pytest

from ta_charts.charts.render import encode_svg, render_candlestick_svg
from ta_charts.charts.theme import CANDLE_DOWN_COLOR, CANDLE_UP_COLOR
from ta_charts.config import ChartSettings
from ta_charts.models import Candle


class TestRenderCandlestickSvg:
    """Tests for render_candlestick_svg."""

    def test_produces_svg_document(self, candle_factory) -> None:
        svg = render_candlestick_svg(
            candle_factory(["100", "102", "101"]), "ETH", ChartSettings()
        )

        assert svg.lstrip().startswith(b"<?xml")
        assert b"<svg" in svg
        assert b"ETH Price Chart" in svg

    def test_rising_and_falling_colors(self) -> None:
        candles = [
            Candle(
                time=1_672_531_200,
                open=Decimal("100"),
                high=Decimal("110"),
                low=Decimal("95"),
                close=Decimal("108"),
                volume=Decimal("1"),
            ),
            Candle(
                time=1_672_534_800,
                open=Decimal("108"),
                high=Decimal("109"),
                low=Decimal("99"),
                close=Decimal("101"),
                volume=Decimal("1"),
            ),
        ]

        svg = render_candlestick_svg(candles, "ETH", ChartSettings()).decode("utf-8")

        assert CANDLE_UP_COLOR in svg
        assert CANDLE_DOWN_COLOR in svg

    def test_dimensions_follow_settings(self, candle_factory) -> None:
        settings = ChartSettings(width=800, height=400, dpi=100)
        svg = render_candlestick_svg(candle_factory(["1", "2"]), "ETH", settings)

        # 8in x 4in at 72pt/in
        assert b'width="576pt"' in svg
        assert b'height="288pt"' in svg

    def test_date_labels(self, candle_factory) -> None:
        svg = render_candlestick_svg(candle_factory(["1", "2"]), "ETH", ChartSettings())
        assert b"2023-01-01" in svg

    def test_single_candle(self, candle_factory) -> None:
        svg = render_candlestick_svg(candle_factory(["42"]), "ETH", ChartSettings())
        assert b"<svg" in svg

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            render_candlestick_svg([], "ETH", ChartSettings())


class TestEncodeSvg:
    """Tests for base64 transport encoding."""

    def test_decodes_back(self) -> None:
        svg = b'<svg xmlns="http://www.w3.org/2000/svg"></svg>'
        encoded = encode_svg(svg)

        assert isinstance(encoded, str)
        assert base64.b64decode(encoded) == svg
