"""Candlestick chart generation for a token."""

from ta_charts.charts.files import ChartFileStore
from ta_charts.charts.render import encode_svg, render_candlestick_svg
from ta_charts.config import ChartSettings
from ta_charts.logging import get_logger
from ta_charts.models import IntervalUnit
from ta_charts.ohlcv.service import OHLCVService

logger = get_logger(__name__)


class ChartService:
    """Fetches a token's candles and renders them to a base64 SVG chart.

    When a ChartFileStore is given every chart is also saved to disk.
    """

    def __init__(
        self,
        ohlcv: OHLCVService,
        settings: ChartSettings,
        files: ChartFileStore | None = None,
    ) -> None:
        self._ohlcv = ohlcv
        self._settings = settings
        self._files = files

    async def render_svg(
        self,
        token_name: str,
        time_ago: str,
        interval: int,
        interval_frequency: str | IntervalUnit,
    ) -> bytes:
        candles = await self._ohlcv.get_ohlcv(
            token_name, time_ago, interval, interval_frequency
        )

        svg = render_candlestick_svg(candles, token_name, self._settings)
        logger.info("chart_generated", token_name=token_name, candles=len(candles))

        if self._files is not None:
            self._files.save(token_name, svg)
        return svg

    async def candlestick_chart(
        self,
        token_name: str,
        time_ago: str,
        interval: int,
        interval_frequency: str | IntervalUnit,
    ) -> str:
        """Render the chart and return it base64 encoded."""
        svg = await self.render_svg(token_name, time_ago, interval, interval_frequency)
        return encode_svg(svg)
