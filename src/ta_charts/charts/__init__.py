"""Candlestick chart rendering, theming, and saved-chart storage."""

from ta_charts.charts.files import ChartFileStore
from ta_charts.charts.render import encode_svg, render_candlestick_svg
from ta_charts.charts.service import ChartService

__all__ = ["ChartFileStore", "ChartService", "encode_svg", "render_candlestick_svg"]
