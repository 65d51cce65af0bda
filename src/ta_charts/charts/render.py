"""Candlestick chart rendering to SVG with matplotlib.

Uses the object-oriented Figure API (no pyplot), so no GUI backend or
global figure registry is involved.
"""

import base64
import io
from datetime import datetime, timezone

import matplotlib
from matplotlib.figure import Figure

from ta_charts.charts.theme import (
    CANDLE_BORDER_WIDTH,
    CANDLE_DOWN_COLOR,
    CANDLE_UP_COLOR,
    PURPLE_PASSION_RC,
)
from ta_charts.config import ChartSettings
from ta_charts.models import Candle

#: Max x-axis date labels before thinning.
_MAX_X_LABELS = 8
_BODY_WIDTH = 0.6


def render_candlestick_svg(
    candles: list[Candle], token_name: str, settings: ChartSettings
) -> bytes:
    """Render candles as a themed SVG document.

    The x axis is categorical (one slot per candle, labelled by UTC date),
    so gaps in the series do not leave empty space.
    """
    if not candles:
        raise ValueError("Cannot render a chart without candles")

    positions = list(range(len(candles)))
    opens = [float(c.open) for c in candles]
    closes = [float(c.close) for c in candles]
    highs = [float(c.high) for c in candles]
    lows = [float(c.low) for c in candles]

    rising = [c >= o for o, c in zip(opens, closes)]
    wick_colors = [CANDLE_UP_COLOR if up else CANDLE_DOWN_COLOR for up in rising]
    body_faces = [CANDLE_UP_COLOR if up else "none" for up in rising]
    body_bottoms = [min(o, c) for o, c in zip(opens, closes)]
    body_heights = [abs(c - o) for o, c in zip(opens, closes)]

    with matplotlib.rc_context(PURPLE_PASSION_RC):
        fig = Figure(
            figsize=(settings.width / settings.dpi, settings.height / settings.dpi),
            dpi=settings.dpi,
        )
        ax = fig.add_subplot()
        ax.set_title(f"{token_name} Price Chart")

        ax.vlines(positions, lows, highs, colors=wick_colors, linewidth=1)
        ax.bar(
            positions,
            body_heights,
            bottom=body_bottoms,
            width=_BODY_WIDTH,
            color=body_faces,
            edgecolor=wick_colors,
            linewidth=CANDLE_BORDER_WIDTH,
        )

        step = max(1, len(candles) // _MAX_X_LABELS)
        ticks = positions[::step]
        ax.set_xticks(ticks, [_date_label(candles[i].time) for i in ticks])
        ax.set_xlim(-1, len(candles))
        ax.margins(y=0.05)

        fig.tight_layout()
        buffer = io.BytesIO()
        fig.savefig(buffer, format="svg")

    return buffer.getvalue()


def encode_svg(svg: bytes) -> str:
    """Base64-encode an SVG document for transport as text."""
    return base64.b64encode(svg).decode("ascii")


def _date_label(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")
