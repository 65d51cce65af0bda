"""MCP server exposing the EMA and candlestick tools and the saved-chart resource.

Every tool failure comes back as error text rather than a protocol error,
so the model can read and relay it. Expected failures (unknown token, no
data, upstream errors, bad input) log one line; anything else logs a traceback.
"""

import json
from typing import Annotated, Literal

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from ta_charts.charts.files import ChartFileStore
from ta_charts.charts.service import ChartService
from ta_charts.exceptions import ChartToolsError
from ta_charts.indicators.service import EMAService
from ta_charts.logging import get_logger

logger = get_logger(__name__)

TokenName = Annotated[
    str, Field(description="Simple name of the token like ETH, BNB, BTC etc.")
]
TimeAgo = Annotated[
    str, Field(description="ISO date string (e.g., '2023-01-01T00:00:00Z')")
]
Interval = Annotated[int, Field(gt=0, description="Interval value")]
IntervalFrequency = Annotated[
    Literal["minutes", "hours", "days", "weeks", "months"],
    Field(description="Interval frequency"),
]


async def get_emas_text(
    ema_service: EMAService,
    token_name: str,
    time_ago: str,
    interval: int,
    interval_frequency: str,
) -> str:
    """Run the EMA calculation and format the tool's text result."""
    try:
        rows = await ema_service.calculate_emas(
            token_name, time_ago, interval, interval_frequency
        )
        payload = json.dumps([row.to_dict() for row in rows])
    except (ChartToolsError, ValueError) as e:
        logger.error("get_emas_tool_failed", token_name=token_name, error=str(e))
        return f"Error calculating EMAs: {e}"
    except Exception as e:
        logger.exception("get_emas_tool_failed", token_name=token_name)
        return f"Error calculating EMAs: {e}"

    return f"EMA calculation completed for {token_name}-\n{payload}"


async def get_candlestick_text(
    chart_service: ChartService,
    token_name: str,
    time_ago: str,
    interval: int,
    interval_frequency: str,
) -> str:
    """Render the chart and format the tool's text result."""
    try:
        chart = await chart_service.candlestick_chart(
            token_name, time_ago, interval, interval_frequency
        )
    except (ChartToolsError, ValueError) as e:
        logger.error("get_candlestick_tool_failed", token_name=token_name, error=str(e))
        return f"Error generating candlestick chart: {e}"
    except Exception as e:
        logger.exception("get_candlestick_tool_failed", token_name=token_name)
        return f"Error generating candlestick chart: {e}"

    return (
        f"Generated candlestick chart for {token_name}. "
        f"Below is the base64 encoded SVG data:\n\n{chart}"
    )


def create_mcp_server(
    name: str,
    ema_service: EMAService,
    chart_service: ChartService,
    chart_files: ChartFileStore,
) -> FastMCP:
    """Build the FastMCP server with all tools and resources registered."""
    mcp = FastMCP(name)

    @mcp.tool(
        name="get_emas",
        description="Calculate EMAs for a given token's price data",
    )
    async def get_emas(
        token_name: TokenName,
        time_ago: TimeAgo,
        interval: Interval,
        interval_frequency: IntervalFrequency,
    ) -> str:
        return await get_emas_text(
            ema_service, token_name, time_ago, interval, interval_frequency
        )

    @mcp.tool(
        name="get_candlestick",
        description="Generate a candlestick chart for a given token",
    )
    async def get_candlestick(
        token_name: TokenName,
        time_ago: TimeAgo,
        interval: Interval,
        interval_frequency: IntervalFrequency,
    ) -> str:
        return await get_candlestick_text(
            chart_service, token_name, time_ago, interval, interval_frequency
        )

    @mcp.resource(
        "file://candlestick/{token_name}",
        name="candlestick_chart",
        description="Most recently generated candlestick chart for a token",
        mime_type="image/svg+xml",
    )
    def candlestick_chart(token_name: str) -> bytes:
        return chart_files.latest(token_name)

    return mcp
