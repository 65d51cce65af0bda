"""HTTP endpoints served next to the MCP SSE transport."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from ta_charts.exceptions import (
    MalformedResponseError,
    NoDataError,
    NotFoundError,
    UpstreamError,
)
from ta_charts.logging import get_logger
from ta_charts.models import IntervalUnit

logger = get_logger(__name__)

router = APIRouter()

_VALID_FREQUENCIES = [unit.value for unit in IntervalUnit]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/candlestick")
async def get_candlestick(
    request: Request,
    token_name: str | None = None,
    time_ago: str | None = None,
    interval: str | None = None,
    interval_frequency: str | None = None,
) -> Response:
    """Candlestick chart for a token as an SVG image."""
    if not token_name or not time_ago or not interval or not interval_frequency:
        return _error(
            400,
            "Missing required parameters: token_name, time_ago, interval, interval_frequency",
        )

    if interval_frequency not in _VALID_FREQUENCIES:
        return _error(
            400,
            "Invalid interval_frequency. Must be one of: " + ", ".join(_VALID_FREQUENCIES),
        )

    try:
        interval_value = int(interval)
    except ValueError:
        return _error(400, "Invalid interval. Must be a positive integer")
    if interval_value <= 0:
        return _error(400, "Invalid interval. Must be a positive integer")

    chart_service = request.app.state.chart_service
    try:
        svg = await chart_service.render_svg(
            token_name, time_ago, interval_value, interval_frequency
        )
    except (NotFoundError, NoDataError) as e:
        return _error(404, str(e))
    except (UpstreamError, MalformedResponseError) as e:
        logger.error("candlestick_upstream_failed", token_name=token_name, error=str(e))
        return _error(502, str(e))
    except ValueError as e:
        return _error(400, str(e))
    except Exception as e:
        logger.exception("candlestick_failed", token_name=token_name)
        return _error(500, str(e) or "Unknown error occurred")

    return Response(content=svg, media_type="image/svg+xml")
