"""EMA trend lines over a token's OHLCV series."""

from ta_charts.config import IndicatorSettings
from ta_charts.indicators.ema import compute_ema, drop_incomplete, merge_emas
from ta_charts.logging import get_logger, log_elapsed
from ta_charts.models import EMACandle, IntervalUnit
from ta_charts.ohlcv.service import OHLCVService

logger = get_logger(__name__)


class EMAService:
    """Computes fast and slow EMA trend lines for a token.

    Usage:
        ema_service = EMAService(ohlcv_service, settings.indicators)
        rows = await ema_service.calculate_emas("ETH", "2023-01-01T00:00:00Z", 1, "hours")
    """

    def __init__(self, ohlcv: OHLCVService, settings: IndicatorSettings) -> None:
        self._ohlcv = ohlcv
        self._settings = settings

    async def calculate_emas(
        self,
        token_name: str,
        time_ago: str,
        interval: int,
        interval_frequency: str | IntervalUnit,
    ) -> list[EMACandle]:
        """Fetch candles and augment each with its fast and slow EMA."""
        logger.info("ema_calculation_started", token_name=token_name)
        with log_elapsed(logger, "ema_calculation", token_name=token_name):
            candles = await self._ohlcv.get_ohlcv(
                token_name, time_ago, interval, interval_frequency
            )

            closes = [c.close for c in candles]
            fast = compute_ema(closes, self._settings.ema_fast_window)
            slow = compute_ema(closes, self._settings.ema_slow_window)

            return drop_incomplete(merge_emas(candles, fast, slow))
