"""Technical indicators computed over OHLCV series."""

from ta_charts.indicators.ema import compute_ema, drop_incomplete, merge_emas
from ta_charts.indicators.service import EMAService

__all__ = ["EMAService", "compute_ema", "drop_incomplete", "merge_emas"]
