"""Exponential moving average over closing prices.

Uses Decimal arithmetic under a local context capped at a fixed number of
significant digits, so tiny micro-cap prices and very large ones keep the
same relative precision.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal, localcontext

from ta_charts.models import Candle, EMACandle

#: Significant digits kept for EMA results.
#: Bounds Decimal representations without a fixed exponent.
EMA_PRECISION = 28


def compute_ema(values: list[Decimal], window: int) -> list[Decimal]:
    """Compute Exponential Moving Average over a list of Decimal values.

    Uses the standard recursive formula:
        alpha = 2 / (window + 1)
        EMA_t = value_t * alpha + EMA_{t-1} * (1 - alpha)

    The first EMA value is the first input value, unchanged. It is a seed
    rather than a true average, since no earlier average exists; so no
    output is undefined.

    Args:
        values: Ordered list of closing prices (oldest first).
        window: Number of periods for EMA smoothing.

    Returns:
        List of EMA values, same length as input. Empty list if input is empty.

    Raises:
        ValueError: If window is not a positive integer.
    """
    if window < 1:
        raise ValueError(f"EMA window must be positive, got {window}")
    if not values:
        return []

    with localcontext() as ctx:
        ctx.prec = EMA_PRECISION
        alpha = Decimal("2") / (Decimal(window) + Decimal("1"))
        one_minus_alpha = Decimal("1") - alpha

        ema = [values[0]]
        for v in values[1:]:
            ema.append(v * alpha + ema[-1] * one_minus_alpha)

    return ema


def merge_emas(
    candles: list[Candle],
    fast: Sequence[Decimal | None],
    slow: Sequence[Decimal | None],
) -> list[EMACandle]:
    """Attach fast/slow EMA values to candles position-wise."""
    if not len(candles) == len(fast) == len(slow):
        raise ValueError(
            f"length mismatch: {len(candles)} candles, {len(fast)} fast, {len(slow)} slow"
        )
    return [
        EMACandle.from_candle(candle, trend_ema_fast=f, trend_ema_slow=s)
        for candle, f, s in zip(candles, fast, slow)
    ]


def drop_incomplete(rows: list[EMACandle]) -> list[EMACandle]:
    """Remove rows whose EMA fields are missing or not finite.

    compute_ema seeds its first value, so today this never removes a row.
    It matters for indicators that leave their warm-up period undefined.
    """
    return [
        row
        for row in rows
        if _is_finite(row.trend_ema_fast) and _is_finite(row.trend_ema_slow)
    ]


def _is_finite(value: Decimal | None) -> bool:
    return value is not None and value.is_finite()
