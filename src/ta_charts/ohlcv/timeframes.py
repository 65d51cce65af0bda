"""Interval and start-time helpers shared by the OHLCV adapters."""

from datetime import datetime, timezone

from ta_charts.models import IntervalUnit

#: Exchange interval letter per unit. Months use upper-case M (minutes own m).
INTERVAL_LETTERS: dict[str, str] = {
    IntervalUnit.MINUTES.value: "m",
    IntervalUnit.HOURS.value: "h",
    IntervalUnit.DAYS.value: "d",
    IntervalUnit.WEEKS.value: "w",
    IntervalUnit.MONTHS.value: "M",
}


def unit_value(unit: str | IntervalUnit) -> str:
    """Plain string value of a unit, whether given as enum or text."""
    return unit.value if isinstance(unit, IntervalUnit) else str(unit)


def interval_token(interval: int, unit: str | IntervalUnit) -> str:
    """Build an exchange interval token such as "15m" or "4h".

    Unrecognized units fall back to minutes.
    """
    return f"{interval}{INTERVAL_LETTERS.get(unit_value(unit), 'm')}"


def parse_time_ago(value: str) -> datetime:
    """Parse an ISO-8601 start time. Naive values are taken as UTC.

    Raises ValueError on text that is not ISO-8601.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_iso_utc(value: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with a Z suffix."""
    text = value.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")
