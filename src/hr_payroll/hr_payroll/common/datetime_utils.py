from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Union

from ..core.constants import WEEK_ENDING_WEEKDAY

_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: Union[str, time]) -> time:
    """Parse HH:MM into time. A `time` passes through unchanged."""
    if isinstance(value, time):
        return value
    return datetime.strptime(str(value).strip(), "%H:%M").time()


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse a clock export timestamp. Raises ValueError when nothing fits."""
    if isinstance(value, datetime):
        return value
    text = str(value or "").strip()
    if not text:
        raise ValueError("empty timestamp")
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"unrecognised timestamp: {text!r}")


def at(day: date, t: time) -> datetime:
    return datetime.combine(day, t)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (floored, may be negative)."""
    return int((end - start).total_seconds() // 60)


def fmt_hhmm(value: datetime | time | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%H:%M")


def fmt_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def week_ending_for(day: date) -> date:
    """Saturday closing the payroll week that contains `day`."""
    return day + timedelta(days=(WEEK_ENDING_WEEKDAY - day.weekday()) % 7)


def week_dates(week_ending: date) -> list[date]:
    return [week_ending - timedelta(days=offset) for offset in range(6, -1, -1)]
