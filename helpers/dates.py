"""Timestamp parsing, sort keys and week ids.

Sheet cells are free-form strings; everything here treats an unparseable
value as "no timestamp" instead of failing.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_WEEK_ID = re.compile(r"^(\d{4})-W(\d{2})$")

_FALLBACK_FORMATS = (
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a cell value into an aware datetime, or None.

    Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, date):
        ts = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        ts = _parse_string(value.strip())
        if ts is None:
            return None
    else:
        return None

    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _parse_string(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def to_iso(ts: datetime | None) -> str | None:
    """ISO-8601 in UTC with millisecond precision, like the front-end expects."""
    if ts is None:
        return None
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ========== Sort keys ==========


def newest_first(getter: Callable[[Any], Any]) -> Callable[[Any], tuple]:
    """Sort key: valid timestamps descending, unparseable ones last."""

    def key(record: Any) -> tuple:
        ts = parse_timestamp(getter(record))
        return (ts is None, -ts.timestamp() if ts else 0.0)

    return key


def pinned_then_newest(
    pinned_getter: Callable[[Any], bool],
    ts_getter: Callable[[Any], Any],
) -> Callable[[Any], tuple]:
    """Sort key: pinned records first, then newest first, invalid timestamps last."""
    newest = newest_first(ts_getter)

    def key(record: Any) -> tuple:
        return (not pinned_getter(record), *newest(record))

    return key


# ========== Weeks ==========


@dataclass
class WeekDay:
    date: str
    day_index: int


@dataclass
class WeekInfo:
    """Working week (Monday to Friday) for an ISO week id."""

    id: str
    title: str
    date_range: str
    days: list[WeekDay] = field(default_factory=list)


def week_id(d: date) -> str:
    """ISO week id, e.g. 2026-W03."""
    year, week, _ = d.isocalendar()
    return f"{year}-W{week:02d}"


def week_info(wid: str) -> WeekInfo:
    """Title, date range and working days of a week id."""
    match = _WEEK_ID.match(wid or "")
    if not match:
        raise ValueError(f"Invalid week id: {wid!r}")

    year, week = int(match.group(1)), int(match.group(2))
    monday = date.fromisocalendar(year, week, 1)
    days = [monday + timedelta(days=i) for i in range(5)]

    return WeekInfo(
        id=wid,
        title=f"{year} W{week:02d}",
        date_range=f"{days[0]:%m/%d} - {days[-1]:%m/%d}",
        days=[WeekDay(date=d.isoformat(), day_index=weekday_of(d.isoformat())) for d in days],
    )


def weekday_of(date_string: str) -> int:
    """Day of week for YYYY-MM-DD (0 = Sunday), -1 when not a valid date."""
    if not _DATE_ONLY.match(date_string or ""):
        return -1
    try:
        d = date.fromisoformat(date_string)
    except ValueError:
        return -1
    return d.isoweekday() % 7
