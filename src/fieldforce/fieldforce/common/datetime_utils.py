from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value)).date()


def as_datetime(value: Union[date, datetime, str, None]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    return datetime.fromisoformat(str(value))


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Half-open [start, end) datetimes of a calendar month."""
    start = datetime(year, month, 1)
    year2, month2 = shift_month(year, month, 1)
    return start, datetime(year2, month2, 1)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_key(year: int, month: int) -> str:
    """Target key for a month, e.g. 2024_3 (1-based month, no padding)."""
    return f"{year}_{month}"


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every calendar date of the inclusive interval [start, end]."""
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


def report_date_key(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def parse_report_date_key(key: str, *, year: int) -> Optional[date]:
    """Read a claim's reportDateKey.

    Accepts YYYY-MM-DD and the legacy MM-DD form, which carries no year and is
    read in ``year``. Returns None for anything else.
    """
    parts = (key or "").strip().split("-")
    try:
        if len(parts) == 3:
            return date(int(parts[0]), int(parts[1]), int(parts[2]))
        if len(parts) == 2:
            return date(int(year), int(parts[0]), int(parts[1]))
    except ValueError:
        return None
    return None
