from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def coerce_date(value: object) -> Optional[date]:
    """Best-effort conversion of a DB/API value into a date.

    Returns None for anything that is not a date or a YYYY-MM-DD string.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_iso_date(value.strip()[:10])
        except ValueError:
            return None
    return None


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar date in [start, end], ascending. Empty when end < start."""
    # count-based so a range ending on date.max never steps past it
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()
