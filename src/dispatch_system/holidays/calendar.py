from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import coerce_date
from ..core.constants import WEEKLY_HOLIDAY_NAME, WEEKLY_HOLIDAY_WEEKDAY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HolidayEntry:
    holiday_date: date
    holiday_name: str


# Korean public holidays (including substitute holidays). Opt-in: routes run on
# public holidays unless PUBLIC_HOLIDAYS_OFF is set.
KOREAN_PUBLIC_HOLIDAYS: Mapping[date, str] = {
    date(2025, 1, 1): "신정",
    date(2025, 1, 28): "설날 연휴",
    date(2025, 1, 29): "설날",
    date(2025, 1, 30): "설날 연휴",
    date(2025, 3, 1): "삼일절",
    date(2025, 3, 3): "대체공휴일",
    date(2025, 5, 5): "어린이날",
    date(2025, 5, 6): "대체공휴일",
    date(2025, 6, 6): "현충일",
    date(2025, 8, 15): "광복절",
    date(2025, 10, 3): "개천절",
    date(2025, 10, 5): "추석 연휴",
    date(2025, 10, 6): "추석",
    date(2025, 10, 7): "추석 연휴",
    date(2025, 10, 8): "대체공휴일",
    date(2025, 10, 9): "한글날",
    date(2025, 12, 25): "성탄절",
    date(2026, 1, 1): "신정",
    date(2026, 2, 16): "설날 연휴",
    date(2026, 2, 17): "설날",
    date(2026, 2, 18): "설날 연휴",
    date(2026, 3, 1): "삼일절",
    date(2026, 3, 2): "대체공휴일",
    date(2026, 5, 5): "어린이날",
    date(2026, 5, 24): "부처님오신날",
    date(2026, 5, 25): "대체공휴일",
    date(2026, 6, 6): "현충일",
    date(2026, 8, 15): "광복절",
    date(2026, 8, 17): "대체공휴일",
    date(2026, 9, 24): "추석 연휴",
    date(2026, 9, 25): "추석",
    date(2026, 9, 26): "추석 연휴",
    date(2026, 10, 3): "개천절",
    date(2026, 10, 5): "대체공휴일",
    date(2026, 10, 9): "한글날",
    date(2026, 12, 25): "성탄절",
}


class HolidayCalendar:
    """Static non-working-day lookup: the weekly Sunday rest day plus a holiday table.

    The default table is empty (Sunday only). Pure lookup with no side effects;
    unknown dates are simply working days.
    """

    def __init__(self, entries: Optional[Iterable[HolidayEntry]] = None):
        self._table: dict[date, str] = {e.holiday_date: e.holiday_name for e in (entries or ())}

    @classmethod
    def with_extra(cls, extra: Iterable[HolidayEntry], *, public_holidays: bool = False) -> "HolidayCalendar":
        entries: list[HolidayEntry] = []
        if public_holidays:
            entries.extend(HolidayEntry(d, name) for d, name in KOREAN_PUBLIC_HOLIDAYS.items())
        entries.extend(extra)
        return cls(entries)

    def is_non_working_day(self, day: date) -> tuple[bool, str]:
        if day.weekday() == WEEKLY_HOLIDAY_WEEKDAY:
            return True, WEEKLY_HOLIDAY_NAME

        name = self._table.get(day)
        if name:
            return True, name
        return False, ""

    def holidays_between(self, start: date, end: date) -> list[HolidayEntry]:
        """Table entries in [start, end] (weekly rest days are not listed)."""
        return [
            HolidayEntry(d, name)
            for d, name in sorted(self._table.items())
            if start <= d <= end
        ]


def parse_extra_holidays(raw: str) -> list[HolidayEntry]:
    """Parse the EXTRA_HOLIDAYS setting: "2025-06-03:대통령선거일,2025-12-31:종무식".

    Malformed items are skipped.
    """
    out: list[HolidayEntry] = []
    for item in (raw or "").split(","):
        item = item.strip()
        if not item:
            continue
        day_s, _, name = item.partition(":")
        day = coerce_date(day_s)
        if day is None or not name.strip():
            logger.warning("Ignoring malformed holiday entry %r", item)
            continue
        out.append(HolidayEntry(day, name.strip()))
    return out
