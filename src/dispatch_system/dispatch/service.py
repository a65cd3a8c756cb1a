from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import month_bounds
from ..common.validators import require_month
from ..core.constants import DEFAULT_DISPATCH_WORKERS, MAX_RANGE_DAYS
from ..core.enums import DispatchStatus
from ..core.exceptions import ValidationError
from ..holidays.calendar import HolidayCalendar
from ..leaves.repository import LeaveRepository
from ..routes.service import RouteConfigService
from .aggregator import dispatch_statistics, filter_dispatches, resolve_range, summarize_month
from .model import DailyDispatch, DispatchDaySummary, DispatchStatistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeResult:
    dispatches: list[DailyDispatch]
    statistics: DispatchStatistics
    total_routes: int


class DispatchService:
    """Use case: answer dispatch queries for the calendar, list and detail views.

    Fetches a fresh configuration snapshot plus the leave/absence facts for the
    covered range, then delegates to the pure engine. Nothing is cached.
    """

    def __init__(
        self,
        config: RouteConfigService,
        leaves: LeaveRepository,
        *,
        calendar: Optional[HolidayCalendar] = None,
        workers: int = DEFAULT_DISPATCH_WORKERS,
        max_range_days: int = MAX_RANGE_DAYS,
    ):
        self._config = config
        self._leaves = leaves
        self._calendar = calendar or HolidayCalendar()
        self._workers = max(int(workers), 0)
        self._max_range_days = int(max_range_days)

    @property
    def calendar(self) -> HolidayCalendar:
        return self._calendar

    def _require_span(self, start: date, end: date) -> None:
        if (end - start).days + 1 > self._max_range_days:
            raise ValidationError(f"조회 기간은 최대 {self._max_range_days}일입니다")

    def _resolve(self, start: date, end: date) -> tuple[list[DailyDispatch], int]:
        if end < start:
            return [], 0

        snapshot = self._config.snapshot()
        leaves = self._leaves.list_range(start=start, end=end)
        absences = self._config.list_absences(start=start, end=end)
        logger.debug(
            "Dispatch %s..%s: %d route(s), %d leave record(s), %d absence(s)",
            start, end, len(snapshot.routes), len(leaves), len(absences),
        )

        if self._workers > 1:
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                dailies = resolve_range(start, end, snapshot, leaves, absences, calendar=self._calendar, executor=pool)
        else:
            dailies = resolve_range(start, end, snapshot, leaves, absences, calendar=self._calendar)
        return dailies, len(snapshot.routes)

    def get_day(self, day: date) -> DailyDispatch:
        dailies, _ = self._resolve(day, day)
        return dailies[0]

    def get_range(
        self,
        *,
        start: date,
        end: date,
        route_id: Optional[str] = None,
        status: Optional[DispatchStatus] = None,
    ) -> RangeResult:
        """Range list view. Statistics are computed before the filters are applied."""
        self._require_span(start, end)
        dailies, total_routes = self._resolve(start, end)
        return RangeResult(
            dispatches=filter_dispatches(dailies, route_id=route_id, status=status),
            statistics=dispatch_statistics(dailies),
            total_routes=total_routes,
        )

    def get_range_statistics(self, *, start: date, end: date) -> DispatchStatistics:
        self._require_span(start, end)
        dailies, _ = self._resolve(start, end)
        return dispatch_statistics(dailies)

    def get_month_summary(self, *, year: int, month: int) -> dict[date, DispatchDaySummary]:
        month = require_month(month)
        try:
            start, end = month_bounds(int(year), month)
        except (TypeError, ValueError):
            raise ValidationError("연도가 올바르지 않습니다")

        snapshot = self._config.snapshot()
        leaves = self._leaves.list_range(start=start, end=end)
        absences = self._config.list_absences(start=start, end=end)
        return summarize_month(int(year), month, snapshot, leaves, absences, calendar=self._calendar)
