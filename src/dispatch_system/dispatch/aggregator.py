from __future__ import annotations

import logging
from concurrent.futures import Executor
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import iter_days, month_bounds
from ..core.enums import DispatchStatus
from ..holidays.calendar import HolidayCalendar
from ..leaves.model import LeaveRequest
from ..seniors.model import SeniorAbsence
from .model import DailyDispatch, DispatchDaySummary, DispatchSnapshot, DispatchStatistics
from .resolver import DailyResolver, DispatchFacts

logger = logging.getLogger(__name__)


def resolve_range(
    start: date,
    end: date,
    snapshot: DispatchSnapshot,
    leave_requests: Iterable[LeaveRequest] = (),
    senior_absences: Iterable[SeniorAbsence] = (),
    *,
    calendar: Optional[HolidayCalendar] = None,
    executor: Optional[Executor] = None,
) -> list[DailyDispatch]:
    """One DailyDispatch per date in [start, end], ascending.

    end < start returns []. With an executor the dates are resolved in
    parallel; Executor.map keeps the ascending order.
    """
    days = list(iter_days(start, end))
    if not days:
        return []

    facts = DispatchFacts.build(leave_requests, senior_absences)
    resolver = DailyResolver(snapshot, facts, calendar or HolidayCalendar())

    if executor is not None:
        results = list(executor.map(resolver.resolve, days))
    else:
        results = [resolver.resolve(day) for day in days]

    logger.debug("Resolved %d day(s) x %d route(s)", len(results), len(snapshot.routes))
    return results


def summarize_day(daily: DailyDispatch, calendar: HolidayCalendar) -> DispatchDaySummary:
    is_holiday, holiday_name = calendar.is_non_working_day(daily.dispatch_date)

    counts = {DispatchStatus.NORMAL: 0, DispatchStatus.SUBSTITUTE: 0, DispatchStatus.NO_SERVICE: 0}
    for rd in daily.route_dispatches:
        if rd.status in counts:
            counts[rd.status] += 1

    return DispatchDaySummary(
        summary_date=daily.dispatch_date,
        total_routes=len(daily.route_dispatches),
        normal_count=counts[DispatchStatus.NORMAL],
        substitute_count=counts[DispatchStatus.SUBSTITUTE],
        no_service_count=counts[DispatchStatus.NO_SERVICE],
        is_holiday=is_holiday,
        holiday_name=holiday_name,
    )


def summarize_month(
    year: int,
    month: int,
    snapshot: DispatchSnapshot,
    leave_requests: Iterable[LeaveRequest] = (),
    senior_absences: Iterable[SeniorAbsence] = (),
    *,
    calendar: Optional[HolidayCalendar] = None,
    executor: Optional[Executor] = None,
) -> dict[date, DispatchDaySummary]:
    """Calendar-cell summaries keyed by date for every day of the month (1-12)."""
    try:
        start, end = month_bounds(year, month)
    except (TypeError, ValueError):
        return {}

    calendar = calendar or HolidayCalendar()
    dailies = resolve_range(
        start,
        end,
        snapshot,
        leave_requests,
        senior_absences,
        calendar=calendar,
        executor=executor,
    )
    return {d.dispatch_date: summarize_day(d, calendar) for d in dailies}


def filter_dispatches(
    dispatches: Sequence[DailyDispatch],
    *,
    route_id: Optional[str] = None,
    status: Optional[DispatchStatus] = None,
) -> list[DailyDispatch]:
    """Post-hoc list filter; days left without any route entry are dropped."""
    out: list[DailyDispatch] = []
    for daily in dispatches:
        kept = tuple(
            rd
            for rd in daily.route_dispatches
            if (route_id is None or rd.route_id == route_id) and (status is None or rd.status == status)
        )
        if kept:
            out.append(DailyDispatch(dispatch_date=daily.dispatch_date, route_dispatches=kept))
    return out


def dispatch_statistics(dispatches: Iterable[DailyDispatch]) -> DispatchStatistics:
    counts = {status: 0 for status in DispatchStatus}
    for daily in dispatches:
        for rd in daily.route_dispatches:
            counts[rd.status] += 1
    return DispatchStatistics(
        normal=counts[DispatchStatus.NORMAL],
        substitute=counts[DispatchStatus.SUBSTITUTE],
        no_service=counts[DispatchStatus.NO_SERVICE],
        holiday=counts[DispatchStatus.HOLIDAY],
    )
