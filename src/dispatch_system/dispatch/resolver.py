from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import coerce_date
from ..core.constants import (
    FALLBACK_DRIVER_ROLE,
    PRIMARY_DRIVER_ROLE,
    REASON_ALL_DRIVERS_ON_LEAVE,
    REASON_NO_DRIVERS_ASSIGNED,
    REASON_PRIMARY_ON_LEAVE,
)
from ..core.enums import DispatchStatus
from ..holidays.calendar import HolidayCalendar
from ..leaves.model import LeaveRequest
from ..routes.model import Route
from ..seniors.model import Senior, SeniorAbsence
from .model import DailyDispatch, DispatchSnapshot, RouteDispatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchFacts:
    """Leave/absence facts indexed by (key, date) for O(1) lookups.

    Built once per query. Dates are normalised to plain dates (datetime and
    YYYY-MM-DD are accepted); records with a missing name/id or an unparseable
    day are dropped here, so a bad record can only ever mean "no conflicting fact".
    """

    blocked_drivers: frozenset[tuple[str, date]]
    absent_seniors: frozenset[tuple[str, date]]

    @classmethod
    def build(
        cls,
        leave_requests: Iterable[LeaveRequest],
        senior_absences: Iterable[SeniorAbsence],
    ) -> "DispatchFacts":
        blocked: set[tuple[str, date]] = set()
        for req in leave_requests:
            leave_date = coerce_date(getattr(req, "leave_date", None))
            user_name = getattr(req, "user_name", None)
            if not user_name or leave_date is None:
                continue
            if req.blocks_dispatch:
                blocked.add((user_name, leave_date))

        absent: set[tuple[str, date]] = set()
        for absence in senior_absences:
            absence_date = coerce_date(getattr(absence, "absence_date", None))
            senior_id = getattr(absence, "senior_id", None)
            if not senior_id or absence_date is None:
                continue
            absent.add((senior_id, absence_date))

        return cls(blocked_drivers=frozenset(blocked), absent_seniors=frozenset(absent))

    def driver_available(self, driver_name: str, day: date) -> bool:
        return (driver_name, day) not in self.blocked_drivers

    def senior_present(self, senior_id: str, day: date) -> bool:
        return (senior_id, day) not in self.absent_seniors


def group_seniors_by_route(seniors: Iterable[Senior]) -> dict[str, list[Senior]]:
    """Seniors per route sorted by boarding order (stable: ties keep insertion order)."""
    grouped: dict[str, list[Senior]] = {}
    for s in seniors:
        if not s.route_id:
            continue
        grouped.setdefault(s.route_id, []).append(s)
    for members in grouped.values():
        members.sort(key=lambda s: s.boarding_order)
    return grouped


def resolve_route(
    route: Route,
    day: date,
    *,
    riders: Iterable[Senior],
    facts: DispatchFacts,
) -> RouteDispatch:
    """Walk the driver chain in stored order; the first available driver wins."""
    base = dict(route_id=route.route_id, route_name=route.name, route_type=route.route_type)

    if not route.drivers:
        return RouteDispatch(status=DispatchStatus.NO_SERVICE, reason=REASON_NO_DRIVERS_ASSIGNED, **base)

    passengers = tuple(s for s in riders if facts.senior_present(s.senior_id, day))
    primary = route.drivers[0]

    for index, driver in enumerate(route.drivers):
        if not facts.driver_available(driver.driver_name, day):
            continue

        if index == 0:
            return RouteDispatch(
                status=DispatchStatus.NORMAL,
                driver=driver,
                driver_role=PRIMARY_DRIVER_ROLE,
                passengers=passengers,
                **base,
            )

        return RouteDispatch(
            status=DispatchStatus.SUBSTITUTE,
            driver=driver,
            driver_role=FALLBACK_DRIVER_ROLE.format(n=index),
            original_main_driver=primary,
            reason=REASON_PRIMARY_ON_LEAVE.format(name=primary.driver_name),
            passengers=passengers,
            **base,
        )

    return RouteDispatch(status=DispatchStatus.NO_SERVICE, reason=REASON_ALL_DRIVERS_ON_LEAVE, **base)


def holiday_dispatch(route: Route) -> RouteDispatch:
    return RouteDispatch(
        route_id=route.route_id,
        route_name=route.name,
        route_type=route.route_type,
        status=DispatchStatus.HOLIDAY,
    )


class DailyResolver:
    """Resolves every route of one date against prebuilt facts.

    Holds only read-only data, so one instance can be shared by worker threads.
    """

    def __init__(self, snapshot: DispatchSnapshot, facts: DispatchFacts, calendar: HolidayCalendar):
        self._snapshot = snapshot
        self._facts = facts
        self._calendar = calendar
        self._riders = group_seniors_by_route(snapshot.seniors)

    @property
    def calendar(self) -> HolidayCalendar:
        return self._calendar

    def resolve(self, day: date) -> DailyDispatch:
        is_holiday, holiday_name = self._calendar.is_non_working_day(day)
        if is_holiday:
            logger.debug("%s is a non-working day (%s)", day, holiday_name)
            dispatches = tuple(holiday_dispatch(route) for route in self._snapshot.routes)
        else:
            dispatches = tuple(
                resolve_route(
                    route,
                    day,
                    riders=self._riders.get(route.route_id, ()),
                    facts=self._facts,
                )
                for route in self._snapshot.routes
            )
        return DailyDispatch(dispatch_date=day, route_dispatches=dispatches)


def resolve_day(
    day: date,
    snapshot: DispatchSnapshot,
    leave_requests: Iterable[LeaveRequest] = (),
    senior_absences: Iterable[SeniorAbsence] = (),
    *,
    calendar: Optional[HolidayCalendar] = None,
) -> DailyDispatch:
    facts = DispatchFacts.build(leave_requests, senior_absences)
    return DailyResolver(snapshot, facts, calendar or HolidayCalendar()).resolve(day)
