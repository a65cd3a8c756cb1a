from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from dispatch_system.container import wire_container
from dispatch_system.core.enums import RouteType
from dispatch_system.holidays.calendar import HolidayCalendar
from dispatch_system.leaves.model import LeaveRequest
from dispatch_system.routes.model import Route, RouteDriver
from dispatch_system.seniors.model import Senior, SeniorAbsence


def make_route(route_id: str, *driver_names: str, route_type: RouteType = RouteType.PICKUP) -> Route:
    return Route(
        route_id=route_id,
        name=route_id,
        route_type=route_type,
        drivers=tuple(
            RouteDriver(driver_id=f"u-{n}", driver_name=n, vehicle_name="스타리아", vehicle_capacity=11)
            for n in driver_names
        ),
    )


class InMemoryRoutes:
    def __init__(self, routes=()):
        self._routes: dict[str, Route] = {r.route_id: r for r in routes}

    def list_all(self):
        return list(self._routes.values())

    def get_by_id(self, route_id: str) -> Optional[Route]:
        return self._routes.get(route_id)

    def create(self, route: Route) -> str:
        self._routes[route.route_id] = route
        return route.route_id

    def update(self, route: Route) -> bool:
        if route.route_id not in self._routes:
            return False
        self._routes[route.route_id] = route
        return True

    def delete(self, route_id: str) -> bool:
        return self._routes.pop(route_id, None) is not None


class InMemorySeniors:
    def __init__(self, seniors=()):
        self._seniors: dict[str, Senior] = {s.senior_id: s for s in seniors}

    def list_all(self):
        return list(self._seniors.values())

    def get_by_id(self, senior_id: str) -> Optional[Senior]:
        return self._seniors.get(senior_id)

    def create(self, senior: Senior) -> str:
        self._seniors[senior.senior_id] = senior
        return senior.senior_id

    def update(self, senior: Senior) -> bool:
        if senior.senior_id not in self._seniors:
            return False
        self._seniors[senior.senior_id] = senior
        return True

    def delete(self, senior_id: str) -> bool:
        return self._seniors.pop(senior_id, None) is not None

    def unassign_route(self, route_id: str) -> int:
        changed = 0
        for sid, s in list(self._seniors.items()):
            if s.route_id == route_id:
                self._seniors[sid] = Senior(s.senior_id, s.name, None, s.boarding_order)
                changed += 1
        return changed

    def update_boarding_orders(self, route_id: str, orders) -> int:
        changed = 0
        for sid, order in orders.items():
            s = self._seniors.get(sid)
            if s and s.route_id == route_id:
                self._seniors[sid] = Senior(s.senior_id, s.name, s.route_id, int(order))
                changed += 1
        return changed


class InMemoryAbsences:
    def __init__(self, absences=()):
        self._items: dict[tuple[str, date], SeniorAbsence] = {(a.senior_id, a.absence_date): a for a in absences}

    def list_range(self, *, start: date, end: date):
        return [a for (_, d), a in sorted(self._items.items()) if start <= d <= end]

    def add(self, absence: SeniorAbsence) -> bool:
        key = (absence.senior_id, absence.absence_date)
        if key in self._items:
            return False
        self._items[key] = absence
        return True

    def remove(self, *, senior_id: str, absence_date: date) -> bool:
        return self._items.pop((senior_id, absence_date), None) is not None

    def delete_for_senior(self, senior_id: str) -> int:
        keys = [k for k in self._items if k[0] == senior_id]
        for k in keys:
            del self._items[k]
        return len(keys)


class FakeLeaves:
    def __init__(self, requests=()):
        self._requests = list(requests)
        self.last_args = None

    def add(self, request: LeaveRequest) -> None:
        self._requests.append(request)

    def list_range(self, *, start: date, end: date):
        self.last_args = {"start": start, "end": end}
        return [r for r in self._requests if start <= r.leave_date <= end]


@pytest.fixture
def calendar() -> HolidayCalendar:
    return HolidayCalendar()


@pytest.fixture
def route_a() -> Route:
    return make_route("A", "Kim", "Lee")


@pytest.fixture
def repos(route_a):
    seniors = [
        Senior("s-park", "Park", "A", 2),
        Senior("s-choi", "Choi", "A", 1),
    ]
    return {
        "routes_repo": InMemoryRoutes([route_a]),
        "seniors_repo": InMemorySeniors(seniors),
        "absences_repo": InMemoryAbsences(),
        "leaves_repo": FakeLeaves(),
    }


@pytest.fixture
def container(repos, calendar):
    return wire_container(calendar=calendar, **repos)
