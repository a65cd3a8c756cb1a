from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.validators import require_non_empty, require_non_negative
from ..core.enums import RouteType
from ..core.exceptions import NotFoundError, ValidationError
from ..dispatch.model import DispatchSnapshot
from ..seniors.model import Senior, SeniorAbsence
from ..seniors.repository import SeniorAbsenceRepository, SeniorRepository
from .model import Route, RouteDriver
from .repository import RouteRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewRouteDriver:
    driver_id: str
    driver_name: str
    vehicle_name: str = ""
    vehicle_capacity: int = 0


def _new_id() -> str:
    return uuid.uuid4().hex


class RouteConfigService:
    """Use case: administrators maintain routes, seniors and senior absences.

    This is the boundary that keeps invalid configuration (a route without
    drivers, a senior on an unknown route) away from the dispatch engine.
    """

    def __init__(
        self,
        routes: RouteRepository,
        seniors: SeniorRepository,
        absences: SeniorAbsenceRepository,
    ):
        self._routes = routes
        self._seniors = seniors
        self._absences = absences

    # -------- Routes --------
    @staticmethod
    def _parse_route_type(value) -> RouteType:
        try:
            return value if isinstance(value, RouteType) else RouteType(str(value).upper())
        except ValueError:
            raise ValidationError("노선 유형이 올바르지 않습니다 (PICKUP/DROPOFF)")

    @staticmethod
    def _build_drivers(drivers: Iterable[NewRouteDriver]) -> tuple[RouteDriver, ...]:
        out: list[RouteDriver] = []
        seen: set[str] = set()
        for d in drivers:
            name = require_non_empty(d.driver_name, "운전자 이름")
            if name in seen:
                raise ValidationError(f"운전자 {name}이(가) 중복 배정되었습니다")
            seen.add(name)
            out.append(
                RouteDriver(
                    driver_id=(d.driver_id or "").strip(),
                    driver_name=name,
                    vehicle_name=(d.vehicle_name or "").strip(),
                    vehicle_capacity=require_non_negative(d.vehicle_capacity, "탑승 정원"),
                )
            )
        if not out:
            raise ValidationError("노선에는 최소 1명의 운전자가 필요합니다")
        return tuple(out)

    def list_routes(self) -> Sequence[Route]:
        return self._routes.list_all()

    def get_route(self, route_id: str) -> Route:
        route = self._routes.get_by_id(str(route_id))
        if not route:
            raise NotFoundError("노선이 존재하지 않습니다")
        return route

    def create_route(self, *, name: str, route_type, drivers: Iterable[NewRouteDriver]) -> str:
        route = Route(
            route_id=_new_id(),
            name=require_non_empty(name, "노선명"),
            route_type=self._parse_route_type(route_type),
            drivers=self._build_drivers(drivers),
        )
        route_id = self._routes.create(route)
        logger.info("Route %s (%s) created with %d driver(s)", route.name, route_id, len(route.drivers))
        return route_id

    def update_route(
        self,
        *,
        route_id: str,
        name: Optional[str] = None,
        route_type=None,
        drivers: Optional[Iterable[NewRouteDriver]] = None,
    ) -> Route:
        current = self.get_route(route_id)
        route = Route(
            route_id=current.route_id,
            name=require_non_empty(name, "노선명") if name is not None else current.name,
            route_type=self._parse_route_type(route_type) if route_type is not None else current.route_type,
            drivers=self._build_drivers(drivers) if drivers is not None else current.drivers,
        )
        if not self._routes.update(route):
            raise ValidationError("노선 수정에 실패했습니다")
        return route

    def delete_route(self, *, route_id: str) -> None:
        if not self._routes.delete(str(route_id)):
            raise NotFoundError("노선이 존재하지 않습니다")
        detached = self._seniors.unassign_route(str(route_id))
        logger.info("Route %s deleted, %d senior(s) unassigned", route_id, detached)

    # -------- Seniors --------
    def list_seniors(self) -> Sequence[Senior]:
        return self._seniors.list_all()

    def _require_route(self, route_id: Optional[str]) -> Optional[str]:
        if not route_id:
            return None
        if not self._routes.get_by_id(str(route_id)):
            raise ValidationError("배정할 노선이 존재하지 않습니다")
        return str(route_id)

    def _next_boarding_order(self, route_id: Optional[str]) -> int:
        orders = [s.boarding_order for s in self._seniors.list_all() if route_id and s.route_id == route_id]
        return max(orders, default=0) + 1

    def create_senior(self, *, name: str, route_id: Optional[str], boarding_order: Optional[int] = None) -> str:
        name = require_non_empty(name, "이름")
        route_id = self._require_route(route_id)
        order = (
            require_non_negative(boarding_order, "탑승 순서")
            if boarding_order is not None
            else self._next_boarding_order(route_id)
        )
        return self._seniors.create(
            Senior(senior_id=_new_id(), name=name, route_id=route_id, boarding_order=order)
        )

    def update_senior(
        self,
        *,
        senior_id: str,
        name: Optional[str] = None,
        route_id: Optional[str] = None,
        boarding_order: Optional[int] = None,
    ) -> Senior:
        current = self._seniors.get_by_id(str(senior_id))
        if not current:
            raise NotFoundError("어르신 정보가 존재하지 않습니다")

        senior = Senior(
            senior_id=current.senior_id,
            name=require_non_empty(name, "이름") if name is not None else current.name,
            route_id=self._require_route(route_id) if route_id is not None else current.route_id,
            boarding_order=(
                require_non_negative(boarding_order, "탑승 순서")
                if boarding_order is not None
                else current.boarding_order
            ),
        )
        if not self._seniors.update(senior):
            raise ValidationError("어르신 정보 수정에 실패했습니다")
        return senior

    def delete_senior(self, *, senior_id: str) -> None:
        if not self._seniors.delete(str(senior_id)):
            raise NotFoundError("어르신 정보가 존재하지 않습니다")
        self._absences.delete_for_senior(str(senior_id))

    def reorder_seniors(self, *, route_id: str, senior_ids: Sequence[str]) -> int:
        """Boarding order becomes the position in senior_ids (1-based)."""
        self.get_route(route_id)
        members = {s.senior_id for s in self._seniors.list_all() if s.route_id == str(route_id)}
        unknown = [sid for sid in senior_ids if sid not in members]
        if unknown:
            raise ValidationError("해당 노선에 배정되지 않은 어르신이 포함되어 있습니다")

        orders = {str(sid): position + 1 for position, sid in enumerate(senior_ids)}
        return self._seniors.update_boarding_orders(str(route_id), orders)

    # -------- Absences --------
    def add_absence(self, *, senior_id: str, absence_date: date, reason: Optional[str] = None) -> bool:
        """Record an absence. Returns False if it was already recorded."""
        if not self._seniors.get_by_id(str(senior_id)):
            raise NotFoundError("어르신 정보가 존재하지 않습니다")
        reason = (reason or "").strip() or None
        return self._absences.add(SeniorAbsence(senior_id=str(senior_id), absence_date=absence_date, reason=reason))

    def remove_absence(self, *, senior_id: str, absence_date: date) -> bool:
        return self._absences.remove(senior_id=str(senior_id), absence_date=absence_date)

    def list_absences(self, *, start: date, end: date) -> Sequence[SeniorAbsence]:
        if end < start:
            return []
        return self._absences.list_range(start=start, end=end)

    # -------- Snapshot --------
    def snapshot(self) -> DispatchSnapshot:
        return DispatchSnapshot.of(self._routes.list_all(), self._seniors.list_all())
