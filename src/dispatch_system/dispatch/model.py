from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Mapping, Optional, Union

from ..common.datetime_utils import format_date
from ..core.enums import DispatchStatus, RouteType
from ..routes.model import Route, RouteDriver
from ..seniors.model import Senior


@dataclass(frozen=True)
class DispatchSnapshot:
    """Configuration snapshot handed to the engine by value.

    Routes keep their configuration order; seniors keep insertion order.
    """

    routes: tuple[Route, ...] = field(default_factory=tuple)
    seniors: tuple[Senior, ...] = field(default_factory=tuple)

    @classmethod
    def of(
        cls,
        routes: Union[Mapping[str, Route], Iterable[Route]],
        seniors: Iterable[Senior] = (),
    ) -> "DispatchSnapshot":
        if isinstance(routes, Mapping):
            routes = routes.values()
        return cls(routes=tuple(routes), seniors=tuple(seniors))

    @property
    def is_empty(self) -> bool:
        return not self.routes


def _driver_dict(driver: Optional[RouteDriver]) -> Optional[dict]:
    if driver is None:
        return None
    return {
        "driver_id": driver.driver_id,
        "driver_name": driver.driver_name,
        "vehicle_name": driver.vehicle_name,
        "vehicle_capacity": driver.vehicle_capacity,
    }


@dataclass(frozen=True)
class RouteDispatch:
    route_id: str
    route_name: str
    route_type: RouteType
    status: DispatchStatus
    driver: Optional[RouteDriver] = None
    driver_role: Optional[str] = None
    original_main_driver: Optional[RouteDriver] = None
    reason: Optional[str] = None
    passengers: tuple[Senior, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "route_id": self.route_id,
            "route_name": self.route_name,
            "route_type": self.route_type.value,
            "status": self.status.value,
            "driver": _driver_dict(self.driver),
            "driver_role": self.driver_role,
            "original_main_driver": _driver_dict(self.original_main_driver),
            "reason": self.reason,
            "passengers": [
                {"senior_id": s.senior_id, "name": s.name, "boarding_order": s.boarding_order}
                for s in self.passengers
            ],
        }


@dataclass(frozen=True)
class DailyDispatch:
    dispatch_date: date
    route_dispatches: tuple[RouteDispatch, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "date": format_date(self.dispatch_date),
            "route_dispatches": [rd.to_dict() for rd in self.route_dispatches],
        }


@dataclass(frozen=True)
class DispatchDaySummary:
    """Read-model cho ô lịch (calendar cell)."""

    summary_date: date
    total_routes: int
    normal_count: int = 0
    substitute_count: int = 0
    no_service_count: int = 0
    is_holiday: bool = False
    holiday_name: str = ""

    @property
    def is_unconfigured(self) -> bool:
        return self.total_routes == 0

    def to_dict(self) -> dict:
        return {
            "date": format_date(self.summary_date),
            "total_routes": self.total_routes,
            "normal_count": self.normal_count,
            "substitute_count": self.substitute_count,
            "no_service_count": self.no_service_count,
            "is_holiday": self.is_holiday,
            "holiday_name": self.holiday_name or None,
        }


@dataclass(frozen=True)
class DispatchStatistics:
    """Per-status route-day counts for the list view. total excludes holidays."""

    normal: int = 0
    substitute: int = 0
    no_service: int = 0
    holiday: int = 0

    @property
    def total(self) -> int:
        return self.normal + self.substitute + self.no_service

    def to_dict(self) -> dict:
        return {
            "normal": self.normal,
            "substitute": self.substitute,
            "no_service": self.no_service,
            "holiday": self.holiday,
            "total": self.total,
        }
