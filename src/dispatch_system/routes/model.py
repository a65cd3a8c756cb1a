from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import RouteType


@dataclass(frozen=True)
class RouteDriver:
    """Một mắt xích trong chuỗi tài xế của tuyến: tài xế + xe."""

    driver_id: str
    driver_name: str
    vehicle_name: str = ""
    vehicle_capacity: int = 0  # 0 = not specified


@dataclass(frozen=True)
class Route:
    """Thực thể miền (domain): Tuyến đưa đón.

    drivers[0] is the primary driver, the rest are fallbacks in priority order.
    """

    route_id: str
    name: str
    route_type: RouteType
    drivers: tuple[RouteDriver, ...] = field(default_factory=tuple)

    @property
    def primary_driver(self) -> RouteDriver | None:
        return self.drivers[0] if self.drivers else None
