from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RouteType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Route, RouteDriver
from .repository import RouteRepository


class MySQLRouteRepository(RouteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_driver(r: dict) -> RouteDriver:
        return RouteDriver(
            driver_id=str(r["driver_id"] or ""),
            driver_name=r["driver_name"],
            vehicle_name=r.get("vehicle_name") or "",
            vehicle_capacity=int(r.get("vehicle_capacity") or 0),
        )

    def _load_drivers(self, cur, route_ids: Sequence[str]) -> dict[str, list[RouteDriver]]:
        if not route_ids:
            return {}
        placeholders = ",".join(["%s"] * len(route_ids))
        cur.execute(
            f"""
            SELECT route_id, position, driver_id, driver_name, vehicle_name, vehicle_capacity
            FROM route_drivers
            WHERE route_id IN ({placeholders})
            ORDER BY route_id, position ASC
            """,
            tuple(route_ids),
        )
        out: dict[str, list[RouteDriver]] = {rid: [] for rid in route_ids}
        for r in fetchall(cur):
            out[str(r["route_id"])].append(self._to_driver(r))
        return out

    def list_all(self) -> Sequence[Route]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT route_id, name, route_type
                FROM routes
                ORDER BY created_seq ASC
                """
            )
            rows = fetchall(cur)
            drivers = self._load_drivers(cur, [str(r["route_id"]) for r in rows])
            return [
                Route(
                    route_id=str(r["route_id"]),
                    name=r["name"],
                    route_type=RouteType(r["route_type"]),
                    drivers=tuple(drivers.get(str(r["route_id"]), [])),
                )
                for r in rows
            ]

    def get_by_id(self, route_id: str) -> Optional[Route]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT route_id, name, route_type FROM routes WHERE route_id=%s",
                (str(route_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            drivers = self._load_drivers(cur, [str(r["route_id"])])
            return Route(
                route_id=str(r["route_id"]),
                name=r["name"],
                route_type=RouteType(r["route_type"]),
                drivers=tuple(drivers.get(str(r["route_id"]), [])),
            )

    def _insert_drivers(self, cur, route: Route) -> None:
        for position, d in enumerate(route.drivers):
            cur.execute(
                """
                INSERT INTO route_drivers(route_id, position, driver_id, driver_name, vehicle_name, vehicle_capacity)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    route.route_id,
                    position,
                    d.driver_id,
                    d.driver_name,
                    d.vehicle_name,
                    int(d.vehicle_capacity),
                ),
            )

    def create(self, route: Route) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO routes(route_id, name, route_type) VALUES(%s,%s,%s)",
                (route.route_id, route.name, route.route_type.value),
            )
            self._insert_drivers(cur, route)
            return route.route_id

    def update(self, route: Route) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE routes SET name=%s, route_type=%s WHERE route_id=%s",
                (route.name, route.route_type.value, route.route_id),
            )
            cur.execute("SELECT 1 FROM routes WHERE route_id=%s", (route.route_id,))
            if not fetchone(cur):
                return False
            cur.execute("DELETE FROM route_drivers WHERE route_id=%s", (route.route_id,))
            self._insert_drivers(cur, route)
            return True

    def delete(self, route_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM route_drivers WHERE route_id=%s", (str(route_id),))
            cur.execute("DELETE FROM routes WHERE route_id=%s", (str(route_id),))
            return cur.rowcount > 0
