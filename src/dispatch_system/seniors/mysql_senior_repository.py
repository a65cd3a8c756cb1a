from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Senior, SeniorAbsence
from .parsing import parse_senior_absences
from .repository import SeniorAbsenceRepository, SeniorRepository


class MySQLSeniorRepository(SeniorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_senior(r: dict) -> Senior:
        return Senior(
            senior_id=str(r["senior_id"]),
            name=r["name"],
            route_id=str(r["route_id"]) if r.get("route_id") else None,
            boarding_order=int(r.get("boarding_order") or 0),
        )

    def list_all(self) -> Sequence[Senior]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT senior_id, name, route_id, boarding_order
                FROM seniors
                ORDER BY created_seq ASC
                """
            )
            return [self._to_senior(r) for r in fetchall(cur)]

    def get_by_id(self, senior_id: str) -> Optional[Senior]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT senior_id, name, route_id, boarding_order FROM seniors WHERE senior_id=%s",
                (str(senior_id),),
            )
            r = fetchone(cur)
            return self._to_senior(r) if r else None

    def create(self, senior: Senior) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO seniors(senior_id, name, route_id, boarding_order) VALUES(%s,%s,%s,%s)",
                (senior.senior_id, senior.name, senior.route_id, int(senior.boarding_order)),
            )
            return senior.senior_id

    def update(self, senior: Senior) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE seniors SET name=%s, route_id=%s, boarding_order=%s WHERE senior_id=%s",
                (senior.name, senior.route_id, int(senior.boarding_order), senior.senior_id),
            )
            # rowcount is 0 when nothing changed, so check existence instead
            cur.execute("SELECT 1 FROM seniors WHERE senior_id=%s", (senior.senior_id,))
            return fetchone(cur) is not None

    def delete(self, senior_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM seniors WHERE senior_id=%s", (str(senior_id),))
            return cur.rowcount > 0

    def unassign_route(self, route_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE seniors SET route_id=NULL WHERE route_id=%s", (str(route_id),))
            return int(cur.rowcount)

    def update_boarding_orders(self, route_id: str, orders: Mapping[str, int]) -> int:
        changed = 0
        with db_cursor(self._conn_factory) as (_, cur):
            for senior_id, order in orders.items():
                cur.execute(
                    "UPDATE seniors SET boarding_order=%s WHERE senior_id=%s AND route_id=%s",
                    (int(order), str(senior_id), str(route_id)),
                )
                changed += cur.rowcount
        return changed


class MySQLSeniorAbsenceRepository(SeniorAbsenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: date, end: date) -> Sequence[SeniorAbsence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT senior_id, absence_date, reason
                FROM senior_absences
                WHERE absence_date BETWEEN %s AND %s
                ORDER BY absence_date ASC
                """,
                (start, end),
            )
            return parse_senior_absences(fetchall(cur))

    def add(self, absence: SeniorAbsence) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO senior_absences(senior_id, absence_date, reason)
                VALUES(%s,%s,%s)
                """,
                (absence.senior_id, absence.absence_date, absence.reason),
            )
            return cur.rowcount > 0

    def remove(self, *, senior_id: str, absence_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM senior_absences WHERE senior_id=%s AND absence_date=%s",
                (str(senior_id), absence_date),
            )
            return cur.rowcount > 0

    def delete_for_senior(self, senior_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM senior_absences WHERE senior_id=%s", (str(senior_id),))
            return int(cur.rowcount)
