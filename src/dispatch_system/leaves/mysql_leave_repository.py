from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveRequest
from .parsing import parse_leave_requests
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    """Reads the vacation system's request table (owned by the leave service)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: date, end: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_name, leave_date, status, duration, leave_type
                FROM vacation_requests
                WHERE leave_date BETWEEN %s AND %s
                ORDER BY leave_date ASC
                """,
                (start, end),
            )
            return parse_leave_requests(fetchall(cur))
