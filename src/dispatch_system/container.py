from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .dispatch.service import DispatchService
from .holidays.calendar import HolidayCalendar
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .routes.mysql_route_repository import MySQLRouteRepository
from .routes.repository import RouteRepository
from .routes.service import RouteConfigService
from .seniors.mysql_senior_repository import MySQLSeniorAbsenceRepository, MySQLSeniorRepository
from .seniors.repository import SeniorAbsenceRepository, SeniorRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    routes_repo: RouteRepository
    seniors_repo: SeniorRepository
    absences_repo: SeniorAbsenceRepository
    leaves_repo: LeaveRepository

    calendar: HolidayCalendar
    route_config_service: RouteConfigService
    dispatch_service: DispatchService


def wire_container(
    *,
    routes_repo: RouteRepository,
    seniors_repo: SeniorRepository,
    absences_repo: SeniorAbsenceRepository,
    leaves_repo: LeaveRepository,
    calendar: Optional[HolidayCalendar] = None,
    workers: int = 0,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    calendar = calendar or HolidayCalendar()
    route_config_service = RouteConfigService(routes_repo, seniors_repo, absences_repo)
    dispatch_service = DispatchService(route_config_service, leaves_repo, calendar=calendar, workers=workers)

    return Container(
        conn=conn,
        routes_repo=routes_repo,
        seniors_repo=seniors_repo,
        absences_repo=absences_repo,
        leaves_repo=leaves_repo,
        calendar=calendar,
        route_config_service=route_config_service,
        dispatch_service=dispatch_service,
    )


def build_container(*, db_config: dict, calendar: Optional[HolidayCalendar] = None, workers: int = 0) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        routes_repo=MySQLRouteRepository(conn),
        seniors_repo=MySQLSeniorRepository(conn),
        absences_repo=MySQLSeniorAbsenceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        calendar=calendar,
        workers=workers,
        conn=conn,
    )
