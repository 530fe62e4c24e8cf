from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.auto_marker import DrinkAutoMarker
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .billing.mysql_bill_repository import MySQLBillRepository
from .billing.repository import BillRepository
from .billing.service import BillingService, BillService
from .common.datetime_utils import Clock
from .database.connection import DBConfig, DatabaseConnection
from .engine import MessEngine
from .menu.mysql_menu_repository import MySQLMenuRepository
from .menu.repository import MenuRepository
from .menu.service import MenuService
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    menu_repo: MenuRepository
    attendance_repo: AttendanceRepository
    bills_repo: BillRepository

    auth_service: AuthService
    menu_service: MenuService
    attendance_service: AttendanceService
    bill_service: BillService
    report_service: ReportService
    engine: MessEngine
    clock: Clock


def wire_container(
    *,
    users_repo: UserRepository,
    menu_repo: MenuRepository,
    attendance_repo: AttendanceRepository,
    bills_repo: BillRepository,
    clock: Optional[Clock] = None,
) -> Container:
    clock = clock or Clock()

    auth_service = AuthService(users_repo)
    menu_service = MenuService(menu_repo, attendance_repo)
    attendance_service = AttendanceService(attendance_repo, users_repo, menu_repo)
    bill_service = BillService(bills_repo, attendance_repo)
    report_service = ReportService(users_repo, menu_repo, attendance_repo, bills_repo)
    engine = MessEngine(
        attendance_service=attendance_service,
        auto_marker=DrinkAutoMarker(attendance_repo, users_repo, menu_repo),
        billing_service=BillingService(bills_repo, attendance_repo, users_repo, menu_repo),
        bill_service=bill_service,
        clock=clock,
    )

    return Container(
        users_repo=users_repo,
        menu_repo=menu_repo,
        attendance_repo=attendance_repo,
        bills_repo=bills_repo,
        auth_service=auth_service,
        menu_service=menu_service,
        attendance_service=attendance_service,
        bill_service=bill_service,
        report_service=report_service,
        engine=engine,
        clock=clock,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        menu_repo=MySQLMenuRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        bills_repo=MySQLBillRepository(conn),
    )
