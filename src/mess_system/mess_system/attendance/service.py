from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Sequence

from ..common.validators import require_positive_id
from ..core.exceptions import NotFoundError
from ..menu.model import MenuItem
from ..menu.repository import MenuRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyAttendanceSheet:
    day: date
    menu: Sequence[MenuItem]
    users: Sequence[User]
    records: Sequence[AttendanceReportRow]

    def attended_ids_for(self, user_id: int) -> set[int]:
        return {r.menu_item_id for r in self.records if r.user_id == user_id and r.attended}


@dataclass(frozen=True)
class AttendanceHistory:
    rows: Sequence[AttendanceReportRow]
    total: int
    food: int
    drink: int
    this_month: int


@dataclass(frozen=True)
class AttendanceExportRow:
    user_name: str
    menu_item: str
    price: Decimal
    type: str


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository, menu: MenuRepository):
        self._attendance = attendance
        self._users = users
        self._menu = menu

    def set_attendance(self, user_id: int, menu_item_id: int, attended: bool) -> AttendanceRecord:
        user_id = require_positive_id(user_id, "User")
        menu_item_id = require_positive_id(menu_item_id, "Menu item")

        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found.")
        if not self._menu.get_by_id(menu_item_id):
            raise NotFoundError("Menu item not found.")

        record = self._attendance.upsert(user_id=user_id, menu_item_id=menu_item_id, attended=bool(attended))
        logger.debug("Attendance user=%s item=%s attended=%s", user_id, menu_item_id, record.attended)
        return record

    def daily_sheet(self, day: date) -> DailyAttendanceSheet:
        return DailyAttendanceSheet(
            day=day,
            menu=self._menu.list_for_date(day),
            users=self._users.list_all(),
            records=self._attendance.list_rows(start_date=day, end_date=day),
        )

    def history_for_user(self, user_id: int, *, today: date) -> AttendanceHistory:
        rows = self._attendance.list_rows(
            start_date=date.min, end_date=date.max, user_id=int(user_id), attended=True
        )
        return AttendanceHistory(
            rows=rows,
            total=len(rows),
            food=sum(1 for r in rows if r.is_food),
            drink=sum(1 for r in rows if not r.is_food),
            this_month=sum(1 for r in rows if (r.item_date.year, r.item_date.month) == (today.year, today.month)),
        )

    def export_day(self, day: date) -> list[AttendanceExportRow]:
        rows = self._attendance.list_rows(start_date=day, end_date=day, attended=True)
        return [
            AttendanceExportRow(
                user_name=r.full_name,
                menu_item=r.item_name,
                price=r.price,
                type="Food" if r.is_food else "Drink",
            )
            for r in rows
        ]
