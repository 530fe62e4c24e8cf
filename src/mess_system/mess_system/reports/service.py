from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..billing.model import Bill
from ..billing.repository import BillRepository
from ..billing.service import summarize
from ..common.datetime_utils import first_day_of_month
from ..core.constants import RECENT_BILLS_LIMIT
from ..menu.repository import MenuRepository
from ..users.repository import UserRepository
from .model import AdminDashboard, MemberHome


def _in_month(bills: Sequence[Bill], month_start: date) -> list[Bill]:
    key = (month_start.year, month_start.month)
    return [b for b in bills if (b.period_start.year, b.period_start.month) == key]


class ReportService:
    """Use case: dashboard projections for members and admins.

    ``today`` is always the resolved business day of the request, never the
    server clock.
    """

    def __init__(
        self,
        users: UserRepository,
        menu: MenuRepository,
        attendance: AttendanceRepository,
        bills: BillRepository,
    ):
        self._users = users
        self._menu = menu
        self._attendance = attendance
        self._bills = bills

    def member_home(self, user_id: int, *, today: date) -> MemberHome:
        user_id = int(user_id)
        menu = self._menu.list_for_date(today)
        attended = self._attendance.list_rows(start_date=today, end_date=today, user_id=user_id, attended=True)

        bills = self._bills.list_for_user(user_id)
        current_start = first_day_of_month(today)
        previous_start = first_day_of_month(current_start - timedelta(days=1))
        overall = summarize(bills)

        return MemberHome(
            day=today,
            menu=menu,
            attended_menu_item_ids=sorted({r.menu_item_id for r in attended}),
            current_month=summarize(_in_month(bills, current_start)),
            previous_month=summarize(_in_month(bills, previous_start)),
            total_paid=overall.paid_amount,
            total_unpaid=overall.unpaid_amount,
            grand_total=overall.total_amount,
            recent_bills=list(bills[:RECENT_BILLS_LIMIT]),
        )

    def dashboard(self, *, today: date) -> AdminDashboard:
        menu_today = self._menu.list_for_date(today)
        ledger = summarize(self._bills.list_all())

        return AdminDashboard(
            day=today,
            total_users=len(self._users.list_all()),
            total_menu_items=len(self._menu.list_all()),
            today_food=sum(1 for m in menu_today if m.is_food),
            today_drink=sum(1 for m in menu_today if not m.is_food),
            today_attendance=len(self._attendance.list_rows(start_date=today, end_date=today, attended=True)),
            unpaid_bills=ledger.unpaid_bills,
            total_revenue=ledger.paid_amount,
            pending_revenue=ledger.unpaid_amount,
        )
