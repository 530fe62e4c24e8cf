"""Operations offered to the admin UI and reporting layer.

Each call resolves "today" once, runs one service operation and hands back an
``Ok`` or a ``Failure`` (see ``core.result``). Role checks happen in the
caller; this layer only reconciles attendance and bills.
"""
from __future__ import annotations

from typing import Optional, Sequence

from .attendance.auto_marker import AutoMarkOutcome, DrinkAutoMarker
from .attendance.model import AttendanceRecord
from .attendance.service import AttendanceService
from .billing.model import Bill, BillingRunSummary
from .billing.service import BillingService, BillService
from .common.datetime_utils import Clock
from .core.enums import BillingPeriod
from .core.result import Result, capture
from .dates.model import ResolvedDay
from .dates.resolver import ClientDate, resolve_business_day


class MessEngine:
    def __init__(
        self,
        *,
        attendance_service: AttendanceService,
        auto_marker: DrinkAutoMarker,
        billing_service: BillingService,
        bill_service: BillService,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance_service
        self._auto_marker = auto_marker
        self._billing = billing_service
        self._bills = bill_service
        self._clock = clock or Clock()

    def resolve_today(self, client_date: ClientDate = None, cookie_value: Optional[str] = None) -> ResolvedDay:
        return resolve_business_day(clock=self._clock, client_date=client_date, cookie_value=cookie_value)

    def mark_attendance(self, user_id: int, menu_item_id: int, attended: bool) -> Result[AttendanceRecord]:
        return capture(self._attendance.set_attendance, user_id, menu_item_id, attended)

    def auto_mark_drinks(
        self, client_date: ClientDate = None, cookie_value: Optional[str] = None
    ) -> Result[AutoMarkOutcome]:
        resolved = self.resolve_today(client_date, cookie_value)
        return capture(self._auto_marker.run, resolved)

    def generate_bills(
        self,
        period: BillingPeriod | str = BillingPeriod.CURRENT,
        client_date: ClientDate = None,
        cookie_value: Optional[str] = None,
    ) -> Result[BillingRunSummary]:
        resolved = self.resolve_today(client_date, cookie_value)
        return capture(self._billing.generate_bills, period, today=resolved.day)

    def list_bills_for_user(self, user_id: int, status: Optional[str] = None) -> Result[Sequence[Bill]]:
        return capture(self._bills.list_for_user, user_id, status=status)

    def list_all_bills(self) -> Result[Sequence[Bill]]:
        return capture(self._bills.list_all)

    def set_bill_paid(self, bill_id: int, paid: bool) -> Result[Bill]:
        return capture(self._bills.set_paid, bill_id, paid)

    def delete_bill(self, bill_id: int) -> Result[None]:
        return capture(self._bills.delete, bill_id)
