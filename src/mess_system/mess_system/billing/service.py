from __future__ import annotations

import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_positive_id
from ..core.enums import BillingPeriod, UpsertOutcome
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..dates.model import BillingWindow
from ..dates.resolver import resolve_billing_window
from ..menu.model import MenuItem
from ..menu.repository import MenuRepository
from ..users.model import User
from ..users.repository import UserRepository
from .calculator.base import ChargeCalculator
from .calculator.opt_out_calculator import OptOutDrinkCalculator
from .model import (
    Bill,
    BillDetails,
    BillingRunSummary,
    BillSummary,
    ChargeBreakdown,
    MonthlyBills,
    UserBillingFailure,
)
from .repository import BillRepository

logger = logging.getLogger(__name__)


class BillingService:
    """Turns a window of attendance into one bill per member."""

    def __init__(
        self,
        bills: BillRepository,
        attendance: AttendanceRepository,
        users: UserRepository,
        menu: MenuRepository,
        *,
        calculator: Optional[ChargeCalculator] = None,
    ):
        self._bills = bills
        self._attendance = attendance
        self._users = users
        self._menu = menu
        self._calculator = calculator or OptOutDrinkCalculator()

    def compute_charge(self, user_id: int, window: BillingWindow, window_drinks: Sequence[MenuItem]) -> ChargeBreakdown:
        attended_rows = self._attendance.list_rows(
            start_date=window.start, end_date=window.end, user_id=int(user_id), attended=True
        )
        return self._calculator.charge(attended_rows=attended_rows, window_drinks=window_drinks)

    def _bill_user(self, user: User, window: BillingWindow, window_drinks: Sequence[MenuItem]) -> UpsertOutcome:
        amount = self.compute_charge(user.user_id, window, window_drinks).total
        return self._bills.compare_and_upsert(
            user_id=user.user_id,
            period_start=window.anchor,
            amount=amount,
            create_when_missing=amount > 0,
        )

    def generate_bills(self, period: BillingPeriod | str, *, today: date) -> BillingRunSummary:
        window = resolve_billing_window(period, today)
        users = self._users.list_all()
        window_drinks = self._menu.list_range(window.start, window.end, is_food=False)

        counts = {outcome: 0 for outcome in UpsertOutcome}
        failures: list[UserBillingFailure] = []

        for user in users:
            try:
                outcome = self._bill_user(user, window, window_drinks)
            except DomainError as e:
                logger.warning("Billing failed for user %s (%s): %s", user.user_id, user.full_name, e)
                failures.append(UserBillingFailure(user_id=user.user_id, full_name=user.full_name, message=str(e)))
                continue
            counts[outcome] += 1

        summary = BillingRunSummary(
            period=window.period,
            window_start=window.start,
            window_end=window.end,
            created=counts[UpsertOutcome.CREATED],
            updated=counts[UpsertOutcome.UPDATED],
            skipped=counts[UpsertOutcome.SKIPPED],
            failures=tuple(failures),
        )
        logger.info(
            "Billing %s..%s: created=%s updated=%s skipped=%s failed=%s",
            window.start, window.end, summary.created, summary.updated, summary.skipped, len(failures),
        )
        return summary


def summarize(bills: Iterable[Bill]) -> BillSummary:
    bills = list(bills)
    paid = [b for b in bills if b.paid]
    unpaid = [b for b in bills if not b.paid]
    return BillSummary(
        total_bills=len(bills),
        paid_bills=len(paid),
        unpaid_bills=len(unpaid),
        total_amount=sum((b.amount for b in bills), Decimal("0")),
        paid_amount=sum((b.amount for b in paid), Decimal("0")),
        unpaid_amount=sum((b.amount for b in unpaid), Decimal("0")),
    )


class BillService:
    """Use case: bill ledger maintenance and read projections."""

    def __init__(self, bills: BillRepository, attendance: AttendanceRepository):
        self._bills = bills
        self._attendance = attendance

    def _require(self, bill_id: int, *, user_id: Optional[int] = None) -> Bill:
        bill = self._bills.get_by_id(require_positive_id(bill_id, "Bill"))
        if not bill or (user_id is not None and bill.user_id != int(user_id)):
            raise NotFoundError("Bill not found!")
        return bill

    def set_paid(self, bill_id: int, paid: bool) -> Bill:
        bill = self._require(bill_id)
        self._bills.set_paid(bill.bill_id, paid=bool(paid))
        logger.info("Bill %s marked %s", bill.bill_id, "paid" if paid else "unpaid")
        return Bill(
            bill_id=bill.bill_id,
            user_id=bill.user_id,
            amount=bill.amount,
            period_start=bill.period_start,
            paid=bool(paid),
            full_name=bill.full_name,
        )

    def delete(self, bill_id: int) -> None:
        bill = self._require(bill_id)
        self._bills.delete(bill.bill_id)
        logger.info("Bill %s deleted", bill.bill_id)

    def list_for_user(self, user_id: int, *, status: Optional[str] = None) -> Sequence[Bill]:
        bills = self._bills.list_for_user(int(user_id))
        if status == "paid":
            return [b for b in bills if b.paid]
        if status == "unpaid":
            return [b for b in bills if not b.paid]
        return bills

    def list_all(self) -> Sequence[Bill]:
        return self._bills.list_all()

    def monthly_report(self, *, year: int, month: int) -> Sequence[Bill]:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12.")
        return self._bills.list_for_month(int(year), int(month))

    def monthly_for_user(self, user_id: int, *, year: int, month: int) -> MonthlyBills:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12.")

        bills = [
            b
            for b in self._bills.list_for_user(int(user_id))
            if (b.period_start.year, b.period_start.month) == (int(year), int(month))
        ]
        return MonthlyBills(
            year=int(year),
            month=int(month),
            month_label=date(int(year), int(month), 1).strftime("%B %Y"),
            bills=bills,
            summary=summarize(bills),
        )

    def details(self, bill_id: int, *, user_id: Optional[int] = None) -> BillDetails:
        bill = self._require(bill_id, user_id=user_id)
        start = bill.period_start.replace(day=1)
        end = start.replace(day=calendar.monthrange(start.year, start.month)[1])

        lines = sorted(
            self._attendance.list_rows(start_date=start, end_date=end, user_id=bill.user_id, attended=True),
            key=lambda r: (r.item_date, r.menu_item_id),
        )
        food = [r for r in lines if r.is_food]
        drinks = [r for r in lines if not r.is_food]
        return BillDetails(
            bill=bill,
            lines=lines,
            food_total=sum((r.price for r in food), Decimal("0")),
            drink_total=sum((r.price for r in drinks), Decimal("0")),
            food_count=len(food),
            drink_count=len(drinks),
        )
