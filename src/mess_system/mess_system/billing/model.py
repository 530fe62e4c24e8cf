from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.model import AttendanceReportRow
from ..core.enums import BillingPeriod


@dataclass(frozen=True)
class Bill:
    """Domain entity: one member's charge for one month."""

    bill_id: int
    user_id: int
    amount: Decimal
    period_start: date
    paid: bool
    full_name: Optional[str] = None

    @property
    def month_label(self) -> str:
        return self.period_start.strftime("%B %Y")


@dataclass(frozen=True)
class ChargeBreakdown:
    attended_food: Decimal
    attended_drinks: Decimal
    unmarked_drinks: Decimal

    @property
    def total(self) -> Decimal:
        return self.attended_food + self.attended_drinks + self.unmarked_drinks


@dataclass(frozen=True)
class UserBillingFailure:
    user_id: int
    full_name: str
    message: str


@dataclass(frozen=True)
class BillingRunSummary:
    period: BillingPeriod
    window_start: date
    window_end: date
    created: int = 0
    updated: int = 0
    skipped: int = 0
    failures: Sequence[UserBillingFailure] = field(default_factory=tuple)

    @property
    def message(self) -> str:
        text = (
            f"Bills for {self.period.label} processed! "
            f"Generated: {self.created}, Updated: {self.updated}"
        )
        if self.failures:
            names = ", ".join(f.full_name for f in self.failures)
            text += f". Failed for {len(self.failures)} member(s): {names}"
        return text


@dataclass(frozen=True)
class BillSummary:
    total_bills: int
    paid_bills: int
    unpaid_bills: int
    total_amount: Decimal
    paid_amount: Decimal
    unpaid_amount: Decimal


@dataclass(frozen=True)
class BillDetails:
    bill: Bill
    lines: Sequence[AttendanceReportRow]
    food_total: Decimal
    drink_total: Decimal
    food_count: int
    drink_count: int


@dataclass(frozen=True)
class MonthlyBills:
    """One member's bills for a chosen month."""

    year: int
    month: int
    month_label: str
    bills: Sequence[Bill]
    summary: BillSummary
