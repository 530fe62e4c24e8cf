from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Sequence

from ..billing.model import Bill, BillSummary
from ..menu.model import MenuItem


@dataclass(frozen=True)
class MemberHome:
    """Read-model for a member's landing page on one business day."""

    day: date
    menu: Sequence[MenuItem]
    attended_menu_item_ids: Sequence[int]
    current_month: BillSummary
    previous_month: BillSummary
    total_paid: Decimal
    total_unpaid: Decimal
    grand_total: Decimal
    recent_bills: Sequence[Bill]


@dataclass(frozen=True)
class AdminDashboard:
    day: date
    total_users: int
    total_menu_items: int
    today_food: int
    today_drink: int
    today_attendance: int
    unpaid_bills: int
    total_revenue: Decimal
    pending_revenue: Decimal
