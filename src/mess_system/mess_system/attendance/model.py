from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: whether one user consumed one menu item.

    A missing record means "not determined yet", which billing treats
    differently from ``attended=False``.
    """

    attendance_id: int
    user_id: int
    menu_item_id: int
    attended: bool


@dataclass(frozen=True)
class AttendanceMark:
    """A requested attendance state for a (user, menu item) pair."""

    user_id: int
    menu_item_id: int
    attended: bool


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model joined with users and menu items (reports, billing)."""

    attendance_id: int
    user_id: int
    full_name: str
    menu_item_id: int
    item_name: str
    item_date: date
    price: Decimal
    is_food: bool
    attended: bool
