from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceMark, AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def list_for_menu_items(self, menu_item_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, *, user_id: int, menu_item_id: int, attended: bool) -> AttendanceRecord:
        """Overwrite the pair's flag or create the record, in one transaction."""

        raise NotImplementedError

    def upsert_many(self, marks: Sequence[AttendanceMark]) -> int:
        """Apply every mark in a single transaction; returns how many were written."""

        raise NotImplementedError

    def exists_for_menu_item(self, menu_item_id: int) -> bool:
        raise NotImplementedError

    def list_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
        is_food: Optional[bool] = None,
        attended: Optional[bool] = None,
    ) -> Sequence[AttendanceReportRow]:
        """Records whose menu item is dated within [start_date, end_date]."""

        raise NotImplementedError
